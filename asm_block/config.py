"""Configuration constants and .env loading.

WHY: The CLI and the HTTP API share a few settings (default fragment
library, default output format, bind address, log level). Keeping them
in one module makes them easy to find and override.

HOW: python-dotenv loads the .env file on import. Constants are read
from the environment with plain defaults.

RULES:
- Every setting can be overridden via an ASM_BLOCK_* environment variable
- An explicit path always wins over ASM_BLOCK_LIBRARY
- An unknown log level name is a ValueError when logging is configured,
  not at import
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env from the project root (where the tool is run from)
load_dotenv()

DEFAULT_FORMAT = os.getenv("ASM_BLOCK_FORMAT", "plain")
SERVER_HOST = os.getenv("ASM_BLOCK_HOST", "127.0.0.1")
SERVER_PORT = int(os.getenv("ASM_BLOCK_PORT", "8000"))
LOG_LEVEL = os.getenv("ASM_BLOCK_LOG_LEVEL", "INFO").upper()

MAX_SOURCE_SIZE = 100_000
"""Largest source text (in characters) the HTTP API accepts per request."""

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def resolve_library_path(explicit: Optional[str] = None) -> Optional[Path]:
    """Pick the fragment library path: explicit argument, then environment."""
    if explicit:
        return Path(explicit)
    value = os.getenv("ASM_BLOCK_LIBRARY", "").strip()
    if value:
        return Path(value)
    return None


def log_level(name: Optional[str] = None) -> int:
    """Numeric logging level for ``name`` (default: ASM_BLOCK_LOG_LEVEL).

    Raises:
        ValueError: If the name is not a standard logging level.
    """
    value = (name or LOG_LEVEL).upper()
    level = logging.getLevelName(value)
    if not isinstance(level, int):
        raise ValueError("invalid ASM_BLOCK_LOG_LEVEL {!r}".format(value))
    return level
