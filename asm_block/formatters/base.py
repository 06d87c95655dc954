"""Abstract base formatter and output container.

WHY: The rendered string is delivered in different shapes: pasted
verbatim, embedded in JSON, or split into the quoted template arguments
of an inline-assembly statement. A common base lets the CLI and the HTTP
API treat every delivery shape the same way.

HOW: BaseFormatter is an ABC with a ``name`` property and a ``format()``
method. FormatterOutput bundles the produced text with its MIME type.

RULES:
- Subclasses MUST implement ``name`` (human-readable) and ``format()``
- ``format()`` receives the already rendered string, never tokens
- Formatters never change the rendered text's characters, only its packaging
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class FormatterOutput:
    """Formatted text ready for delivery.

    Attributes:
        content: The formatted text.
        media_type: MIME type for the content, e.g. ``"application/json"``.
    """

    content: str
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all output formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'Plain Text'."""

    @abstractmethod
    def format(self, rendered: str) -> FormatterOutput:
        """Package the rendered assembly text.

        Args:
            rendered: Output of the transducer (possibly several fragments
                      joined with newlines).

        Returns:
            The formatted content and its MIME type.
        """
