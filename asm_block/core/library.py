"""Fragment library: a registry of named fragments loaded from JSON.

WHY: Fragments are meant to be shared across many emission sites and
across the CLI and the HTTP API. Keeping them in one JSON file makes the
set reviewable and lets every tool resolve ``mad!({x}, 5)`` the same way.

HOW: FragmentLibrary maps fragment names to Fragment objects.
load_library() reads a JSON file, validates it with jsonschema against
fragment_library_schema.json (shipped next to this module), tokenizes
each body and registers the resulting fragments.

RULES:
- Fragment names are unique within a library
- A body may be a string or a list of lines (joined with newlines)
- Every load failure surfaces as LibraryError naming the source file
- A loaded library is only read afterwards, never mutated in place
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

import jsonschema

from asm_block.core.errors import FragmentError, LexError, LibraryError
from asm_block.core.fragments import Argument, Fragment, join_templates, parse_invocation
from asm_block.core.tokens import Token

logger = logging.getLogger(__name__)

_SCHEMA_PATH = Path(__file__).resolve().parent / "fragment_library_schema.json"

_CACHED_SCHEMA: Optional[Dict[str, Any]] = None


def get_schema() -> Dict[str, Any]:
    """Return the library JSON schema, read from disk on first use."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


class FragmentLibrary:
    """Name → Fragment registry."""

    def __init__(self, fragments: Iterable[Fragment] = ()) -> None:
        self._fragments: Dict[str, Fragment] = {}
        for fragment in fragments:
            self.define(fragment)

    def define(self, fragment: Fragment) -> None:
        if fragment.name in self._fragments:
            raise LibraryError("fragment '{}' is already defined".format(fragment.name))
        self._fragments[fragment.name] = fragment
        logger.debug("Defined fragment %s(%s)", fragment.name, ", ".join(fragment.params))

    def get(self, name: str) -> Fragment:
        try:
            return self._fragments[name]
        except KeyError:
            available = ", ".join(self.names()) or "none"
            raise LibraryError(
                "unknown fragment '{}'. Available: {}".format(name, available)
            ) from None

    def names(self) -> List[str]:
        return sorted(self._fragments)

    def __contains__(self, name: object) -> bool:
        return name in self._fragments

    def __len__(self) -> int:
        return len(self._fragments)

    def __iter__(self) -> Iterator[Fragment]:
        for name in self.names():
            yield self._fragments[name]

    def expand(self, name: str, args: Sequence[Argument]) -> Tuple[Token, ...]:
        return self.get(name).expand(*args)

    def render(self, name: str, args: Sequence[Argument]) -> str:
        return self.get(name).render(*args)

    def render_invocation(self, source: str) -> str:
        """Render one ``name!(arg, ...)`` call against this library."""
        name, args = parse_invocation(source)
        return self.render(name, args)

    def render_invocations(self, sources: Iterable[str]) -> str:
        """Render several calls and join them like inline-assembly templates."""
        return join_templates(self.render_invocation(source) for source in sources)


def _describe_validation_error(exc: jsonschema.ValidationError) -> str:
    location = "/".join(str(part) for part in exc.absolute_path)
    return "{} (at {})".format(exc.message, location or "document root")


def library_from_dict(data: Any, source: str = "<dict>") -> FragmentLibrary:
    """Build a FragmentLibrary from an already parsed library document.

    Args:
        data: Parsed JSON document (see fragment_library_schema.json).
        source: Name used in error messages, usually the file path.

    Raises:
        LibraryError: If the document violates the schema or a fragment
            body cannot be tokenized.
    """
    try:
        jsonschema.validate(instance=data, schema=get_schema())
    except jsonschema.ValidationError as exc:
        raise LibraryError(
            "{}: invalid fragment library: {}".format(source, _describe_validation_error(exc))
        ) from exc

    library = FragmentLibrary()
    for name, entry in data["fragments"].items():
        body = entry["body"]
        if isinstance(body, list):
            body = "\n".join(body)
        try:
            fragment = Fragment.from_source(
                name=name,
                params=entry.get("params", []),
                body=body,
                description=entry.get("description", ""),
            )
        except (LexError, FragmentError) as exc:
            raise LibraryError("{}: fragment '{}': {}".format(source, name, exc)) from exc
        library.define(fragment)
    return library


def load_library(path: str | Path) -> FragmentLibrary:
    """Load and validate a fragment library JSON file.

    Raises:
        LibraryError: If the file is missing, unreadable, not JSON, or
            not a valid library.
    """
    library_path = Path(path)
    try:
        text = library_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LibraryError("cannot read fragment library {}: {}".format(library_path, exc)) from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise LibraryError("{}: invalid JSON: {}".format(library_path, exc)) from exc

    library = library_from_dict(data, source=str(library_path))
    logger.info("Loaded %d fragment(s) from %s", len(library), library_path)
    return library
