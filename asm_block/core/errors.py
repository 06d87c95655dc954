"""Exception hierarchy for asm_block.

WHY: The CLI and the HTTP API must tell user input problems (bad source
text, wrong fragment arguments, broken library files) apart from bugs.
Every user-facing error derives from ValueError, so callers that already
treat ValueError as "bad input" keep working.

RULES:
- The transducer itself raises none of these; it trusts its input
- LexError always carries a 1-based line and column
"""

from __future__ import annotations


class AsmBlockError(ValueError):
    """Base class for all asm_block input errors."""


class LexError(AsmBlockError):
    """Source text could not be turned into a balanced token stream."""

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__("{} (line {}, column {})".format(message, line, column))
        self.reason = message
        self.line = line
        self.column = column


class FragmentError(AsmBlockError):
    """Invalid fragment definition, arguments, or invocation syntax."""


class LibraryError(AsmBlockError):
    """Fragment library could not be loaded or queried."""
