"""Token dataclasses for assembler instruction fragments.

WHY: The transducer, the fragment substituter and the formatters all
operate on the same structural token stream. Defining it once keeps the
lexer and every consumer on a single contract.

HOW: Four frozen dataclasses form the token vocabulary:
  Ident  : identifier-like atom (``mov``, ``eax``, ``_start``)
  Punct  : exactly one punctuation character (``:``, ``@``, ``%``)
  Literal: number or double-quoted string, surface text kept verbatim
  Group  : balanced ``{}``, ``[]`` or ``()`` sub-stream

RULES:
- Tokens are immutable; a Group holds a tuple, never a list
- Adjacent punctuation characters are separate Punct tokens
- surface() never inserts whitespace, not even inside groups
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union


class Delimiter(enum.Enum):
    """Bracketing characters of a Group."""

    BRACE = ("{", "}")
    BRACKET = ("[", "]")
    PAREN = ("(", ")")

    @property
    def open(self) -> str:
        return self.value[0]

    @property
    def close(self) -> str:
        return self.value[1]

    @classmethod
    def from_open(cls, char: str) -> "Delimiter":
        for member in cls:
            if member.open == char:
                return member
        raise KeyError(char)


@dataclass(frozen=True)
class Ident:
    text: str

    def surface(self) -> str:
        return self.text


@dataclass(frozen=True)
class Punct:
    char: str

    def __post_init__(self) -> None:
        if len(self.char) != 1:
            raise ValueError("Punct holds exactly one character, got {!r}".format(self.char))

    def surface(self) -> str:
        return self.char


@dataclass(frozen=True)
class Literal:
    """A numeric or string literal.

    ``text`` includes quote characters and escapes exactly as written,
    e.g. ``'"Hello, world\\n"'`` or ``"0xd76aa478"``.
    """

    text: str

    def surface(self) -> str:
        return self.text


@dataclass(frozen=True)
class Group:
    """A delimiter-enclosed, already balanced sub-stream."""

    delimiter: Delimiter
    tokens: Tuple["Token", ...] = ()

    def surface(self) -> str:
        return surface(self)


Token = Union[Ident, Punct, Literal, Group]
TokenStream = Sequence[Token]


def surface(token: Token) -> str:
    """Return the literal source text of a token.

    Groups are flattened with an explicit stack: open delimiter, every
    inner token's surface text with no separators, close delimiter.
    """
    if not isinstance(token, Group):
        return token.surface()

    parts: List[str] = []
    # Stack entries are either a token still to visit or a pending closer.
    pending: List[Union[Token, str]] = [token]
    while pending:
        item = pending.pop()
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, Group):
            parts.append(item.delimiter.open)
            pending.append(item.delimiter.close)
            pending.extend(reversed(item.tokens))
        else:
            parts.append(item.surface())
    return "".join(parts)


def is_punct(token: object, chars: str) -> bool:
    """True if ``token`` is a Punct whose character is one of ``chars``."""
    return isinstance(token, Punct) and token.char in chars
