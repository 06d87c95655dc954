"""Source text to token stream.

WHY: The transducer only understands structural tokens with pre-matched
groups. Users write fragments as text (``mov {x}, [{x} + 4]``), so this
module is the front end that turns that text into a balanced stream and
rejects everything the transducer cannot represent.

HOW: A single master regex classifies the text at the cursor. Whitespace
and comments are skipped, openers push a new group on an explicit stack,
closers pop it and wrap the collected tokens in a Group.

RULES:
- Whitespace only separates tokens; it never reaches the stream
- ``//`` and ``/* */`` comments are dropped; block comments nest
- ``;`` is a token (statement separator), never a comment starter
- Every punctuation character is its own Punct token
- Single quotes are rejected, not lexed
- Unbalanced or mismatched delimiters raise LexError
"""

from __future__ import annotations

import re
from typing import List, Tuple

from asm_block.core.errors import LexError
from asm_block.core.tokens import Delimiter, Group, Ident, Literal, Punct, Token

# Order matters: comments before punctuation, strings before the bare quote.
_TOKEN_SPECS = [
    ("SPACE", r"\s+"),
    ("LINE_COMMENT", r"//[^\n]*"),
    ("BLOCK_COMMENT", r"/\*"),
    ("IDENT", r"[^\W\d]\w*"),
    ("NUMBER", r"\d\w*(?:\.\d\w*)?"),
    ("STRING", r'"(?:\\[\s\S]|[^"\\])*"'),
    ("BAD_STRING", r'"'),
    ("BAD_QUOTE", r"'"),
    ("OPEN", r"[\[({]"),
    ("CLOSE", r"[\])}]"),
    ("PUNCT", r"[^\s\w]"),
]

_MASTER_RE = re.compile("|".join("(?P<{}>{})".format(name, pattern) for name, pattern in _TOKEN_SPECS))
_BLOCK_COMMENT_RE = re.compile(r"/\*|\*/")


def _position(source: str, offset: int) -> Tuple[int, int]:
    """1-based (line, column) of ``offset`` in ``source``."""
    line = source.count("\n", 0, offset) + 1
    column = offset - (source.rfind("\n", 0, offset) + 1) + 1
    return line, column


def _error(source: str, offset: int, message: str) -> LexError:
    line, column = _position(source, offset)
    return LexError(message, line, column)


def _skip_block_comment(source: str, start: int) -> int:
    """Return the offset just past the block comment opened at ``start``."""
    depth = 0
    for match in _BLOCK_COMMENT_RE.finditer(source, start):
        depth += 1 if match.group(0) == "/*" else -1
        if depth == 0:
            return match.end()
    raise _error(source, start, "unterminated block comment")


def tokenize(source: str) -> Tuple[Token, ...]:
    """Split ``source`` into a balanced token stream.

    Args:
        source: Fragment text, e.g. ``"lea {a:e}, [{a:e} + 4]; rol {a:e}, 7"``.

    Returns:
        Tuple of tokens; brackets, parens and braces are nested Groups.

    Raises:
        LexError: On single quotes, unterminated strings or comments,
            non-printable characters, or unbalanced delimiters.
    """
    root: List[Token] = []
    current = root
    # (delimiter, offset of the opener, token list that encloses the group)
    stack: List[Tuple[Delimiter, int, List[Token]]] = []

    pos = 0
    end = len(source)
    while pos < end:
        match = _MASTER_RE.match(source, pos)
        if match is None:
            # The alternatives cover every character; keeps the loop from stalling.
            raise _error(source, pos, "cannot classify character {!r}".format(source[pos]))
        kind = match.lastgroup
        text = match.group(0)

        if kind == "SPACE" or kind == "LINE_COMMENT":
            pos = match.end()
            continue
        if kind == "BLOCK_COMMENT":
            pos = _skip_block_comment(source, pos)
            continue

        if kind == "IDENT":
            current.append(Ident(text))
        elif kind in ("NUMBER", "STRING"):
            current.append(Literal(text))
        elif kind == "BAD_STRING":
            raise _error(source, pos, "unterminated string literal")
        elif kind == "BAD_QUOTE":
            raise _error(source, pos, "single-quoted tokens are not supported")
        elif kind == "OPEN":
            stack.append((Delimiter.from_open(text), pos, current))
            current = []
        elif kind == "CLOSE":
            if not stack:
                raise _error(source, pos, "unexpected closing {!r}".format(text))
            delimiter, open_pos, parent = stack.pop()
            if delimiter.close != text:
                line, column = _position(source, open_pos)
                raise _error(
                    source,
                    pos,
                    "mismatched closing {!r}, expected {!r} to close {!r} opened at line {}, column {}".format(
                        text, delimiter.close, delimiter.open, line, column
                    ),
                )
            parent.append(Group(delimiter, tuple(current)))
            current = parent
        else:
            if not text.isprintable():
                raise _error(source, pos, "cannot classify character {!r}".format(text))
            current.append(Punct(text))

        pos = match.end()

    if stack:
        delimiter, open_pos, _ = stack[-1]
        raise _error(source, open_pos, "unclosed {!r}".format(delimiter.open))

    return tuple(root)
