"""Rule-based transducer from a token stream to assembler text.

WHY: Inline-assembly templates are plain strings, so composing them from
reusable pieces means turning structured tokens back into text. The
assembler is lenient about whitespace, which lets a handful of adjacency
rules produce text it accepts without understanding any instruction.

HOW: A cursor walks the stream left to right and, for the token under
it, applies the first matching rule from the table below. Bracket and
paren groups push a new cursor frame over their inner tokens together
with the suffix to emit when that frame is exhausted. The loop never
recurses, so stream length and nesting depth are only bounded by memory.

RULES (first match wins):
 1. empty stream                   → ""
 2. ";"                            → "\\n"
 3-5. Ident followed by ":"/"@"/"." → identifier text, no space
 6. ":"                            → ":"
 7. "@"                            → "@"
 8. "." followed by any token T    → "." + surface(T) + " "
 9. {…}                            → "{" + raw inner surface text + "}"
10. […]                            → "[" + render(inner) + "] "
11. (…)                            → "(" + render(inner) + ") "
12. anything else                  → surface(token) + " "
"""

from __future__ import annotations

from typing import List

from asm_block.core.tokens import (
    Delimiter,
    Group,
    Ident,
    TokenStream,
    is_punct,
    surface,
)


class _Frame:
    """Cursor over one stream plus the text to emit once it is exhausted."""

    __slots__ = ("tokens", "pos", "closer")

    def __init__(self, tokens: TokenStream, closer: str) -> None:
        self.tokens = tokens
        self.pos = 0
        self.closer = closer


def render(stream: TokenStream) -> str:
    """Render a token stream into a single normalized assembler string.

    Args:
        stream: Balanced token stream, as produced by the lexer or by
                fragment expansion.

    Returns:
        The rendered text. Identical input always yields identical output.
    """
    out: List[str] = []
    frames = [_Frame(stream, "")]

    while frames:
        frame = frames[-1]
        tokens = frame.tokens
        pos = frame.pos

        if pos >= len(tokens):
            frames.pop()
            out.append(frame.closer)
            continue

        token = tokens[pos]
        following = tokens[pos + 1] if pos + 1 < len(tokens) else None

        if is_punct(token, ";"):
            out.append("\n")
            frame.pos = pos + 1
        elif isinstance(token, Ident) and is_punct(following, ":@."):
            # The separator itself is handled on the next iteration.
            out.append(token.text)
            frame.pos = pos + 1
        elif is_punct(token, ":@"):
            out.append(token.char)
            frame.pos = pos + 1
        elif is_punct(token, ".") and following is not None:
            out.append(".")
            out.append(surface(following))
            out.append(" ")
            frame.pos = pos + 2
        elif isinstance(token, Group):
            frame.pos = pos + 1
            if token.delimiter is Delimiter.BRACE:
                out.append(surface(token))
            else:
                out.append(token.delimiter.open)
                frames.append(_Frame(token.tokens, token.delimiter.close + " "))
        else:
            out.append(surface(token))
            out.append(" ")
            frame.pos = pos + 1

    return "".join(out)
