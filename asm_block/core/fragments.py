"""Named, parameterized assembly fragments.

WHY: An assembler ``.macro`` cannot be defined once and reused from
several inline-assembly sites, because every site re-emits the
definition. Fragments move that reuse to the Python side: a fragment body
is substituted and rendered to plain text, so each site receives
finished instructions and the assembler never sees a macro.

HOW: A Fragment holds its parameter names and a tokenized body. In the
body, ``$name`` marks a parameter. expand() splices the argument's tokens
in place of each marker (inside groups too) and render() runs the
transducer over the result. parse_invocation() reads the
``name!(arg, ...)`` call syntax used by the CLI, the API and libraries.

RULES:
- Only ``$`` followed by a declared parameter name is substituted;
  any other ``$`` (``$1``, ``$msg``) stays a literal token
- An argument is any token sequence, so ``dword ptr [rax]`` is a single
  argument; substituted tokens are not scanned for markers again
- Argument count must match the parameter count exactly
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Mapping, Sequence, Tuple, Union

from asm_block.core.errors import FragmentError
from asm_block.core.lexer import tokenize
from asm_block.core.tokens import Delimiter, Group, Ident, Literal, Punct, Token, is_punct
from asm_block.core.transducer import render

PARAM_SIGIL = "$"

Argument = Union[str, Token, Sequence[Token]]


def _coerce_argument(arg: Argument) -> Tuple[Token, ...]:
    if isinstance(arg, str):
        return tokenize(arg)
    if isinstance(arg, (Ident, Punct, Literal, Group)):
        return (arg,)
    return tuple(arg)


def _substitute(tokens: Sequence[Token], bindings: Mapping[str, Tuple[Token, ...]]) -> Tuple[Token, ...]:
    result: List[Token] = []
    i = 0
    while i < len(tokens):
        token = tokens[i]
        following = tokens[i + 1] if i + 1 < len(tokens) else None
        if (
            is_punct(token, PARAM_SIGIL)
            and isinstance(following, Ident)
            and following.text in bindings
        ):
            result.extend(bindings[following.text])
            i += 2
            continue
        if isinstance(token, Group):
            result.append(Group(token.delimiter, _substitute(token.tokens, bindings)))
        else:
            result.append(token)
        i += 1
    return tuple(result)


@dataclass(frozen=True)
class Fragment:
    """A reusable piece of assembly with ``$``-prefixed parameters.

    Example::

        mad = Fragment.from_source("mad", ["x", "y"], "mul $x, $y; lea $x, [$x + $y];")
        mad.render("{x}", "5")
        # 'mul {x}, 5 \\nlea {x}, [{x}+ 5 ] \\n'
    """

    name: str
    params: Tuple[str, ...]
    body: Tuple[Token, ...]
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name.isidentifier():
            raise FragmentError("invalid fragment name {!r}".format(self.name))
        seen = set()
        for param in self.params:
            if not param.isidentifier():
                raise FragmentError(
                    "fragment '{}': invalid parameter name {!r}".format(self.name, param)
                )
            if param in seen:
                raise FragmentError(
                    "fragment '{}': duplicate parameter '{}'".format(self.name, param)
                )
            seen.add(param)

    @classmethod
    def from_source(
        cls,
        name: str,
        params: Iterable[str],
        body: str,
        description: str = "",
    ) -> "Fragment":
        """Build a fragment whose body is given as source text."""
        return cls(name=name, params=tuple(params), body=tokenize(body), description=description)

    def expand(self, *args: Argument) -> Tuple[Token, ...]:
        """Substitute ``args`` for the parameters and return the token stream.

        Raises:
            FragmentError: If the number of arguments does not match.
            LexError: If a string argument cannot be tokenized.
        """
        if len(args) != len(self.params):
            raise FragmentError(
                "fragment '{}' expects {} argument(s) ({}), got {}".format(
                    self.name, len(self.params), ", ".join(self.params), len(args)
                )
            )
        bindings = {param: _coerce_argument(arg) for param, arg in zip(self.params, args)}
        return _substitute(self.body, bindings)

    def render(self, *args: Argument) -> str:
        return render(self.expand(*args))


def split_arguments(tokens: Sequence[Token], name: str = "<invocation>") -> List[Tuple[Token, ...]]:
    """Split a token sequence on top-level commas.

    A single trailing comma is ignored; any other empty argument is an error.
    """
    args: List[Tuple[Token, ...]] = []
    current: List[Token] = []
    for token in tokens:
        if is_punct(token, ","):
            if not current:
                raise FragmentError(
                    "empty argument {} in invocation of '{}'".format(len(args) + 1, name)
                )
            args.append(tuple(current))
            current = []
        else:
            current.append(token)
    if current:
        args.append(tuple(current))
    return args


def parse_invocation(source: str) -> Tuple[str, List[Tuple[Token, ...]]]:
    """Parse ``name!(arg, ...)`` (the ``!`` is optional).

    Returns:
        The fragment name and one token tuple per argument.

    Raises:
        FragmentError: If the text is not a single invocation.
    """
    tokens = tokenize(source)
    shape = list(tokens)
    if len(shape) == 3 and is_punct(shape[1], "!"):
        del shape[1]
    if (
        len(shape) != 2
        or not isinstance(shape[0], Ident)
        or not isinstance(shape[1], Group)
        or shape[1].delimiter is not Delimiter.PAREN
    ):
        raise FragmentError(
            "expected an invocation like 'name!(arg, ...)', got {!r}".format(source.strip())
        )
    name = shape[0].text
    return name, split_arguments(shape[1].tokens, name)


def join_templates(parts: Iterable[str]) -> str:
    """Join rendered fragments the way an inline-assembly statement joins
    its template strings: one newline between consecutive parts."""
    return "\n".join(parts)
