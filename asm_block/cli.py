"""Command-line interface for asm_block.

WHY: Fragments are most useful when build scripts can turn them into
assembly text without writing Python. The CLI wires the pipeline (read
source or fragment calls, lex, substitute, render, format, write)
behind a single command.

HOW: Uses argparse. Without ``--call`` the positional input (a file, or
``-`` for stdin) is rendered as one block. With ``--call`` each
``name!(args)`` invocation is expanded from the fragment library and the
results are joined like inline-assembly template strings. The chosen
formatter packages the result for stdout or ``--output``.

RULES:
- Result goes to stdout (or --output); status and logs go to stderr
- --library defaults to ASM_BLOCK_LIBRARY; --call requires a library
- Input errors print "Error: <message>" and exit with status 1
- Ctrl-C exits with status 130
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from asm_block.config import DEFAULT_FORMAT, LOG_FORMAT, log_level, resolve_library_path
from asm_block.core.lexer import tokenize
from asm_block.core.library import FragmentLibrary, load_library
from asm_block.core.transducer import render
from asm_block.formatters import FORMATTERS

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _read_source(input_arg: str) -> str:
    if input_arg == "-":
        return sys.stdin.read()
    return Path(input_arg).read_text(encoding="utf-8")


def _load_library(library_arg: Optional[str]) -> Optional[FragmentLibrary]:
    path = resolve_library_path(library_arg)
    if path is None:
        return None
    return load_library(path)


def _list_fragments(library: FragmentLibrary) -> None:
    for fragment in library:
        signature = "{}!({})".format(fragment.name, ", ".join(fragment.params))
        if fragment.description:
            print("{}  {}".format(signature, fragment.description))
        else:
            print(signature)


def _run(args: argparse.Namespace) -> None:
    """Execute one CLI invocation.

    RULES:
    - --list-fragments prints the library and skips rendering
    - --call and the positional input are mutually exclusive
    - The output file is written only after rendering succeeded
    - The library is read only for --call and --list-fragments
    """
    if args.list_fragments:
        library = _load_library(args.library)
        if library is None:
            raise ValueError("--list-fragments requires --library or ASM_BLOCK_LIBRARY")
        _list_fragments(library)
        return

    if args.call:
        if args.input is not None:
            raise ValueError("pass either an input file or --call, not both")
        library = _load_library(args.library)
        if library is None:
            raise ValueError("--call requires --library or ASM_BLOCK_LIBRARY")
        logger.debug("Rendering %d invocation(s)", len(args.call))
        rendered = library.render_invocations(args.call)
    else:
        source = _read_source(args.input or "-")
        tokens = tokenize(source)
        logger.debug("Rendering %d top-level token(s)", len(tokens))
        rendered = render(tokens)

    output = FORMATTERS[args.format]().format(rendered)

    if args.output:
        output_path = Path(args.output)
        output_path.write_text(output.content, encoding="utf-8")
        _status("Saved: {}".format(output_path))
    else:
        sys.stdout.write(output.content)
        sys.stdout.flush()


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="asm_block",
        description="Render assembly fragments into normalized inline-assembly "
                    "template text.",
    )

    parser.add_argument(
        "input",
        nargs="?",
        default=None,
        help="Source file to render, or '-' for stdin (default: stdin).",
    )

    parser.add_argument(
        "--call",
        action="append",
        default=None,
        metavar="INVOCATION",
        help="Fragment invocation such as 'mad!({x}, 5)'. Can be specified "
             "multiple times; results are joined with newlines.",
    )

    parser.add_argument(
        "--library",
        default=None,
        help="Fragment library JSON file (default: $ASM_BLOCK_LIBRARY).",
    )

    parser.add_argument(
        "--list-fragments",
        action="store_true",
        help="List the fragments in the library and exit.",
    )

    parser.add_argument(
        "--format",
        choices=sorted(FORMATTERS.keys()),
        default=DEFAULT_FORMAT if DEFAULT_FORMAT in FORMATTERS else "plain",
        help="Output format (default: %(default)s).",
    )

    parser.add_argument(
        "--output",
        default=None,
        help="Write the result to this file instead of stdout.",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else log_level(),
            format=LOG_FORMAT,
            stream=sys.stderr,
        )
        _run(args)
    except KeyboardInterrupt:
        _status("\nCancelled by user.")
        sys.exit(130)
    except (ValueError, OSError) as e:
        # Lexer, fragment and library errors are ValueError subclasses
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
