"""asm_block: composable assembly text from token streams.

WHY: Inline-assembly statements take template strings, and reusing an
assembler ``.macro`` across several of them fails with redefinition
errors. asm_block builds the template text on the Python side instead:
fragments are written as ordinary assembly, substituted with arguments
and rendered into strings that can be concatenated freely.

HOW: Three-stage pipeline: lex (source text to token stream), render
(rule-based transducer to a normalized string), format (pluggable output
formatters). Fragments and fragment libraries sit between lexing and
rendering. Each stage is independently testable.

RULES:
- The transducer only ever sees finished, substituted token streams
- The rendered string is the stable contract between core and formatters
- Output is whitespace-normalized, never validated as assembly
"""

__version__ = "0.1.0"
