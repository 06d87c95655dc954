"""Inline-assembly template formatter: one quoted string per line.

WHY: Inline-assembly statements accept their template as a list of
string literals and insert a newline between consecutive literals.
Emitting one literal per rendered line gives text that can be pasted
straight into such a statement and reads like hand-written assembly.

HOW: Split the rendered text on newlines, drop the empty remainder after
a final newline, and quote each line as a double-quoted string literal
(backslashes and quotes escaped). Literals are joined with ``",\\n"``.

RULES:
- A trailing newline does not produce an empty final literal
- Blank lines in the middle are kept as ``""`` literals
- Lines are not stripped; trailing spaces are harmless to the assembler
- Empty input → empty content
"""

from __future__ import annotations

import json
from typing import List

from asm_block.formatters.base import BaseFormatter, FormatterOutput


def _split_lines(rendered: str) -> List[str]:
    if not rendered:
        return []
    lines = rendered.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


class TemplateLinesFormatter(BaseFormatter):
    @property
    def name(self) -> str:
        return "Inline Assembly Template"

    def format(self, rendered: str) -> FormatterOutput:
        literals = [json.dumps(line, ensure_ascii=False) for line in _split_lines(rendered)]
        content = ",\n".join(literals)
        if content:
            content += "\n"
        return FormatterOutput(content=content, media_type="text/plain")
