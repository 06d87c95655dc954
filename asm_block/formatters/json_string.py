"""JSON string formatter.

WHY: Build scripts and code generators that consume asm_block output
over a pipe need the exact string, including trailing spaces and
newlines, without shell quoting surprises.

RULES:
- Content is a single JSON string literal followed by a newline
- Non-ASCII characters are kept as-is (UTF-8), not escaped
"""

from __future__ import annotations

import json

from asm_block.formatters.base import BaseFormatter, FormatterOutput


class JsonStringFormatter(BaseFormatter):
    @property
    def name(self) -> str:
        return "JSON String"

    def format(self, rendered: str) -> FormatterOutput:
        return FormatterOutput(
            content=json.dumps(rendered, ensure_ascii=False) + "\n",
            media_type="application/json",
        )
