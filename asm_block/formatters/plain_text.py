"""Plain text formatter: the rendered string, untouched."""

from __future__ import annotations

from asm_block.formatters.base import BaseFormatter, FormatterOutput


class PlainTextFormatter(BaseFormatter):
    @property
    def name(self) -> str:
        return "Plain Text"

    def format(self, rendered: str) -> FormatterOutput:
        return FormatterOutput(content=rendered, media_type="text/plain")
