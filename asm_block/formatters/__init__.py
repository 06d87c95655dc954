"""Output formatter registry.

WHY: The CLI and the HTTP API need a single lookup to find the right
formatter by name. Adding a format = one module plus one line here.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["template"]()``.

RULES:
- Keys are lowercase identifiers (used in CLI flags and API requests)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from asm_block.formatters.json_string import JsonStringFormatter
from asm_block.formatters.plain_text import PlainTextFormatter
from asm_block.formatters.template_lines import TemplateLinesFormatter

if TYPE_CHECKING:
    from asm_block.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "plain": PlainTextFormatter,
    "json": JsonStringFormatter,
    "template": TemplateLinesFormatter,
}
