"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation.

HOW: Each endpoint has its own request and/or response model. An enum
represents the closed set of output format names.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- OutputFormat values match keys in asm_block.formatters.FORMATTERS exactly
- Python 3.9+ compatible (Optional/List from typing in models)
"""

from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class OutputFormat(str, Enum):
    """Available output format identifiers."""

    plain = "plain"
    json = "json"
    template = "template"


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class RenderRequest(BaseModel):
    """Source text to render as one block."""

    source: str = Field(description="Assembly source, statements separated by ';'.")
    format: OutputFormat = Field(
        default=OutputFormat.plain,
        description="Output format for the rendered text.",
    )

    model_config = {"json_schema_extra": {
        "examples": [
            {"source": "_start: mov rax, 1; lea {x}, [{x} + 4]", "format": "plain"}
        ]
    }}


class FragmentRenderRequest(BaseModel):
    """Arguments for a single library fragment."""

    args: List[str] = Field(
        default_factory=list,
        description="One source-text argument per fragment parameter, in order.",
    )
    format: OutputFormat = Field(
        default=OutputFormat.plain,
        description="Output format for the rendered text.",
    )

    model_config = {"json_schema_extra": {
        "examples": [{"args": ["{x}", "5"], "format": "template"}]
    }}


class InvocationsRenderRequest(BaseModel):
    """A sequence of ``name!(args)`` calls rendered and joined in order."""

    invocations: List[str] = Field(
        min_length=1,
        description="Fragment invocations such as 'mad!({x}, 5)'.",
    )
    format: OutputFormat = Field(
        default=OutputFormat.plain,
        description="Output format for the rendered text.",
    )


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class RenderResponse(BaseModel):
    """Rendered and formatted assembly text."""

    format: str = Field(description="Output format that was applied.")
    content: str = Field(description="Formatted text.")
    media_type: str = Field(description="MIME type of the formatted text.")

    model_config = {"json_schema_extra": {
        "examples": [
            {
                "format": "plain",
                "content": "_start:mov rax , 1 \nlea {x}, [{x}+ 4 ] ",
                "media_type": "text/plain",
            }
        ]
    }}


class FragmentInfo(BaseModel):
    """Description of a library fragment."""

    name: str = Field(description="Fragment name used in invocations.")
    params: List[str] = Field(description="Parameter names, in argument order.")
    description: str = Field(default="", description="Free-form description.")


class FormatInfo(BaseModel):
    """Description of an available output format."""

    key: str = Field(description="Format identifier used in API requests.")
    name: str = Field(description="Human-readable format name.")
    media_type: str = Field(description="MIME type of the formatted text.")


class ErrorResponse(BaseModel):
    """Standard error response body."""

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
    fragments: int = Field(description="Number of fragments in the loaded library.")
