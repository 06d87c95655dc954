"""FastAPI application exposing the renderer over HTTP.

WHY: Code generators written in other languages (build.rs scripts, C
generators, editor plugins) need the same rendering and the same shared
fragment library as the CLI without embedding Python.

HOW: A single FastAPI app exposes render endpoints for raw source, for
one library fragment, and for a list of invocations, plus discovery
endpoints for fragments and formats and a health check. The fragment
library is loaded once at startup from ASM_BLOCK_LIBRARY.

RULES:
- Input errors (lexing, arguments, unknown names in invocations) → 400
- Unknown fragment in the URL path → 404
- Source longer than MAX_SOURCE_SIZE → 413
- The library is replaced wholesale on startup, never mutated per request
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import List

from fastapi import FastAPI, HTTPException

from asm_block import __version__
from asm_block.config import LOG_FORMAT, MAX_SOURCE_SIZE, SERVER_HOST, SERVER_PORT, log_level, resolve_library_path
from asm_block.core.errors import AsmBlockError
from asm_block.core.lexer import tokenize
from asm_block.core.library import FragmentLibrary, load_library
from asm_block.core.transducer import render
from asm_block.formatters import FORMATTERS
from asm_block.server.models import (
    ErrorResponse,
    FormatInfo,
    FragmentInfo,
    FragmentRenderRequest,
    HealthResponse,
    InvocationsRenderRequest,
    OutputFormat,
    RenderRequest,
    RenderResponse,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App and library setup
# ---------------------------------------------------------------------------

library = FragmentLibrary()


def _load_configured_library() -> FragmentLibrary:
    path = resolve_library_path()
    if path is None:
        logger.info("No fragment library configured; serving an empty library")
        return FragmentLibrary()
    return load_library(path)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the configured fragment library on startup."""
    global library
    library = _load_configured_library()
    yield


app = FastAPI(
    lifespan=lifespan,
    title="asm_block API",
    description=(
        "Render assembly source and named fragments into normalized "
        "inline-assembly template text."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Source or arguments could not be rendered"},
    413: {"model": ErrorResponse, "description": "Source text too large"},
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _check_size(*texts: str) -> None:
    """Raise HTTPException if the combined text exceeds MAX_SOURCE_SIZE."""
    size = sum(len(text) for text in texts)
    if size > MAX_SOURCE_SIZE:
        raise HTTPException(
            status_code=413,
            detail="Source too large ({} chars, max {})".format(size, MAX_SOURCE_SIZE),
        )


def _formatted(rendered: str, output_format: OutputFormat) -> RenderResponse:
    output = FORMATTERS[output_format.value]().format(rendered)
    return RenderResponse(
        format=output_format.value,
        content=output.content,
        media_type=output.media_type,
    )


# ---------------------------------------------------------------------------
# Endpoints: Rendering
# ---------------------------------------------------------------------------


@app.post(
    "/render",
    response_model=RenderResponse,
    tags=["render"],
    summary="Render source text",
    description="Lex and render assembly source text as a single block.",
    responses=_ERROR_RESPONSES,
)
async def render_source(request: RenderRequest) -> RenderResponse:
    _check_size(request.source)
    try:
        rendered = render(tokenize(request.source))
    except AsmBlockError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return _formatted(rendered, request.format)


@app.post(
    "/fragments/{name}/render",
    response_model=RenderResponse,
    tags=["render"],
    summary="Render one library fragment",
    description="Substitute the given arguments into a library fragment and render it.",
    responses={
        **_ERROR_RESPONSES,
        404: {"model": ErrorResponse, "description": "Fragment not found"},
    },
)
async def render_fragment(name: str, request: FragmentRenderRequest) -> RenderResponse:
    if name not in library:
        raise HTTPException(status_code=404, detail="Fragment not found: {}".format(name))
    _check_size(*request.args)
    try:
        rendered = library.render(name, request.args)
    except AsmBlockError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return _formatted(rendered, request.format)


@app.post(
    "/invocations/render",
    response_model=RenderResponse,
    tags=["render"],
    summary="Render fragment invocations",
    description=(
        "Render each 'name!(args)' invocation against the library and join "
        "the results with newlines, in request order."
    ),
    responses=_ERROR_RESPONSES,
)
async def render_invocations(request: InvocationsRenderRequest) -> RenderResponse:
    _check_size(*request.invocations)
    try:
        rendered = library.render_invocations(request.invocations)
    except AsmBlockError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return _formatted(rendered, request.format)


# ---------------------------------------------------------------------------
# Endpoints: Discovery
# ---------------------------------------------------------------------------


@app.get(
    "/fragments",
    response_model=List[FragmentInfo],
    tags=["fragments"],
    summary="List library fragments",
)
async def list_fragments() -> List[FragmentInfo]:
    return [
        FragmentInfo(
            name=fragment.name,
            params=list(fragment.params),
            description=fragment.description,
        )
        for fragment in library
    ]


@app.get(
    "/formats",
    response_model=List[FormatInfo],
    tags=["formats"],
    summary="List available output formats",
)
async def list_formats() -> List[FormatInfo]:
    result = []
    for key, formatter_cls in sorted(FORMATTERS.items()):
        formatter = formatter_cls()
        result.append(FormatInfo(
            key=key,
            name=formatter.name,
            media_type=formatter.format("").media_type,
        ))
    return result


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Liveness and readiness check for load balancers and orchestrators.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__, fragments=len(library))


def run_api():
    """Entry point for the asm-block-api console script."""
    import uvicorn

    logging.basicConfig(level=log_level(), format=LOG_FORMAT)
    logger.info("Starting asm_block API on %s:%d", SERVER_HOST, SERVER_PORT)
    uvicorn.run(app, host=SERVER_HOST, port=SERVER_PORT)
