"""FastAPI application serving entry trees to browser renderers.

WHY: The interactive size viewer runs in a browser and needs the entry
tree as JSON, built from an analyzer result it already holds. An HTTP API
also lets scripts and CI jobs render reports without installing the CLI.

HOW: A single FastAPI app exposes four endpoints grouped by tags. POST
/tree validates the posted analyzer result, builds the tree with a fresh
id allocator, and returns it as nested EntryNode objects. POST
/render/{format_key} runs one registered formatter over the same tree.

RULES:
- Invalid results and leftover mismatches (under the "error" policy)
  return 422 with an ErrorResponse body
- Unknown format keys return 404
- Every request builds with its own IdAllocator, so ids start at 1
- /tree and /render handlers are plain def and run in the threadpool
- Python 3.9+ compatible (no match/case, no PEP 604 unions)
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Dict, List, Optional

from fastapi import Body, FastAPI, HTTPException, Query
from fastapi.responses import Response

from binsize_tree import __version__
from binsize_tree.config import API_HOST, API_PORT
from binsize_tree.core.builder import LeftoverMismatchError, build_tree
from binsize_tree.core.entry import ResultEntry
from binsize_tree.core.ids import IdAllocator
from binsize_tree.formatters import FORMATTERS
from binsize_tree.formatters.json_tree import entry_to_dict
from binsize_tree.records.loader import InvalidResultError, parse_result
from binsize_tree.server.models import (
    EntryNode,
    ErrorResponse,
    FormatInfo,
    HealthResponse,
    NegativeLeftoverPolicy,
    PackageOrder,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Binary Size Tree API",
    description=(
        "Builds a size-accounting tree from a binary size analyzer result. "
        "Every byte of the binary is attributed to a section, package, file, "
        "symbol, or an explicit Disasm/Unknown entry."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

ResultBody = Annotated[
    Dict[str, Any],
    Body(description="Analyzer result JSON (name, size, sections, packages)."),
]
OrderQuery = Annotated[
    Optional[PackageOrder],
    Query(description="Package mapping iteration order. Defaults to server config."),
]
PolicyQuery = Annotated[
    Optional[NegativeLeftoverPolicy],
    Query(description="What to do when children exceed their parent's size."),
]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _build_from_payload(
    payload: Dict[str, Any],
    order: Optional[PackageOrder],
    negative_leftover: Optional[NegativeLeftoverPolicy],
) -> ResultEntry:
    """Validate a posted result and build its tree, mapping errors to 422."""
    try:
        result = parse_result(payload)
        return build_tree(
            result,
            allocator=IdAllocator(),
            package_order=order.value if order is not None else None,
            negative_leftover=negative_leftover.value if negative_leftover is not None else None,
        )
    except InvalidResultError as e:
        logger.info("Rejected result payload: %s", e)
        raise HTTPException(status_code=422, detail=str(e))
    except LeftoverMismatchError as e:
        logger.info("Leftover mismatch: %s", e)
        raise HTTPException(status_code=422, detail=str(e))


# ---------------------------------------------------------------------------
# Endpoints: Trees
# ---------------------------------------------------------------------------


@app.post(
    "/tree",
    response_model=EntryNode,
    tags=["trees"],
    summary="Build the entry tree for an analyzer result",
    description=(
        "Validates the posted analyzer result and returns the full entry "
        "tree: an 'Unknown Sections Size' container, one container per "
        "package type, and an 'Unknown' entry for unattributed bytes."
    ),
    responses={
        422: {"model": ErrorResponse, "description": "Invalid result or size mismatch"},
    },
)
def create_tree(
    payload: ResultBody,
    order: OrderQuery = None,
    negative_leftover: PolicyQuery = None,
) -> EntryNode:
    root = _build_from_payload(payload, order, negative_leftover)
    return EntryNode.model_validate(entry_to_dict(root))


@app.post(
    "/render/{format_key}",
    tags=["trees"],
    summary="Render an analyzer result with one output format",
    description="Builds the entry tree and returns the formatter's output file content.",
    responses={
        404: {"model": ErrorResponse, "description": "Unknown format"},
        422: {"model": ErrorResponse, "description": "Invalid result or size mismatch"},
    },
)
def render_tree(
    format_key: str,
    payload: ResultBody,
    order: OrderQuery = None,
    negative_leftover: PolicyQuery = None,
) -> Response:
    formatter_cls = FORMATTERS.get(format_key)
    if formatter_cls is None:
        available = ", ".join(sorted(FORMATTERS.keys()))
        raise HTTPException(
            status_code=404,
            detail="Unknown format '{}'. Available formats: {}".format(format_key, available),
        )

    root = _build_from_payload(payload, order, negative_leftover)
    output = formatter_cls().format(root)[0]
    return Response(content=output.content, media_type=output.media_type)


# ---------------------------------------------------------------------------
# Endpoints: Formats
# ---------------------------------------------------------------------------


@app.get(
    "/formats",
    response_model=List[FormatInfo],
    tags=["formats"],
    summary="List available output formats",
    description=(
        "Returns all supported output formats with their identifiers, "
        "human-readable names, and file suffixes."
    ),
)
async def list_formats() -> List[FormatInfo]:
    result = []
    for key, formatter_cls in sorted(FORMATTERS.items()):
        formatter = formatter_cls()
        result.append(FormatInfo(key=key, name=formatter.name, suffix=formatter.suffix))
    return result


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Liveness and readiness check for load balancers and orchestrators.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api():
    """Entry point for the binsize-tree-api console script."""
    import uvicorn
    uvicorn.run(app, host=API_HOST, port=API_PORT)
