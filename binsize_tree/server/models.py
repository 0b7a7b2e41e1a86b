"""Pydantic response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for response serialization
and automatic OpenAPI documentation. The entry tree is recursive, so the
schema a UI codes against is worth spelling out.

HOW: EntryNode mirrors the json_tree formatter's node dict and refers to
itself for children. Enums represent closed sets (entry types, query policies).
All models include Field descriptions for rich OpenAPI docs.

RULES:
- EntryNode.type is binsize_tree.core.entry.EntryType itself
- Request bodies are raw analyzer JSON, validated by the records loader
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, Field

from binsize_tree.core.entry import EntryType


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class PackageOrder(str, Enum):
    by_name = "name"
    by_input = "input"


class NegativeLeftoverPolicy(str, Enum):
    ignore = "ignore"
    warn = "warn"
    error = "error"


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class EntryNode(BaseModel):
    """One node of the size-accounting tree.

    RULES:
    - id is unique within the tree and follows construction order
    - size is in bytes
    - children are in tree order
    """

    id: int = Field(description="Creation-ordered entry identifier.")
    type: EntryType = Field(description="Entry variant tag.")
    name: str = Field(description="Display name.")
    size: int = Field(description="Size in bytes attributed to this entry.")
    summary: str = Field(description="Multi-line key/value description.")
    children: List[EntryNode] = Field(
        default_factory=list,
        description="Child entries in tree order.",
    )

    model_config = {"json_schema_extra": {
        "examples": [
            {
                "id": 7,
                "type": "disasm",
                "name": "main Disasm",
                "size": 50,
                "summary": "Disasm: main Disasm\nSize:   50 B\n\n...",
                "children": [],
            }
        ]
    }}


EntryNode.model_rebuild()


class FormatInfo(BaseModel):
    """Description of an available output format."""

    key: str = Field(description="Format identifier used in API paths.")
    name: str = Field(description="Human-readable format name.")
    suffix: str = Field(description="File suffix produced (e.g. '-tree.json').")


class ErrorResponse(BaseModel):
    """Standard error response body.

    RULES:
    - detail is always a human-readable error message
    """

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
