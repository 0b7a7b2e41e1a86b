"""Nested JSON export of the entry tree.

WHY: Browser and TUI renderers consume the tree as data: they need the
id for stable selection, the type tag to pick icons, and the summary for
the detail pane. JSON is the shared wire format.

HOW: entry_to_dict() converts an entry and its subtree into plain dicts.
The document is validated against tree_schema.json with jsonschema
before it is serialized.

RULES:
- Every node: id, type, name, size, summary, children (in tree order)
- type values are the EntryType strings
- Schema validation is mandatory and raises on invalid output
- Output suffix: "-tree.json", media type "application/json"
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema

from binsize_tree.core.entry import BaseEntry
from binsize_tree.formatters.base import BaseFormatter, FormatterOutput

_SCHEMA_PATH = Path(__file__).resolve().parent / "tree_schema.json"

_CACHED_SCHEMA: Optional[Dict[str, Any]] = None


def _get_schema() -> Dict[str, Any]:
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def entry_to_dict(entry: BaseEntry) -> Dict[str, Any]:
    return {
        "id": entry.id,
        "type": entry.type.value,
        "name": entry.name,
        "size": entry.size,
        "summary": entry.summary(),
        "children": [entry_to_dict(child) for child in entry.children],
    }


class JsonTreeFormatter(BaseFormatter):
    """Formatter that serializes the entry tree as nested JSON."""

    def __init__(self, indent: Optional[int] = 2) -> None:
        self.indent = indent

    @property
    def name(self) -> str:
        return "JSON Tree"

    @property
    def suffix(self) -> str:
        return "-tree.json"

    def format(self, root: BaseEntry) -> List[FormatterOutput]:
        """Serialize the tree.

        Raises:
            jsonschema.ValidationError: If the generated document does not
                conform to the tree schema.
        """
        document = entry_to_dict(root)
        jsonschema.validate(instance=document, schema=_get_schema())

        return [
            FormatterOutput(
                suffix=self.suffix,
                content=json.dumps(document, indent=self.indent, ensure_ascii=False),
                media_type="application/json",
            )
        ]
