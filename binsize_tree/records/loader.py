"""Load and validate analyzer result JSON at the input boundary.

WHY: The tree builder trusts its input: it does plain arithmetic on sizes
and produces nonsense (negative sizes) when handed malformed records.
Validation therefore happens once, here, before any record is built.

HOW: Raw JSON is checked against result_schema.json with jsonschema, then
converted with Result.from_dict. Every failure is re-raised as
InvalidResultError carrying the JSON path of the offending value.

RULES:
- Sizes, offsets, and addresses must be non-negative integers
- null collections are accepted (Go encodes nil slices as null)
- Unknown extra fields are ignored
- A section's known_size may not exceed its file_size
- The schema is loaded once and cached at module level
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import jsonschema
from jsonschema.exceptions import best_match

from binsize_tree.records.models import Result

logger = logging.getLogger(__name__)

_SCHEMA_PATH = Path(__file__).resolve().parent / "result_schema.json"

_CACHED_SCHEMA: Optional[Dict[str, Any]] = None


class InvalidResultError(ValueError):
    """Raised when analyzer output is not a well-formed result document."""


def _get_schema() -> Dict[str, Any]:
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def _format_path(error: jsonschema.ValidationError) -> str:
    """Render a validation error location as ``$.packages.fmt.size``."""
    parts = ["$"]
    for item in error.absolute_path:
        if isinstance(item, int):
            parts.append("[{}]".format(item))
        else:
            parts.append(".{}".format(item))
    return "".join(parts)


def parse_result(data: Any) -> Result:
    """Validate a decoded result document and build the Result record.

    Args:
        data: The decoded JSON value (normally a dict).

    Returns:
        The root Result record.

    Raises:
        InvalidResultError: If the document does not match the schema.
    """
    validator = jsonschema.Draft7Validator(_get_schema())
    error = best_match(validator.iter_errors(data))
    if error is not None:
        logger.debug("Result rejected at %s: %s", _format_path(error), error.message)
        raise InvalidResultError(
            "Invalid result at {}: {}".format(_format_path(error), error.message)
        )
    _check_sections(data.get("sections") or [])
    return Result.from_dict(data)


def _check_sections(sections: List[Dict[str, Any]]) -> None:
    """Reject sections claiming more known bytes than they occupy.

    JSON Schema cannot compare two fields, so this runs after validation.
    """
    for i, section in enumerate(sections):
        if section["known_size"] > section["file_size"]:
            raise InvalidResultError(
                "Invalid result at $.sections[{}]: known_size {} exceeds "
                "file_size {} of section '{}'".format(
                    i, section["known_size"], section["file_size"], section["name"]
                )
            )


def load_result(source: Union[str, Path]) -> Result:
    """Read an analyzer JSON file and return its validated Result record.

    RULES:
    - Missing files propagate as FileNotFoundError
    - Undecodable bytes or JSON become InvalidResultError
    """
    path = Path(source)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidResultError("{} is not valid JSON: {}".format(path.name, e)) from e
    return parse_result(data)
