"""Input records produced by the binary size analyzer.

WHY: The core never parses binaries itself. It consumes the analyzer's
JSON result, so the shape of that result is a contract worth typing.

HOW: models.py defines the frozen record dataclasses, loader.py reads and
validates raw JSON against result_schema.json before building them.
"""

from binsize_tree.records.loader import InvalidResultError, load_result, parse_result
from binsize_tree.records.models import File, FileSymbol, Package, Result, Section

__all__ = [
    "File",
    "FileSymbol",
    "InvalidResultError",
    "Package",
    "Result",
    "Section",
    "load_result",
    "parse_result",
]
