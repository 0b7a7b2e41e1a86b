"""Output formatter registry: pluggable renderers for the entry tree.

WHY: The CLI and API layers need a single lookup to find the right
formatter by name. A central dict makes it trivial to add new formats:
create the formatter class, import it here, add one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["text_tree"]()``.

RULES:
- Keys are snake_case identifiers (used in CLI flags and API paths)
- Values are BaseFormatter subclasses (not instances)
- Every formatter must be constructible with no arguments
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from binsize_tree.formatters.flat_csv import FlatCsvFormatter
from binsize_tree.formatters.json_tree import JsonTreeFormatter
from binsize_tree.formatters.text_tree import TextTreeFormatter

if TYPE_CHECKING:
    from binsize_tree.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "text_tree": TextTreeFormatter,
    "json_tree": JsonTreeFormatter,
    "flat_csv": FlatCsvFormatter,
}
