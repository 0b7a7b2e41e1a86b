"""Flat CSV listing of every entry.

WHY: Spreadsheets and diff tools work on rows, not trees. A flat listing
with parent ids and paths makes it easy to compare two builds of the same
binary or to sort by size.

HOW: Pre-order walk with an explicit stack of (entry, parent_id, depth,
path). The csv module handles quoting of names containing commas.

RULES:
- Header: id,parent_id,depth,type,name,size,path
- parent_id is empty for the root
- path joins entry names from the root with " > "
- Output suffix: "-entries.csv", media type "text/csv"
"""

from __future__ import annotations

import csv
import io
from typing import List, Optional, Tuple

from binsize_tree.core.entry import BaseEntry
from binsize_tree.formatters.base import BaseFormatter, FormatterOutput

CSV_HEADER = ["id", "parent_id", "depth", "type", "name", "size", "path"]

PATH_SEPARATOR = " > "


class FlatCsvFormatter(BaseFormatter):
    """Formatter that lists entries one per CSV row in pre-order."""

    @property
    def name(self) -> str:
        return "Flat CSV"

    @property
    def suffix(self) -> str:
        return "-entries.csv"

    def format(self, root: BaseEntry) -> List[FormatterOutput]:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADER)

        stack: List[Tuple[BaseEntry, Optional[int], int, str]] = [(root, None, 0, root.name)]
        while stack:
            entry, parent_id, depth, path = stack.pop()
            writer.writerow([
                entry.id,
                "" if parent_id is None else parent_id,
                depth,
                entry.type.value,
                entry.name,
                entry.size,
                path,
            ])
            # Reversed so children pop in tree order
            for child in reversed(entry.children):
                stack.append((child, entry.id, depth + 1, path + PATH_SEPARATOR + child.name))

        return [
            FormatterOutput(
                suffix=self.suffix,
                content=buffer.getvalue(),
                media_type="text/csv",
            )
        ]
