"""Box-drawing text tree of entry names and sizes.

WHY: The quickest way to see where a binary's bytes went is a terminal
tree: one line per entry, nested like the package hierarchy.

HOW: Recursive pre-order walk. Each line is the connector prefix, the
entry name, its human-readable size, and its type tag. Children keep
their tree order (build order); nothing is re-sorted.

RULES:
- Root line has no connector
- "├── " / "└── " connectors, "│   " / "    " continuation prefixes
- max_depth=None renders everything; depth 0 is the root alone
- Output suffix: "-tree.txt", media type "text/plain"
"""

from __future__ import annotations

from typing import List, Optional

from binsize_tree.core.entry import BaseEntry
from binsize_tree.core.text import format_bytes
from binsize_tree.formatters.base import BaseFormatter, FormatterOutput


def _label(entry: BaseEntry) -> str:
    return "{}  {}  [{}]".format(entry.name, format_bytes(entry.size), entry.type.value)


class TextTreeFormatter(BaseFormatter):
    """Formatter that produces an indented, box-drawing entry tree."""

    def __init__(self, max_depth: Optional[int] = None) -> None:
        if max_depth is not None and max_depth < 0:
            raise ValueError("max_depth must be >= 0, got {}".format(max_depth))
        self.max_depth = max_depth

    @property
    def name(self) -> str:
        return "Text Tree"

    @property
    def suffix(self) -> str:
        return "-tree.txt"

    def _render(self, entry: BaseEntry, prefix: str, depth: int, lines: List[str]) -> None:
        if self.max_depth is not None and depth >= self.max_depth:
            return
        children = entry.children
        for i, child in enumerate(children):
            is_last = i == len(children) - 1
            connector = "└── " if is_last else "├── "
            lines.append("{}{}{}".format(prefix, connector, _label(child)))
            self._render(child, prefix + ("    " if is_last else "│   "), depth + 1, lines)

    def render_lines(self, root: BaseEntry) -> List[str]:
        lines = [_label(root)]
        self._render(root, "", 0, lines)
        return lines

    def format(self, root: BaseEntry) -> List[FormatterOutput]:
        content = "\n".join(self.render_lines(root)) + "\n"
        return [
            FormatterOutput(
                suffix=self.suffix,
                content=content,
                media_type="text/plain",
            )
        ]
