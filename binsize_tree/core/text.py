"""Text helpers for entry summaries: byte sizes, hex, alignment.

WHY: Every entry renders a small key/value summary. The formatting rules
(human byte sizes, 0x-prefixed addresses, aligned keys) are shared by all
variants and by the text formatters.

RULES:
- Byte sizes use 1024-based units, up to two decimals, trailing zeros dropped
- Addresses are lowercase hex with a 0x prefix and no zero padding
- Ranges render as "0x<start> - 0x<end>"
- Aligner pads keys to a common column, one "key value" pair per line
"""

from __future__ import annotations

from typing import List, Tuple

_BYTE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")


def format_bytes(size: int) -> str:
    """Render a byte count for humans, e.g. 1536 -> "1.5 KB".

    Negative values keep their sign so that malformed input stays visible.
    """
    if size < 0:
        return "-" + format_bytes(-size)

    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(_BYTE_UNITS) - 1:
        value /= 1024
        unit += 1

    if unit == 0:
        return "{} B".format(size)
    text = "{:.2f}".format(value).rstrip("0").rstrip(".")
    return "{} {}".format(text, _BYTE_UNITS[unit])


def format_hex(value: int) -> str:
    return "0x{:x}".format(value)


def format_range(start: int, end: int) -> str:
    return "{} - {}".format(format_hex(start), format_hex(end))


def format_bool(value: bool) -> str:
    return "true" if value else "false"


def title(text: str) -> str:
    """Upper-case the first character only ("main" -> "Main")."""
    return text[:1].upper() + text[1:]


def trim_prefix(name: str, prefix: str) -> str:
    """Strip a parent package name from a fully-qualified package name.

    RULES:
    - Only a leading match is removed
    - The path separator left behind is removed too ("foo/bar" - "foo" -> "bar")
    - A name equal to the prefix is returned unchanged
    """
    if not prefix or name == prefix or not name.startswith(prefix):
        return name
    return name[len(prefix):].lstrip("/")


class Aligner:
    """Collects key/value pairs and renders them as an aligned block.

    Usage::

        Aligner().add("Size:", "40 B").add("Debug:", "false").render()
    """

    def __init__(self) -> None:
        self._rows: List[Tuple[str, str]] = []

    def add(self, key: str, value: str) -> Aligner:
        self._rows.append((key, value))
        return self

    def render(self) -> str:
        if not self._rows:
            return ""
        width = max(len(key) for key, _ in self._rows)
        return "\n".join(
            "{} {}".format(key.ljust(width), value) for key, value in self._rows
        )

    def __str__(self) -> str:
        return self.render()

    def __len__(self) -> int:
        return len(self._rows)
