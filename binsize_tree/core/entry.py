"""Entry variants of the size-accounting tree.

WHY: The tree mixes entries built from analyzer records (sections, files,
symbols, packages, the result itself) with synthetic entries that plug
size gaps (disasm, unknown) or group siblings (container). Renderers treat
them uniformly, so all eight share one interface.

HOW: BaseEntry is an ABC holding the id and the child tuple. Each variant
declares its EntryType and the set of child types it accepts; the base
constructor rejects anything else. Record-backed variants derive name and
size from the wrapped record, synthetic variants take them as arguments.

RULES:
- Entries are immutable after construction (read-only properties only)
- Child types are checked once, at construction (TypeError otherwise)
- EntryType values are a wire contract with existing renderers:
  "section", "file", "package", "result", "symbol", "disasm",
  "unknown", "container"
- str(entry) is its summary()
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from typing import ClassVar, FrozenSet, Iterator, Optional, Sequence, Tuple

from binsize_tree.core.text import (
    Aligner,
    format_bool,
    format_bytes,
    format_hex,
    format_range,
    trim_prefix,
)
from binsize_tree.records.models import File, FileSymbol, Package, Result, Section


class EntryType(str, enum.Enum):
    """Closed set of entry variants.

    Inherits from str so values serialize cleanly to JSON.
    """

    SECTION = "section"
    FILE = "file"
    PACKAGE = "package"
    RESULT = "result"
    SYMBOL = "symbol"
    DISASM = "disasm"
    UNKNOWN = "unknown"
    CONTAINER = "container"


class BaseEntry(ABC):
    """Abstract base for all tree entries.

    Subclasses set ``entry_type`` and, when they can have children,
    ``allowed_children``, and implement ``name``, ``size`` and ``summary()``.
    """

    entry_type: ClassVar[EntryType]
    allowed_children: ClassVar[FrozenSet[EntryType]] = frozenset()

    def __init__(self, entry_id: int, children: Sequence[BaseEntry] = ()) -> None:
        for child in children:
            if child.type not in self.allowed_children:
                raise TypeError(
                    "{} entry cannot contain a {} entry".format(
                        self.entry_type.value, child.type.value
                    )
                )
        self._id = entry_id
        self._children: Tuple[BaseEntry, ...] = tuple(children)

    @property
    def id(self) -> int:
        return self._id

    @property
    def type(self) -> EntryType:
        return self.entry_type

    @property
    def children(self) -> Tuple[BaseEntry, ...]:
        return self._children

    @property
    def has_children(self) -> bool:
        return bool(self._children)

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name of the entry."""

    @property
    @abstractmethod
    def size(self) -> int:
        """Size in bytes attributed to this entry."""

    @abstractmethod
    def summary(self) -> str:
        """Multi-line key/value description for detail panes."""

    def walk(self) -> Iterator[BaseEntry]:
        """Yield this entry and all descendants in pre-order."""
        yield self
        for child in self._children:
            yield from child.walk()

    def __str__(self) -> str:
        return self.summary()

    def __repr__(self) -> str:
        return "<{} id={} name={!r} size={}>".format(
            type(self).__name__, self._id, self.name, self.size
        )


# ---------------------------------------------------------------------------
# Leaf entries backed by analyzer records
# ---------------------------------------------------------------------------


class SectionEntry(BaseEntry):
    """The part of a section not attributed to any package or symbol."""

    entry_type = EntryType.SECTION

    def __init__(self, entry_id: int, record: Section) -> None:
        super().__init__(entry_id)
        self._record = record

    @property
    def record(self) -> Section:
        return self._record

    @property
    def name(self) -> str:
        return self._record.name

    @property
    def size(self) -> int:
        return self._record.file_size - self._record.known_size

    def summary(self) -> str:
        data = self._record
        return (
            Aligner()
            .add("Section:", data.name)
            .add("Size:", format_bytes(self.size))
            .add("File Size:", format_bytes(data.file_size))
            .add("Known size:", format_bytes(data.known_size))
            .add("Unknown size:", format_bytes(self.size))
            .add("Offset:", format_range(data.offset, data.end))
            .add("Address:", format_range(data.addr, data.addr_end))
            .add("Memory:", format_bool(data.only_in_memory))
            .add("Debug:", format_bool(data.debug))
            .render()
        )


class FileEntry(BaseEntry):
    entry_type = EntryType.FILE

    def __init__(self, entry_id: int, record: File) -> None:
        super().__init__(entry_id)
        self._record = record

    @property
    def record(self) -> File:
        return self._record

    @property
    def name(self) -> str:
        return self._record.file_path.split("/")[-1]

    @property
    def size(self) -> int:
        return self._record.size

    def summary(self) -> str:
        data = self._record
        align = (
            Aligner()
            .add("File:", data.file_path)
            .add("Path:", data.file_path)
            .add("Size:", format_bytes(data.size))
        )
        if data.pcln_size > 0:
            align.add("Pcln Size:", format_bytes(data.pcln_size))
        return align.render()


class SymbolEntry(BaseEntry):
    entry_type = EntryType.SYMBOL

    def __init__(self, entry_id: int, record: FileSymbol) -> None:
        super().__init__(entry_id)
        self._record = record

    @property
    def record(self) -> FileSymbol:
        return self._record

    @property
    def name(self) -> str:
        return self._record.name

    @property
    def size(self) -> int:
        return self._record.size

    def summary(self) -> str:
        data = self._record
        return (
            Aligner()
            .add("Symbol:", data.name)
            .add("Size:", format_bytes(data.size))
            .add("Address:", format_hex(data.addr))
            .add("Type:", data.type)
            .render()
        )


# ---------------------------------------------------------------------------
# Synthetic entries
# ---------------------------------------------------------------------------

DISASM_NOTE = (
    "This size is not accurate. "
    "The real size determined by disassembling can be larger."
)

UNKNOWN_NOTE = (
    "The unknown part in the binary.\n"
    "Can be ELF Header, Program Header, align offset...\n"
    "We just don't know."
)


class DisasmEntry(BaseEntry):
    """Package bytes not traceable to any file or symbol (a lower bound)."""

    entry_type = EntryType.DISASM

    def __init__(self, entry_id: int, name: str, size: int) -> None:
        super().__init__(entry_id)
        self._name = name
        self._size = size

    @property
    def name(self) -> str:
        return self._name

    @property
    def size(self) -> int:
        return self._size

    def summary(self) -> str:
        align = Aligner().add("Disasm:", self._name).add("Size:", format_bytes(self._size))
        return "{}\n\n{}".format(align.render(), DISASM_NOTE)


class UnknownEntry(BaseEntry):
    """Binary bytes outside every section and package."""

    entry_type = EntryType.UNKNOWN

    def __init__(self, entry_id: int, size: int) -> None:
        super().__init__(entry_id)
        self._size = size

    @property
    def name(self) -> str:
        return "Unknown"

    @property
    def size(self) -> int:
        return self._size

    def summary(self) -> str:
        align = Aligner().add("Size:", format_bytes(self._size))
        return "{}\n\n{}".format(align.render(), UNKNOWN_NOTE)


class ContainerEntry(BaseEntry):
    """A labeled bucket grouping sibling packages or sections.

    The size is taken as given; callers pass the aggregate of the children.
    """

    entry_type = EntryType.CONTAINER
    allowed_children = frozenset({EntryType.PACKAGE, EntryType.DISASM, EntryType.SECTION})

    def __init__(
        self,
        entry_id: int,
        name: str,
        size: int,
        children: Sequence[BaseEntry] = (),
        explain: str = "",
    ) -> None:
        super().__init__(entry_id, children)
        self._name = name
        self._size = size
        self._explain = explain

    @property
    def name(self) -> str:
        return self._name

    @property
    def size(self) -> int:
        return self._size

    @property
    def explain(self) -> str:
        return self._explain

    def summary(self) -> str:
        align = Aligner().add("Size:", format_bytes(self._size))
        return "{}\n\n{}".format(self._explain, align.render())


# ---------------------------------------------------------------------------
# Composite entries backed by analyzer records
# ---------------------------------------------------------------------------


class PackageEntry(BaseEntry):
    """A package with its files, sub-packages, symbols, and disasm gap.

    RULES:
    - size is the declared package size, not the sum of the children
    - with a parent name, the display name drops that prefix
    """

    entry_type = EntryType.PACKAGE
    allowed_children = frozenset(
        {EntryType.FILE, EntryType.PACKAGE, EntryType.SYMBOL, EntryType.DISASM}
    )

    def __init__(
        self,
        entry_id: int,
        record: Package,
        children: Sequence[BaseEntry] = (),
        parent: Optional[str] = None,
    ) -> None:
        super().__init__(entry_id, children)
        self._record = record
        self._parent = parent

    @property
    def record(self) -> Package:
        return self._record

    @property
    def parent(self) -> Optional[str]:
        return self._parent

    @property
    def name(self) -> str:
        if self._parent is not None:
            return trim_prefix(self._record.name, self._parent)
        return self._record.name

    @property
    def size(self) -> int:
        return self._record.size

    def summary(self) -> str:
        data = self._record
        return (
            Aligner()
            .add("Package:", data.name)
            .add("Type:", data.type)
            .add("Size:", format_bytes(data.size))
            .render()
        )


class ResultEntry(BaseEntry):
    """Root of the tree: the whole binary."""

    entry_type = EntryType.RESULT
    allowed_children = frozenset({EntryType.CONTAINER, EntryType.SECTION, EntryType.UNKNOWN})

    def __init__(
        self,
        entry_id: int,
        record: Result,
        children: Sequence[BaseEntry] = (),
    ) -> None:
        super().__init__(entry_id, children)
        self._record = record

    @property
    def record(self) -> Result:
        return self._record

    @property
    def name(self) -> str:
        return self._record.name

    @property
    def size(self) -> int:
        return self._record.size

    def summary(self) -> str:
        data = self._record
        align = Aligner().add("Result:", data.name).add("Size:", format_bytes(data.size))
        if data.analyzers:
            align.add("Analyzers:", ", ".join(data.analyzers))
        return align.render()
