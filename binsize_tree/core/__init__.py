"""Core entry model and tree construction.

WHY: The core is the only part with real invariants: every byte of the
binary must be attributed somewhere in the tree, and ids must follow
construction order. Everything else (loading, rendering, serving) is a
thin consumer of it.

HOW: ids.py issues creation-ordered ids, entry.py defines the eight entry
variants, builder.py builds and reconciles the tree, text.py holds the
summary formatting helpers.

RULES:
- Entries are immutable; the tree is built once and never edited
- builder.build_tree() is the single public entry point
"""

from binsize_tree.core.builder import LeftoverMismatchError, TreeBuilder, build_tree
from binsize_tree.core.entry import (
    BaseEntry,
    ContainerEntry,
    DisasmEntry,
    EntryType,
    FileEntry,
    PackageEntry,
    ResultEntry,
    SectionEntry,
    SymbolEntry,
    UnknownEntry,
)
from binsize_tree.core.ids import IdAllocator

__all__ = [
    "BaseEntry",
    "ContainerEntry",
    "DisasmEntry",
    "EntryType",
    "FileEntry",
    "IdAllocator",
    "LeftoverMismatchError",
    "PackageEntry",
    "ResultEntry",
    "SectionEntry",
    "SymbolEntry",
    "TreeBuilder",
    "UnknownEntry",
    "build_tree",
]
