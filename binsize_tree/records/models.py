"""Analyzer result records: sections, packages, files, symbols.

WHY: The analyzer emits a nested JSON document. Typed, immutable records
make field names explicit and keep the tree builder free of dict lookups.

HOW: Each dataclass maps 1:1 to a JSON object of the analyzer output.
Factory methods (from_dict) handle parsing from already-validated dicts.

RULES:
- Records are frozen; the core never mutates them
- Sizes, offsets, and addresses are plain ints (bytes); whole-number
  floats such as 150.0 are coerced with int()
- Go encodes nil slices/maps as null, so null collections parse as empty
- Mapping fields keep the key order of the source document
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Section:
    """A contiguous region of the binary layout, e.g. ``.text``.

    RULES:
    - file_size: bytes the section occupies in the file
    - known_size: bytes already attributed to packages/symbols
    - offset/end: file offsets; addr/addr_end: virtual addresses
    - only_in_memory: True for sections such as ``.bss``
    """

    name: str
    file_size: int
    known_size: int
    offset: int
    end: int
    addr: int
    addr_end: int
    only_in_memory: bool = False
    debug: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> Section:
        return cls(
            name=data["name"],
            file_size=int(data["file_size"]),
            known_size=int(data["known_size"]),
            offset=int(data.get("offset") or 0),
            end=int(data.get("end") or 0),
            addr=int(data.get("addr") or 0),
            addr_end=int(data.get("addr_end") or 0),
            only_in_memory=bool(data.get("only_in_memory", False)),
            debug=bool(data.get("debug", False)),
        )


@dataclass(frozen=True)
class File:
    """A source file that contributed code or data to a package.

    RULES:
    - file_path is the path recorded in the binary's line table
    - pcln_size is 0 when the analyzer has no pclntab data for the file
    """

    file_path: str
    size: int
    pcln_size: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> File:
        return cls(
            file_path=data["file_path"],
            size=int(data["size"]),
            pcln_size=int(data.get("pcln_size") or 0),
        )


@dataclass(frozen=True)
class FileSymbol:
    """A named, sized symbol (function or variable) inside a package."""

    name: str
    size: int
    addr: int
    type: str

    @classmethod
    def from_dict(cls, data: dict) -> FileSymbol:
        return cls(
            name=data["name"],
            size=int(data["size"]),
            addr=int(data["addr"]),
            type=data["type"],
        )


@dataclass(frozen=True)
class Package:
    """A unit of compiled code with files, nested packages, and symbols.

    WHY: Packages are the main attribution unit. Their declared size can
    exceed what their files and symbols account for; the tree builder
    surfaces that gap.

    RULES:
    - name is fully qualified (e.g. ``net/http``), also for sub-packages
    - type is a classification such as "std", "main", "vendor"
    - sub_packages maps the sub-package key to its record
    """

    name: str
    type: str
    size: int
    files: Tuple[File, ...] = ()
    sub_packages: Dict[str, Package] = field(default_factory=dict)
    symbols: Tuple[FileSymbol, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> Package:
        """Parse a Package (recursively) from a raw result dict.

        RULES:
        - ``subPackages`` is the wire name of sub_packages
        - null or missing files/symbols/subPackages parse as empty
        """
        sub_packages = data.get("subPackages") or {}
        return cls(
            name=data["name"],
            type=data["type"],
            size=int(data["size"]),
            files=tuple(File.from_dict(f) for f in data.get("files") or []),
            sub_packages={
                key: Package.from_dict(value) for key, value in sub_packages.items()
            },
            symbols=tuple(FileSymbol.from_dict(s) for s in data.get("symbols") or []),
        )


@dataclass(frozen=True)
class Result:
    """The complete analysis of one binary: the root of every tree.

    RULES:
    - size is the total file size of the binary
    - sections are in analyzer order
    - packages maps the top-level package key to its record
    - analyzers lists which analysis passes produced the data (may be empty)
    """

    name: str
    size: int
    sections: Tuple[Section, ...] = ()
    packages: Dict[str, Package] = field(default_factory=dict)
    analyzers: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> Result:
        packages: Dict[str, Any] = data.get("packages") or {}
        return cls(
            name=data["name"],
            size=int(data["size"]),
            sections=tuple(Section.from_dict(s) for s in data.get("sections") or []),
            packages={key: Package.from_dict(value) for key, value in packages.items()},
            analyzers=tuple(data.get("analyzers") or []),
        )
