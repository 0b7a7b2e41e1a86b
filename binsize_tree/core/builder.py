"""Tree construction and leftover reconciliation.

WHY: The analyzer's records overlap and rarely sum to the declared sizes.
A package is larger than its files and symbols; the binary is larger than
its sections and packages. Dropping the difference would make the tree
lie about where the bytes went, so every gap becomes a visible entry.

HOW: TreeBuilder walks the Result depth-first. For each composite it
builds the children first, then computes

    leftover = declared_size - sum(child.size for child in children)

and appends one synthetic entry when the leftover is positive: a
DisasmEntry named "<package> Disasm" under a package, an UnknownEntry
under the result. Result children are grouped into an "Unknown Sections
Size" container and one "<Type> Packages Size" container per package
type, in first-seen type order.

RULES:
- Ids follow construction order: package/result before their children,
  containers after theirs, leftover entries last
- Zero leftover adds nothing; negative leftover adds nothing and is
  handled by the negative-leftover policy (ignore / warn / error)
- Mapping iteration order is the configured package order, applied to
  the root packages and to every subPackages mapping
- Input records are never mutated
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from binsize_tree.config import resolve_negative_leftover, resolve_package_order
from binsize_tree.core.entry import (
    BaseEntry,
    ContainerEntry,
    DisasmEntry,
    FileEntry,
    PackageEntry,
    ResultEntry,
    SectionEntry,
    SymbolEntry,
    UnknownEntry,
)
from binsize_tree.core.ids import IdAllocator, default_allocator
from binsize_tree.core.text import title
from binsize_tree.records.models import Package, Result, Section

logger = logging.getLogger(__name__)

SECTION_CONTAINER_NAME = "Unknown Sections Size"
SECTION_CONTAINER_EXPLAIN = "The unknown size of the sections in the binary."


class LeftoverMismatchError(ValueError):
    """Children of an entry add up to more than its declared size."""

    def __init__(self, owner: str, declared: int, accounted: int) -> None:
        self.owner = owner
        self.declared = declared
        self.accounted = accounted
        super().__init__(
            "Children of '{}' account for {} bytes but it declares only {} "
            "({} bytes over)".format(owner, accounted, declared, accounted - declared)
        )


def sum_sizes(entries: Iterable[BaseEntry]) -> int:
    return sum(entry.size for entry in entries)


def group_packages_by_type(packages: Iterable[Package]) -> Dict[str, List[Package]]:
    """Partition packages by their type, keeping first-seen type order."""
    grouped: Dict[str, List[Package]] = {}
    for pkg in packages:
        grouped.setdefault(pkg.type, []).append(pkg)
    return grouped


def package_container_name(package_type: str) -> str:
    return "{} Packages Size".format(title(package_type))


def package_container_explain(package_type: str) -> str:
    return "The size of the {} packages in the binary.".format(package_type)


class TreeBuilder:
    """Builds an entry tree from a Result record.

    Args:
        allocator: Id source; the process-wide default when omitted.
        package_order: "name" or "input"; config default when omitted.
        negative_leftover: "ignore", "warn" or "error"; config default
            when omitted.
    """

    def __init__(
        self,
        allocator: Optional[IdAllocator] = None,
        package_order: Optional[str] = None,
        negative_leftover: Optional[str] = None,
    ) -> None:
        self._ids = allocator if allocator is not None else default_allocator
        self.package_order = resolve_package_order(package_order)
        self.negative_leftover = resolve_negative_leftover(negative_leftover)

    # -- ordering ----------------------------------------------------------

    def ordered(self, mapping: Mapping[str, Package]) -> List[Package]:
        if self.package_order == "name":
            return [mapping[key] for key in sorted(mapping)]
        return list(mapping.values())

    # -- reconciliation ----------------------------------------------------

    def leftover(self, owner: str, declared: int, children: Sequence[BaseEntry]) -> int:
        """Return declared minus the children's total, applying the policy.

        A negative leftover is reported according to the negative-leftover
        policy and returned unchanged; callers only act on positive values.
        """
        accounted = sum_sizes(children)
        left = declared - accounted
        if left < 0:
            if self.negative_leftover == "error":
                raise LeftoverMismatchError(owner, declared, accounted)
            if self.negative_leftover == "warn":
                logger.warning(
                    "Children of '%s' exceed its declared size by %d bytes "
                    "(declared %d, accounted %d)",
                    owner, -left, declared, accounted,
                )
        return left

    # -- builders ----------------------------------------------------------

    def build_section(self, record: Section) -> SectionEntry:
        return SectionEntry(self._ids.next_id(), record)

    def build_package(self, record: Package, parent: Optional[str] = None) -> PackageEntry:
        """Build a package entry with files, sub-packages, symbols, and disasm.

        RULES:
        - Children order: files, sub-packages, symbols (record order within
          files and symbols, package order within sub-packages)
        - Sub-packages get this package's name as their parent prefix
        - Positive leftover appends DisasmEntry("<name> Disasm", leftover)
        """
        entry_id = self._ids.next_id()

        children: List[BaseEntry] = []
        for file in record.files:
            children.append(FileEntry(self._ids.next_id(), file))
        for sub_package in self.ordered(record.sub_packages):
            children.append(self.build_package(sub_package, parent=record.name))
        for symbol in record.symbols:
            children.append(SymbolEntry(self._ids.next_id(), symbol))

        left = self.leftover(record.name, record.size, children)
        if left > 0:
            children.append(
                DisasmEntry(self._ids.next_id(), "{} Disasm".format(record.name), left)
            )

        return PackageEntry(entry_id, record, children, parent=parent)

    def build_section_container(self, sections: Sequence[Section]) -> ContainerEntry:
        entries = [self.build_section(section) for section in sections]
        return ContainerEntry(
            self._ids.next_id(),
            SECTION_CONTAINER_NAME,
            sum_sizes(entries),
            entries,
            SECTION_CONTAINER_EXPLAIN,
        )

    def build_package_containers(self, packages: Mapping[str, Package]) -> List[ContainerEntry]:
        containers: List[ContainerEntry] = []
        for package_type, group in group_packages_by_type(self.ordered(packages)).items():
            entries = [self.build_package(pkg) for pkg in group]
            containers.append(ContainerEntry(
                self._ids.next_id(),
                package_container_name(package_type),
                sum_sizes(entries),
                entries,
                package_container_explain(package_type),
            ))
        return containers

    def build(self, result: Result) -> ResultEntry:
        """Build the full tree rooted at a ResultEntry.

        RULES:
        - First child: the section container (always present, possibly empty)
        - Then one container per package type, first-seen order
        - Positive leftover appends UnknownEntry(leftover) last
        """
        entry_id = self._ids.next_id()

        children: List[BaseEntry] = [self.build_section_container(result.sections)]
        children.extend(self.build_package_containers(result.packages))

        left = self.leftover(result.name, result.size, children)
        if left > 0:
            children.append(UnknownEntry(self._ids.next_id(), left))

        root = ResultEntry(entry_id, result, children)
        logger.debug(
            "Built tree for '%s': %d entries, %d package groups, unknown %d bytes",
            result.name,
            sum(1 for _ in root.walk()),
            len(children) - (2 if left > 0 else 1),
            max(left, 0),
        )
        return root


def build_tree(
    result: Result,
    allocator: Optional[IdAllocator] = None,
    package_order: Optional[str] = None,
    negative_leftover: Optional[str] = None,
) -> ResultEntry:
    """Build the size-accounting tree for one analyzer result.

    This is the single entry point of the core. See TreeBuilder for the
    meaning of the optional arguments.
    """
    builder = TreeBuilder(
        allocator=allocator,
        package_order=package_order,
        negative_leftover=negative_leftover,
    )
    return builder.build(result)
