"""Creation-ordered identifiers for tree entries.

WHY: Renderers need a stable handle for every entry (selection state,
expand/collapse, DOM keys). Names are not unique, so each entry gets an
integer id at construction time.

HOW: IdAllocator wraps a counter behind a threading.Lock. The tree builder
takes an allocator as a dependency; a process-wide default exists for
callers that do not care about the absolute values.

RULES:
- next_id() is called exactly once per entry construction
- Ids strictly increase and are never reused within one allocator
- Ids carry no meaning across allocators beyond uniqueness
"""

from __future__ import annotations

import threading

DEFAULT_START = 1


class IdAllocator:
    """Thread-safe monotonically increasing integer source."""

    def __init__(self, start: int = DEFAULT_START) -> None:
        self._next = start
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            value = self._next
            self._next += 1
        return value

    def peek(self) -> int:
        """Return the id the next call to next_id() will hand out."""
        with self._lock:
            return self._next


default_allocator = IdAllocator()


def next_id() -> int:
    """Allocate an id from the process-wide default allocator."""
    return default_allocator.next_id()
