"""Unit tests for the entry id allocator.

RULES:
- Each test creates its own IdAllocator (no shared mutable state)
"""

import threading

from binsize_tree.core import ids
from binsize_tree.core.ids import IdAllocator


class TestIdAllocator:
    def test_starts_at_default_base(self):
        assert IdAllocator().next_id() == ids.DEFAULT_START

    def test_custom_start(self):
        allocator = IdAllocator(start=100)
        assert [allocator.next_id() for _ in range(3)] == [100, 101, 102]

    def test_peek_does_not_consume(self):
        allocator = IdAllocator()
        assert allocator.peek() == allocator.peek()
        first = allocator.next_id()
        assert allocator.peek() == first + 1

    def test_independent_allocators(self):
        a = IdAllocator()
        b = IdAllocator()
        a.next_id()
        a.next_id()
        assert b.next_id() == ids.DEFAULT_START


class TestDefaultAllocator:
    def test_module_next_id_strictly_increases(self):
        first = ids.next_id()
        second = ids.next_id()
        assert second > first


class TestThreadSafety:
    """Concurrent callers never receive the same id."""

    def test_concurrent_ids_unique(self):
        allocator = IdAllocator()
        seen = []
        lock = threading.Lock()

        def worker():
            local = [allocator.next_id() for _ in range(500)]
            with lock:
                seen.extend(local)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(seen) == 4000
        assert len(set(seen)) == 4000
        assert sorted(seen) == list(range(ids.DEFAULT_START, ids.DEFAULT_START + 4000))
