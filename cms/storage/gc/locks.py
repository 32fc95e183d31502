"""
Per-record Sync Serialization

Optional guard that runs reconciliation for one record at a time within
this process. Disabled by default: without it, concurrent edits of the
same record each list/diff/delete independently and a sync may remove an
image uploaded by a newer edit that has not been saved yet.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator

from cms.content_kinds import ContentKind


class RecordLocks:
    """asyncio locks keyed by (kind, record_id), created on demand."""

    def __init__(self, enabled: bool = False):
        self.enabled = enabled
        self._locks: dict[tuple[ContentKind, str], asyncio.Lock] = {}
        self._waiters: dict[tuple[ContentKind, str], int] = {}

    @asynccontextmanager
    async def hold(self, kind: ContentKind | str, record_id: str) -> AsyncIterator[None]:
        """Hold the record's lock for the body; no-op when disabled."""
        if not self.enabled:
            yield
            return

        key = (ContentKind.parse(kind), record_id)
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._waiters[key] = self._waiters.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._waiters[key] -= 1
            if self._waiters[key] == 0:
                del self._waiters[key]
                del self._locks[key]

    def __len__(self) -> int:
        return len(self._locks)
