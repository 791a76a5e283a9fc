"""Per-domain memoization of sellers.json lookups.

`DirectoryLookupCache` is owned by the caller and passed into each top-level
cross-check call; nothing is cached at module level. The first access for a
domain stores an `asyncio.Task` before awaiting it, so every record referencing
the same ad-system domain converges on one in-flight lookup. Under asyncio's
single-threaded scheduling no other coroutine can run between the "not cached"
check and the store, so no lock is needed.

Entries expire after `ttl_seconds` when a TTL is set; without one they live as
long as the cache object. A cache is bound to the event loop that filled it:
entries created under another loop are reloaded. A lookup that raised is
reloaded on the next access once it has finished.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Iterable, Mapping

from core.domain.models import SellerRecord, SellersDirectory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectoryLookup:
    """Resolved sellers.json for one ad-system domain plus its seller-id counts."""

    domain: str
    directory: SellersDirectory | None
    seller_id_counts: Mapping[str, int] = field(default_factory=dict)
    sellers_by_id: Mapping[str, SellerRecord] = field(default_factory=dict)

    @classmethod
    def build(cls, domain: str, directory: SellersDirectory | None) -> "DirectoryLookup":
        counts: Counter[str] = Counter()
        first: dict[str, SellerRecord] = {}
        if directory is not None:
            for seller_id, seller in _seller_ids(directory.sellers):
                counts[seller_id] += 1
                first.setdefault(seller_id, seller)
        return cls(domain=domain, directory=directory, seller_id_counts=dict(counts), sellers_by_id=first)

    @property
    def available(self) -> bool:
        return self.directory is not None

    def find_seller(self, account_id: str) -> SellerRecord | None:
        return self.sellers_by_id.get(account_id.strip())

    def count(self, seller_id: str) -> int:
        return self.seller_id_counts.get(seller_id.strip(), 0)


def _seller_ids(sellers: Iterable[SellerRecord]) -> Iterable[tuple[str, SellerRecord]]:
    for seller in sellers:
        seller_id = seller.normalized_seller_id
        if seller_id:
            yield seller_id, seller


Loader = Callable[[str], Awaitable[DirectoryLookup]]


@dataclass
class _Slot:
    task: asyncio.Task
    expires_at: float | None


class DirectoryLookupCache:
    """Explicit, caller-owned cache of `DirectoryLookup` values keyed by domain."""

    def __init__(
        self,
        ttl_seconds: float | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds is not None and ttl_seconds < 0:
            raise ValueError("ttl_seconds must be >= 0")
        self._ttl = ttl_seconds
        self._clock = clock
        self._slots: dict[str, _Slot] = {}

    def __len__(self) -> int:
        return len(self._slots)

    def __contains__(self, domain: object) -> bool:
        return isinstance(domain, str) and domain.lower() in self._slots

    def clear(self) -> None:
        self._slots.clear()

    def _fresh(self, slot: _Slot, loop: asyncio.AbstractEventLoop) -> bool:
        if slot.task.get_loop() is not loop:
            return False
        if not slot.task.done():
            return True
        # Failed lookups are shared by waiters already in flight, never by later callers.
        if slot.task.cancelled() or slot.task.exception() is not None:
            return False
        if slot.expires_at is None:
            return True
        return self._clock() < slot.expires_at

    async def get(self, domain: str, loader: Loader) -> DirectoryLookup:
        """Return the lookup for `domain`, running `loader` at most once per live entry."""

        key = domain.lower()
        loop = asyncio.get_running_loop()
        slot = self._slots.get(key)
        if slot is None or not self._fresh(slot, loop):
            logger.debug("Directory cache miss for %s", key)
            expires_at = None if self._ttl is None else self._clock() + self._ttl
            slot = _Slot(task=loop.create_task(loader(key)), expires_at=expires_at)
            self._slots[key] = slot
        # shield: a cancelled waiter must not cancel the lookup shared with other records.
        return await asyncio.shield(slot.task)
