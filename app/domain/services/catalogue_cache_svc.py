import json
import logging
import time
from typing import Any, Callable, Optional, Tuple

from app.domain.errors import CatalogueFetchError, ListingFetchError
from app.domain.models.product import CatalogueSnapshot, Product

logger = logging.getLogger(__name__)


def _json_preview(obj: Any, limit: int = 1000) -> str:
    """Minify and truncate JSON for debug logs."""
    try:
        s = json.dumps(obj, separators=(",", ":"), ensure_ascii=False)
        return s if len(s) <= limit else s[:limit] + "…[truncated]"
    except Exception:
        return "<unserializable>"


class CatalogueCache:
    """
    Single-slot, in-process cache for the whole store catalogue.

    - Fresh snapshot (age < ttl) is returned as-is, with no upstream call.
    - Otherwise the fetcher runs; success replaces the slot wholesale.
    - Failure returns an empty snapshot and leaves the slot untouched, so the
      TTL is never armed by a failed refresh and the next call retries.
    - No refresh lock: concurrent stale callers may each fetch; last writer wins.

    `fetcher` is anything with `async fetch_all() -> list[Product]`;
    `clock` returns seconds (time.time by default) and is injectable for tests.
    """
    def __init__(self, fetcher, ttl: int = 10 * 60, clock: Callable[[], float] = time.time):
        self.fetcher = fetcher
        self.ttl = ttl
        self.clock = clock
        self._snapshot: Optional[CatalogueSnapshot] = None

    @property
    def snapshot(self) -> Optional[CatalogueSnapshot]:
        return self._snapshot

    def age(self, now: Optional[float] = None) -> Optional[float]:
        """Seconds since the stored snapshot was captured; None if nothing is cached."""
        if self._snapshot is None:
            return None
        now = self.clock() if now is None else now
        return now - self._snapshot.captured_at

    def is_fresh(self, now: float) -> bool:
        return self._snapshot is not None and (now - self._snapshot.captured_at) < self.ttl

    async def get_or_refresh(self, now: Optional[float] = None) -> CatalogueSnapshot:
        now = self.clock() if now is None else now
        if self.is_fresh(now):
            logger.debug("catalogue cache_hit items=%s age=%.1fs", self._snapshot.count, self.age(now))
            return self._snapshot

        logger.info("catalogue cache_miss ttl=%ss", self.ttl)
        try:
            products = await self.fetcher.fetch_all()
        except CatalogueFetchError as e:
            logger.error("catalogue fetch failed: %s", e)
            if isinstance(e, ListingFetchError) and e.status_code is not None:
                logger.error("catalogue upstream status=%s body=%s", e.status_code, _json_preview(e.body))
            return CatalogueSnapshot(products=(), captured_at=now)

        snapshot = CatalogueSnapshot(products=tuple(products), captured_at=now)
        self._snapshot = snapshot
        logger.info("catalogue cached items=%s", snapshot.count)
        return snapshot

    async def get_catalogue(self, now: Optional[float] = None) -> Tuple[Product, ...]:
        """Full, unfiltered product list; callers apply category filtering."""
        snapshot = await self.get_or_refresh(now)
        return snapshot.products
