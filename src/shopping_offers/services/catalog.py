"""
Offer catalog: the live, periodically refreshed set of offers.

The catalog owns one supervising background task. It performs the initial
load, marks the catalog ready, then sleeps and reloads on a fixed interval
until it is cancelled. Each load goes through the aggregator, is deduplicated
by offer name (first seen wins) and replaces the snapshot with a single
assignment.

The snapshot is an immutable tuple. Writers hold `_lock` around the swap;
readers just take the current tuple, so they see either the previous complete
snapshot or the new one, never a mix.
"""

import asyncio
import contextlib
import logging
import threading
from typing import Iterable

from shopping_offers.domain.models import CatalogState
from shopping_offers.domain.offers import Offer
from shopping_offers.services.aggregator import OfferAggregator

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_INTERVAL_SECONDS = 3600.0  # 1 hour


def dedupe_by_name(offers: Iterable[Offer]) -> tuple[Offer, ...]:
    """Keep the first offer of each name, in order."""
    seen: set[str] = set()
    unique: list[Offer] = []
    for offer in offers:
        if offer.name not in seen:
            seen.add(offer.name)
            unique.append(offer)
    return tuple(unique)


class OfferCatalog:
    """Lock-guarded offer snapshot with a cancellable background refresh."""

    def __init__(
        self,
        aggregator: OfferAggregator,
        refresh_interval: float = DEFAULT_REFRESH_INTERVAL_SECONDS,
    ) -> None:
        self._aggregator = aggregator
        self.refresh_interval = refresh_interval
        self._offers: tuple[Offer, ...] = ()
        # Guards every mutation of _offers, from the refresh task and from add().
        self._lock = threading.Lock()
        self._task: asyncio.Task[None] | None = None
        self._ready: asyncio.Event | None = None
        # Refreshes in flight while serving; READY is restored when it drops to 0.
        self._refreshing = 0
        self.state = CatalogState.UNINITIALIZED

    # ── Reads ────────────────────────────────────────────────────

    def snapshot(self) -> tuple[Offer, ...]:
        return self._offers

    @property
    def is_ready(self) -> bool:
        return self.state in (CatalogState.READY, CatalogState.REFRESHING)

    # ── Mutations ────────────────────────────────────────────────

    def add(self, offer: Offer) -> None:
        """Append an ad-hoc offer. It lasts until the next refresh."""
        with self._lock:
            self._offers = self._offers + (offer,)

    async def refresh(self) -> None:
        """Run one load-and-replace cycle."""
        serving = self.state in (CatalogState.READY, CatalogState.REFRESHING)
        if serving:
            self._refreshing += 1
            self.state = CatalogState.REFRESHING
        try:
            offers = dedupe_by_name(await self._aggregator.load_offers())
            with self._lock:
                self._offers = offers
        finally:
            if serving:
                self._refreshing -= 1
                if self._refreshing == 0 and self.state is CatalogState.REFRESHING:
                    self.state = CatalogState.READY
        logger.info("Offer catalog refreshed: %s", [offer.name for offer in offers])

    # ── Lifecycle ────────────────────────────────────────────────

    def start(self) -> None:
        """Schedule the initial load and the refresh loop on the running loop.

        Returns immediately; use `wait_ready()` to wait for the initial load.
        """
        if self._task is not None:
            return
        self._ready = asyncio.Event()
        self.state = CatalogState.LOADING
        self._task = asyncio.create_task(self._run(self._ready), name="offer-catalog-refresh")

    async def wait_ready(self) -> None:
        if self._ready is None:
            raise RuntimeError("Offer catalog has not been started")
        await self._ready.wait()

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is not None:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self.state = CatalogState.STOPPED
        logger.info("Offer catalog stopped")

    async def _run(self, ready: asyncio.Event) -> None:
        try:
            await self.refresh()
        except Exception:
            logger.exception("Initial offer load failed; serving an empty catalog")
        finally:
            # Waiters are released even when stop() cancels the initial load.
            ready.set()
        self.state = CatalogState.READY

        while True:
            await asyncio.sleep(self.refresh_interval)
            try:
                await self.refresh()
            except Exception:
                logger.exception("Error refreshing offers")
