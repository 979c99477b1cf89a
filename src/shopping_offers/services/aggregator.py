"""
Offer aggregator: concurrent fan-out over every configured source.

One task per source runs on the event loop; the aggregator waits for all of
them (a barrier join) and concatenates their results in source order, not
completion order. A source that raises is logged and counts as contributing
no offers, so one broken source never hides the others.
"""

import asyncio
import logging
from typing import Sequence

from shopping_offers.domain.offers import Offer
from shopping_offers.services.sources import OfferSource

logger = logging.getLogger(__name__)


class OfferAggregator:
    """Merges the offers of several sources. `load_offers()` never raises."""

    def __init__(self, sources: Sequence[OfferSource]) -> None:
        self._sources = tuple(sources)

    @property
    def sources(self) -> tuple[OfferSource, ...]:
        return self._sources

    async def _load_from(self, source: OfferSource) -> list[Offer] | None:
        try:
            return await source.load_offers()
        except Exception as exc:
            logger.warning("Error loading offers from %s: %s", source.description, exc)
            return None

    async def load_offers(self) -> list[Offer]:
        results = await asyncio.gather(*(self._load_from(source) for source in self._sources))

        offers: list[Offer] = []
        failed = 0
        for result in results:
            if result is None:
                failed += 1
                continue
            offers.extend(result)

        logger.info(
            "Loaded %d offers from %d sources (%d failed)",
            len(offers),
            len(self._sources),
            failed,
        )
        return offers
