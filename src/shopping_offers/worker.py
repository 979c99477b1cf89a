"""
Long-running offer catalog process.

Builds a shopping service from settings, waits for the initial offer load,
then keeps the background refresh running until it is interrupted (Ctrl+C)
or, when embedded, until the `stop` event is set.

Sources are configured through the environment:
  - OFFERS_URL                        remote JSON endpoint (optional)
  - OFFERS_FILE                       local JSON file (default: bundled config)
  - OFFERS_REFRESH_INTERVAL_SECONDS   refresh period (default: 3600)

Run with:
    python -m shopping_offers.worker
"""

import asyncio
import logging

from shopping_offers.domain.models import Cart
from shopping_offers.services.aggregator import OfferAggregator
from shopping_offers.services.factory import ServiceFactory
from shopping_offers.services.shopping import DefaultShoppingService
from shopping_offers.settings import Settings, get_settings


async def run_worker(settings: Settings | None = None, stop: asyncio.Event | None = None) -> None:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    logger = logging.getLogger(__name__)

    aggregator = OfferAggregator(ServiceFactory.build_sources(settings))
    logger.info(
        "Starting offer catalog with sources %s, refreshing every %.0fs",
        [source.description for source in aggregator.sources],
        settings.refresh_interval_seconds,
    )

    async with DefaultShoppingService(
        Cart(), aggregator=aggregator, refresh_interval=settings.refresh_interval_seconds
    ) as service:
        logger.info("Offer catalog ready: %s", [offer.name for offer in service.catalog.snapshot()])
        # Blocks until stopped; cancellation (Ctrl+C) unwinds through __aexit__.
        await (stop or asyncio.Event()).wait()


def main() -> None:
    try:
        asyncio.run(run_worker())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
