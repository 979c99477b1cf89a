"""
Shopping service facade.

Ties a cart to an offer catalog. The catalog is started with the service and
stopped with it; receipts are priced against whatever snapshot the catalog
holds at the time, so a receipt is always produced, even when every offer
source is down (it is then simply full price).

Typical use:

    async with DefaultShoppingService(cart) as service:
        cart.add_item(Product(name="Cornflakes", price=Decimal("2.50")), 3)
        print(service.generate_receipt())
"""

import logging
from typing import Protocol

from shopping_offers.domain.models import Cart, CatalogState
from shopping_offers.domain.offers import Offer
from shopping_offers.domain.receipt import calculate_receipt
from shopping_offers.services.aggregator import OfferAggregator
from shopping_offers.services.catalog import OfferCatalog
from shopping_offers.services.factory import ServiceFactory
from shopping_offers.settings import get_settings

logger = logging.getLogger(__name__)


class ShoppingService(Protocol):
    def generate_receipt(self) -> str: ...

    def add_offer(self, offer: Offer) -> None: ...


class DefaultShoppingService:
    """Prices a cart against a periodically refreshed offer catalog.

    Construction does not load anything. `start()` schedules the initial load
    and the refresh loop; callers wait on `wait_ready()` (or use the service
    as an async context manager) before relying on offers being present.
    """

    def __init__(
        self,
        cart: Cart,
        aggregator: OfferAggregator | None = None,
        refresh_interval: float | None = None,
    ) -> None:
        self.cart = cart
        if aggregator is None:
            aggregator = ServiceFactory.get_offer_aggregator()
        if refresh_interval is None:
            refresh_interval = get_settings().refresh_interval_seconds
        self.catalog = OfferCatalog(aggregator, refresh_interval)

    @property
    def state(self) -> CatalogState:
        return self.catalog.state

    def start(self) -> None:
        self.catalog.start()

    async def wait_ready(self) -> None:
        await self.catalog.wait_ready()

    async def load_offers(self) -> None:
        """Reload offers now instead of waiting for the next refresh."""
        await self.catalog.refresh()

    async def aclose(self) -> None:
        await self.catalog.stop()

    async def __aenter__(self) -> "DefaultShoppingService":
        self.start()
        await self.wait_ready()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def add_offer(self, offer: Offer) -> None:
        self.catalog.add(offer)

    def generate_receipt(self) -> str:
        receipt = calculate_receipt(self.cart.items, self.catalog.snapshot())
        logger.debug("Generated receipt with %d lines, total %s", len(receipt.lines), receipt.total)
        return receipt.render()
