"""
Domain models for the shopping cart and its offer catalog.

Value objects use Pydantic v2 BaseModel for validation and decoding. The offer
configuration in particular arrives as JSON from remote and local sources and
is validated into `OfferConfig` records before being mapped to offers.

Enums inherit from (str, Enum) so they serialize as plain strings in JSON and
log lines (e.g. "READY" instead of "CatalogState.READY").
"""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CatalogState(str, Enum):
    """Lifecycle of the offer catalog."""

    UNINITIALIZED = "UNINITIALIZED"  # Created, no load scheduled yet
    LOADING = "LOADING"              # Initial load in progress
    READY = "READY"                  # A complete snapshot is being served
    REFRESHING = "REFRESHING"        # Serving the old snapshot while reloading
    STOPPED = "STOPPED"              # Background refresh cancelled


class Product(BaseModel):
    """A product in the cart.

    Frozen so it is hashable and can key the cart. Offers match products by
    lowercased name.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0)  # Unit price in pounds


# ── Offer configuration ──────────────────────────────────────────────


class OfferConfig(BaseModel):
    """One raw offer definition as found in the JSON configuration.

    Only lives for the duration of a load: `map_configs()` turns a list of
    these into executable offers and the records are then discarded.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # Records without a type are dropped at mapping time like unknown types
    type: str | None = None
    applicable_to: list[str] | None = Field(default=None, alias="applicableTo")
    discount_percentage: float | None = Field(default=None, alias="discountPercentage")


# ── Cart ─────────────────────────────────────────────────────────────


class Cart:
    """Multiset of products: each product maps to a positive quantity."""

    def __init__(self) -> None:
        self.items: dict[Product, int] = {}

    def add_item(self, product: Product, quantity: int = 1) -> None:
        if quantity < 1:
            raise ValueError(f"quantity must be positive, got {quantity}")
        self.items[product] = self.items.get(product, 0) + quantity

    def remove_item(self, product: Product, quantity: int = 1) -> None:
        """Decrement a line, dropping it once the quantity is used up.

        Removing a product that is not in the cart does nothing.
        """
        if quantity < 1:
            raise ValueError(f"quantity must be positive, got {quantity}")
        current = self.items.get(product)
        if current is None:
            return
        if current <= quantity:
            del self.items[product]
        else:
            self.items[product] = current - quantity
