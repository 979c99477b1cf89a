"""
Offer strategies (Strategy pattern).

The receipt calculation holds a sequence of `Offer` objects (a Protocol) and
asks each one whether it applies to a product and how much it discounts. To
add a new kind of promotion, implement the protocol and teach `map_configs()`
the configuration type that produces it.

Offers are resolved from their string tag once, at mapping time. Nothing
downstream dispatches on the tag again.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import ClassVar, Iterable, Protocol

from shopping_offers.domain.models import OfferConfig, Product

logger = logging.getLogger(__name__)


class Offer(Protocol):
    """Interface for a promotional rule.

    Any class with a `name` and the two methods below satisfies this
    protocol (structural subtyping, no explicit inheritance needed).
    """

    name: str

    def is_applicable(self, product: Product) -> bool: ...

    def apply(self, product: Product, quantity: int) -> Decimal: ...


@dataclass(frozen=True)
class TwoForOneOffer:
    """Buy two, pay for one: every second unit of a listed product is free.

    Examples:
        - 4 x Cornflakes @ 2.50: discount 5.00
        - 3 x Cornflakes @ 2.50: discount 2.50
    """

    name: ClassVar[str] = "2-for-1"

    applicable_product_names: tuple[str, ...]
    _normalised: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        names = tuple(self.applicable_product_names)
        object.__setattr__(self, "applicable_product_names", names)
        object.__setattr__(self, "_normalised", frozenset(n.lower() for n in names))

    def is_applicable(self, product: Product) -> bool:
        return product.name.lower() in self._normalised

    def apply(self, product: Product, quantity: int) -> Decimal:
        return (quantity // 2) * product.price


OFFER_TYPE_TWO_FOR_ONE = "TwoForOneOffer"


def map_configs(configs: Iterable[OfferConfig]) -> list[Offer]:
    """Translate raw configuration records into offers, preserving order.

    Records of an unknown type, and 2-for-1 records without `applicableTo`,
    are dropped rather than treated as errors.
    """
    offers: list[Offer] = []
    for config in configs:
        if config.type == OFFER_TYPE_TWO_FOR_ONE and config.applicable_to is not None:
            offers.append(TwoForOneOffer(tuple(config.applicable_to)))
        else:
            logger.debug("Skipping unsupported offer config %r", config.type)
    return offers
