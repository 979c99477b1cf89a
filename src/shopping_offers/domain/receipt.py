"""
Receipt calculation.

Pure: takes the cart contents and a snapshot of the offer catalog and returns
a `Receipt`. No I/O, no shared state, so it is safe to run against whatever
snapshot the catalog handed out, even while a refresh is in flight.
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, Sequence

from shopping_offers.domain.models import Product
from shopping_offers.domain.offers import Offer

CURRENCY = "£"
PENNY = Decimal("0.01")


def _money(amount: Decimal) -> str:
    return f"{CURRENCY}{amount.quantize(PENNY, rounding=ROUND_HALF_UP):f}"


@dataclass
class Receipt:
    """Formatted receipt lines plus the unrounded total."""

    lines: list[str] = field(default_factory=list)
    total: Decimal = Decimal("0")

    def render(self) -> str:
        body = "".join(f"{line}\n" for line in self.lines)
        return f"Receipt:\n{body}Total: {_money(self.total)}\n"


def calculate_receipt(items: Mapping[Product, int], offers: Sequence[Offer]) -> Receipt:
    """Price every cart line against the offers that apply to it.

    Each applicable offer contributes `subtotal - discount` to the total, so
    two offers on the same product both discount from the full subtotal.
    Lines without an applicable offer contribute their subtotal.
    """
    receipt = Receipt()
    for product, quantity in items.items():
        subtotal = product.price * quantity
        receipt.lines.append(f"{product.name} x{quantity}: {_money(subtotal)}")

        applicable = [offer for offer in offers if offer.is_applicable(product)]
        for offer in applicable:
            discount = offer.apply(product, quantity)
            if discount > 0:
                receipt.lines.append(
                    f"Offer '{offer.name}' applied to product ({product.name}): -{_money(discount)}"
                )
            receipt.total += subtotal - discount

        if not applicable:
            receipt.total += subtotal
    return receipt
