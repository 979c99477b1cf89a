"""Unit tests for receipt calculation."""

from decimal import Decimal

from shopping_offers.domain.models import Product
from shopping_offers.domain.offers import TwoForOneOffer
from shopping_offers.domain.receipt import calculate_receipt


class FlatOffer:
    """Test offer discounting a fixed amount from every applicable line."""

    def __init__(self, name: str, amount: str) -> None:
        self.name = name
        self.amount = Decimal(amount)

    def is_applicable(self, product):
        return True

    def apply(self, product, quantity):
        return self.amount


class TestCalculateReceipt:
    def test_no_offers_is_full_price(self, cornflakes):
        receipt = calculate_receipt({cornflakes: 3}, ())
        assert receipt.lines == ["Cornflakes x3: £7.50"]
        assert receipt.total == Decimal("7.50")
        assert receipt.render() == "Receipt:\nCornflakes x3: £7.50\nTotal: £7.50\n"

    def test_two_for_one_discount_line(self, cornflakes):
        receipt = calculate_receipt({cornflakes: 4}, (TwoForOneOffer(["Cornflakes"]),))
        assert receipt.lines == [
            "Cornflakes x4: £10.00",
            "Offer '2-for-1' applied to product (Cornflakes): -£5.00",
        ]
        assert receipt.total == Decimal("5.00")

    def test_zero_discount_has_no_offer_line(self, cornflakes):
        receipt = calculate_receipt({cornflakes: 1}, (TwoForOneOffer(["Cornflakes"]),))
        assert receipt.lines == ["Cornflakes x1: £2.50"]
        assert receipt.total == Decimal("2.50")

    def test_multiple_offers_each_discount_the_full_subtotal(self, cornflakes):
        offers = (TwoForOneOffer(["Cornflakes"]), FlatOffer("flat", "1.00"))
        receipt = calculate_receipt({cornflakes: 4}, offers)
        # (10.00 - 5.00) + (10.00 - 1.00)
        assert receipt.total == Decimal("14.00")
        assert "Offer 'flat' applied to product (Cornflakes): -£1.00" in receipt.lines

    def test_offer_only_touches_matching_products(self, cornflakes):
        milk = Product(name="Milk", price=Decimal("0.99"))
        receipt = calculate_receipt({cornflakes: 2, milk: 2}, (TwoForOneOffer(["Cornflakes"]),))
        assert receipt.total == Decimal("2.50") + Decimal("1.98")
        assert "Milk x2: £1.98" in receipt.lines

    def test_total_is_rounded_for_display_only(self):
        item = Product(name="Gum", price=Decimal("0.333"))
        receipt = calculate_receipt({item: 3}, ())
        assert receipt.total == Decimal("0.999")
        assert receipt.render().endswith("Total: £1.00\n")

    def test_half_pennies_round_up_for_display(self):
        item = Product(name="Gum", price=Decimal("0.125"))
        receipt = calculate_receipt({item: 1}, ())
        assert receipt.render() == "Receipt:\nGum x1: £0.13\nTotal: £0.13\n"
        assert receipt.total == Decimal("0.125")
