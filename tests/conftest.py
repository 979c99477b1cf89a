from decimal import Decimal

import pytest

from shopping_offers.domain.models import Product
from shopping_offers.services.factory import ServiceFactory


@pytest.fixture
def cornflakes() -> Product:
    return Product(name="Cornflakes", price=Decimal("2.50"))


@pytest.fixture(autouse=True)
def reset_factory():
    ServiceFactory.reset()
    yield
    ServiceFactory.reset()
