"""Shared fixtures: a fixed clock and small builders for products and sales."""

from datetime import datetime

import pytest

from stock_core.models import Product, SaleRecord

NOW = datetime(2024, 3, 1, 12, 0, 0)


def make_product(name="Coffee", category="Drinks", **kwargs) -> Product:
    return Product(name=name, category=category, **kwargs)


def make_sale(product="Coffee", category="Drinks", quantity=1, date=None) -> SaleRecord:
    return SaleRecord(
        product=product,
        category=category,
        quantity=quantity,
        date=date or datetime(2024, 1, 15),
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def coffee_sales():
    return [
        make_sale(quantity=5, date=datetime(2024, 1, 5)),
        make_sale(quantity=10, date=datetime(2024, 1, 15)),
    ]
