"""
Matching of free-text register lines to catalog products.

Register exports label sales with whatever was typed at the till, so a
product is matched in two passes:
1. Exact signature match (normalized name + category)
2. Fuzzy match: same category, name contained in either direction

The fuzzy pass only runs when the exact pass finds nothing.
"""

import logging
from enum import Enum

from .models import Product, SaleRecord
from .parsers import normalize_label, signature

logger = logging.getLogger(__name__)


class MatchType(Enum):
    """How a product's sales were found."""

    EXACT = "exact"  # Signature equality
    FUZZY = "fuzzy"  # Same category, substring on name
    UNMATCHED = "unmatched"  # No sales for this product


def exact_matches(product: Product, sales: list[SaleRecord]) -> list[SaleRecord]:
    """Sales whose normalized name|category signature equals the product's."""
    key = signature(product.name, product.category)
    return [sale for sale in sales if signature(sale.product, sale.category) == key]


def fuzzy_matches(product: Product, sales: list[SaleRecord]) -> list[SaleRecord]:
    """
    Sales in the same normalized category whose name contains, or is
    contained in, the product's normalized name.

    Known limitation: short names match longer unrelated ones in the same
    category ("tea" inside "herbal tea blend").
    """
    name = normalize_label(product.name)
    category = normalize_label(product.category)

    matched = []
    for sale in sales:
        if normalize_label(sale.category) != category:
            continue
        sale_name = normalize_label(sale.product)
        if name in sale_name or sale_name in name:
            matched.append(sale)
    return matched


def match_product_sales(
    product: Product, all_sales: list[SaleRecord]
) -> tuple[MatchType, list[SaleRecord]]:
    """Find a product's sales and report which pass produced them."""
    exact = exact_matches(product, all_sales)
    if exact:
        # Exact matches always win, even over a larger fuzzy set
        return MatchType.EXACT, exact

    fuzzy = fuzzy_matches(product, all_sales)
    if fuzzy:
        logger.debug(
            "No exact sales for %r (%r), %d fuzzy match(es)",
            product.name,
            product.category,
            len(fuzzy),
        )
        return MatchType.FUZZY, fuzzy

    return MatchType.UNMATCHED, []


def find_product_sales(product: Product, all_sales: list[SaleRecord]) -> list[SaleRecord]:
    """All sales that refer to `product`, in ledger order. Empty is a normal result."""
    _, sales = match_product_sales(product, all_sales)
    return sales
