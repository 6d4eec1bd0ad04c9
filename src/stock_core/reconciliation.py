"""
Stock reconciliation: current stock from a declared baseline and the sales ledger.

A product declares `initial_stock` as of `initial_stock_date`. Sales made
before that day were already reflected in the declared figure, so only
sales on or after the baseline day are deducted. Products without a
baseline date (created before the field existed) deduct every sale.
"""

import logging
from datetime import datetime

from .matching import find_product_sales
from .models import Product, SaleRecord, StockCalculationResult, total_quantity
from .parsers import is_before, resolve_cutoff

logger = logging.getLogger(__name__)


def partition_sales(
    sales: list[SaleRecord], cutoff_start: datetime
) -> tuple[list[SaleRecord], list[SaleRecord]]:
    """
    Split sales around a cutoff.

    Returns (valid, ignored): ignored sales are strictly before
    `cutoff_start`, everything else is valid. Ledger order is kept.
    """
    valid: list[SaleRecord] = []
    ignored: list[SaleRecord] = []
    for sale in sales:
        if is_before(sale.date, cutoff_start):
            ignored.append(sale)
        else:
            valid.append(sale)
    return valid, ignored


def ignored_sales_message(ignored: list[SaleRecord]) -> str:
    return (
        f"{len(ignored)} vente(s) antérieure(s) à la date de stock "
        f"({total_quantity(ignored)} unités ignorées)"
    )


def calculate_stock_final(
    product: Product,
    all_sales: list[SaleRecord],
    now: datetime | None = None,
) -> StockCalculationResult:
    """
    Compute a product's current stock.

    Args:
        product: The product to reconcile
        all_sales: The full sales ledger (not pre-filtered)
        now: Used as the cutoff when the baseline date can't be read.
             Defaults to the current time.

    Never raises for missing or malformed dates; final stock is clamped at 0.
    """
    initial_stock = product.initial_stock

    if not all_sales:
        return StockCalculationResult(final_stock=initial_stock)

    product_sales = find_product_sales(product, all_sales)
    if not product_sales:
        return StockCalculationResult(final_stock=initial_stock)

    # Legacy mode: no baseline, every sale counts
    if not product.has_baseline:
        return StockCalculationResult(
            final_stock=max(0, initial_stock - total_quantity(product_sales)),
            valid_sales=product_sales,
        )

    cutoff = resolve_cutoff(product.initial_stock_date, now=now)
    valid, ignored = partition_sales(product_sales, cutoff.start)

    result = StockCalculationResult(
        final_stock=max(0, initial_stock - total_quantity(valid)),
        valid_sales=valid,
        ignored_sales=ignored,
        has_inconsistent_stock=len(ignored) > 0,
    )
    if result.has_inconsistent_stock:
        result.warning_message = ignored_sales_message(ignored)
        logger.debug("%s: %s", product.name, result.warning_message)

    return result
