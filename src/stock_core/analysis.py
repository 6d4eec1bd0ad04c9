"""
Catalog-wide stock analysis.

Computes:
- Stock level classification (out / low / ok)
- Aggregated stock statistics for the stock screen header
- A per-product stock report table
"""

from datetime import datetime

import pandas as pd

from .models import AggregatedStockStats, Product, SaleRecord
from .parsers import format_stock_date
from .reconciliation import calculate_stock_final

REPORT_COLUMNS = [
    "name",
    "category",
    "initial_stock",
    "initial_stock_date",
    "final_stock",
    "min_stock",
    "units_sold",
    "ignored_sales",
    "ignored_units",
    "has_inconsistent_stock",
    "warning_message",
    "stock_value",
    "status",
]


def classify_stock_level(final_stock: int, min_stock: int) -> str:
    """
    Bucket a stock figure against its reorder threshold.

    - out: nothing left
    - low: 0 < stock <= min_stock
    - ok: above the threshold
    """
    if final_stock == 0:
        return "out"
    if final_stock <= min_stock:
        return "low"
    return "ok"


def calculate_aggregated_stock_stats(
    products: list[Product],
    all_sales: list[SaleRecord],
    now: datetime | None = None,
) -> AggregatedStockStats:
    """
    Reconcile every product once and accumulate the header counters.

    Cost is one full ledger scan per product.
    """
    stats = AggregatedStockStats(total_products=len(products))

    for product in products:
        calculation = calculate_stock_final(product, all_sales, now=now)

        stats.total_stock += calculation.final_stock
        stats.total_sold += calculation.valid_quantity
        stats.total_value += calculation.final_stock * product.price

        level = classify_stock_level(calculation.final_stock, product.min_stock)
        if level == "out":
            stats.out_of_stock += 1
        elif level == "low":
            stats.low_stock += 1

        if calculation.has_inconsistent_stock:
            stats.inconsistent_stock += 1

    return stats


def build_stock_report(
    products: list[Product],
    all_sales: list[SaleRecord],
    now: datetime | None = None,
) -> pd.DataFrame:
    """
    Build the per-product stock table.

    Returns DataFrame with one row per product (input order), including:
    - final_stock / units_sold (after the baseline cutoff)
    - ignored_sales / ignored_units (before the baseline)
    - stock_value (final stock x unit price)
    - status (out/low/ok)
    """
    rows = []
    for product in products:
        calculation = calculate_stock_final(product, all_sales, now=now)
        rows.append(
            {
                "name": product.name,
                "category": product.category,
                "initial_stock": product.initial_stock,
                "initial_stock_date": format_stock_date(product.initial_stock_date)
                if product.initial_stock_date
                else None,
                "final_stock": calculation.final_stock,
                "min_stock": product.min_stock,
                "units_sold": calculation.valid_quantity,
                "ignored_sales": len(calculation.ignored_sales),
                "ignored_units": calculation.ignored_quantity,
                "has_inconsistent_stock": calculation.has_inconsistent_stock,
                "warning_message": calculation.warning_message,
                "price": product.price,
            }
        )

    if not rows:
        return pd.DataFrame(columns=REPORT_COLUMNS)

    report = pd.DataFrame(rows)
    report["stock_value"] = report["final_stock"] * report["price"]
    report["status"] = [
        classify_stock_level(stock, minimum)
        for stock, minimum in zip(report["final_stock"], report["min_stock"])
    ]

    return report[REPORT_COLUMNS]
