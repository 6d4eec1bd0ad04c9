"""
Stock configuration checks.

Looks at a single product's baseline setup and reports what the stock
screen should warn about:
- No baseline date (every sale is deducted)
- Baseline date in the future
- Sales recorded before the baseline date

Read-only: nothing here changes products or sales.
"""

from dataclasses import dataclass, field
from datetime import datetime

from .matching import find_product_sales
from .models import Product, SaleRecord, StockValidationWarning, total_quantity
from .parsers import is_before, resolve_cutoff

NO_INITIAL_STOCK_DATE_MESSAGE = (
    "Aucune date de stock initial définie - toutes les ventes sont prises en compte"
)
FUTURE_STOCK_DATE_MESSAGE = "La date de stock initial est dans le futur"


def validate_stock_configuration(
    product: Product,
    all_sales: list[SaleRecord],
    now: datetime | None = None,
) -> list[StockValidationWarning]:
    """Return the configuration warnings for `product`, most fundamental first."""
    if not product.has_baseline:
        return [
            StockValidationWarning(
                type="no_initial_stock_date",
                message=NO_INITIAL_STOCK_DATE_MESSAGE,
                severity="info",
            )
        ]

    now = now or datetime.now()
    cutoff = resolve_cutoff(product.initial_stock_date, now=now)
    warnings = []

    if cutoff.is_future(now):
        warnings.append(
            StockValidationWarning(
                type="future_stock_date",
                message=FUTURE_STOCK_DATE_MESSAGE,
                severity="warning",
            )
        )

    earlier = [
        sale
        for sale in find_product_sales(product, all_sales)
        if is_before(sale.date, cutoff.start)
    ]
    if earlier:
        warnings.append(
            StockValidationWarning(
                type="sales_before_stock_date",
                message=(
                    f"{len(earlier)} vente(s) antérieure(s) détectée(s) "
                    f"({total_quantity(earlier)} unités)"
                ),
                severity="warning",
            )
        )

    return warnings


@dataclass
class StockConfigurationReport:
    """Warnings for one product, grouped for display."""

    product_name: str
    warnings: list[StockValidationWarning] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return any(w.severity in ("warning", "error") for w in self.warnings)

    def by_severity(self, severity: str) -> list[StockValidationWarning]:
        return [w for w in self.warnings if w.severity == severity]

    def summary(self) -> dict:
        """Return a summary dict for display."""
        return {
            "product": self.product_name,
            "error": len(self.by_severity("error")),
            "warning": len(self.by_severity("warning")),
            "info": len(self.by_severity("info")),
        }


def check_product(
    product: Product, all_sales: list[SaleRecord], now: datetime | None = None
) -> StockConfigurationReport:
    return StockConfigurationReport(
        product_name=product.name,
        warnings=validate_stock_configuration(product, all_sales, now=now),
    )
