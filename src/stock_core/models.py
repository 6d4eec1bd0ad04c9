"""
Data model shared by the stock reconciliation core.

Products and sale records come from the storage/import layer and are
validated once at that boundary (pydantic). Everything the core computes
is returned as plain dataclasses.
"""

from dataclasses import dataclass, field
from datetime import date as calendar_date, datetime, time
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Product(BaseModel):
    """A catalog product as handed over by the storage layer."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(description="Product name, not guaranteed normalized")
    category: str = Field(default="", description="Product category label")
    initial_stock: int = Field(
        default=0,
        ge=0,
        alias="initialStock",
        description="Units on hand as of the baseline date (absent means 0)",
    )
    initial_stock_date: str | None = Field(
        default=None,
        alias="initialStockDate",
        description="Baseline date string; None means legacy mode",
    )
    min_stock: int = Field(default=0, alias="minStock", description="Reorder threshold")
    price: float = Field(default=0.0, description="Unit price, used for valuation only")

    @field_validator("initial_stock", mode="before")
    @classmethod
    def _default_initial_stock(cls, value):
        return 0 if value is None else value

    @field_validator("min_stock", mode="before")
    @classmethod
    def _default_min_stock(cls, value):
        return 0 if value is None else value

    @field_validator("initial_stock_date", mode="before")
    @classmethod
    def _blank_date_is_absent(cls, value):
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @field_validator("name", "category", mode="before")
    @classmethod
    def _text_or_empty(cls, value):
        return "" if value is None else value

    @property
    def has_baseline(self) -> bool:
        return self.initial_stock_date is not None


class SaleRecord(BaseModel):
    """One point-of-sale line. `date` is already a datetime at this point."""

    model_config = ConfigDict(frozen=True)

    product: str = Field(description="Free-text product label from the register")
    category: str = Field(default="", description="Free-text category label")
    quantity: int = Field(ge=0, description="Units sold in this record")
    date: datetime

    @field_validator("product", "category", mode="before")
    @classmethod
    def _text_or_empty(cls, value):
        return "" if value is None else value

    @field_validator("date", mode="before")
    @classmethod
    def _calendar_day_is_midnight(cls, value):
        # plain dates count from the start of that day
        if isinstance(value, calendar_date) and not isinstance(value, datetime):
            return datetime.combine(value, time.min)
        return value


def total_quantity(sales: list[SaleRecord]) -> int:
    """Sum of units over a sequence of sales."""
    return sum(sale.quantity for sale in sales)


@dataclass
class StockCalculationResult:
    """Outcome of reconciling one product against the sales ledger."""

    final_stock: int
    valid_sales: list[SaleRecord] = field(default_factory=list)
    ignored_sales: list[SaleRecord] = field(default_factory=list)
    has_inconsistent_stock: bool = False
    warning_message: str | None = None

    @property
    def valid_quantity(self) -> int:
        return total_quantity(self.valid_sales)

    @property
    def ignored_quantity(self) -> int:
        return total_quantity(self.ignored_sales)

    def summary(self) -> dict:
        """Return a summary dict for display."""
        return {
            "finalStock": self.final_stock,
            "validSales": len(self.valid_sales),
            "ignoredSales": len(self.ignored_sales),
            "hasInconsistentStock": self.has_inconsistent_stock,
            "warningMessage": self.warning_message,
        }


WarningType = Literal[
    "sales_before_stock_date", "no_initial_stock_date", "future_stock_date"
]
Severity = Literal["warning", "error", "info"]


@dataclass(frozen=True)
class StockValidationWarning:
    """A single diagnostic about a product's stock configuration."""

    type: WarningType
    message: str
    severity: Severity


@dataclass
class AggregatedStockStats:
    """Fleet-wide stock counters over a product collection."""

    total_products: int = 0
    total_stock: int = 0
    total_sold: int = 0
    out_of_stock: int = 0
    low_stock: int = 0
    inconsistent_stock: int = 0
    total_value: float = 0.0

    def summary(self) -> dict:
        return {
            "totalProducts": self.total_products,
            "totalStock": self.total_stock,
            "totalSold": self.total_sold,
            "outOfStock": self.out_of_stock,
            "lowStock": self.low_stock,
            "inconsistentStock": self.inconsistent_stock,
            "totalValue": self.total_value,
        }
