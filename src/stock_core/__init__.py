# Stock reconciliation core: baseline stock + register sales -> current stock
# Pure functions over in-memory products and sales; nothing is stored here

from .models import (
    Product,
    SaleRecord,
    StockCalculationResult,
    StockValidationWarning,
    AggregatedStockStats,
)
from .parsers import (
    DateParser,
    StockCutoff,
    normalize_label,
    signature,
    resolve_cutoff,
    get_default_initial_stock_date,
    format_stock_date,
)
from .matching import MatchType, find_product_sales, match_product_sales
from .reconciliation import calculate_stock_final, partition_sales
from .quality import StockConfigurationReport, validate_stock_configuration, check_product
from .analysis import (
    calculate_aggregated_stock_stats,
    classify_stock_level,
    build_stock_report,
)
from .config import Settings, configure_logging

__all__ = [
    "Product",
    "SaleRecord",
    "StockCalculationResult",
    "StockValidationWarning",
    "AggregatedStockStats",
    "DateParser",
    "StockCutoff",
    "normalize_label",
    "signature",
    "resolve_cutoff",
    "get_default_initial_stock_date",
    "format_stock_date",
    "MatchType",
    "find_product_sales",
    "match_product_sales",
    "calculate_stock_final",
    "partition_sales",
    "StockConfigurationReport",
    "validate_stock_configuration",
    "check_product",
    "calculate_aggregated_stock_stats",
    "classify_stock_level",
    "build_stock_report",
    "Settings",
    "configure_logging",
]
