# Import-layer adapters
# Each module maps one export format onto the stock core's SaleRecord

from .register_export import RegisterExportLoader

__all__ = ["RegisterExportLoader"]
