"""
Loader for cash-register sale exports.

Turns a raw export (CSV or an already-loaded DataFrame) into SaleRecord
objects the stock core can consume. String-to-date parsing happens here,
so the core only ever sees real datetimes.

Export quirks handled:
- Labels with stray whitespace or missing values
- Dates in ISO form, with or without a time part
- Quantities exported as text or floats ("3", 3.0)

Rows whose date or quantity can't be read are dropped and logged.
"""

import logging
from pathlib import Path

import numpy as np
import pandas as pd
from pydantic import ValidationError

from stock_core.models import SaleRecord
from stock_core.parsers import DateParser

logger = logging.getLogger(__name__)


class RegisterExportLoader:
    """
    Maps a register export onto SaleRecord.

    Usage:
        loader = RegisterExportLoader(column_map={"produit": "product"})
        sales = loader.load_csv("exports/ventes.csv")
    """

    # Export column -> SaleRecord field
    DEFAULT_COLUMNS = {
        "product": "product",
        "category": "category",
        "quantity": "quantity",
        "date": "date",
    }

    def __init__(
        self,
        column_map: dict[str, str] | None = None,
        date_parser: DateParser | None = None,
    ):
        """
        Args:
            column_map: Export column names to SaleRecord fields, merged over the defaults
        """
        self.column_map = {**self.DEFAULT_COLUMNS, **(column_map or {})}
        self.date_parser = date_parser or DateParser()

    def load_csv(self, path: Path | str) -> list[SaleRecord]:
        """Read a CSV export and convert it."""
        df = pd.read_csv(Path(path), dtype=str, keep_default_na=True)
        return self.sales_from_frame(df)

    def prepare_frame(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Rename and clean export columns.

        Adds:
        - date_parsed (datetime or None)
        - quantity_clean (whole units, NaN when unreadable)
        """
        df = df.rename(columns=self.column_map).copy()

        for col in ("product", "category"):
            if col not in df.columns:
                df[col] = ""
            df[col] = df[col].fillna("").astype(str).str.strip()

        if "date" not in df.columns:
            df["date"] = None
        df["date_parsed"] = self.date_parser.parse_series(df["date"])

        if "quantity" not in df.columns:
            df["quantity"] = None
        quantity = pd.to_numeric(df["quantity"], errors="coerce").astype(float)
        # Infinities and fractional units are unreadable, not rounded
        df["quantity_clean"] = quantity.where(np.isfinite(quantity) & (quantity % 1 == 0))

        return df

    def sales_from_frame(self, df: pd.DataFrame) -> list[SaleRecord]:
        """Convert an export DataFrame into SaleRecord objects, in row order."""
        prepared = self.prepare_frame(df)

        unreadable = prepared["date_parsed"].isna() | prepared["quantity_clean"].isna()
        if unreadable.any():
            samples = prepared.loc[unreadable, "date"].head(5).tolist()
            logger.warning(
                "Dropping %d register row(s) with unreadable date or quantity (e.g. %s)",
                int(unreadable.sum()),
                samples,
            )

        sales = []
        for idx, row in prepared[~unreadable].iterrows():
            try:
                sales.append(
                    SaleRecord(
                        product=row["product"],
                        category=row["category"],
                        quantity=int(row["quantity_clean"]),
                        date=pd.Timestamp(row["date_parsed"]).to_pydatetime(),
                    )
                )
            except ValidationError as e:
                logger.warning("Dropping register row %s: %s", idx, e.errors()[0]["msg"])

        return sales
