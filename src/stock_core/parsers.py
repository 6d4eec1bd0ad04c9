"""
Parsers and normalizers for product labels and stock dates.

These handle the messy reality of register data:
- Product/category labels typed by hand (casing, stray whitespace)
- Baseline dates stored as strings by the edit form
- Sale timestamps that may or may not carry a timezone
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, time

import pandas as pd

logger = logging.getLogger(__name__)

STORAGE_DATE_FORMAT = "%Y-%m-%d"  # what the edit form stores: 2024-01-10
DISPLAY_DATE_FORMAT = "%d/%m/%Y"  # what the stock screen shows: 10/01/2024


def normalize_label(value: str | None) -> str:
    """Lowercase, trim and collapse internal whitespace. Accents are kept."""
    if value is None:
        return ""
    return " ".join(str(value).lower().split())


def signature(name: str | None, category: str | None) -> str:
    """Exact-match key for a product or a sale line."""
    return f"{normalize_label(name)}|{normalize_label(category)}"


class DateParser:
    """
    Parser for the ISO date strings stored alongside products.

    Returns None instead of raising on anything it can't read, so callers
    decide what the fallback is.
    """

    # ISO variants, ordered by how often the edit form produces them
    DATE_FORMATS = [
        "%Y-%m-%d",              # 2024-01-10
        "%Y-%m-%dT%H:%M:%S",     # 2024-01-10T08:30:00
        "%Y-%m-%dT%H:%M",        # 2024-01-10T08:30
        "%Y-%m-%d %H:%M:%S",     # 2024-01-10 08:30:00
        "%Y-%m-%dT%H:%M:%S.%f",  # 2024-01-10T08:30:00.000
    ]

    def __init__(self, custom_formats: list[str] | None = None):
        """
        Args:
            custom_formats: Additional date formats to try (prepended to defaults)
        """
        self.formats = (custom_formats or []) + self.DATE_FORMATS
        self._cache: dict[str, datetime | None] = {}

    def parse(self, date_str) -> datetime | None:
        """Parse a date string, trying each known format."""
        if isinstance(date_str, datetime):
            return date_str
        if isinstance(date_str, date):
            return datetime.combine(date_str, time.min)
        if date_str is None or pd.isna(date_str) or not str(date_str).strip():
            return None

        date_str = str(date_str).strip()

        if date_str in self._cache:
            return self._cache[date_str]

        result = None
        for fmt in self.formats:
            try:
                result = datetime.strptime(date_str, fmt)
                break
            except ValueError:
                continue

        if result is None:
            # Offsets and "Z" suffixes
            try:
                result = datetime.fromisoformat(date_str.replace("Z", "+00:00"))
            except ValueError:
                result = None

        self._cache[date_str] = result
        return result

    def parse_series(self, series: pd.Series) -> pd.Series:
        """Parse an entire pandas Series of dates."""
        return series.apply(self.parse)


def align(moment: datetime, reference: datetime) -> datetime:
    """
    Make `moment` comparable with `reference`.

    A naive value compared against an aware one is read as wall-clock time
    in the aware value's timezone.
    """
    if moment.tzinfo is None and reference.tzinfo is not None:
        return moment.replace(tzinfo=reference.tzinfo)
    if moment.tzinfo is not None and reference.tzinfo is None:
        return moment.replace(tzinfo=None)
    return moment


def is_before(moment: datetime, reference: datetime) -> bool:
    return align(moment, reference) < reference


@dataclass(frozen=True)
class StockCutoff:
    """
    Resolved baseline for a product.

    `defaulted` is True when the stored date could not be read and the
    current time was used instead.
    """

    moment: datetime
    defaulted: bool = False

    @property
    def day(self) -> date:
        return self.moment.date()

    @property
    def start(self) -> datetime:
        """Midnight at the beginning of the baseline day."""
        return datetime.combine(self.day, time.min, tzinfo=self.moment.tzinfo)

    def is_future(self, now: datetime) -> bool:
        return align(self.moment, now) > now


def resolve_cutoff(
    initial_stock_date: str | None,
    now: datetime | None = None,
    parser: DateParser | None = None,
) -> StockCutoff:
    """Parse a baseline date, falling back to `now` when it can't be read."""
    parser = parser or DateParser()
    parsed = parser.parse(initial_stock_date)
    if parsed is not None:
        return StockCutoff(moment=parsed)

    now = now or datetime.now()
    logger.debug(
        "Unreadable initial stock date %r, using %s as cutoff",
        initial_stock_date,
        now.date().isoformat(),
    )
    return StockCutoff(moment=now, defaulted=True)


def get_default_initial_stock_date(today: date | None = None) -> str:
    """Today's date in the stored form (YYYY-MM-DD)."""
    today = today or date.today()
    return today.strftime(STORAGE_DATE_FORMAT)


def format_stock_date(date_string: str) -> str:
    """Render a stored date as DD/MM/YYYY, or return it unchanged if unreadable."""
    parsed = DateParser().parse(date_string)
    if parsed is None:
        return date_string
    return parsed.strftime(DISPLAY_DATE_FORMAT)
