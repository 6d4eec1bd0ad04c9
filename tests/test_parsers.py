"""Label normalization and stock date parsing."""

from datetime import date, datetime, timedelta, timezone

from stock_core import parsers
from stock_core.parsers import (
    DateParser,
    StockCutoff,
    format_stock_date,
    get_default_initial_stock_date,
    is_before,
    normalize_label,
    resolve_cutoff,
    signature,
)
from stock_core.reconciliation import calculate_stock_final, partition_sales

from conftest import NOW, make_product, make_sale


class TestNormalizeLabel:
    def test_lowercase_and_trim(self):
        assert normalize_label("  Coffee ") == "coffee"

    def test_collapses_internal_whitespace(self):
        assert normalize_label("Cafe \t  Latte\n") == "cafe latte"

    def test_accents_are_kept(self):
        assert normalize_label("Café Latte") == "café latte"

    def test_none_is_empty(self):
        assert normalize_label(None) == ""

    def test_signature(self):
        assert signature(" Coffee", "DRINKS ") == "coffee|drinks"


class TestDateParser:
    def test_iso_date(self):
        assert DateParser().parse("2024-01-10") == datetime(2024, 1, 10)

    def test_iso_datetime(self):
        assert DateParser().parse("2024-01-10T08:30:00") == datetime(2024, 1, 10, 8, 30)

    def test_utc_suffix(self):
        parsed = DateParser().parse("2024-01-10T08:30:00Z")
        assert parsed == datetime(2024, 1, 10, 8, 30, tzinfo=timezone.utc)

    def test_garbage_returns_none(self):
        parser = DateParser()
        assert parser.parse("not a date") is None
        assert parser.parse("2024-13-45") is None
        assert parser.parse("") is None
        assert parser.parse(None) is None

    def test_date_objects_pass_through(self):
        parser = DateParser()
        assert parser.parse(date(2024, 1, 10)) == datetime(2024, 1, 10)
        assert parser.parse(datetime(2024, 1, 10, 5)) == datetime(2024, 1, 10, 5)

    def test_custom_formats_first(self):
        parser = DateParser(custom_formats=["%d/%m/%Y"])
        assert parser.parse("10/01/2024") == datetime(2024, 1, 10)


class TestResolveCutoff:
    def test_parsed_date(self):
        cutoff = resolve_cutoff("2024-01-10T15:45:00", now=NOW)
        assert cutoff.defaulted is False
        assert cutoff.start == datetime(2024, 1, 10)

    def test_unreadable_date_falls_back_to_now(self):
        cutoff = resolve_cutoff("yesterday-ish", now=NOW)
        assert cutoff.defaulted is True
        assert cutoff.moment == NOW
        assert cutoff.start == datetime(2024, 3, 1)

    def test_future_check(self):
        assert StockCutoff(moment=NOW + timedelta(days=1)).is_future(NOW)
        assert not StockCutoff(moment=datetime(2024, 3, 1)).is_future(NOW)


class TestIsBefore:
    def test_naive(self):
        assert is_before(datetime(2024, 1, 9, 23, 59), datetime(2024, 1, 10))
        assert not is_before(datetime(2024, 1, 10), datetime(2024, 1, 10))

    def test_mixed_timezones_do_not_raise(self):
        aware = datetime(2024, 1, 9, 23, 0, tzinfo=timezone.utc)
        assert is_before(aware, datetime(2024, 1, 10))
        assert not is_before(datetime(2024, 1, 10, 1), datetime(2024, 1, 10, tzinfo=timezone.utc))


class TestDateHelpers:
    def test_default_initial_stock_date(self):
        assert get_default_initial_stock_date(date(2024, 2, 5)) == "2024-02-05"

    def test_default_initial_stock_date_is_today(self):
        assert get_default_initial_stock_date() == date.today().strftime("%Y-%m-%d")

    def test_format_stock_date(self):
        assert format_stock_date("2024-01-10") == "10/01/2024"

    def test_format_stock_date_keeps_unreadable_input(self):
        assert format_stock_date("bientôt") == "bientôt"


class TestNoSharedParserState:
    def test_repeated_calls_keep_no_module_cache(self):
        for i in range(50):
            format_stock_date(f"junk-{i}")
            resolve_cutoff(f"junk-{i}", now=NOW)

        module_parsers = [v for v in vars(parsers).values() if isinstance(v, DateParser)]
        assert module_parsers == []

    def test_given_parser_is_used(self):
        parser = DateParser(custom_formats=["%d/%m/%Y"])
        cutoff = resolve_cutoff("10/01/2024", now=NOW, parser=parser)
        assert cutoff.defaulted is False
        assert cutoff.start == datetime(2024, 1, 10)


class TestOffsetBaseline:
    def test_offset_baseline_against_naive_sales(self):
        product = make_product(initial_stock=10, initial_stock_date="2024-01-10T00:00:00+02:00")
        late_evening = make_sale(quantity=2, date=datetime(2024, 1, 9, 23, 0))
        midnight = make_sale(quantity=3, date=datetime(2024, 1, 10, 0, 0))

        cutoff = resolve_cutoff(product.initial_stock_date, now=NOW)
        assert cutoff.start == datetime(2024, 1, 10, tzinfo=timezone(timedelta(hours=2)))

        valid, ignored = partition_sales([late_evening, midnight], cutoff.start)
        assert valid == [midnight]
        assert ignored == [late_evening]

        result = calculate_stock_final(product, [late_evening, midnight], now=NOW)
        assert result.final_stock == 7
        assert result.has_inconsistent_stock is True
