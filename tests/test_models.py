"""Unit tests for record coercion and domain value objects."""
import math

from marketing_dashboard.domain.models import (
    PLACEHOLDER_SUBCATEGORIES,
    FilterCriteria,
    MetricTotals,
    Record,
    SortDirection,
    SortField,
    SortSpec,
    to_non_negative_number,
)


def test_to_non_negative_number_coerces_bad_values_to_zero():
    """Test that missing, non-numeric and non-finite inputs become zero."""
    assert to_non_negative_number(None) == 0.0
    assert to_non_negative_number("") == 0.0
    assert to_non_negative_number("abc") == 0.0
    assert to_non_negative_number(float("nan")) == 0.0
    assert to_non_negative_number(math.inf) == 0.0
    assert to_non_negative_number(-5) == 0.0
    assert to_non_negative_number(True) == 0.0
    assert to_non_negative_number([1]) == 0.0


def test_to_non_negative_number_parses_numeric_text():
    """Test numeric strings, including thousands separators."""
    assert to_non_negative_number("12.5") == 12.5
    assert to_non_negative_number(" 1,200 ") == 1200.0
    assert to_non_negative_number(7) == 7.0


def test_record_from_row_defaults_missing_fields():
    """Test that missing dimensions become Unknown and missing metrics zero."""
    record = Record.from_row({"id": "r1"})

    assert record.channel == "Unknown"
    assert record.region == "Unknown"
    assert record.totals == MetricTotals()


def test_record_from_row_blank_dimension_is_unknown():
    """Test that whitespace-only dimensions default to Unknown."""
    record = Record.from_row({"id": 1, "channel": "  ", "region": None})

    assert record.channel == "Unknown"
    assert record.region == "Unknown"


def test_record_from_row_truncates_counts_to_int():
    """Test that count fields are integers."""
    record = Record.from_row({"id": 1, "impressions": "1000.9", "clicks": 3.2, "conversions": "x"})

    assert record.impressions == 1000
    assert record.clicks == 3
    assert record.conversions == 0
    assert isinstance(record.impressions, int)


def test_record_to_dict_keeps_extras_after_core_fields():
    """Test natural key order: core fields first, then extra source columns."""
    record = Record.from_row({"date": "2024-01-01", "id": 9, "channel": "Search", "week": 1})

    keys = list(record.to_dict().keys())

    assert keys[:8] == ["id", "channel", "region", "spend", "impressions", "clicks", "conversions", "revenue"]
    assert keys[8:] == ["date", "week"]


def test_metric_totals_addition_and_unknown_get():
    """Test additive merge and zero for unknown metric names."""
    total = MetricTotals(spend=1.5, impressions=10) + MetricTotals(spend=2.0, clicks=3, revenue=4.0)

    assert total == MetricTotals(spend=3.5, impressions=10, clicks=3, conversions=0, revenue=4.0)
    assert total.get("not_a_metric") == 0.0


def test_filter_criteria_from_mapping_treats_malformed_as_unset():
    """Test that non-string criteria values mean no constraint."""
    criteria = FilterCriteria.from_mapping({"channel": 5, "region": None, "q": "sea"})

    assert criteria == FilterCriteria(channel="", region="", query="sea")
    assert FilterCriteria.from_mapping(None).is_identity


def test_sort_defaults_and_direction_flip():
    """Test the default sort and direction flipping."""
    spec = SortSpec()

    assert spec.field is SortField.SPEND
    assert spec.direction is SortDirection.DESC
    assert SortDirection.DESC.flipped() is SortDirection.ASC
    assert SortField.SPEND.is_numeric
    assert not SortField.CHANNEL.is_numeric


def test_placeholder_subcategories_order():
    """Test the fixed placeholder labels."""
    assert PLACEHOLDER_SUBCATEGORIES == ("Direct", "Seasonality", "Holidays", "Trends")
