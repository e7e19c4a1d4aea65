"""Unit tests for metric aggregation and derived ratios."""
import random

import pytest

from marketing_dashboard.application.metrics import (
    derived_ratio,
    kpi_summary,
    ratio,
    sum_metrics,
    top_channels,
)
from marketing_dashboard.domain.models import MetricTotals, Record


def test_sum_metrics_scenario(scenario_records):
    """Test totals for the two-row Search/West scenario."""
    totals = sum_metrics(scenario_records)

    assert totals == MetricTotals(spend=150.0, impressions=1500, clicks=70, conversions=15, revenue=700.0)


def test_ctr_scenario(scenario_records):
    """Test CTR as conversions over impressions times 100."""
    totals = sum_metrics(scenario_records)

    assert ratio("conversions", "impressions", totals) * 100 == pytest.approx(1.0)
    assert derived_ratio("ctr", totals) == pytest.approx(1.0)


def test_sum_metrics_is_order_independent(mixed_records):
    """Test that any permutation yields identical totals."""
    expected = sum_metrics(mixed_records)
    rng = random.Random(7)
    for _ in range(10):
        shuffled = list(mixed_records)
        rng.shuffle(shuffled)
        assert sum_metrics(shuffled) == expected


def test_sum_metrics_fractional_spend_is_order_independent():
    """Test that fractional spends sum to the same value in either order."""
    rows = [Record(id=idx, channel="Search", region="West", spend=spend) for idx, spend in enumerate([0.1, 0.2, 0.3], start=1)]

    forward = sum_metrics(rows)
    backward = sum_metrics(list(reversed(rows)))

    assert forward == backward
    assert forward.spend == 0.6


def test_sum_metrics_empty():
    """Test that an empty input sums to zero."""
    assert sum_metrics([]) == MetricTotals()


@pytest.mark.parametrize("numerator", ["spend", "impressions", "clicks", "conversions", "revenue"])
def test_ratio_zero_denominator_is_exactly_zero(numerator):
    """Test the zero guard for every numerator field."""
    totals = MetricTotals(spend=10.0, impressions=0, clicks=5, conversions=2, revenue=30.0)

    assert ratio(numerator, "impressions", totals) == 0


def test_ratio_unknown_fields_are_zero():
    """Test that unknown field names never raise."""
    totals = MetricTotals(spend=10.0, clicks=5)

    assert ratio("spend", "nope", totals) == 0
    assert ratio("nope", "clicks", totals) == 0
    assert derived_ratio("nope", totals) == 0


def test_derived_ratios():
    """Test the additional derived ratios."""
    totals = MetricTotals(spend=200.0, impressions=4000, clicks=100, conversions=20, revenue=800.0)

    assert derived_ratio("click_rate", totals) == pytest.approx(2.5)
    assert derived_ratio("cvr", totals) == pytest.approx(20.0)
    assert derived_ratio("cpc", totals) == pytest.approx(2.0)
    assert derived_ratio("cpa", totals) == pytest.approx(10.0)
    assert derived_ratio("roas", totals) == pytest.approx(4.0)


def test_kpi_summary(scenario_records):
    """Test KPI totals with CTR."""
    kpis = kpi_summary(scenario_records)

    assert kpis["spend"] == 150.0
    assert kpis["clicks"] == 70
    assert kpis["ctr"] == pytest.approx(1.0)


def test_top_channels_orders_by_spend_and_limits(mixed_records):
    """Test channel aggregation ordered by spend descending."""
    result = top_channels(mixed_records, limit=2)

    assert [item.channel for item in result] == ["Search", "Display"]
    assert result[0].spend == 160.0
    assert result[0].impressions == 1900


def test_top_channels_ties_keep_first_seen_order():
    """Test that equal spend keeps first-seen channel order."""
    records = [
        Record.from_row({"id": 1, "channel": "B", "region": "X", "spend": 10}),
        Record.from_row({"id": 2, "channel": "A", "region": "X", "spend": 10}),
        Record.from_row({"id": 3, "channel": "C", "region": "X", "spend": 30}),
    ]

    assert [item.channel for item in top_channels(records)] == ["C", "B", "A"]


def test_top_channels_empty():
    """Test that no records give no channels."""
    assert top_channels([]) == []
    assert top_channels([Record.from_row({"id": 1})], limit=0) == []
