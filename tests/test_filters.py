"""Unit tests for the filter engine."""
from marketing_dashboard.application.filters import filter_options, filter_records, filter_summary
from marketing_dashboard.domain.models import FilterCriteria, Record


def test_channel_filter_scenario(scenario_records):
    """Test that an exact channel with empty sentinels keeps both rows."""
    result = filter_records(scenario_records, FilterCriteria(channel="Search", region="", query=""))

    assert result == scenario_records


def test_unmatched_channel_returns_empty(scenario_records):
    """Test that an absent channel yields nothing."""
    assert filter_records(scenario_records, {"channel": "Display"}) == []


def test_identity_filter_returns_copy_in_order(mixed_records):
    """Test pass-through for empty criteria."""
    result = filter_records(mixed_records, FilterCriteria())

    assert result == mixed_records
    assert result is not mixed_records


def test_region_filter_is_exact(mixed_records):
    """Test region equality rather than substring."""
    assert [r.id for r in filter_records(mixed_records, {"region": "West"})] == [1, 3, 5]
    assert filter_records(mixed_records, {"region": "Wes"}) == []


def test_query_matches_channel_or_region_case_insensitive(mixed_records):
    """Test free-text search over channel and region."""
    assert [r.id for r in filter_records(mixed_records, {"q": "  EAST "})] == [2, 4]
    assert [r.id for r in filter_records(mixed_records, {"query": "sea"})] == [1, 4]


def test_combined_constraints(mixed_records):
    """Test that all constraints must hold."""
    criteria = FilterCriteria(channel="Display", region="West", query="dis")

    assert [r.id for r in filter_records(mixed_records, criteria)] == [5]


def test_filter_is_idempotent(mixed_records):
    """Test filter(filter(R, C), C) == filter(R, C)."""
    for criteria in (
        FilterCriteria(),
        FilterCriteria(channel="Search"),
        FilterCriteria(region="West", query="o"),
        FilterCriteria(query="zzz"),
    ):
        once = filter_records(mixed_records, criteria)
        assert filter_records(once, criteria) == once


def test_malformed_criteria_never_raise(mixed_records):
    """Test that malformed criteria are treated as unset."""
    assert filter_records(mixed_records, {"channel": None, "region": 3}) == mixed_records
    assert filter_records(mixed_records, None) == mixed_records
    assert filter_records(mixed_records, "not criteria") == mixed_records


def test_filter_options_are_sorted_distinct(mixed_records):
    """Test dropdown options."""
    options = filter_options(mixed_records)

    assert options["channels"] == ["Display", "Email", "Search", "Social"]
    assert options["regions"] == ["East", "North", "West"]


def test_filter_summary(scenario_records):
    """Test the row count label."""
    assert filter_summary(scenario_records) == "2 rows"


def test_query_tolerates_missing_labels():
    """Test that records built without channel or region match as Unknown."""
    record = Record(id=1, channel=None, region=None)

    assert filter_records([record], FilterCriteria(query="unk")) == [record]
    assert filter_records([record], FilterCriteria(query="search")) == []
    assert filter_records([record], FilterCriteria(channel="Unknown")) == [record]
    assert filter_options([record]) == {"channels": ["Unknown"], "regions": ["Unknown"]}
