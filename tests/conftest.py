"""Shared fixtures for marketing dashboard tests."""

from typing import Any, Dict, List

import pytest

from marketing_dashboard.domain.models import Record


@pytest.fixture
def scenario_rows() -> List[Dict[str, Any]]:
    return [
        {
            "id": 1,
            "channel": "Search",
            "region": "West",
            "spend": 100,
            "impressions": 1000,
            "clicks": 50,
            "conversions": 10,
            "revenue": 500,
        },
        {
            "id": 2,
            "channel": "Search",
            "region": "West",
            "spend": 50,
            "impressions": 500,
            "clicks": 20,
            "conversions": 5,
            "revenue": 200,
        },
    ]


@pytest.fixture
def scenario_records(scenario_rows) -> List[Record]:
    return [Record.from_row(row) for row in scenario_rows]


@pytest.fixture
def mixed_records() -> List[Record]:
    rows = [
        {"id": 1, "channel": "Search", "region": "West", "spend": 100, "impressions": 1000, "clicks": 50, "conversions": 10, "revenue": 500},
        {"id": 2, "channel": "Display", "region": "East", "spend": 80, "impressions": 4000, "clicks": 40, "conversions": 4, "revenue": 160},
        {"id": 3, "channel": "Social", "region": "West", "spend": 100, "impressions": 2500, "clicks": 75, "conversions": 6, "revenue": 300},
        {"id": 4, "channel": "Search", "region": "East", "spend": 60, "impressions": 900, "clicks": 30, "conversions": 9, "revenue": 420},
        {"id": 5, "channel": "Display", "region": "West", "spend": 20, "impressions": 1500, "clicks": 10, "conversions": 1, "revenue": 30},
        {"id": 6, "channel": "Email", "region": "North", "spend": 100, "impressions": 0, "clicks": 0, "conversions": 0, "revenue": 0},
    ]
    return [Record.from_row(row) for row in rows]
