"""Shared fixtures."""

import pytest


def make_response(weeks):
    """GraphQL response body for a list of weeks of (date, count) pairs."""
    return {
        "data": {
            "user": {
                "contributionsCollection": {
                    "contributionCalendar": {
                        "totalContributions": sum(c for week in weeks for _, c in week),
                        "weeks": [
                            {"contributionDays": [{"date": d, "contributionCount": c} for d, c in week]}
                            for week in weeks
                        ],
                    }
                }
            }
        }
    }


@pytest.fixture
def api_payload():
    """Two weeks starting on Sunday 2024-01-07."""
    return make_response([
        [("2024-01-07", 0), ("2024-01-08", 3), ("2024-01-09", 5)],
        [("2024-01-14", 1), ("2024-01-15", 0), ("2024-01-20", 9)],
    ])
