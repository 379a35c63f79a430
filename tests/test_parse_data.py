"""Tests for GraphQL response parsing."""

import datetime as dt

import pytest
from pydantic import ValidationError

from contrib_terrain.github.parse_data import ApiResponse, parse_contribution_data, sunday_weekday


class TestSundayWeekday:
    def test_sunday_is_zero(self):
        assert sunday_weekday(dt.date(2024, 1, 7)) == 0

    def test_monday_is_one(self):
        assert sunday_weekday(dt.date(2024, 1, 1)) == 1

    def test_saturday_is_six(self):
        assert sunday_weekday(dt.date(2024, 1, 6)) == 6


class TestParseContributionData:
    """Test flattening of the calendar into activity records."""

    def test_flattens_weeks(self, api_payload):
        records = parse_contribution_data(api_payload)

        assert len(records) == 6
        assert [r.week_index for r in records] == [0, 0, 0, 1, 1, 1]
        assert [r.weekday for r in records] == [0, 1, 2, 0, 1, 6]
        assert records[1].date == "2024-01-08"
        assert records[5].count == 9

    def test_accepts_validated_model(self, api_payload):
        model = ApiResponse.model_validate(api_payload)
        assert parse_contribution_data(model) == parse_contribution_data(api_payload)

    def test_negative_count_rejected(self, api_payload):
        day = api_payload["data"]["user"]["contributionsCollection"]["contributionCalendar"]["weeks"][0]["contributionDays"][0]
        day["contributionCount"] = -1

        with pytest.raises(ValidationError):
            parse_contribution_data(api_payload)

    def test_missing_user(self):
        with pytest.raises(ValueError, match="user"):
            parse_contribution_data({"data": {"user": None}})

    def test_total_contributions(self, api_payload):
        model = ApiResponse.model_validate(api_payload)
        assert model.calendar.total_contributions == 18
