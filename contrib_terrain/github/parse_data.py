"""
Parsing of GitHub GraphQL contribution calendar responses.
"""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional, Union

from ..core.height_field import ActivityRecord


class ContributionDay(BaseModel):
    """One day of the contribution calendar."""

    model_config = ConfigDict(populate_by_name=True)

    contribution_count: int = Field(alias="contributionCount", ge=0, description="Contributions on this day")
    date: dt.date = Field(description="Calendar date")


class ContributionWeek(BaseModel):
    """One calendar column, Sunday first."""

    model_config = ConfigDict(populate_by_name=True)

    contribution_days: List[ContributionDay] = Field(alias="contributionDays")


class ContributionCalendar(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_contributions: int = Field(alias="totalContributions", ge=0)
    weeks: List[ContributionWeek]


class ContributionsCollection(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    contribution_calendar: ContributionCalendar = Field(alias="contributionCalendar")


class GithubUser(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    contributions_collection: ContributionsCollection = Field(alias="contributionsCollection")


class ResponseData(BaseModel):
    user: Optional[GithubUser] = None


class ApiResponse(BaseModel):
    """Top level GraphQL response envelope."""

    data: ResponseData

    @property
    def calendar(self) -> ContributionCalendar:
        if self.data.user is None:
            raise ValueError("Response does not contain a user")
        return self.data.user.contributions_collection.contribution_calendar


def sunday_weekday(day: dt.date) -> int:
    """Weekday with Sunday = 0 .. Saturday = 6."""
    return (day.weekday() + 1) % 7


def parse_contribution_data(api_response: Union[ApiResponse, Dict[str, Any]]) -> List[ActivityRecord]:
    """
    Flatten a contribution calendar into activity records.

    Week columns are numbered in response order; the weekday comes from the
    day's date.

    Args:
        api_response: Validated response or raw decoded JSON

    Returns:
        Activity records in calendar order
    """
    if not isinstance(api_response, ApiResponse):
        api_response = ApiResponse.model_validate(api_response)

    records: List[ActivityRecord] = []
    for week_index, week in enumerate(api_response.calendar.weeks):
        for day in week.contribution_days:
            records.append(ActivityRecord(
                date=day.date.isoformat(),
                count=day.contribution_count,
                weekday=sunday_weekday(day.date),
                week_index=week_index,
            ))
    return records
