"""
Output model for time conversion queries.

Defines the structure of a converted instant shown in each location.
"""

from typing import Optional

from pydantic import BaseModel, Field


class TimezoneInfo(BaseModel):
    """A timezone with its abbreviation and offset at the converted instant."""

    name: str = Field(..., description="IANA timezone name", examples=["Europe/Vienna"])
    abbrev: str = Field(..., description="Timezone abbreviation", examples=["CET"])
    utc_offset: str = Field(..., description="Offset from UTC as +HHMM", examples=["+0100"])


class LocationInfo(BaseModel):
    """The place a timezone was resolved from."""

    name: str
    admin_code: Optional[str] = None
    country: Optional[str] = None


class ConvertedTime(BaseModel):
    """One instant expressed in one location."""

    datetime: str = Field(..., description="ISO 8601 timestamp with offset")
    date: str = Field(..., description="Calendar date (YYYY-MM-DD)")
    time: str = Field(..., description="Wall clock time (HH:MM:SS)")
    weekday: str
    time_of_day: str = Field(..., examples=["late morning", "night"])
    relative: str = Field(..., description="Distance from now", examples=["in 2 hours", "now"])
    label: str = Field(
        ..., description="Display name of the location", examples=["Vienna, VA; United States"]
    )
    timezone: TimezoneInfo
    location: Optional[LocationInfo] = Field(
        None, description="Resolved place; absent when a timezone was given directly"
    )


class ConvertTimeOutput(BaseModel):
    """
    Output model for time conversion queries.

    The first location is the one the expression was interpreted in. On
    failure `locations` is empty and `error`/`error_type` describe the problem.
    """

    is_relative: bool = Field(
        False, description="True when the result depends on the current time"
    )
    locations: list[ConvertedTime] = Field(default_factory=list)
    error: Optional[str] = None
    error_type: Optional[str] = Field(
        None,
        examples=["parse_error", "invalid_date", "unknown_location"],
    )
