"""
Output model for timezone listings.
"""

from pydantic import BaseModel, Field


class TimezoneEntry(BaseModel):
    """A timezone with its current abbreviation and UTC offset."""

    name: str = Field(..., examples=["America/New_York"])
    abbrev: str = Field(..., examples=["EST"])
    utc_offset: str = Field(..., examples=["-0500"])


class ListTimezonesOutput(BaseModel):
    """Timezones sorted by name."""

    timezones: list[TimezoneEntry] = Field(default_factory=list)
