"""
Output model for location lookups.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field


class LocationCandidate(BaseModel):
    """A place or timezone a location string can refer to."""

    name: str = Field(..., examples=["Vienna"])
    admin_code: Optional[str] = Field(None, examples=["VA"])
    country: Optional[str] = Field(None, examples=["United States"])
    timezone: str = Field(..., examples=["America/New_York"])
    kind: Literal["timezone", "city", "airport"] = "city"
    population: Optional[int] = None


class LookupLocationOutput(BaseModel):
    """
    Output model for location lookups.

    `match` is what a conversion would use; `candidates` lists every place
    with the same name, most populous first.
    """

    query: str
    match: Optional[LocationCandidate] = None
    candidates: list[LocationCandidate] = Field(default_factory=list)
    suggestions: list[str] = Field(
        default_factory=list, description="Similar place names when nothing matched"
    )
    error: Optional[str] = None
