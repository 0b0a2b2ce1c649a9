"""
Input model for time conversion queries.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ConvertTimeInput(BaseModel):
    """
    Input model for time conversion queries.

    The expression holds a time followed by optional locations, e.g.
    "5pm in vienna -> tokyo".
    """

    expression: str = Field(
        "now",
        description="Time expression with optional locations",
        examples=["now", "5pm in yyz -> sfo", "in 2 hours in tokyo", "dec 25 at 9am in sydney"],
    )
    local_timezone: Optional[str] = Field(
        None,
        description="IANA timezone of the caller; the server's local zone when omitted",
        examples=["Europe/Vienna"],
    )
