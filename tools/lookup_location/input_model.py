"""
Input model for location lookups.
"""

from pydantic import BaseModel, Field


class LookupLocationInput(BaseModel):
    """A single location as it would appear after 'in' in an expression."""

    location: str = Field(
        ...,
        min_length=1,
        description="Timezone, airport code or place name with an optional qualifier",
        examples=["vienna, va", "yyz", "Europe/Vienna", "san jose cr"],
    )
