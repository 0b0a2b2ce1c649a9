"""
Input model for timezone listings.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ListTimezonesInput(BaseModel):
    """Optional filter for the timezone listing."""

    contains: Optional[str] = Field(
        None,
        description="Case-insensitive substring the timezone name must contain",
        examples=["europe", "new_york"],
    )
