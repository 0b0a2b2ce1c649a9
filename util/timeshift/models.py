"""Pydantic models for parsed expressions, places and conversion results."""

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from util.timeshift import zones


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Time specifications
# ---------------------------------------------------------------------------


class TimeOfDay(_Frozen):
    """
    A wall-clock time as written in the input.

    `hour` is kept as written: 1-12 when a meridiem is present, 0-23 otherwise.
    """

    hour: int = Field(ge=0, le=23)
    minute: int = Field(0, ge=0, le=59)
    second: int = Field(0, ge=0, le=59)
    meridiem: Optional[Literal["am", "pm"]] = None

    @property
    def hour24(self) -> int:
        """Hour on the 24-hour clock."""
        if self.meridiem is None:
            return self.hour
        return self.hour % 12 + (12 if self.meridiem == "pm" else 0)


class Today(_Frozen):
    kind: Literal["today"] = "today"


class Tomorrow(_Frozen):
    kind: Literal["tomorrow"] = "tomorrow"


class Yesterday(_Frozen):
    kind: Literal["yesterday"] = "yesterday"


class InDays(_Frozen):
    kind: Literal["in_days"] = "in_days"
    days: int


class ExplicitDate(_Frozen):
    """A calendar date; the year defaults to the current one when omitted."""

    kind: Literal["explicit"] = "explicit"
    day: int = Field(ge=1, le=31)
    month: int = Field(ge=1, le=12)
    year: Optional[int] = None


DateSpec = Annotated[
    Union[Today, Tomorrow, Yesterday, InDays, ExplicitDate],
    Field(discriminator="kind"),
]


class Now(_Frozen):
    kind: Literal["now"] = "now"


class Absolute(_Frozen):
    """A time of day and/or a date, anchored to the reference date."""

    kind: Literal["absolute"] = "absolute"
    time_of_day: Optional[TimeOfDay] = None
    date: Optional[DateSpec] = None

    @model_validator(mode="after")
    def _require_time_or_date(self):
        if self.time_of_day is None and self.date is None:
            raise ValueError("absolute time spec needs a time of day or a date")
        return self


class RelativeOffset(_Frozen):
    """Offset in seconds from the reference instant (negative for 'ago')."""

    kind: Literal["relative"] = "relative"
    seconds: int


class UnixEpoch(_Frozen):
    kind: Literal["unix"] = "unix"
    seconds: int


TimeSpec = Annotated[
    Union[Now, Absolute, RelativeOffset, UnixEpoch],
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------------
# Parsed expression
# ---------------------------------------------------------------------------


class TokenKind(str, Enum):
    """Classification of a location token."""

    TEXT = "text"
    UTC = "utc"
    LOCAL = "local"


class LocationToken(_Frozen):
    """A raw location substring, resolved later by the resolver."""

    text: str
    kind: TokenKind = TokenKind.TEXT
    offset: Optional[int] = None


class ParsedExpression(_Frozen):
    """Result of parsing one input string."""

    time_spec: TimeSpec
    locations: tuple[LocationToken, ...] = ()

    @property
    def anchor(self) -> Optional[LocationToken]:
        """The source location, if any."""
        return self.locations[0] if self.locations else None

    @property
    def targets(self) -> tuple[LocationToken, ...]:
        return self.locations[1:]

    @property
    def is_relative(self) -> bool:
        """True when the result depends on the current wall-clock time."""
        return isinstance(self.time_spec, (Now, RelativeOffset))


# ---------------------------------------------------------------------------
# Gazetteer records and resolution results
# ---------------------------------------------------------------------------


class Country(_Frozen):
    code: str
    name: str


class Place(_Frozen):
    """A populated place from the gazetteer."""

    name: str
    admin_code: Optional[str] = None
    country_code: str
    timezone_id: str
    population: int = Field(0, ge=0)


class ZoneKind(str, Enum):
    """What a location token turned out to be."""

    TIMEZONE = "timezone"
    CITY = "city"
    AIRPORT = "airport"


class ResolvedZone(_Frozen):
    """A timezone with its abbreviation and offset at a specific instant."""

    timezone_id: str
    abbrev: str
    utc_offset: str
    kind: ZoneKind = ZoneKind.TIMEZONE
    place: Optional[Place] = None
    country: Optional[Country] = None

    @property
    def display_name(self) -> str:
        """Human readable name, e.g. 'Vienna, VA; United States'."""
        if self.place is None:
            return self.timezone_id
        label = self.place.name
        if self.place.admin_code:
            label += f", {self.place.admin_code}"
        if self.country is not None:
            label += f"; {self.country.name}"
        return label


class LocationMatch(_Frozen):
    """A resolved location whose offset has not been computed yet."""

    timezone_id: str
    kind: ZoneKind = ZoneKind.TIMEZONE
    place: Optional[Place] = None
    country: Optional[Country] = None

    def at(self, instant: datetime) -> ResolvedZone:
        """Compute abbreviation and UTC offset for the given instant."""
        abbrev, utc_offset = zones.zone_offset(instant, self.timezone_id)
        return ResolvedZone(
            timezone_id=self.timezone_id,
            abbrev=abbrev,
            utc_offset=utc_offset,
            kind=self.kind,
            place=self.place,
            country=self.country,
        )


class ConversionEntry(_Frozen):
    """One point in time expressed in one resolved zone."""

    instant: datetime
    zone: ResolvedZone
    is_relative: bool = False


class ConversionResult(_Frozen):
    """Ordered conversion entries; the first one is the anchor."""

    entries: tuple[ConversionEntry, ...]
    is_relative: bool = False

    @property
    def anchor(self) -> ConversionEntry:
        return self.entries[0]
