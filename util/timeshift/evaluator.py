"""Turns a parsed time specification into a concrete instant."""

import logging
from datetime import datetime, timedelta, timezone

from util.timeshift.errors import EvaluationError, InvalidDateError
from util.timeshift.models import (
    Absolute,
    ExplicitDate,
    InDays,
    Now,
    RelativeOffset,
    TimeOfDay,
    Today,
    Tomorrow,
    UnixEpoch,
    Yesterday,
)
from util.timeshift.zones import get_zone

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_DAY_SHIFTS = {Today: 0, Tomorrow: 1, Yesterday: -1}


def _apply_date(wall: datetime, date_spec) -> datetime:
    if isinstance(date_spec, ExplicitDate):
        year = wall.year if date_spec.year is None else date_spec.year
        try:
            return wall.replace(year=year, month=date_spec.month, day=date_spec.day)
        except ValueError as e:
            raise InvalidDateError(date_spec.day, date_spec.month, year) from e

    if isinstance(date_spec, InDays):
        days = date_spec.days
    else:
        days = _DAY_SHIFTS[type(date_spec)]
    return wall + timedelta(days=days)


def _apply_time(wall: datetime, time_of_day: TimeOfDay) -> datetime:
    return wall.replace(
        hour=time_of_day.hour24,
        minute=time_of_day.minute,
        second=time_of_day.second,
        microsecond=0,
    )


def _evaluate_absolute(spec: Absolute, zone, reference: datetime) -> datetime:
    # work on naive wall-clock values, attach the zone at the end
    wall = reference.astimezone(zone).replace(tzinfo=None)
    if spec.date is not None:
        wall = _apply_date(wall, spec.date)
    if spec.time_of_day is not None:
        wall = _apply_time(wall, spec.time_of_day)
    # round trip through UTC so that wall times inside a DST gap become real
    return wall.replace(tzinfo=zone).astimezone(timezone.utc).astimezone(zone)


def evaluate(spec, anchor_zone: str, reference_instant: datetime) -> datetime:
    """
    Evaluate a time specification in the anchor zone.

    Args:
        spec: One of Now, Absolute, RelativeOffset or UnixEpoch.
        anchor_zone: IANA zone the expression is interpreted in.
        reference_instant: The current instant; must be timezone-aware.

    Returns:
        A timezone-aware datetime expressed in the anchor zone.

    Raises:
        ValueError: If reference_instant is naive.
        InvalidDateError: If an explicit date does not exist.
        EvaluationError: If the result is outside the supported range.
    """
    if reference_instant.tzinfo is None or reference_instant.utcoffset() is None:
        raise ValueError("reference_instant must be timezone-aware")

    zone = get_zone(anchor_zone)
    try:
        if isinstance(spec, Now):
            result = reference_instant.astimezone(zone)
        elif isinstance(spec, RelativeOffset):
            shifted = reference_instant.astimezone(timezone.utc) + timedelta(seconds=spec.seconds)
            result = shifted.astimezone(zone)
        elif isinstance(spec, UnixEpoch):
            result = (EPOCH + timedelta(seconds=spec.seconds)).astimezone(zone)
        elif isinstance(spec, Absolute):
            result = _evaluate_absolute(spec, zone, reference_instant)
        else:
            raise EvaluationError(f"unsupported time specification: {spec!r}")
    except OverflowError as e:
        raise EvaluationError(f"time out of range: {e}") from e

    logger.debug("Evaluated %r in %s to %s", spec, anchor_zone, result.isoformat())
    return result
