"""Parse, evaluate and resolve an expression into a list of zoned instants."""

import logging
from datetime import datetime, timezone

from util.timeshift import zones
from util.timeshift.errors import EvaluationError, UnknownLocationError
from util.timeshift.evaluator import evaluate
from util.timeshift.gazetteer import Gazetteer, get_gazetteer
from util.timeshift.models import ConversionEntry, ConversionResult, LocationMatch
from util.timeshift.parser import parse
from util.timeshift.resolver import find_location

logger = logging.getLogger(__name__)


def _local_zone_id(local_zone: str | None) -> str:
    if local_zone is None:
        return zones.get_local_zone()
    zone_id = zones.find_zone_id(local_zone)
    if zone_id is None:
        raise UnknownLocationError(local_zone)
    return zone_id


def _same_zone(first: str, second: str) -> bool:
    return first == second or (zones.is_utc(first) and zones.is_utc(second))


def convert(
    text: str,
    local_zone: str | None = None,
    *,
    gazetteer: Gazetteer | None = None,
    now: datetime | None = None,
    include_local: bool = True,
) -> ConversionResult:
    """
    Convert a time expression into one instant shown in every requested zone.

    Args:
        text: Expression such as "5pm in yyz -> sfo" or "in 2 hours in tokyo".
        local_zone: IANA zone used for "local" and as the default anchor.
            Detected from the environment when omitted.
        gazetteer: Place tables; the process-wide gazetteer when omitted.
        now: Reference instant; the current time when omitted. Must be aware.
        include_local: With a single location, also show local time.

    Returns:
        ConversionResult whose first entry is the anchor.

    Raises:
        ParseError: If the text does not match the grammar. Checked before
            anything else, including local_zone.
        EvaluationError: If the time cannot be evaluated or falls outside
            the representable range in one of the zones.
        UnknownLocationError: If a location (or local_zone) is unknown. The
            `unresolved` attribute lists every token that failed.
    """
    parsed = parse(text)

    local_zone_id = _local_zone_id(local_zone)
    if gazetteer is None:
        gazetteer = get_gazetteer()
    if now is None:
        now = datetime.now(timezone.utc)

    matches = []
    failures = []
    for token in parsed.locations:
        try:
            matches.append(find_location(token, gazetteer, local_zone_id))
        except UnknownLocationError as e:
            failures.append(e)
    if failures:
        error = failures[0]
        error.unresolved = [failure.token for failure in failures]
        raise error

    if parsed.anchor is None:
        matches.append(LocationMatch(timezone_id=local_zone_id))
    anchor = matches[0]

    instant = evaluate(parsed.time_spec, anchor.timezone_id, now)

    if (
        include_local
        and parsed.anchor is not None
        and not parsed.targets
        and not _same_zone(anchor.timezone_id, local_zone_id)
    ):
        matches.append(LocationMatch(timezone_id=local_zone_id))

    is_relative = parsed.is_relative
    try:
        entries = tuple(
            ConversionEntry(
                instant=instant.astimezone(zones.get_zone(match.timezone_id)),
                zone=match.at(instant),
                is_relative=is_relative,
            )
            for match in matches
        )
    except OverflowError as e:
        raise EvaluationError(f"time out of range: {e}") from e
    logger.debug("Converted %r into %d entries", text, len(entries))
    return ConversionResult(entries=entries, is_relative=is_relative)
