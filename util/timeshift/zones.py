"""Timezone service backed by zoneinfo and the tzdata package."""

import logging
import os
from datetime import datetime
from functools import lru_cache
from zoneinfo import ZoneInfo, available_timezones

logger = logging.getLogger(__name__)

UTC_ALIASES = frozenset(
    {
        "Universal",
        "UTC",
        "UCT",
        "Zulu",
        "Etc/Universal",
        "Etc/UCT",
        "Etc/UTC",
        "Etc/Zulu",
    }
)

LOCALTIME_PATH = "/etc/localtime"


@lru_cache(maxsize=1)
def available_zones() -> tuple[str, ...]:
    """Return every known IANA zone identifier, sorted."""
    return tuple(sorted(available_timezones()))


@lru_cache(maxsize=1)
def _zones_by_folded_name() -> dict[str, str]:
    return {zone_id.casefold(): zone_id for zone_id in available_zones()}


def find_zone_id(name: str) -> str | None:
    """
    Look up an IANA zone identifier.

    An exact (case-sensitive) match wins; otherwise the name is matched
    case-insensitively with spaces standing in for underscores.

    Args:
        name: Candidate zone name, e.g. "Europe/Vienna" or "america/new york".

    Returns:
        The canonical zone identifier, or None if the name is not a zone.
    """
    name = name.strip()
    if not name:
        return None
    if name in available_zones():
        return name
    return _zones_by_folded_name().get(name.replace(" ", "_").casefold())


@lru_cache(maxsize=None)
def get_zone(zone_id: str) -> ZoneInfo:
    """Return the ZoneInfo for a zone identifier."""
    return ZoneInfo(zone_id)


def is_utc(zone_id: str) -> bool:
    """True if the zone is one of the UTC aliases (not merely at offset zero)."""
    return zone_id in UTC_ALIASES


def format_offset(instant: datetime) -> str:
    """Format the UTC offset of an aware datetime as +HHMM."""
    return instant.strftime("%z")


def zone_offset(instant: datetime, zone_id: str) -> tuple[str, str]:
    """
    Return the abbreviation and UTC offset of a zone at an instant.

    Args:
        instant: A timezone-aware datetime.
        zone_id: IANA zone identifier.

    Returns:
        Tuple of (abbreviation, offset formatted as +HHMM).
    """
    local = instant.astimezone(get_zone(zone_id))
    return local.tzname() or "", format_offset(local)


def list_zones(at: datetime) -> list[tuple[str, str, str]]:
    """Return (zone id, abbreviation, offset) for every known zone at an instant."""
    return [(zone_id, *zone_offset(at, zone_id)) for zone_id in available_zones()]


def _zone_from_localtime() -> str | None:
    try:
        target = os.path.realpath(LOCALTIME_PATH)
    except OSError as e:
        logger.debug("Could not read %s: %s", LOCALTIME_PATH, e)
        return None
    if "zoneinfo/" not in target:
        return None
    return find_zone_id(target.split("zoneinfo/", 1)[1])


def get_local_zone() -> str:
    """
    Determine the machine-local zone identifier.

    Checks LOCAL_TIMEZONE, then TZ, then the /etc/localtime symlink, and
    falls back to UTC.
    """
    for variable in ("LOCAL_TIMEZONE", "TZ"):
        configured = os.getenv(variable)
        if not configured:
            continue
        zone_id = find_zone_id(configured.lstrip(":"))
        if zone_id:
            return zone_id
        logger.warning("Ignoring unknown timezone %s=%r", variable, configured)

    zone_id = _zone_from_localtime()
    if zone_id:
        return zone_id

    logger.debug("Could not determine local timezone, using UTC")
    return "UTC"


__all__ = [
    "available_zones",
    "find_zone_id",
    "format_offset",
    "get_local_zone",
    "get_zone",
    "is_utc",
    "list_zones",
    "zone_offset",
]
