"""Resolves location tokens to timezones."""

import logging
from datetime import datetime, timezone
from typing import Iterable, Union

from util.timeshift import zones
from util.timeshift.airports import find_airport
from util.timeshift.errors import UnknownLocationError
from util.timeshift.gazetteer import Gazetteer, normalize_name
from util.timeshift.models import (
    LocationMatch,
    LocationToken,
    Place,
    ResolvedZone,
    TokenKind,
    ZoneKind,
)

logger = logging.getLogger(__name__)

LOCAL_KEYWORD = "local"

Token = Union[LocationToken, str]


def rank_candidates(places: Iterable[Place]) -> list[Place]:
    """Order places by population, largest first; ties keep their order."""
    return sorted(places, key=lambda place: -place.population)


def _qualifier_matches(place: Place, qualifier: str, gazetteer: Gazetteer) -> bool:
    wanted = normalize_name(qualifier)
    if place.admin_code and place.admin_code.casefold() == wanted:
        return True
    if place.country_code.casefold() == wanted:
        return True
    country = gazetteer.lookup_country_by_name(qualifier)
    return country is not None and country.code == place.country_code.upper()


def _place_match(place: Place, gazetteer: Gazetteer, kind: ZoneKind = ZoneKind.CITY) -> LocationMatch:
    return LocationMatch(
        timezone_id=place.timezone_id,
        kind=kind,
        place=place,
        country=gazetteer.lookup_country(place.country_code),
    )


def _find_local(local_zone: str | None) -> LocationMatch:
    if local_zone is None:
        return LocationMatch(timezone_id=zones.get_local_zone())
    zone_id = zones.find_zone_id(local_zone)
    if zone_id is None:
        raise UnknownLocationError(local_zone)
    return LocationMatch(timezone_id=zone_id)


def _find_airport(text: str, gazetteer: Gazetteer) -> LocationMatch | None:
    airport = find_airport(text)
    if airport is None:
        return None
    places = [
        place
        for place in gazetteer.lookup_by_name(airport.city)
        if place.country_code == airport.country_code
    ]
    if places:
        return _place_match(rank_candidates(places)[0], gazetteer, ZoneKind.AIRPORT)

    place = Place(
        name=airport.city,
        country_code=airport.country_code,
        timezone_id=airport.timezone_id,
    )
    return _place_match(place, gazetteer, ZoneKind.AIRPORT)


def _find_place(text: str, gazetteer: Gazetteer) -> LocationMatch | None:
    for delimiter in (",", " "):
        if delimiter not in text:
            continue
        name, qualifier = (part.strip() for part in text.rsplit(delimiter, 1))
        if not name or not qualifier:
            continue
        candidates = [
            place
            for place in gazetteer.lookup_by_name(name)
            if _qualifier_matches(place, qualifier, gazetteer)
        ]
        if candidates:
            return _place_match(rank_candidates(candidates)[0], gazetteer)

    candidates = gazetteer.lookup_by_name(text)
    if candidates:
        return _place_match(rank_candidates(candidates)[0], gazetteer)
    return None


def find_location(token: Token, gazetteer: Gazetteer, local_zone: str | None = None) -> LocationMatch:
    """
    Resolve a location token to a timezone, without computing offsets.

    Tries, in order: the utc/local markers, IANA zone names, airport codes
    and finally the gazetteer.

    Args:
        token: A LocationToken from the parser, or plain text.
        gazetteer: Places and countries to search.
        local_zone: Zone for the "local" marker; detected when omitted.

    Returns:
        The matched LocationMatch.

    Raises:
        UnknownLocationError: If nothing matches the token.
    """
    if isinstance(token, str):
        token = LocationToken(text=token)
    text = token.text.strip()

    if token.kind == TokenKind.UTC:
        return LocationMatch(timezone_id="UTC")
    if token.kind == TokenKind.LOCAL or text.casefold() == LOCAL_KEYWORD:
        return _find_local(local_zone)

    zone_id = zones.find_zone_id(text)
    if zone_id is not None:
        logger.debug("Resolved %r as timezone %s", text, zone_id)
        return LocationMatch(timezone_id=zone_id)

    match = _find_airport(text, gazetteer)
    if match is not None:
        logger.debug("Resolved %r as airport in %s", text, match.timezone_id)
        return match

    match = _find_place(text, gazetteer)
    if match is not None:
        logger.debug("Resolved %r as %s (%s)", text, match.place.name, match.timezone_id)
        return match

    raise UnknownLocationError(text, gazetteer.suggest(text))


def resolve(
    token: Token,
    gazetteer: Gazetteer,
    at: datetime | None = None,
    local_zone: str | None = None,
) -> ResolvedZone:
    """Resolve a location token and compute its abbreviation and offset at an instant."""
    match = find_location(token, gazetteer, local_zone)
    return match.at(at or datetime.now(timezone.utc))


__all__ = [
    "find_location",
    "rank_candidates",
    "resolve",
]
