"""Location lookup tool."""

import logging
from typing import Dict

from langfuse import get_client, observe

from util.timeshift import UnknownLocationError, find_location, get_gazetteer, rank_candidates
from util.timeshift.gazetteer import Gazetteer
from util.timeshift.models import LocationMatch, Place

from .input_model import LookupLocationInput
from .output_model import LocationCandidate, LookupLocationOutput

logger = logging.getLogger(__name__)

try:
    LANGFUSE = get_client()
except Exception as e:
    logger.warning("Failed to initialize Langfuse client: %s", e)
    LANGFUSE = None


def _place_candidate(place: Place, gazetteer: Gazetteer) -> LocationCandidate:
    country = gazetteer.lookup_country(place.country_code)
    return LocationCandidate(
        name=place.name,
        admin_code=place.admin_code,
        country=country.name if country else place.country_code,
        timezone=place.timezone_id,
        population=place.population,
    )


def _match_candidate(match: LocationMatch, gazetteer: Gazetteer) -> LocationCandidate:
    if match.place is None:
        return LocationCandidate(
            name=match.timezone_id,
            timezone=match.timezone_id,
            kind="timezone",
        )
    candidate = _place_candidate(match.place, gazetteer)
    return candidate.model_copy(update={"kind": match.kind.value})


@observe(name="lookup_location")
def lookup_location(query: LookupLocationInput) -> Dict:
    """Resolve a location string the same way convert_time does.

    Args:
        query: The location to resolve.

    Returns:
        A dict representation of LookupLocationOutput. Unknown locations are
        reported through `error` together with similar place names.
    """
    gazetteer = get_gazetteer()
    try:
        match = find_location(query.location, gazetteer)
    except UnknownLocationError as e:
        logger.info("Unknown location %r", query.location)
        if LANGFUSE:
            LANGFUSE.update_current_trace(
                tags=["error", e.error_type],
                metadata={
                    "error_type": e.error_type,
                    "message": str(e),
                    "location": query.location,
                    "success": False,
                },
            )
        return LookupLocationOutput(
            query=query.location, suggestions=e.suggestions, error=str(e)
        ).model_dump()

    candidates = []
    if match.place is not None:
        candidates = [
            _place_candidate(place, gazetteer)
            for place in rank_candidates(gazetteer.lookup_by_name(match.place.name))
        ]

    return LookupLocationOutput(
        query=query.location,
        match=_match_candidate(match, gazetteer),
        candidates=candidates,
    ).model_dump()
