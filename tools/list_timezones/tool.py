"""Timezone listing tool."""

import logging
from datetime import datetime, timezone
from typing import Dict

from langfuse import observe

from util.timeshift.zones import list_zones

from .input_model import ListTimezonesInput
from .output_model import ListTimezonesOutput, TimezoneEntry

logger = logging.getLogger(__name__)


@observe(name="list_timezones")
def list_timezones(query: ListTimezonesInput) -> Dict:
    """List known IANA timezones with their offsets right now.

    Args:
        query: Optional substring filter.

    Returns:
        A dict representation of ListTimezonesOutput.
    """
    now = datetime.now(timezone.utc)
    needle = (query.contains or "").strip().replace(" ", "_").casefold()

    entries = [
        TimezoneEntry(name=name, abbrev=abbrev, utc_offset=offset)
        for name, abbrev, offset in list_zones(now)
        if needle in name.casefold()
    ]
    logger.debug("Listing %d timezones for filter %r", len(entries), query.contains)
    return ListTimezonesOutput(timezones=entries).model_dump()
