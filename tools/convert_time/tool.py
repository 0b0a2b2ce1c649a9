"""Time conversion tool.

Parses an expression like "5pm in vienna -> tokyo", evaluates it once and
shows the resulting instant in every requested location.
"""

import logging
from datetime import datetime, timezone
from typing import Dict

from langfuse import get_client, observe

from util.timeshift import PipelineError, convert
from util.timeshift.humanize import relative_to_human, time_of_day
from util.timeshift.models import ConversionEntry

from .input_model import ConvertTimeInput
from .output_model import ConvertedTime, ConvertTimeOutput, LocationInfo, TimezoneInfo

logger = logging.getLogger(__name__)

try:
    LANGFUSE = get_client()
except Exception as e:
    logger.warning("Failed to initialize Langfuse client: %s", e)
    LANGFUSE = None


def _to_output(entry: ConversionEntry, now: datetime) -> ConvertedTime:
    zone = entry.zone
    location = None
    if zone.place is not None:
        location = LocationInfo(
            name=zone.place.name,
            admin_code=zone.place.admin_code,
            country=zone.country.name if zone.country else zone.place.country_code,
        )
    return ConvertedTime(
        datetime=entry.instant.isoformat(),
        date=entry.instant.strftime("%Y-%m-%d"),
        time=entry.instant.strftime("%H:%M:%S"),
        weekday=entry.instant.strftime("%A"),
        time_of_day=time_of_day(entry.instant),
        relative=relative_to_human(entry.instant, now),
        label=zone.display_name,
        timezone=TimezoneInfo(
            name=zone.timezone_id,
            abbrev=zone.abbrev,
            utc_offset=zone.utc_offset,
        ),
        location=location,
    )


@observe(name="convert_time")
def convert_time(query: ConvertTimeInput) -> Dict:
    """Convert a time expression between timezones.

    Args:
        query: The expression and, optionally, the caller's timezone.

    Returns:
        A dict representation of ConvertTimeOutput. Expressions that fail to
        parse, evaluate or resolve are reported through `error` and
        `error_type` instead of raising.
    """
    now = datetime.now(timezone.utc)
    try:
        result = convert(query.expression, query.local_timezone, now=now)
    except PipelineError as e:
        logger.info("Could not convert %r: %s", query.expression, e)
        if LANGFUSE:
            LANGFUSE.update_current_trace(
                tags=["error", e.error_type],
                metadata={
                    "error_type": e.error_type,
                    "message": str(e),
                    "expression": query.expression,
                    "success": False,
                },
            )
        return ConvertTimeOutput(error=str(e), error_type=e.error_type).model_dump()

    output = ConvertTimeOutput(
        is_relative=result.is_relative,
        locations=[_to_output(entry, now) for entry in result.entries],
    )
    return output.model_dump()
