"""Offline UTC offset lookup for a coordinate on a given date."""

import logging
from datetime import date, datetime, time

from pytz import timezone
from timezonefinder import TimezoneFinder

logger = logging.getLogger(__name__)

_tf = TimezoneFinder()


class TimezoneLookupError(Exception):
    """No timezone covers the coordinate."""


def timezone_name(latitude: float, longitude: float) -> str:
    """IANA timezone name at the coordinate.

    Raises:
        TimezoneLookupError: When the coordinate falls in no known zone.
    """
    tz_str = _tf.timezone_at(lat=latitude, lng=longitude)
    if tz_str is None:
        raise TimezoneLookupError(
            f"Timezone not found: lat={latitude}, lng={longitude}"
        )
    return tz_str


def utc_offset_minutes(latitude: float, longitude: float, day: date) -> int:
    """Offset east of UTC in minutes at local noon of `day`, DST included.

    Args:
        latitude: Decimal degrees.
        longitude: Decimal degrees.
        day: Civil date the offset applies to.

    Returns:
        Minutes east of UTC (Dhaka = 360, New York in winter = -300).

    Raises:
        TimezoneLookupError: When the coordinate falls in no known zone.
    """
    tz_str = timezone_name(latitude, longitude)
    local_noon = timezone(tz_str).localize(datetime.combine(day, time(12, 0)), is_dst=None)
    offset = local_noon.utcoffset()
    assert offset is not None
    minutes = int(offset.total_seconds() // 60)
    logger.debug("Resolved %s on %s to UTC%+d min", tz_str, day, minutes)
    return minutes
