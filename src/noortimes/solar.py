"""Solar position layer: low-precision sun ephemeris and hour-angle solving.

Accuracy is about a minute at ordinary latitudes. Near the poles, or when the
sun never reaches a requested elevation, the hour-angle argument is clamped to
[-1, 1]: the result is a defined but degenerate time (the event lands twelve
hours from noon, or at noon) rather than an error.
"""

import logging
import math
from datetime import date, datetime, time, timedelta, timezone

from noortimes.models import JuristicSchool, SolarInstants

logger = logging.getLogger(__name__)

SUNRISE_ELEVATION = -0.833  # Refraction plus solar semi-diameter (degrees)
J2000 = 2451545.0
_MINUTES_PER_DAY = 1440


def julian_day(moment: datetime) -> float:
    """Fractional Julian day of a naive UTC datetime (Gregorian calendar)."""
    a = (14 - moment.month) // 12
    y = moment.year + 4800 - a
    m = moment.month + 12 * a - 3
    jdn = (
        moment.day
        + (153 * m + 2) // 5
        + 365 * y
        + y // 4
        - y // 100
        + y // 400
        - 32045
    )
    # The day number refers to noon UTC.
    day_fraction = (
        moment.hour + moment.minute / 60 + moment.second / 3600 - 12
    ) / 24
    return jdn + day_fraction


def sun_coordinates(jd: float) -> tuple[float, float]:
    """Return (declination in degrees, equation of time in minutes) at jd."""
    d = jd - J2000
    g = math.radians((357.529 + 0.98560028 * d) % 360)
    q = (280.459 + 0.98564736 * d) % 360
    ecliptic_lng = math.radians(q + 1.915 * math.sin(g) + 0.020 * math.sin(2 * g))
    obliquity = math.radians(23.439 - 0.00000036 * d)

    declination = math.asin(math.sin(obliquity) * math.sin(ecliptic_lng))
    eqt = 4 * math.degrees(
        math.tan(obliquity / 2) ** 2 * math.sin(2 * math.radians(q))
        - 2 * 0.0167 * math.sin(g)
    )
    return math.degrees(declination), eqt


def _clamp(x: float) -> float:
    return max(-1.0, min(1.0, x))


def hour_angle(latitude: float, declination: float, elevation: float) -> float:
    """Hour angle (degrees) at which the sun stands at `elevation` degrees.

    The acos argument is clamped, so this never fails: an elevation the sun
    never reaches yields 0 or 180 degrees.
    """
    lat = math.radians(latitude)
    decl = math.radians(declination)
    cos_h = (math.sin(math.radians(elevation)) - math.sin(lat) * math.sin(decl)) / (
        math.cos(lat) * math.cos(decl)
    )
    if not -1.0 <= cos_h <= 1.0:
        logger.debug(
            "Sun never reaches %.3f deg at lat=%.4f decl=%.4f; clamping %.4f",
            elevation,
            latitude,
            declination,
            cos_h,
        )
    return math.degrees(math.acos(_clamp(cos_h)))


def asr_elevation(latitude: float, declination: float, shadow_factor: int) -> float:
    """Sun elevation (degrees) when an object's shadow is `shadow_factor`
    times its height plus its noon shadow."""
    noon_shadow = abs(math.tan(math.radians(latitude - declination)))
    return math.degrees(math.atan(1 / (shadow_factor + noon_shadow)))


def _to_local(hours: float, day: date, tz: timezone) -> datetime:
    """Place fractional local hours on `day`, rounded to the minute.

    Values that drift past either midnight wrap back onto the same day.
    """
    minutes = round(hours * 60) % _MINUTES_PER_DAY
    return datetime.combine(day, time(minutes // 60, minutes % 60), tzinfo=tz)


def compute_solar_instants(
    latitude: float,
    longitude: float,
    day: date,
    timezone_offset_minutes: int,
    fajr_angle: float,
    isha_angle: float | None = None,
    school: JuristicSchool = JuristicSchool.STANDARD,
) -> SolarInstants:
    """Compute the six solar event instants for one civil day.

    Args:
        latitude: Observer latitude (decimal degrees).
        longitude: Observer longitude (decimal degrees, east positive).
        day: Civil date. A plain date is evaluated at local noon; a naive
            datetime is evaluated at that local wall-clock time.
        timezone_offset_minutes: Local offset east of UTC in minutes.
        fajr_angle: Dawn elevation in degrees (negative, e.g. -18).
        isha_angle: Dusk elevation in degrees, or None to leave Isha unset.
        school: Selects the Asr shadow multiplier.

    Returns:
        SolarInstants with timezone-aware datetimes on `day`.
    """
    if isinstance(day, datetime):
        local = day.replace(tzinfo=None)
        day = local.date()
    else:
        local = datetime.combine(day, time(12, 0))
    utc = local - timedelta(minutes=timezone_offset_minutes)

    declination, eqt = sun_coordinates(julian_day(utc))
    noon = 12 + timezone_offset_minutes / 60 - longitude / 15 - eqt / 60
    tz = timezone(timedelta(minutes=timezone_offset_minutes))

    def at_elevation(elevation: float, after_noon: bool) -> datetime:
        h = hour_angle(latitude, declination, elevation) / 15
        return _to_local(noon + h if after_noon else noon - h, day, tz)

    asr_angle = asr_elevation(latitude, declination, school.shadow_factor)

    return SolarInstants(
        fajr=at_elevation(fajr_angle, after_noon=False),
        sunrise=at_elevation(SUNRISE_ELEVATION, after_noon=False),
        dhuhr=_to_local(noon, day, tz),
        asr=at_elevation(asr_angle, after_noon=True),
        maghrib=at_elevation(SUNRISE_ELEVATION, after_noon=True),
        isha=at_elevation(isha_angle, after_noon=True) if isha_angle is not None else None,
    )
