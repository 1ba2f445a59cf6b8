"""Prayer time engine: convention resolution, interval override and offsets."""

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta, timezone

from noortimes.config import Settings
from noortimes.conventions import resolve_convention
from noortimes.models import (
    Location,
    PrayerConfig,
    PrayerState,
    Schedule,
    SolarEvent,
    SolarInstants,
)
from noortimes.schedule import build_windows
from noortimes.solar import compute_solar_instants
from noortimes.state import classify
from noortimes.timezones import utc_offset_minutes

logger = logging.getLogger(__name__)


def _apply_offsets(instants: SolarInstants, config: PrayerConfig) -> SolarInstants:
    if config.offsets.is_zero():
        return instants
    shifted = {}
    for event in SolarEvent:
        at = instants.get(event)
        minutes = config.offsets.get(event)
        if at is not None and minutes:
            shifted[event.name.lower()] = at + timedelta(minutes=minutes)
    return replace(instants, **shifted)


def compute_prayer_times(config: PrayerConfig) -> SolarInstants:
    """Compute the six event instants for config.day.

    Unknown convention names fall back to the Custom convention. For
    conventions with a fixed Isha interval, Isha is Maghrib plus that
    interval and the dusk angle is never computed. Offsets are applied
    last and are not checked against neighbouring events.

    Args:
        config: Location, day, timezone, convention, school and offsets.

    Returns:
        SolarInstants with isha always set.
    """
    convention = resolve_convention(config.convention)
    logger.debug(
        "Computing %s at (%s, %s) with %s/%s",
        config.day,
        config.location.latitude,
        config.location.longitude,
        convention.name,
        config.school.value,
    )
    instants = compute_solar_instants(
        config.location.latitude,
        config.location.longitude,
        config.day,
        config.timezone_offset_minutes,
        fajr_angle=-convention.fajr_angle,
        isha_angle=-convention.isha_angle if convention.isha_angle is not None else None,
        school=config.school,
    )

    if convention.isha_interval is not None:
        instants = replace(
            instants,
            isha=instants.maghrib + timedelta(minutes=convention.isha_interval),
        )

    return _apply_offsets(instants, config)


def compute_schedule(config: PrayerConfig) -> Schedule:
    """Compute the day's instants and derive its windows."""
    return build_windows(compute_prayer_times(config))


def compute_days(
    config: PrayerConfig, days: int
) -> tuple[tuple[date, SolarInstants], ...]:
    """Compute consecutive days starting at config.day.

    Raises:
        ValueError: If days is less than 1.
    """
    if days < 1:
        raise ValueError(f"days must be at least 1, got {days}")
    result: list[tuple[date, SolarInstants]] = []
    for i in range(days):
        day = config.day + timedelta(days=i)
        result.append((day, compute_prayer_times(replace(config, day=day))))
    return tuple(result)


def current_state(config: PrayerConfig, now: datetime) -> PrayerState:
    """Classify `now` against the prayer times of its own civil day.

    config.day is ignored; the day is taken from `now` in the configured
    offset. Naive values of `now` are read as wall-clock time there.
    """
    tz = timezone(timedelta(minutes=config.timezone_offset_minutes))
    local_now = now.replace(tzinfo=tz) if now.tzinfo is None else now.astimezone(tz)
    instants = compute_prayer_times(replace(config, day=local_now.date()))
    return classify(instants, local_now)


def config_from_settings(settings: Settings, day: date) -> PrayerConfig:
    """Build a PrayerConfig for `day`, resolving the UTC offset if unset.

    Raises:
        TimezoneLookupError: When no offset is configured and the location
            has no known timezone.
    """
    offset = settings.timezone_offset_minutes
    if offset is None:
        offset = utc_offset_minutes(settings.latitude, settings.longitude, day)
    return PrayerConfig(
        location=Location(settings.latitude, settings.longitude),
        day=day,
        timezone_offset_minutes=offset,
        convention=settings.method,
        school=settings.school,
        offsets=settings.offsets,
    )


def run(settings: Settings, day: date | None = None) -> Schedule:
    """Top-level entry point: takes Settings and returns the day's Schedule.

    Args:
        settings: Loaded configuration.
        day: Civil date; defaults to today on the local clock.

    Returns:
        Fully computed Schedule.
    """
    config = config_from_settings(settings, day or date.today())
    return compute_schedule(config)
