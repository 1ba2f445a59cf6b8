from datetime import date, datetime, timedelta, timezone

import pytest

from noortimes.models import (
    JuristicSchool,
    Location,
    PrayerConfig,
    SolarInstants,
)

UTC = timezone.utc
DHAKA = Location(23.71, 90.41)
SUMMER = date(2025, 6, 21)


def at(hour: int, minute: int, day: int = 10, second: int = 0) -> datetime:
    """A UTC instant in March 2025, for hand-built instant sets."""
    return datetime(2025, 3, day, hour, minute, second, tzinfo=UTC)


@pytest.fixture
def instants() -> SolarInstants:
    """A plain mid-latitude day: Fajr 05:10 through Isha 19:20 (UTC)."""
    return SolarInstants(
        fajr=at(5, 10),
        sunrise=at(6, 20),
        dhuhr=at(12, 0),
        asr=at(15, 30),
        maghrib=at(18, 0),
        isha=at(19, 20),
    )


@pytest.fixture
def dhaka_config() -> PrayerConfig:
    return PrayerConfig(
        location=DHAKA,
        day=SUMMER,
        timezone_offset_minutes=360,
        convention="Karachi",
        school=JuristicSchool.HANAFI,
    )


def minutes(n: int) -> timedelta:
    return timedelta(minutes=n)
