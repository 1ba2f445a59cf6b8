"""Settings read from the environment (populated from .env by entry points)."""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from noortimes.models import JuristicSchool, PrayerOffsets, SolarEvent

# Dhaka, Karachi convention, Hanafi school.
DEFAULT_LATITUDE = 23.71
DEFAULT_LONGITUDE = 90.41
DEFAULT_METHOD = "Karachi"
DEFAULT_OFFSETS = PrayerOffsets(dhuhr=1, maghrib=1, isha=1)

_SCHOOL_ALIASES: dict[str, JuristicSchool] = {
    "hanafi": JuristicSchool.HANAFI,
    "1": JuristicSchool.HANAFI,
    "standard": JuristicSchool.STANDARD,
    "shafi": JuristicSchool.STANDARD,
    "0": JuristicSchool.STANDARD,
}


class ConfigError(ValueError):
    """An environment value could not be parsed."""


@dataclass(frozen=True)
class Settings:
    latitude: float = DEFAULT_LATITUDE
    longitude: float = DEFAULT_LONGITUDE
    method: str = DEFAULT_METHOD
    school: JuristicSchool = JuristicSchool.HANAFI
    offsets: PrayerOffsets = field(default_factory=lambda: DEFAULT_OFFSETS)
    timezone_offset_minutes: int | None = None  # None: look up from location


def _float(environ: Mapping[str, str], key: str, default: float) -> float:
    raw = environ.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigError(f"{key} must be a number, got {raw!r}") from e


def parse_offsets(raw: str) -> PrayerOffsets:
    """Parse "Dhuhr=1,Maghrib=-2" into PrayerOffsets. Empty means all zero.

    Raises:
        ConfigError: On a malformed pair, non-integer minutes or unknown name.
    """
    mapping: dict[SolarEvent | str, int] = {}
    for pair in filter(None, (p.strip() for p in raw.split(","))):
        name, sep, minutes = pair.partition("=")
        if not sep:
            raise ConfigError(f"Offset {pair!r} is not in NAME=MINUTES form")
        try:
            mapping[name.strip()] = int(minutes)
        except ValueError as e:
            raise ConfigError(f"Offset for {name.strip()!r} must be an integer") from e
    try:
        return PrayerOffsets.from_mapping(mapping)
    except ValueError as e:
        raise ConfigError(str(e)) from e


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Read NOOR_* variables into Settings.

    Unset variables keep their defaults. NOOR_TZ_OFFSET is minutes east of
    UTC; leave it unset to resolve the offset from the location.

    Args:
        environ: Variable source; defaults to os.environ.

    Returns:
        Settings instance.

    Raises:
        ConfigError: On any malformed value.
    """
    env = os.environ if environ is None else environ

    school_raw = env.get("NOOR_SCHOOL", "").strip().lower()
    if school_raw and school_raw not in _SCHOOL_ALIASES:
        raise ConfigError(f"NOOR_SCHOOL must be hanafi or standard, got {school_raw!r}")

    tz_raw = env.get("NOOR_TZ_OFFSET", "").strip()
    try:
        tz_offset = int(tz_raw) if tz_raw else None
    except ValueError as e:
        raise ConfigError(f"NOOR_TZ_OFFSET must be an integer, got {tz_raw!r}") from e

    offsets_raw = env.get("NOOR_OFFSETS")
    return Settings(
        latitude=_float(env, "NOOR_LATITUDE", DEFAULT_LATITUDE),
        longitude=_float(env, "NOOR_LONGITUDE", DEFAULT_LONGITUDE),
        method=env.get("NOOR_METHOD", "").strip() or DEFAULT_METHOD,
        school=_SCHOOL_ALIASES.get(school_raw, JuristicSchool.HANAFI),
        offsets=DEFAULT_OFFSETS if offsets_raw is None else parse_offsets(offsets_raw),
        timezone_offset_minutes=tz_offset,
    )
