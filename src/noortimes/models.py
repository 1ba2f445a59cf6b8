"""Data model definitions: explicit boundaries between config, compute, and render layers."""

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from datetime import date, datetime, timedelta
from enum import Enum


class SolarEvent(str, Enum):
    """The six daily events, in the order they occur on an ordinary day."""

    FAJR = "Fajr"  # Dawn: sun at the convention's dawn depression
    SUNRISE = "Sunrise"
    DHUHR = "Dhuhr"  # Apparent solar noon
    ASR = "Asr"  # Shadow-length afternoon event
    MAGHRIB = "Maghrib"  # Sunset
    ISHA = "Isha"  # Dusk: convention angle or fixed interval after sunset


class JuristicSchool(str, Enum):
    """Rule selecting the shadow multiplier for the Asr event."""

    STANDARD = "standard"
    HANAFI = "hanafi"

    @property
    def shadow_factor(self) -> int:
        return 2 if self is JuristicSchool.HANAFI else 1


class PrayerWindowName(str, Enum):
    FAJR = "Fajr"
    DHUHR = "Dhuhr"
    ASR = "Asr"
    MAGHRIB = "Maghrib"
    ISHA = "Isha"
    TAHAJJUD = "Tahajjud"  # Night vigil: last third of the night


class ForbiddenLabel(str, Enum):
    AFTER_SUNRISE = "After Sunrise"
    ZAWAL = "Zawal"  # Sun at its zenith, just before Dhuhr
    BEFORE_SUNSET = "Before Sunset"


@dataclass(frozen=True)
class Location:
    """Observer position. Not validated; extreme latitudes degrade accuracy."""

    latitude: float  # Decimal degrees, north positive
    longitude: float  # Decimal degrees, east positive


@dataclass(frozen=True)
class CalculationConvention:
    """A named set of twilight parameters.

    Isha is defined either by a depression angle or by a fixed number of
    minutes after sunset, never both.
    """

    name: str
    fajr_angle: float  # Depression below the horizon (degrees, positive)
    isha_angle: float | None = None  # Depression below the horizon (degrees)
    isha_interval: int | None = None  # Minutes after Maghrib

    def __post_init__(self) -> None:
        if (self.isha_angle is None) == (self.isha_interval is None):
            raise ValueError(
                f"Convention {self.name!r} needs exactly one of isha_angle "
                "or isha_interval"
            )


@dataclass(frozen=True)
class PrayerOffsets:
    """Signed minute adjustments applied after the astronomical calculation."""

    fajr: int = 0
    sunrise: int = 0
    dhuhr: int = 0
    asr: int = 0
    maghrib: int = 0
    isha: int = 0

    @classmethod
    def from_mapping(cls, mapping: Mapping[SolarEvent | str, int]) -> "PrayerOffsets":
        """Build offsets from a mapping keyed by SolarEvent or event name.

        Names are matched case-insensitively ("Dhuhr", "dhuhr").

        Raises:
            ValueError: On a key that names no SolarEvent.
        """
        by_name = {event.value.lower(): event for event in SolarEvent}
        values: dict[str, int] = {}
        for key, minutes in mapping.items():
            event = key if isinstance(key, SolarEvent) else by_name.get(str(key).lower())
            if event is None:
                raise ValueError(f"Unknown prayer name in offsets: {key!r}")
            values[event.name.lower()] = int(minutes)
        return cls(**values)

    def get(self, event: SolarEvent) -> int:
        return getattr(self, event.name.lower())

    def is_zero(self) -> bool:
        return all(getattr(self, f.name) == 0 for f in fields(self))


@dataclass(frozen=True)
class SolarInstants:
    """The six event instants for one civil day, in the caller's timezone.

    isha is None only in raw calculator output when no dusk angle was given;
    the prayer time engine always fills it.
    """

    fajr: datetime
    sunrise: datetime
    dhuhr: datetime
    asr: datetime
    maghrib: datetime
    isha: datetime | None

    def get(self, event: SolarEvent) -> datetime | None:
        return getattr(self, event.name.lower())

    def events(self) -> tuple[tuple[SolarEvent, datetime], ...]:
        """(event, instant) pairs in canonical order. Requires isha to be set."""
        assert self.isha is not None, "isha missing from engine output"
        return tuple((event, getattr(self, event.name.lower())) for event in SolarEvent)


@dataclass(frozen=True)
class PrayerWindow:
    name: PrayerWindowName
    start: datetime
    end: datetime


@dataclass(frozen=True)
class ForbiddenWindow:
    label: ForbiddenLabel
    start: datetime
    end: datetime


@dataclass(frozen=True)
class Schedule:
    """Derived windows for one day. The sole input to renderers."""

    prayer_windows: tuple[PrayerWindow, ...]
    forbidden_windows: tuple[ForbiddenWindow, ...]
    midnight: datetime  # Half-way between Maghrib and the next Fajr

    def window(self, name: PrayerWindowName) -> PrayerWindow:
        for window in self.prayer_windows:
            if window.name is name:
                return window
        raise KeyError(name)


@dataclass(frozen=True)
class PrayerConfig:
    """Everything the engine needs for one day at one place."""

    location: Location
    day: date
    timezone_offset_minutes: int  # Minutes east of UTC (Dhaka = +360)
    convention: str = "MWL"
    school: JuristicSchool = JuristicSchool.HANAFI
    offsets: PrayerOffsets = field(default_factory=PrayerOffsets)


@dataclass(frozen=True)
class InPrayerWindow:
    name: PrayerWindowName
    window_start: datetime
    remaining: timedelta  # Until the window ends; never negative


@dataclass(frozen=True)
class InForbiddenWindow:
    label: ForbiddenLabel
    remaining: timedelta


@dataclass(frozen=True)
class Neutral:
    """Outside every prayer and forbidden window (e.g. the forenoon lull)."""


PrayerState = InPrayerWindow | InForbiddenWindow | Neutral
