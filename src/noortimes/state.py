"""Classify an instant against a day's prayer and forbidden windows."""

from datetime import datetime, timedelta

from noortimes.models import (
    InForbiddenWindow,
    InPrayerWindow,
    Neutral,
    PrayerState,
    PrayerWindowName,
    SolarEvent,
    SolarInstants,
)
from noortimes.schedule import ONE_DAY, build_windows

# Window opened by each event that can precede a later one in the day.
# Sunrise opens no prayer window.
_WINDOW_AFTER: dict[SolarEvent, PrayerWindowName] = {
    SolarEvent.FAJR: PrayerWindowName.FAJR,
    SolarEvent.DHUHR: PrayerWindowName.DHUHR,
    SolarEvent.ASR: PrayerWindowName.ASR,
    SolarEvent.MAGHRIB: PrayerWindowName.MAGHRIB,
}


def _localize(now: datetime, instants: SolarInstants) -> datetime:
    """Read a naive `now` as wall-clock time in the instants' timezone."""
    if now.tzinfo is None:
        return now.replace(tzinfo=instants.fajr.tzinfo)
    return now


def _non_negative(delta: timedelta) -> timedelta:
    return max(delta, timedelta(0))


def classify(instants: SolarInstants, now: datetime) -> PrayerState:
    """Determine which window `now` falls in.

    `instants` must belong to the civil day containing `now`. Forbidden
    windows take precedence over prayer windows. Before the day's Fajr,
    `now` is in the previous night's Isha; after the day's Isha it is in
    tonight's Isha, which in both cases lasts until the next Fajr.

    Args:
        instants: Engine output for the day of `now`.
        now: Reference instant; naive values are read in the instants' zone.

    Returns:
        Exactly one of InPrayerWindow, InForbiddenWindow or Neutral.
    """
    now = _localize(now, instants)
    schedule = build_windows(instants)

    for forbidden in schedule.forbidden_windows:
        if forbidden.start <= now < forbidden.end:
            return InForbiddenWindow(forbidden.label, _non_negative(forbidden.end - now))

    events = instants.events()
    upcoming = next((i for i, (_, at) in enumerate(events) if at > now), None)

    assert instants.isha is not None
    if upcoming is None:
        return InPrayerWindow(
            PrayerWindowName.ISHA,
            instants.isha,
            _non_negative(instants.fajr + ONE_DAY - now),
        )
    if upcoming == 0:
        return InPrayerWindow(
            PrayerWindowName.ISHA,
            instants.isha - ONE_DAY,
            _non_negative(instants.fajr - now),
        )

    previous, _ = events[upcoming - 1]
    name = _WINDOW_AFTER.get(previous)
    if name is None:
        return Neutral()
    window = schedule.window(name)
    if now > window.end:
        return Neutral()
    return InPrayerWindow(name, window.start, _non_negative(window.end - now))


def next_event(instants: SolarInstants, now: datetime) -> tuple[SolarEvent, datetime]:
    """The first event strictly after `now`, rolling over to tomorrow's Fajr.

    Tomorrow's Fajr is approximated as today's plus 24 hours.
    """
    now = _localize(now, instants)
    for event, at in instants.events():
        if at > now:
            return event, at
    return SolarEvent.FAJR, instants.fajr + ONE_DAY
