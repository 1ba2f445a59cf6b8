"""Prayer and forbidden windows derived from a day's solar instants."""

from datetime import timedelta

from noortimes.models import (
    ForbiddenLabel,
    ForbiddenWindow,
    PrayerWindow,
    PrayerWindowName,
    Schedule,
    SolarInstants,
)

ONE_DAY = timedelta(days=1)
_ONE_MINUTE = timedelta(minutes=1)

# Policy constants, not derived from solar angles.
AFTER_SUNRISE_DURATION = timedelta(minutes=15)
ZAWAL_DURATION = timedelta(minutes=6)
BEFORE_SUNSET_DURATION = timedelta(minutes=15)


def build_windows(instants: SolarInstants) -> Schedule:
    """Derive prayer windows, forbidden windows and midnight for one day.

    The night runs from Maghrib to the next day's Fajr; Isha lasts until
    its midpoint and Tahajjud covers its last third. Windows are not
    validated: offsets that invert the event order produce inverted windows.

    Args:
        instants: Engine output with isha set.

    Returns:
        Schedule for the day.
    """
    assert instants.isha is not None
    next_fajr = instants.fajr + ONE_DAY
    night = next_fajr - instants.maghrib
    midnight = instants.maghrib + night / 2

    prayer_windows = (
        PrayerWindow(PrayerWindowName.FAJR, instants.fajr, instants.sunrise - _ONE_MINUTE),
        PrayerWindow(PrayerWindowName.DHUHR, instants.dhuhr, instants.asr - _ONE_MINUTE),
        PrayerWindow(
            PrayerWindowName.ASR,
            instants.asr,
            instants.maghrib - BEFORE_SUNSET_DURATION,
        ),
        PrayerWindow(
            PrayerWindowName.MAGHRIB, instants.maghrib, instants.isha - _ONE_MINUTE
        ),
        PrayerWindow(PrayerWindowName.ISHA, instants.isha, midnight),
        PrayerWindow(
            PrayerWindowName.TAHAJJUD,
            instants.maghrib + night * 2 / 3,
            next_fajr - _ONE_MINUTE,
        ),
    )

    forbidden_windows = (
        ForbiddenWindow(
            ForbiddenLabel.AFTER_SUNRISE,
            instants.sunrise,
            instants.sunrise + AFTER_SUNRISE_DURATION,
        ),
        ForbiddenWindow(
            ForbiddenLabel.ZAWAL, instants.dhuhr - ZAWAL_DURATION, instants.dhuhr
        ),
        ForbiddenWindow(
            ForbiddenLabel.BEFORE_SUNSET,
            instants.maghrib - BEFORE_SUNSET_DURATION,
            instants.maghrib,
        ),
    )

    return Schedule(
        prayer_windows=prayer_windows,
        forbidden_windows=forbidden_windows,
        midnight=midnight,
    )
