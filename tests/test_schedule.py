from dataclasses import replace

import pytest

from conftest import at, minutes
from noortimes.compute import compute_prayer_times
from noortimes.models import ForbiddenLabel, PrayerWindowName
from noortimes.schedule import build_windows


@pytest.mark.parametrize(
    ("name", "start", "end"),
    [
        (PrayerWindowName.FAJR, at(5, 10), at(6, 19)),
        (PrayerWindowName.DHUHR, at(12, 0), at(15, 29)),
        (PrayerWindowName.ASR, at(15, 30), at(17, 45)),
        (PrayerWindowName.MAGHRIB, at(18, 0), at(19, 19)),
        (PrayerWindowName.ISHA, at(19, 20), at(23, 35)),
        (PrayerWindowName.TAHAJJUD, at(1, 26, day=11, second=40), at(5, 9, day=11)),
    ],
)
def test_prayer_windows(instants, name, start, end):
    window = build_windows(instants).window(name)
    assert (window.start, window.end) == (start, end)


def test_midnight_splits_the_night(instants):
    # Night runs 18:00 to 05:10 the next day: 11h10m.
    assert build_windows(instants).midnight == at(23, 35)


def test_forbidden_windows(instants):
    forbidden = build_windows(instants).forbidden_windows
    assert [(f.label, f.start, f.end) for f in forbidden] == [
        (ForbiddenLabel.AFTER_SUNRISE, at(6, 20), at(6, 35)),
        (ForbiddenLabel.ZAWAL, at(11, 54), at(12, 0)),
        (ForbiddenLabel.BEFORE_SUNSET, at(17, 45), at(18, 0)),
    ]


def test_window_order_follows_the_day(instants):
    schedule = build_windows(instants)
    starts = [w.start for w in schedule.prayer_windows]
    assert starts == sorted(starts)
    assert all(w.start <= w.end for w in schedule.prayer_windows)


def test_inverted_window_is_passed_through(instants):
    # Asr pushed past Maghrib; the Asr window ends before it starts.
    late_asr = replace(instants, asr=at(18, 30))
    window = build_windows(late_asr).window(PrayerWindowName.ASR)
    assert window.end < window.start


def test_window_lookup_of_missing_name_raises(instants):
    schedule = build_windows(instants)
    trimmed = replace(schedule, prayer_windows=schedule.prayer_windows[:2])
    with pytest.raises(KeyError):
        trimmed.window(PrayerWindowName.ISHA)


def test_tahajjud_follows_isha_and_ends_before_next_fajr(dhaka_config):
    instants = compute_prayer_times(dhaka_config)
    schedule = build_windows(instants)
    tahajjud = schedule.window(PrayerWindowName.TAHAJJUD)
    assert tahajjud.start > schedule.window(PrayerWindowName.ISHA).start
    assert tahajjud.start > schedule.midnight
    assert tahajjud.end == instants.fajr + minutes(24 * 60 - 1)
