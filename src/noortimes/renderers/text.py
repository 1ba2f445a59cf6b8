"""Plain-text renderer: 12-hour clock strings for schedules and states."""

from datetime import datetime, timedelta
from typing import Any

from noortimes.models import (
    InForbiddenWindow,
    InPrayerWindow,
    PrayerState,
    Schedule,
)


def format_time_12h(dt: datetime) -> str:
    """Format as "5:10 AM" (no leading zero on the hour)."""
    hour = dt.hour % 12 or 12
    return f"{hour}:{dt.minute:02d} {'AM' if dt.hour < 12 else 'PM'}"


def format_window(start: datetime, end: datetime) -> str:
    return f"{format_time_12h(start)} – {format_time_12h(end)}"


def format_remaining(delta: timedelta) -> str:
    """Format a duration as "4h 40m" or "10m", rounded down to the minute."""
    minutes = int(delta.total_seconds() // 60)
    hours, minutes = divmod(minutes, 60)
    return f"{hours}h {minutes}m" if hours else f"{minutes}m"


def describe_schedule(schedule: Schedule) -> dict[str, Any]:
    """Display strings keyed the way a page template consumes them.

    Returns:
        {"prayers": {window name: range}, "forbidden": ["label: range", ...]}
    """
    return {
        "prayers": {
            w.name.value: format_window(w.start, w.end) for w in schedule.prayer_windows
        },
        "forbidden": [
            f"{f.label.value}: {format_window(f.start, f.end)}"
            for f in schedule.forbidden_windows
        ],
    }


def format_state(state: PrayerState) -> str:
    if isinstance(state, InPrayerWindow):
        return f"{state.name.value}, {format_remaining(state.remaining)} left"
    if isinstance(state, InForbiddenWindow):
        return (
            f"Forbidden ({state.label.value}), "
            f"{format_remaining(state.remaining)} left"
        )
    return "Between prayers"


def render_timetable(schedule: Schedule, state: PrayerState | None = None) -> str:
    """Render a schedule (and optionally the current state) as aligned text."""
    described = describe_schedule(schedule)
    width = max(len(name) for name in described["prayers"])
    lines = [f"{name:<{width}}  {span}" for name, span in described["prayers"].items()]
    lines.append("")
    lines.append("Forbidden times")
    lines.extend(f"  {entry}" for entry in described["forbidden"])
    if state is not None:
        lines.append("")
        lines.append(f"Now: {format_state(state)}")
    return "\n".join(lines)
