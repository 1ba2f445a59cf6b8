"""CLI entry point for today's prayer timetable.

Set NOOR_* variables in the environment or a .env file, then run:
    uv run noortimes
"""

import logging
import os
from datetime import datetime, timedelta, timezone

from dotenv import load_dotenv

load_dotenv()

from noortimes.compute import compute_prayer_times, config_from_settings  # noqa: E402
from noortimes.config import load_settings  # noqa: E402
from noortimes.renderers.text import render_timetable  # noqa: E402
from noortimes.schedule import build_windows  # noqa: E402
from noortimes.state import classify  # noqa: E402


def main() -> None:
    logging.basicConfig(level=os.environ.get("NOOR_LOG_LEVEL", "WARNING").upper())
    settings = load_settings()
    today = datetime.now().date()
    config = config_from_settings(settings, today)

    tz = timezone(timedelta(minutes=config.timezone_offset_minutes))
    now = datetime.now(tz)
    if now.date() != config.day:
        config = config_from_settings(settings, now.date())

    instants = compute_prayer_times(config)
    print(f"{config.day:%d %b %Y}  ({settings.latitude}, {settings.longitude})")
    print(render_timetable(build_windows(instants), classify(instants, now)))


if __name__ == "__main__":
    main()
