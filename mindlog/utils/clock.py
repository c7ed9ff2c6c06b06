# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

from datetime import date, datetime
from typing import Optional

import pytz
from pytz.exceptions import UnknownTimeZoneError

from mindlog.utils.errors import InvalidInput


def resolve_timezone(tz_name: str):
    try:
        return pytz.timezone(tz_name)
    except UnknownTimeZoneError:
        raise InvalidInput(f"Unknown timezone: {tz_name}")


class Clock:
    """Supplies "today" as a calendar date in the user's local zone."""

    def __init__(self, default_tz: str = "UTC"):
        self.default_tz = default_tz

    def now(self) -> datetime:
        return datetime.utcnow()

    def today(self, tz_name: Optional[str] = None) -> date:
        tz = resolve_timezone(tz_name or self.default_tz)
        return pytz.utc.localize(self.now()).astimezone(tz).date()


class FixedClock(Clock):
    """Clock pinned to a given UTC instant; used by tests and backfills."""

    def __init__(self, moment: datetime, default_tz: str = "UTC"):
        super().__init__(default_tz)
        self.moment = moment

    @classmethod
    def on(cls, day: date, default_tz: str = "UTC") -> "FixedClock":
        # Noon UTC keeps the calendar day stable for zones within +/-11h.
        return cls(datetime(day.year, day.month, day.day, 12, 0), default_tz)

    def now(self) -> datetime:
        return self.moment

    def set_day(self, day: date):
        self.moment = datetime(day.year, day.month, day.day, 12, 0)
