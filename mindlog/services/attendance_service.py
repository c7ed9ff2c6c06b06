# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

"""
Attendance calendar and badges, derived from check-in dates on every read.
Nothing here is stored.
"""

import calendar
from datetime import date, timedelta
from typing import Iterable, List, Optional, Set

from mindlog.models.records import Achievement
from mindlog.utils.errors import InvalidInput

STREAK_BADGE_DAYS = 7
TOTAL_BADGE_DAYS = 30
CENTURY_BADGE_DAYS = 100


def month_days(year: int, month: int) -> List[date]:
    if not 1 <= month <= 12:
        raise InvalidInput(f"month must be between 1 and 12, got {month}")
    _, last = calendar.monthrange(year, month)
    return [date(year, month, d) for d in range(1, last + 1)]


def longest_streak(dates: Iterable[date]) -> int:
    best = run = 0
    previous = None
    for d in sorted(set(dates)):
        run = run + 1 if previous is not None and d - previous == timedelta(days=1) else 1
        best = max(best, run)
        previous = d
    return best


def current_streak(dates: Iterable[date], today: date) -> int:
    """Consecutive checked days ending today, or ending yesterday if today is still open."""
    checked = set(dates)
    cursor = today if today in checked else today - timedelta(days=1)
    count = 0
    while cursor in checked:
        count += 1
        cursor -= timedelta(days=1)
    return count


def build_month(year: int, month: int, checked: Set[date], today: Optional[date] = None) -> dict:
    days = month_days(year, month)
    cells = [
        {"date": d, "day": d.day, "checked": d in checked, "is_today": d == today}
        for d in days
    ]

    # Sunday-first rows, padded with None on both ends
    lead = (days[0].weekday() + 1) % 7
    padded: List[Optional[dict]] = [None] * lead + cells
    padded += [None] * (-len(padded) % 7)
    weeks = [padded[i:i + 7] for i in range(0, len(padded), 7)]

    return {"year": year, "month": month, "days": cells, "weeks": weeks}


def achievements(total_days: int, best_streak: int, month_checked: int, days_in_month: int) -> List[Achievement]:
    return [
        Achievement(
            key="streak_7",
            title="7-day streak",
            description="Checked in seven days in a row",
            icon="🔥",
            achieved=best_streak >= STREAK_BADGE_DAYS,
        ),
        Achievement(
            key="total_30",
            title="30 days",
            description="Checked in on 30 days in total",
            icon="⭐",
            achieved=total_days >= TOTAL_BADGE_DAYS,
        ),
        Achievement(
            key="total_100",
            title="100 days",
            description="Checked in on 100 days in total",
            icon="🏆",
            achieved=total_days >= CENTURY_BADGE_DAYS,
        ),
        Achievement(
            key="perfect_month",
            title="Perfect month",
            description="Checked in on every day of the month",
            icon="💯",
            achieved=month_checked >= days_in_month,
        ),
    ]


def summarize(year: int, month: int, checked_dates: Iterable[date], today: date) -> dict:
    checked = set(checked_dates)
    grid = build_month(year, month, checked, today)
    in_month = sum(1 for cell in grid["days"] if cell["checked"])
    best = longest_streak(checked)

    return {
        "year": year,
        "month": month,
        "total_days": len(checked),
        "month_days": in_month,
        "days_in_month": len(grid["days"]),
        "current_streak": current_streak(checked, today),
        "longest_streak": best,
        "calendar": grid,
        "achievements": achievements(len(checked), best, in_month, len(grid["days"])),
    }
