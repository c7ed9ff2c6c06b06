from datetime import date, timedelta

import pytest

from mindlog.services import attendance_service
from mindlog.utils.errors import InvalidInput


def days(start: date, count: int):
    return [start + timedelta(days=i) for i in range(count)]


def test_month_grid_is_sunday_first():
    # 2024-02-01 is a Thursday; February 2024 has 29 days
    grid = attendance_service.build_month(2024, 2, {date(2024, 2, 14)}, today=date(2024, 2, 20))

    assert len(grid["days"]) == 29
    assert grid["weeks"][0][:4] == [None, None, None, None]
    assert grid["weeks"][0][4]["day"] == 1
    assert all(len(week) == 7 for week in grid["weeks"])
    checked = [c["day"] for c in grid["days"] if c["checked"]]
    assert checked == [14]
    assert [c["day"] for c in grid["days"] if c["is_today"]] == [20]


def test_invalid_month():
    with pytest.raises(InvalidInput):
        attendance_service.build_month(2024, 13, set())


def test_streaks():
    history = days(date(2024, 1, 1), 3) + days(date(2024, 1, 10), 5)

    assert attendance_service.longest_streak(history) == 5
    assert attendance_service.longest_streak([]) == 0
    assert attendance_service.current_streak(history, date(2024, 1, 14)) == 5
    # today not yet checked: count through yesterday
    assert attendance_service.current_streak(history, date(2024, 1, 15)) == 5
    assert attendance_service.current_streak(history, date(2024, 1, 16)) == 0


def test_summary_totals_and_badges():
    history = days(date(2024, 1, 25), 7) + [date(2023, 12, 1)]
    summary = attendance_service.summarize(2024, 1, history, today=date(2024, 1, 31))

    assert summary["total_days"] == 8
    assert summary["month_days"] == 7
    assert summary["days_in_month"] == 31
    assert summary["longest_streak"] == 7
    assert summary["current_streak"] == 7

    badges = {a.key: a.achieved for a in summary["achievements"]}
    assert badges == {"streak_7": True, "total_30": False, "total_100": False, "perfect_month": False}


def test_perfect_month_and_totals():
    history = days(date(2024, 4, 1), 30)
    summary = attendance_service.summarize(2024, 4, history, today=date(2024, 4, 30))
    badges = {a.key: a.achieved for a in summary["achievements"]}

    assert badges["perfect_month"] is True
    assert badges["total_30"] is True
    assert badges["total_100"] is False

    may = attendance_service.summarize(2024, 5, history, today=date(2024, 5, 2))
    assert {a.key: a.achieved for a in may["achievements"]}["perfect_month"] is False
