from datetime import date, datetime

import pytest

from mindlog.models.enums import Emotion
from mindlog.services.checkin_engine import current_streak, next_streak
from mindlog.utils.clock import FixedClock
from mindlog.utils.errors import InvalidInput, NotFound


@pytest.fixture
def user(stores):
    return stores.profiles.create("u1", display_name="Tester")


def test_first_check_in_starts_streak(engine, stores, user):
    profile = engine.record_check_in("u1", "happy", 3, 3, 7)

    assert profile.streak == 1
    assert profile.last_check_in == date(2024, 1, 1)
    assert stores.checkins.get("u1", date(2024, 1, 1)).emotion == Emotion.happy


def test_consecutive_day_extends_streak(engine, clock, user):
    engine.record_check_in("u1", "happy", 3, 3, 7)
    clock.set_day(date(2024, 1, 2))

    profile = engine.record_check_in("u1", "calm", 2, 4, 8)

    assert profile.streak == 2
    assert profile.last_check_in == date(2024, 1, 2)


def test_gap_resets_streak(engine, clock, user):
    engine.record_check_in("u1", "happy", 3, 3, 7)
    clock.set_day(date(2024, 1, 2))
    engine.record_check_in("u1", "happy", 3, 3, 7)
    clock.set_day(date(2024, 1, 5))

    profile = engine.record_check_in("u1", "sad", 4, 2, 5)

    assert profile.streak == 1
    assert profile.last_check_in == date(2024, 1, 5)


def test_same_day_repeat_keeps_streak_and_overwrites(engine, stores, clock, user):
    engine.record_check_in("u1", "happy", 3, 3, 7)
    clock.set_day(date(2024, 1, 2))
    first = engine.record_check_in("u1", "happy", 3, 3, 7)

    second = engine.record_check_in("u1", "stressed", 5, 1, 4.5, note="long day")

    assert second.streak == first.streak == 2
    checkins = stores.checkins.list_range("u1", date(2024, 1, 2), date(2024, 1, 2))
    assert len(checkins) == 1
    assert checkins[0].emotion == Emotion.stressed
    assert checkins[0].sleep_hours == 4.5
    assert checkins[0].note == "long day"


def test_last_check_in_in_future_resets(engine, stores, user):
    stores.profiles.update("u1", streak=4, last_check_in=date(2024, 1, 3))

    profile = engine.record_check_in("u1", "calm", 1, 5, 9)

    assert profile.streak == 1
    assert profile.last_check_in == date(2024, 1, 1)


def test_missing_profile_is_not_found(engine, stores):
    with pytest.raises(NotFound):
        engine.record_check_in("ghost", "happy", 3, 3, 7)
    assert stores.checkins.dates("ghost") == []


@pytest.mark.parametrize(
    "emotion, stress, energy, sleep",
    [
        ("angry", 3, 3, 7),
        ("happy", 0, 3, 7),
        ("happy", 3, 6, 7),
        ("happy", 3, 3, -1),
        ("happy", True, 3, 7),
        ("happy", 3, 3, float("nan")),
        ("happy", 3, 3, float("inf")),
        ("happy", 3, 3, float("-inf")),
    ],
)
def test_invalid_input_writes_nothing(engine, stores, user, emotion, stress, energy, sleep):
    with pytest.raises(InvalidInput):
        engine.record_check_in("u1", emotion, stress, energy, sleep)

    assert stores.checkins.dates("u1") == []
    assert stores.profiles.get("u1").streak == 0


def test_profile_read_decays_stale_streak(engine, clock, user):
    engine.record_check_in("u1", "happy", 3, 3, 7)
    clock.set_day(date(2024, 1, 2))
    engine.record_check_in("u1", "happy", 3, 3, 7)

    clock.set_day(date(2024, 1, 3))
    assert engine.get_profile("u1").streak == 2

    clock.set_day(date(2024, 1, 4))
    assert engine.get_profile("u1").streak == 0


def test_today_check_in(engine, clock, user):
    assert engine.today_check_in("u1") is None
    engine.record_check_in("u1", "anxious", 4, 2, 6)

    assert engine.today_check_in("u1").emotion == Emotion.anxious
    clock.set_day(date(2024, 1, 2))
    assert engine.today_check_in("u1") is None


def test_day_boundary_follows_profile_timezone(stores, locks):
    from mindlog.services.checkin_engine import CheckinEngine

    # 2024-01-01 20:00 UTC is already 2024-01-02 in Seoul
    clock = FixedClock(datetime(2024, 1, 1, 20, 0))
    engine = CheckinEngine(stores.profiles, stores.checkins, clock, locks)
    stores.profiles.create("seoul", timezone="Asia/Seoul")
    stores.profiles.create("london", timezone="Europe/London")

    assert engine.record_check_in("seoul", "calm", 2, 3, 7).last_check_in == date(2024, 1, 2)
    assert engine.record_check_in("london", "calm", 2, 3, 7).last_check_in == date(2024, 1, 1)


@pytest.mark.parametrize(
    "previous, last, expected",
    [
        (0, None, 1),
        (3, date(2024, 1, 10), 3),
        (3, date(2024, 1, 9), 4),
        (3, date(2024, 1, 8), 1),
        (3, date(2024, 1, 11), 1),
    ],
)
def test_next_streak(previous, last, expected):
    assert next_streak(previous, last, date(2024, 1, 10)) == expected


def test_current_streak_without_history():
    from mindlog.models.records import UserProfile

    assert current_streak(UserProfile(id="x"), date(2024, 1, 1)) == 0


def test_parallel_check_ins_count_once(engine, stores, user):
    import threading

    threads = [
        threading.Thread(target=engine.record_check_in, args=("u1", "happy", 3, 3, 7))
        for _ in range(8)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert stores.profiles.get("u1").streak == 1
    assert stores.checkins.dates("u1") == [date(2024, 1, 1)]
