# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from dataclasses import replace
from datetime import date, timedelta
from typing import List, Optional

from mindlog.models.records import CheckIn, UserProfile
from mindlog.stores.base import CheckinStore, ProfileStore
from mindlog.utils.clock import Clock
from mindlog.utils.errors import NotFound
from mindlog.utils.user_locks import UserLockRegistry
from mindlog.utils.validators import validate_emotion, validate_scale, validate_sleep_hours

logger = logging.getLogger(__name__)


def next_streak(previous: int, last_check_in: Optional[date], today: date) -> int:
    """
    Streak after checking in on `today`.
    A repeat on the same day keeps it, yesterday extends it, anything else
    (a gap, or a last check-in in the future from clock skew) starts over at 1.
    """
    if last_check_in is None:
        return 1
    if last_check_in == today:
        return max(previous, 1)
    if last_check_in == today - timedelta(days=1):
        return previous + 1
    return 1


def current_streak(profile: UserProfile, today: date) -> int:
    """Stored streak if it is still alive (last check-in today or yesterday), else 0."""
    last = profile.last_check_in
    if last is None:
        return 0
    if last in (today, today - timedelta(days=1)):
        return profile.streak
    return 0


class CheckinEngine:
    """Records the daily check-in and keeps the profile streak in step with it."""

    def __init__(self, profiles: ProfileStore, checkins: CheckinStore, clock: Clock, locks: UserLockRegistry):
        self.profiles = profiles
        self.checkins = checkins
        self.clock = clock
        self.locks = locks

    def today_for(self, profile: UserProfile) -> date:
        return self.clock.today(profile.timezone)

    def record_check_in(self, user_id: str, emotion, stress: int, energy: int,
                        sleep_hours: float, note: Optional[str] = None) -> UserProfile:
        emotion = validate_emotion(emotion)
        stress = validate_scale("stress", stress)
        energy = validate_scale("energy", energy)
        sleep_hours = validate_sleep_hours(sleep_hours)
        note = (note.strip() or None) if note else None

        with self.locks.hold(user_id):
            profile = self.profiles.get(user_id)
            today = self.today_for(profile)

            self.checkins.upsert(user_id, today, emotion, stress, energy, sleep_hours, note)

            streak = next_streak(profile.streak, profile.last_check_in, today)
            updated = self.profiles.update(user_id, streak=streak, last_check_in=today)

        if streak != profile.streak:
            logger.info(f"🔥 User {user_id} streak {profile.streak} -> {streak} on {today.isoformat()}")
        return updated

    def get_profile(self, user_id: str) -> UserProfile:
        profile = self.profiles.get(user_id)
        return replace(profile, streak=current_streak(profile, self.today_for(profile)))

    def today_check_in(self, user_id: str) -> Optional[CheckIn]:
        profile = self.profiles.get(user_id)
        try:
            return self.checkins.get(user_id, self.today_for(profile))
        except NotFound:
            return None

    def history(self, user_id: str, start: date, end: date) -> List[CheckIn]:
        return self.checkins.list_range(user_id, start, end)
