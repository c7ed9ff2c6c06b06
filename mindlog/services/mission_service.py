# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from typing import List, Optional, Sequence

from mindlog.models.records import Mission
from mindlog.stores.base import MissionStore, ProfileStore
from mindlog.utils.clock import Clock
from mindlog.utils.errors import NotFound
from mindlog.utils.user_locks import UserLockRegistry

logger = logging.getLogger(__name__)


def completion_rate(missions: Sequence[Mission]) -> float:
    """Share of completed missions; 0.0 for an empty list."""
    if not missions:
        return 0.0
    return sum(1 for m in missions if m.completed) / len(missions)


def completion_percent(missions: Sequence[Mission]) -> int:
    return round(completion_rate(missions) * 100)


class MissionService:
    """
    Today's mission list for a user.

    Recurring missions roll over to incomplete once per calendar day in the
    user's timezone. The rollover runs lazily before reads and toggles, and
    from the hourly scheduler job; all of it happens under the user's lock so
    a reset never interleaves with the user's own toggle.
    """

    def __init__(self, missions: MissionStore, profiles: ProfileStore, clock: Clock, locks: UserLockRegistry):
        self.missions = missions
        self.profiles = profiles
        self.clock = clock
        self.locks = locks

    def _today(self, user_id: str):
        return self.clock.today(self.profiles.get(user_id).timezone)

    def _owned(self, user_id: str, mission_id: int) -> Mission:
        mission = self.missions.get(mission_id)
        if mission.user_id != user_id:
            # don't leak other users' ids
            raise NotFound(f"Mission {mission_id} not found")
        return mission

    def rollover(self, user_id: str) -> int:
        today = self._today(user_id)
        with self.locks.hold(user_id):
            count = self.missions.reset_recurring(user_id, today)
        if count:
            logger.info(f"🔄 Reset {count} recurring mission(s) for user {user_id} on {today.isoformat()}")
        return count

    def add(self, user_id: str, title: str, recurring: bool = False, description: Optional[str] = None) -> Mission:
        today = self._today(user_id)
        with self.locks.hold(user_id):
            return self.missions.add(user_id, title, recurring, description, now=self.clock.now(), today=today)

    def list(self, user_id: str) -> List[Mission]:
        self.rollover(user_id)
        return self.missions.list(user_id)

    def toggle(self, user_id: str, mission_id: int) -> Mission:
        self.rollover(user_id)
        with self.locks.hold(user_id):
            self._owned(user_id, mission_id)
            return self.missions.toggle(mission_id, now=self.clock.now())

    def remove(self, user_id: str, mission_id: int) -> None:
        with self.locks.hold(user_id):
            self._owned(user_id, mission_id)
            self.missions.remove(mission_id)
