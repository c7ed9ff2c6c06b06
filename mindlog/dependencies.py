# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

"""
Everything the routers and jobs need, built once at startup and kept on
`app.state.container`.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from mindlog import config
from mindlog.services.checkin_engine import CheckinEngine
from mindlog.services.coach_ai_service import CoachAIService
from mindlog.services.community_service import CommunityService
from mindlog.services.letter_service import LetterService
from mindlog.services.mission_service import MissionService
from mindlog.stores.base import (
    CheckinStore, CommentStore, DiaryStore, LetterStore, MissionStore, PostStore, ProfileStore,
)
from mindlog.utils.clock import Clock
from mindlog.utils.user_locks import UserLockRegistry

logger = logging.getLogger(__name__)


@dataclass
class Container:
    profiles: ProfileStore
    checkins: CheckinStore
    missions: MissionStore
    diary: DiaryStore
    letters: LetterStore
    posts: PostStore
    comments: CommentStore
    clock: Clock
    locks: UserLockRegistry
    engine: CheckinEngine
    mission_service: MissionService
    coach: CoachAIService
    letter_service: LetterService
    community: CommunityService


def build_container(
    use_mock: Optional[bool] = None,
    database_url: Optional[str] = None,
    clock: Optional[Clock] = None,
    coach: Optional[CoachAIService] = None,
) -> Container:
    use_mock = config.USE_MOCK_STORE if use_mock is None else use_mock
    clock = clock or Clock(config.APP_TIMEZONE)

    if use_mock:
        from mindlog.stores.memory import (
            InMemoryCheckinStore, InMemoryCommentStore, InMemoryDiaryStore, InMemoryLetterStore,
            InMemoryMissionStore, InMemoryPostStore, InMemoryProfileStore,
        )
        logger.info("🧪 Using in-memory stores")
        profiles = InMemoryProfileStore(config.APP_TIMEZONE)
        checkins = InMemoryCheckinStore()
        missions = InMemoryMissionStore()
        diary = InMemoryDiaryStore()
        letters = InMemoryLetterStore()
        posts = InMemoryPostStore()
        comments = InMemoryCommentStore(posts)
    else:
        from mindlog.models.database import init_db, make_engine, make_session_factory
        from mindlog.stores.sql import (
            SqlCheckinStore, SqlCommentStore, SqlDiaryStore, SqlLetterStore,
            SqlMissionStore, SqlPostStore, SqlProfileStore,
        )

        engine = make_engine(database_url or config.DATABASE_URL)
        # Create DB tables in one go
        init_db(engine)
        session_factory = make_session_factory(engine)
        logger.info(f"🗄️ Using SQL stores on {engine.url.render_as_string(hide_password=True)}")
        profiles = SqlProfileStore(session_factory, config.APP_TIMEZONE)
        checkins = SqlCheckinStore(session_factory)
        missions = SqlMissionStore(session_factory)
        diary = SqlDiaryStore(session_factory)
        letters = SqlLetterStore(session_factory)
        posts = SqlPostStore(session_factory)
        comments = SqlCommentStore(session_factory)

    locks = UserLockRegistry()
    coach = coach or CoachAIService(
        api_key=config.COACH_API_KEY,
        api_url=config.COACH_API_URL,
        model=config.COACH_MODEL,
        timeout=config.COACH_TIMEOUT,
        max_retries=config.COACH_MAX_RETRIES,
        seed=config.COACH_FALLBACK_SEED,
    )

    return Container(
        profiles=profiles,
        checkins=checkins,
        missions=missions,
        diary=diary,
        letters=letters,
        posts=posts,
        comments=comments,
        clock=clock,
        locks=locks,
        engine=CheckinEngine(profiles, checkins, clock, locks),
        mission_service=MissionService(missions, profiles, clock, locks),
        coach=coach,
        letter_service=LetterService(letters, profiles, coach, clock),
        community=CommunityService(posts, comments, profiles, clock),
    )


# Dependency to get the container
def get_container(request: Request) -> Container:
    return request.app.state.container
