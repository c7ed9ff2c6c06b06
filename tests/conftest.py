import os

# Settings are read at import time; pin them before anything imports mindlog
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["USE_MOCK_STORE"] = "true"
os.environ["APP_TIMEZONE"] = "Asia/Seoul"
os.environ["ENV"] = "production"  # skip .env loading

from datetime import date
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from mindlog.dependencies import build_container
from mindlog.models.database import init_db, make_engine, make_session_factory
from mindlog.services.checkin_engine import CheckinEngine
from mindlog.services.coach_ai_service import CoachAIService
from mindlog.services.community_service import CommunityService
from mindlog.services.letter_service import LetterService
from mindlog.services.mission_service import MissionService
from mindlog.stores.memory import (
    InMemoryCheckinStore,
    InMemoryCommentStore,
    InMemoryDiaryStore,
    InMemoryLetterStore,
    InMemoryMissionStore,
    InMemoryPostStore,
    InMemoryProfileStore,
)
from mindlog.stores.sql import (
    SqlCheckinStore,
    SqlCommentStore,
    SqlDiaryStore,
    SqlLetterStore,
    SqlMissionStore,
    SqlPostStore,
    SqlProfileStore,
)
from mindlog.utils.clock import FixedClock
from mindlog.utils.user_locks import UserLockRegistry


@pytest.fixture
def clock():
    return FixedClock.on(date(2024, 1, 1))


@pytest.fixture(params=["memory", "sql"])
def stores(request):
    if request.param == "memory":
        posts = InMemoryPostStore()
        yield SimpleNamespace(
            profiles=InMemoryProfileStore("UTC"),
            checkins=InMemoryCheckinStore(),
            missions=InMemoryMissionStore(),
            diary=InMemoryDiaryStore(),
            letters=InMemoryLetterStore(),
            posts=posts,
            comments=InMemoryCommentStore(posts),
        )
        return

    engine = make_engine("sqlite://")
    init_db(engine)
    factory = make_session_factory(engine)
    yield SimpleNamespace(
        profiles=SqlProfileStore(factory, "UTC"),
        checkins=SqlCheckinStore(factory),
        missions=SqlMissionStore(factory),
        diary=SqlDiaryStore(factory),
        letters=SqlLetterStore(factory),
        posts=SqlPostStore(factory),
        comments=SqlCommentStore(factory),
    )
    engine.dispose()


@pytest.fixture
def locks():
    return UserLockRegistry()


@pytest.fixture
def engine(stores, clock, locks):
    return CheckinEngine(stores.profiles, stores.checkins, clock, locks)


@pytest.fixture
def mission_service(stores, clock, locks):
    return MissionService(stores.missions, stores.profiles, clock, locks)


@pytest.fixture
def letter_service(stores, clock, offline_coach):
    return LetterService(stores.letters, stores.profiles, offline_coach, clock)


@pytest.fixture
def community(stores, clock):
    return CommunityService(stores.posts, stores.comments, stores.profiles, clock)


@pytest.fixture
def offline_coach():
    return CoachAIService(api_key=None, api_url="http://coach.invalid/v1/chat/completions", seed=7, retry_delay=0)


@pytest.fixture(params=["memory", "sql"])
def container(request, clock, offline_coach):
    if request.param == "memory":
        return build_container(use_mock=True, clock=clock, coach=offline_coach)
    return build_container(use_mock=False, database_url="sqlite://", clock=clock, coach=offline_coach)


@pytest.fixture
def client(container):
    from mindlog.main import app

    app.state.container = container
    with TestClient(app) as test_client:
        yield test_client
    app.state.container = None


@pytest.fixture
def login(client):
    def _login(user_id="u1", display_name="Tester"):
        res = client.post("/auth/session", json={"user_id": user_id, "display_name": display_name})
        assert res.status_code == 200, res.text
        return {"Authorization": f"Bearer {res.json()['token']}"}
    return _login
