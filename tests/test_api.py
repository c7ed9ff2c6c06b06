from datetime import date

from mindlog.services.coach_ai_service import FALLBACK_REPLIES


def check_in(client, headers, **overrides):
    body = {"emotion": "happy", "stress": 3, "energy": 3, "sleep_hours": 7}
    body.update(overrides)
    return client.post("/checkins", json=body, headers=headers)


def test_health_and_quote(client):
    assert client.get("/health").json() == {"status": "ok"}

    quote = client.get("/quotes/today").json()
    assert quote["date"] == "2024-01-01"
    assert quote["text"] and quote["author"]


def test_requires_token(client):
    assert client.get("/profile").status_code == 422  # header missing
    assert client.get("/profile", headers={"Authorization": "Token abc"}).status_code == 401
    assert client.get("/profile", headers={"Authorization": "Bearer not-a-jwt"}).status_code == 401


def test_session_creates_profile_once(client):
    first = client.post("/auth/session", json={"user_id": "u1", "display_name": "Mina"}).json()
    second = client.post("/auth/session", json={"user_id": "u1", "display_name": "Other"}).json()

    assert first["message"].endswith("New profile created")
    assert second["message"].endswith("Returning user")
    assert second["profile"]["display_name"] == "Mina"
    assert second["profile"]["streak"] == 0


def test_session_rejects_unknown_timezone(client):
    res = client.post("/auth/session", json={"user_id": "u1", "timezone": "Mars/Olympus"})
    assert res.status_code == 422


def test_streak_scenario(client, clock, login):
    headers = login()

    res = check_in(client, headers)
    assert res.status_code == 200, res.text
    assert res.json()["profile"]["streak"] == 1
    assert res.json()["profile"]["last_check_in"] == "2024-01-01"

    clock.set_day(date(2024, 1, 2))
    assert check_in(client, headers, emotion="calm").json()["profile"]["streak"] == 2

    clock.set_day(date(2024, 1, 5))
    assert client.get("/profile", headers=headers).json()["streak"] == 0
    assert check_in(client, headers, emotion="sad").json()["profile"]["streak"] == 1

    history = client.get(
        "/checkins", params={"start_date": "2024-01-01", "end_date": "2024-01-31"}, headers=headers
    ).json()
    assert [c["date"] for c in history] == ["2024-01-01", "2024-01-02", "2024-01-05"]


def test_same_day_check_in_overwrites(client, login):
    headers = login()
    check_in(client, headers)
    res = check_in(client, headers, emotion="stressed", stress=5, note="exam week")

    assert res.json()["profile"]["streak"] == 1
    today = client.get("/checkins/today", headers=headers).json()
    assert today["emotion"] == "stressed"
    assert today["note"] == "exam week"


def test_check_in_validation(client, login):
    headers = login()

    assert check_in(client, headers, emotion="angry").status_code == 422
    assert check_in(client, headers, stress=9).status_code == 422
    assert check_in(client, headers, sleep_hours=-2).status_code == 422
    assert client.get("/checkins/today", headers=headers).json() is None


def test_check_in_rejects_non_finite_sleep(client, login):
    headers = {**login(), "Content-Type": "application/json"}

    for raw in ("NaN", "Infinity", "-Infinity"):
        body = '{"emotion": "happy", "stress": 3, "energy": 3, "sleep_hours": %s}' % raw
        res = client.post("/checkins", content=body, headers=headers)
        assert res.status_code == 422, raw
        assert "finite" in res.json()["detail"]

    assert client.get("/checkins/today", headers=headers).json() is None


def test_unknown_profile_gets_404(client):
    from mindlog.utils.jwt_utils import issue_token

    headers = {"Authorization": f"Bearer {issue_token('ghost')}"}
    assert check_in(client, headers).status_code == 404


def test_missions_flow(client, login):
    headers = login()

    empty = client.get("/missions", headers=headers).json()
    assert empty["missions"] == []
    assert empty["completion_rate"] == 0

    created = client.post("/missions", json={"title": "stretch in the morning", "recurring": True}, headers=headers)
    assert created.status_code == 201
    mission_id = created.json()["id"]

    assert client.post(f"/missions/{mission_id}/toggle", headers=headers).json()["completed"] is True
    listing = client.get("/missions", headers=headers).json()
    assert listing["completion_percent"] == 100

    assert client.post(f"/missions/{mission_id}/toggle", headers=headers).json()["completed"] is False
    listing = client.get("/missions", headers=headers).json()
    assert [m["title"] for m in listing["missions"]] == ["stretch in the morning"]
    assert listing["completion_rate"] == 0

    assert client.delete(f"/missions/{mission_id}", headers=headers).status_code == 200
    assert client.delete(f"/missions/{mission_id}", headers=headers).status_code == 404


def test_missions_are_private(client, login):
    alice = login("alice")
    bob = login("bob")
    mission_id = client.post("/missions", json={"title": "journal"}, headers=alice).json()["id"]

    assert client.get("/missions", headers=bob).json()["missions"] == []
    assert client.post(f"/missions/{mission_id}/toggle", headers=bob).status_code == 404
    assert client.post("/missions", json={"title": "  "}, headers=bob).status_code == 422


def test_diary_flow(client, login):
    headers = login()

    saved = client.put("/diary", json={"content": "Had tea with a friend", "emotion": "happy"}, headers=headers)
    assert saved.status_code == 200, saved.text
    assert saved.json()["date"] == "2024-01-01"

    client.put("/diary", json={"content": "Rainy, stayed in", "emotion": "calm"}, headers=headers)
    client.put("/diary", json={"content": "New year plans", "emotion": "happy", "date": "2023-12-31"}, headers=headers)

    entry = client.get("/diary/2024-01-01", headers=headers).json()
    assert entry["content"] == "Rainy, stayed in"

    listing = client.get(
        "/diary", params={"start_date": "2023-12-01", "end_date": "2024-01-31"}, headers=headers
    ).json()
    assert [e["date"] for e in listing] == ["2023-12-31", "2024-01-01"]

    recent = client.get("/diary/recent", params={"limit": 1}, headers=headers).json()
    assert [e["date"] for e in recent] == ["2024-01-01"]

    summary = client.get("/diary/summary", headers=headers).json()
    assert summary["total_entries"] == 2
    assert summary["happy_entries"] == 1
    assert summary["months_written"] == 2

    assert client.get("/diary/2024-01-02", headers=headers).status_code == 404
    assert client.put("/diary", json={"content": "", "emotion": "happy"}, headers=headers).status_code == 422


def test_attendance(client, clock, login):
    headers = login()
    for day in (1, 2, 3):
        clock.set_day(date(2024, 1, day))
        check_in(client, headers)

    res = client.get("/attendance", params={"year": 2024, "month": 1}, headers=headers).json()
    assert res["total_days"] == 3
    assert res["month_days"] == 3
    assert res["current_streak"] == 3
    assert [d["day"] for d in res["calendar"]["days"] if d["checked"]] == [1, 2, 3]
    assert {a["key"]: a["achieved"] for a in res["achievements"]}["streak_7"] is False

    december = client.get("/attendance", params={"year": 2023, "month": 12}, headers=headers).json()
    assert december["month_days"] == 0
    assert december["total_days"] == 3


def test_coach_falls_back_without_provider(client, login):
    headers = login()
    res = client.post("/coach/reply", json={"title": "Work", "content": "I feel stuck"}, headers=headers)

    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["fallback"] is True
    assert body["response"] in FALLBACK_REPLIES


def test_profile_update(client, login):
    headers = login()
    res = client.patch("/profile", json={"display_name": "Mina", "timezone": "Europe/London"}, headers=headers)

    assert res.status_code == 200
    assert res.json()["display_name"] == "Mina"
    assert res.json()["timezone"] == "Europe/London"
    assert client.patch("/profile", json={"timezone": "Nowhere/City"}, headers=headers).status_code == 422


def test_letters_flow(client, login):
    alice = login("alice")
    bob = login("bob")

    res = client.post(
        "/coach/letters", json={"title": "Work", "content": "I feel stuck", "coach_id": "luna"}, headers=alice
    )
    assert res.status_code == 201, res.text
    body = res.json()
    assert body["fallback"] is True
    assert body["letter"]["ai_response"] in FALLBACK_REPLIES
    letter_id = body["letter"]["id"]

    client.post("/coach/letters", json={"title": "Home", "content": "Quiet day", "is_private": True}, headers=alice)

    mine = client.get("/coach/letters", headers=alice).json()
    assert {l["title"] for l in mine} == {"Work", "Home"}
    assert [l["title"] for l in client.get("/coach/letters/public", headers=bob).json()] == ["Work"]

    assert client.patch(f"/coach/letters/{letter_id}", json={"is_private": True}, headers=bob).status_code == 404
    assert client.patch(f"/coach/letters/{letter_id}", json={"is_private": True}, headers=alice).json()["is_private"] is True
    assert client.get("/coach/letters/public", headers=bob).json() == []

    assert client.delete(f"/coach/letters/{letter_id}", headers=bob).status_code == 404
    assert client.delete(f"/coach/letters/{letter_id}", headers=alice).status_code == 200
    assert [l["title"] for l in client.get("/coach/letters", headers=alice).json()] == ["Home"]
    assert client.post("/coach/letters", json={"title": "x", "content": " "}, headers=alice).status_code == 422


def test_community_flow(client, login):
    alice = login("alice", "Alice")
    bob = login("bob", "Bob")

    created = client.post(
        "/community/posts",
        json={"category": "challenge", "title": "Walk every day", "content": "Join me"},
        headers=alice,
    )
    assert created.status_code == 201, created.text
    post_id = created.json()["id"]
    assert created.json()["author_name"] == "Alice"
    assert "user_id" not in created.json()

    secret = client.post(
        "/community/posts",
        json={"category": "concern", "title": "Can't sleep", "content": "Tips?", "is_anonymous": True},
        headers=bob,
    ).json()
    assert secret["author_name"] == "Anonymous"

    assert client.post(f"/community/posts/{post_id}/like", headers=bob).json()["likes"] == 1
    assert [p["id"] for p in client.get("/community/posts/popular", headers=bob).json()] == [post_id, secret["id"]]
    assert [p["id"] for p in client.get("/community/posts", params={"category": "concern"}, headers=bob).json()] == [secret["id"]]
    assert client.get("/community/posts", params={"category": "gossip"}, headers=bob).status_code == 422

    comment = client.post(f"/community/posts/{post_id}/comments", json={"content": "I'm in"}, headers=bob)
    assert comment.status_code == 201
    assert client.get(f"/community/posts/{post_id}", headers=alice).json()["comment_count"] == 1
    assert [c["author_name"] for c in client.get(f"/community/posts/{post_id}/comments", headers=alice).json()] == ["Bob"]

    comment_id = comment.json()["id"]
    assert client.delete(f"/community/comments/{comment_id}", headers=alice).status_code == 404
    assert client.delete(f"/community/comments/{comment_id}", headers=bob).status_code == 200
    assert client.get(f"/community/posts/{post_id}", headers=alice).json()["comment_count"] == 0

    assert client.delete(f"/community/posts/{post_id}", headers=bob).status_code == 404
    assert client.delete(f"/community/posts/{post_id}", headers=alice).status_code == 200
    assert client.get(f"/community/posts/{post_id}", headers=alice).status_code == 404
    assert client.post(f"/community/posts/{post_id}/like", headers=bob).status_code == 404


def test_rate_limiter_follows_settings():
    from mindlog import config
    from mindlog.utils import rate_limit_utils

    assert config.RATE_LIMIT_ENABLED is False
    assert rate_limit_utils.limiter.enabled is False
    assert [name for name in vars(rate_limit_utils) if name.isupper()] == []
