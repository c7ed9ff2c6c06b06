# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

"""In-memory stores for tests and the demo mode (USE_MOCK_STORE=true)."""

import itertools
import threading
from dataclasses import replace
from datetime import date, datetime
from typing import Dict, List, Optional, Tuple

from mindlog.models.records import CheckIn, Comment, DiaryEntry, Letter, Mission, Post, UserProfile
from mindlog.stores.base import (
    CheckinStore, CommentStore, DiaryStore, LetterStore, MissionStore, PostStore, ProfileStore,
)
from mindlog.utils.errors import AlreadyExists, NotFound
from mindlog.utils.validators import validate_emotion


class InMemoryProfileStore(ProfileStore):

    def __init__(self, default_timezone: str = "UTC"):
        self.default_timezone = default_timezone
        self._rows: Dict[str, UserProfile] = {}
        self._lock = threading.Lock()

    def get(self, user_id: str) -> UserProfile:
        with self._lock:
            profile = self._rows.get(user_id)
            if profile is None:
                raise NotFound(f"Profile {user_id} not found")
            return replace(profile)

    def list_ids(self) -> List[str]:
        with self._lock:
            return list(self._rows)

    def _create(self, user_id: str, fields: dict) -> UserProfile:
        with self._lock:
            if user_id in self._rows:
                raise AlreadyExists(f"Profile {user_id} already exists")
            fields.setdefault("timezone", self.default_timezone)
            profile = UserProfile(id=user_id, **fields)
            self._rows[user_id] = profile
            return replace(profile)

    def _update(self, user_id: str, fields: dict) -> UserProfile:
        with self._lock:
            profile = self._rows.get(user_id)
            if profile is None:
                raise NotFound(f"Profile {user_id} not found")
            profile = replace(profile, **fields)
            self._rows[user_id] = profile
            return replace(profile)


class InMemoryCheckinStore(CheckinStore):

    def __init__(self):
        self._rows: Dict[Tuple[str, date], CheckIn] = {}
        self._lock = threading.Lock()

    def upsert(self, user_id, day, emotion, stress, energy, sleep_hours, note=None) -> CheckIn:
        record = CheckIn(
            user_id=user_id,
            date=day,
            emotion=validate_emotion(emotion),
            stress=stress,
            energy=energy,
            sleep_hours=sleep_hours,
            note=note,
        )
        with self._lock:
            self._rows[(user_id, day)] = record
        return replace(record)

    def get(self, user_id: str, day: date) -> CheckIn:
        with self._lock:
            record = self._rows.get((user_id, day))
        if record is None:
            raise NotFound(f"No check-in on {day.isoformat()}")
        return replace(record)

    def dates(self, user_id: str) -> List[date]:
        with self._lock:
            return sorted(d for (uid, d) in self._rows if uid == user_id)

    def _list_range(self, user_id, start, end) -> List[CheckIn]:
        with self._lock:
            rows = [replace(r) for (uid, d), r in self._rows.items() if uid == user_id and start <= d <= end]
        return sorted(rows, key=lambda r: r.date)


class InMemoryMissionStore(MissionStore):

    def __init__(self):
        # dicts keep insertion order, which is creation order here
        self._rows: Dict[int, Mission] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def _add(self, user_id, title, recurring, description, now, today) -> Mission:
        with self._lock:
            mission = Mission(
                id=next(self._ids),
                user_id=user_id,
                title=title,
                description=description,
                recurring=recurring,
                created_at=now,
                last_reset_on=today,
            )
            self._rows[mission.id] = mission
            return replace(mission)

    def get(self, mission_id: int) -> Mission:
        with self._lock:
            mission = self._rows.get(mission_id)
            if mission is None:
                raise NotFound(f"Mission {mission_id} not found")
            return replace(mission)

    def toggle(self, mission_id: int, now: Optional[datetime] = None) -> Mission:
        with self._lock:
            mission = self._rows.get(mission_id)
            if mission is None:
                raise NotFound(f"Mission {mission_id} not found")
            mission.completed = not mission.completed
            mission.completed_at = (now or datetime.utcnow()) if mission.completed else None
            return replace(mission)

    def remove(self, mission_id: int) -> None:
        with self._lock:
            if self._rows.pop(mission_id, None) is None:
                raise NotFound(f"Mission {mission_id} not found")

    def list(self, user_id: str) -> List[Mission]:
        with self._lock:
            return [replace(m) for m in self._rows.values() if m.user_id == user_id]

    def reset_recurring(self, user_id: str, today: date) -> int:
        count = 0
        with self._lock:
            for mission in self._rows.values():
                if mission.user_id != user_id or not mission.recurring:
                    continue
                if mission.last_reset_on is not None and mission.last_reset_on >= today:
                    continue
                mission.completed = False
                mission.completed_at = None
                mission.last_reset_on = today
                count += 1
        return count


class InMemoryDiaryStore(DiaryStore):

    def __init__(self):
        self._rows: Dict[Tuple[str, date], DiaryEntry] = {}
        self._lock = threading.Lock()

    def _upsert(self, user_id, day, content, emotion) -> DiaryEntry:
        now = datetime.utcnow()
        with self._lock:
            existing = self._rows.get((user_id, day))
            entry = DiaryEntry(
                user_id=user_id,
                date=day,
                content=content,
                emotion=emotion,
                created_at=existing.created_at if existing else now,
                updated_at=now,
            )
            self._rows[(user_id, day)] = entry
        return replace(entry)

    def get(self, user_id: str, day: date) -> DiaryEntry:
        with self._lock:
            entry = self._rows.get((user_id, day))
        if entry is None:
            raise NotFound(f"No diary entry on {day.isoformat()}")
        return replace(entry)

    def recent(self, user_id: str, limit: int = 30) -> List[DiaryEntry]:
        with self._lock:
            rows = [replace(e) for (uid, _), e in self._rows.items() if uid == user_id]
        rows.sort(key=lambda e: e.date, reverse=True)
        return rows[:limit]

    def _list_range(self, user_id, start, end) -> List[DiaryEntry]:
        with self._lock:
            rows = [replace(e) for (uid, d), e in self._rows.items() if uid == user_id and start <= d <= end]
        return sorted(rows, key=lambda e: e.date)


def _newest_first(rows):
    return sorted(rows, key=lambda r: (r.created_at, r.id), reverse=True)


class InMemoryLetterStore(LetterStore):

    def __init__(self):
        self._rows: Dict[int, Letter] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def _create(self, user_id, title, content, is_private, coach_id, now) -> Letter:
        with self._lock:
            letter = Letter(
                id=next(self._ids),
                user_id=user_id,
                title=title,
                content=content,
                is_private=is_private,
                coach_id=coach_id,
                created_at=now,
                updated_at=now,
            )
            self._rows[letter.id] = letter
            return replace(letter)

    def get(self, letter_id: int) -> Letter:
        with self._lock:
            letter = self._rows.get(letter_id)
            if letter is None:
                raise NotFound(f"Letter {letter_id} not found")
            return replace(letter)

    def _update(self, letter_id, fields, now) -> Letter:
        with self._lock:
            letter = self._rows.get(letter_id)
            if letter is None:
                raise NotFound(f"Letter {letter_id} not found")
            letter = replace(letter, updated_at=now, **fields)
            self._rows[letter_id] = letter
            return replace(letter)

    def _list(self, user_id, is_private, limit) -> List[Letter]:
        with self._lock:
            rows = [
                replace(letter) for letter in self._rows.values()
                if (user_id is None or letter.user_id == user_id)
                and (is_private is None or letter.is_private == is_private)
            ]
        return _newest_first(rows)[:limit]

    def remove(self, letter_id: int) -> None:
        with self._lock:
            if self._rows.pop(letter_id, None) is None:
                raise NotFound(f"Letter {letter_id} not found")


class InMemoryPostStore(PostStore):
    """Also owns the comment rows, so counters and cascades stay under one lock."""

    def __init__(self):
        self._rows: Dict[int, Post] = {}
        self._comments: Dict[int, Comment] = {}
        self._ids = itertools.count(1)
        self._comment_ids = itertools.count(1)
        self._lock = threading.Lock()

    def _create(self, user_id, author_name, category, title, content, is_anonymous, now) -> Post:
        with self._lock:
            post = Post(
                id=next(self._ids),
                user_id=user_id,
                author_name=author_name,
                category=category,
                title=title,
                content=content,
                is_anonymous=is_anonymous,
                created_at=now,
            )
            self._rows[post.id] = post
            return replace(post)

    def get(self, post_id: int) -> Post:
        with self._lock:
            post = self._rows.get(post_id)
            if post is None:
                raise NotFound(f"Post {post_id} not found")
            return replace(post)

    def _list(self, category, limit) -> List[Post]:
        with self._lock:
            rows = [replace(p) for p in self._rows.values() if category is None or p.category == category]
        return _newest_first(rows)[:limit]

    def _popular(self, limit) -> List[Post]:
        with self._lock:
            rows = [replace(p) for p in self._rows.values()]
        return sorted(rows, key=lambda p: (p.likes, p.created_at, p.id), reverse=True)[:limit]

    def like(self, post_id: int) -> Post:
        with self._lock:
            post = self._rows.get(post_id)
            if post is None:
                raise NotFound(f"Post {post_id} not found")
            post.likes += 1
            return replace(post)

    def remove(self, post_id: int) -> None:
        with self._lock:
            if self._rows.pop(post_id, None) is None:
                raise NotFound(f"Post {post_id} not found")
            for comment_id in [c.id for c in self._comments.values() if c.post_id == post_id]:
                del self._comments[comment_id]


class InMemoryCommentStore(CommentStore):

    def __init__(self, posts: InMemoryPostStore):
        self.posts = posts

    def _add(self, post_id, user_id, author_name, content, is_anonymous, now) -> Comment:
        posts = self.posts
        with posts._lock:
            post = posts._rows.get(post_id)
            if post is None:
                raise NotFound(f"Post {post_id} not found")
            comment = Comment(
                id=next(posts._comment_ids),
                post_id=post_id,
                user_id=user_id,
                author_name=author_name,
                content=content,
                is_anonymous=is_anonymous,
                created_at=now,
            )
            posts._comments[comment.id] = comment
            post.comment_count += 1
            return replace(comment)

    def get(self, comment_id: int) -> Comment:
        with self.posts._lock:
            comment = self.posts._comments.get(comment_id)
            if comment is None:
                raise NotFound(f"Comment {comment_id} not found")
            return replace(comment)

    def list(self, post_id: int) -> List[Comment]:
        with self.posts._lock:
            rows = [replace(c) for c in self.posts._comments.values() if c.post_id == post_id]
        return sorted(rows, key=lambda c: (c.created_at, c.id))

    def remove(self, comment_id: int) -> None:
        posts = self.posts
        with posts._lock:
            comment = posts._comments.pop(comment_id, None)
            if comment is None:
                raise NotFound(f"Comment {comment_id} not found")
            post = posts._rows.get(comment.post_id)
            if post is not None:
                post.comment_count = max(post.comment_count - 1, 0)
