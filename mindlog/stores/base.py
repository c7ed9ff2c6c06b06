# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

"""
Store contracts shared by the in-memory and SQL backends.

Validation that belongs to the record itself (blank text, unknown emotion)
lives in the concrete public methods here, so both backends reject the same
input. Backends implement the underscored hooks.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import List, Optional

from mindlog.models.records import CheckIn, Comment, DiaryEntry, Letter, Mission, Post, UserProfile
from mindlog.utils.errors import InvalidInput
from mindlog.utils.validators import require_text, validate_category, validate_emotion, validate_range

PROFILE_FIELDS = {"display_name", "email", "timezone", "streak", "last_check_in"}
LETTER_FIELDS = {"title", "content", "ai_response", "is_private", "coach_id"}


def _check_profile_fields(fields: dict) -> dict:
    unknown = set(fields) - PROFILE_FIELDS
    if unknown:
        raise InvalidInput(f"Unknown profile fields: {', '.join(sorted(unknown))}")
    streak = fields.get("streak")
    if streak is not None and (not isinstance(streak, int) or streak < 0):
        raise InvalidInput("streak must be a non-negative integer")
    return fields


class ProfileStore(ABC):

    @abstractmethod
    def get(self, user_id: str) -> UserProfile:
        """Raises NotFound."""

    def create(self, user_id: str, **fields) -> UserProfile:
        """Raises AlreadyExists when the id is taken."""
        require_text("user_id", user_id)
        return self._create(user_id, _check_profile_fields(fields))

    def update(self, user_id: str, **fields) -> UserProfile:
        """Raises NotFound."""
        return self._update(user_id, _check_profile_fields(fields))

    @abstractmethod
    def list_ids(self) -> List[str]:
        ...

    @abstractmethod
    def _create(self, user_id: str, fields: dict) -> UserProfile:
        ...

    @abstractmethod
    def _update(self, user_id: str, fields: dict) -> UserProfile:
        ...


class CheckinStore(ABC):
    """One check-in per (user, day). Callers validate the numeric fields."""

    @abstractmethod
    def upsert(self, user_id: str, day: date, emotion, stress: int, energy: int,
               sleep_hours: float, note: Optional[str] = None) -> CheckIn:
        ...

    @abstractmethod
    def get(self, user_id: str, day: date) -> CheckIn:
        """Raises NotFound."""

    def list_range(self, user_id: str, start: date, end: date) -> List[CheckIn]:
        validate_range(start, end)
        return self._list_range(user_id, start, end)

    @abstractmethod
    def dates(self, user_id: str) -> List[date]:
        """Every checked-in day for the user, ascending."""

    @abstractmethod
    def _list_range(self, user_id: str, start: date, end: date) -> List[CheckIn]:
        ...


class MissionStore(ABC):

    def add(self, user_id: str, title: str, recurring: bool = False,
            description: Optional[str] = None, now: Optional[datetime] = None,
            today: Optional[date] = None) -> Mission:
        title = require_text("title", title)
        now = now or datetime.utcnow()
        return self._add(user_id, title, bool(recurring), description, now, today or now.date())

    @abstractmethod
    def get(self, mission_id: int) -> Mission:
        """Raises NotFound."""

    @abstractmethod
    def toggle(self, mission_id: int, now: Optional[datetime] = None) -> Mission:
        """Flip `completed`. Raises NotFound."""

    @abstractmethod
    def remove(self, mission_id: int) -> None:
        """Raises NotFound, including for an already removed mission."""

    @abstractmethod
    def list(self, user_id: str) -> List[Mission]:
        """Missions of one user in creation order."""

    @abstractmethod
    def reset_recurring(self, user_id: str, today: date) -> int:
        """
        Mark the user's recurring missions incomplete for `today`.
        Missions already stamped with `today` are left alone.
        Returns how many missions were reset.
        """

    @abstractmethod
    def _add(self, user_id: str, title: str, recurring: bool, description: Optional[str],
             now: datetime, today: date) -> Mission:
        ...


class DiaryStore(ABC):

    def upsert(self, user_id: str, day: date, content: str, emotion) -> DiaryEntry:
        content = require_text("content", content)
        return self._upsert(user_id, day, content, validate_emotion(emotion))

    @abstractmethod
    def get(self, user_id: str, day: date) -> DiaryEntry:
        """Raises NotFound."""

    def list_range(self, user_id: str, start: date, end: date) -> List[DiaryEntry]:
        validate_range(start, end)
        return self._list_range(user_id, start, end)

    @abstractmethod
    def recent(self, user_id: str, limit: int = 30) -> List[DiaryEntry]:
        """Newest first."""

    @abstractmethod
    def _upsert(self, user_id: str, day: date, content: str, emotion) -> DiaryEntry:
        ...

    @abstractmethod
    def _list_range(self, user_id: str, start: date, end: date) -> List[DiaryEntry]:
        ...


def _check_limit(limit: Optional[int]) -> Optional[int]:
    if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or limit < 1):
        raise InvalidInput("limit must be a positive integer")
    return limit


class LetterStore(ABC):
    """Letters written to the coach. `ai_response` is filled in after the reply arrives."""

    def create(self, user_id: str, title: str, content: str, is_private: bool = False,
               coach_id: Optional[str] = None, now: Optional[datetime] = None) -> Letter:
        title = require_text("title", title)
        content = require_text("content", content)
        return self._create(user_id, title, content, bool(is_private), coach_id, now or datetime.utcnow())

    @abstractmethod
    def get(self, letter_id: int) -> Letter:
        """Raises NotFound."""

    def update(self, letter_id: int, now: Optional[datetime] = None, **fields) -> Letter:
        """Raises NotFound. Bumps `updated_at`."""
        unknown = set(fields) - LETTER_FIELDS
        if unknown:
            raise InvalidInput(f"Unknown letter fields: {', '.join(sorted(unknown))}")
        for name in ("title", "content"):
            if name in fields:
                fields[name] = require_text(name, fields[name])
        if "is_private" in fields:
            fields["is_private"] = bool(fields["is_private"])
        return self._update(letter_id, fields, now or datetime.utcnow())

    def list(self, user_id: Optional[str] = None, is_private: Optional[bool] = None,
             limit: Optional[int] = None) -> List[Letter]:
        """Newest first, optionally narrowed to one writer and/or one privacy setting."""
        return self._list(user_id, is_private, _check_limit(limit))

    @abstractmethod
    def remove(self, letter_id: int) -> None:
        """Raises NotFound."""

    @abstractmethod
    def _create(self, user_id: str, title: str, content: str, is_private: bool,
                coach_id: Optional[str], now: datetime) -> Letter:
        ...

    @abstractmethod
    def _update(self, letter_id: int, fields: dict, now: datetime) -> Letter:
        ...

    @abstractmethod
    def _list(self, user_id: Optional[str], is_private: Optional[bool], limit: Optional[int]) -> List[Letter]:
        ...


class PostStore(ABC):
    """Community board posts with their like and comment counters."""

    def create(self, user_id: str, author_name: str, category, title: str, content: str,
               is_anonymous: bool = False, now: Optional[datetime] = None) -> Post:
        return self._create(
            user_id,
            require_text("author_name", author_name),
            validate_category(category),
            require_text("title", title),
            require_text("content", content),
            bool(is_anonymous),
            now or datetime.utcnow(),
        )

    @abstractmethod
    def get(self, post_id: int) -> Post:
        """Raises NotFound."""

    def list(self, category=None, limit: int = 30) -> List[Post]:
        """Newest first, optionally one category only."""
        category = validate_category(category) if category is not None else None
        return self._list(category, _check_limit(limit))

    def popular(self, limit: int = 30) -> List[Post]:
        """Most liked first; newer posts win ties."""
        return self._popular(_check_limit(limit))

    @abstractmethod
    def like(self, post_id: int) -> Post:
        """Add one like. Raises NotFound."""

    @abstractmethod
    def remove(self, post_id: int) -> None:
        """Removes the post with its comments. Raises NotFound."""

    @abstractmethod
    def _create(self, user_id: str, author_name: str, category, title: str, content: str,
                is_anonymous: bool, now: datetime) -> Post:
        ...

    @abstractmethod
    def _list(self, category, limit: int) -> List[Post]:
        ...

    @abstractmethod
    def _popular(self, limit: int) -> List[Post]:
        ...


class CommentStore(ABC):
    """
    Comments under a post. Adding and removing a comment moves the post's
    `comment_count` in the same step.
    """

    def add(self, post_id: int, user_id: str, author_name: str, content: str,
            is_anonymous: bool = False, now: Optional[datetime] = None) -> Comment:
        """Raises NotFound when the post is gone."""
        return self._add(
            post_id,
            user_id,
            require_text("author_name", author_name),
            require_text("content", content),
            bool(is_anonymous),
            now or datetime.utcnow(),
        )

    @abstractmethod
    def get(self, comment_id: int) -> Comment:
        """Raises NotFound."""

    @abstractmethod
    def list(self, post_id: int) -> List[Comment]:
        """Oldest first."""

    @abstractmethod
    def remove(self, comment_id: int) -> None:
        """Raises NotFound."""

    @abstractmethod
    def _add(self, post_id: int, user_id: str, author_name: str, content: str,
             is_anonymous: bool, now: datetime) -> Comment:
        ...
