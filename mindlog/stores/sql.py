# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

"""SQLAlchemy-backed stores. Each call opens and closes its own session."""

import logging
from contextlib import contextmanager
from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from mindlog.models.community import CommentRow, PostRow
from mindlog.models.daily_checkin import DailyCheckinRow
from mindlog.models.diary import DiaryEntryRow
from mindlog.models.enums import Emotion, PostCategory
from mindlog.models.letter import LetterRow
from mindlog.models.mission import MissionRow
from mindlog.models.records import CheckIn, Comment, DiaryEntry, Letter, Mission, Post, UserProfile
from mindlog.models.user_profile import UserProfileRow
from mindlog.stores.base import (
    CheckinStore, CommentStore, DiaryStore, LetterStore, MissionStore, PostStore, ProfileStore,
)
from mindlog.utils.errors import AlreadyExists, NotFound, Unavailable
from mindlog.utils.validators import validate_emotion

logger = logging.getLogger(__name__)


@contextmanager
def session_scope(session_factory):
    db: Session = session_factory()
    try:
        yield db
        db.commit()
    except OperationalError as e:
        db.rollback()
        logger.error(f"🛑 Storage backend unreachable: {e}")
        raise Unavailable("Storage backend is unavailable") from e
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def _profile(row: UserProfileRow) -> UserProfile:
    return UserProfile(
        id=row.id,
        display_name=row.display_name or "",
        email=row.email,
        timezone=row.timezone,
        streak=row.streak or 0,
        last_check_in=row.last_check_in,
        created_at=row.created_at,
    )


def _checkin(row: DailyCheckinRow) -> CheckIn:
    return CheckIn(
        user_id=row.user_id,
        date=row.date,
        emotion=Emotion(row.emotion),
        stress=row.stress,
        energy=row.energy,
        sleep_hours=row.sleep_hours,
        note=row.note,
        updated_at=row.updated_at,
    )


def _diary(row: DiaryEntryRow) -> DiaryEntry:
    return DiaryEntry(
        user_id=row.user_id,
        date=row.date,
        content=row.content,
        emotion=Emotion(row.emotion),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _mission(row: MissionRow) -> Mission:
    return Mission(
        id=row.id,
        user_id=row.user_id,
        title=row.title,
        description=row.description,
        completed=bool(row.completed),
        recurring=bool(row.recurring),
        created_at=row.created_at,
        completed_at=row.completed_at,
        last_reset_on=row.last_reset_on,
    )


def _letter(row: LetterRow) -> Letter:
    return Letter(
        id=row.id,
        user_id=row.user_id,
        title=row.title,
        content=row.content,
        ai_response=row.ai_response,
        is_private=bool(row.is_private),
        coach_id=row.coach_id,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _post(row: PostRow) -> Post:
    return Post(
        id=row.id,
        user_id=row.user_id,
        author_name=row.author_name,
        category=PostCategory(row.category),
        title=row.title,
        content=row.content,
        is_anonymous=bool(row.is_anonymous),
        likes=row.likes or 0,
        comment_count=row.comment_count or 0,
        created_at=row.created_at,
    )


def _comment(row: CommentRow) -> Comment:
    return Comment(
        id=row.id,
        post_id=row.post_id,
        user_id=row.user_id,
        author_name=row.author_name,
        content=row.content,
        is_anonymous=bool(row.is_anonymous),
        created_at=row.created_at,
    )

class SqlProfileStore(ProfileStore):

    def __init__(self, session_factory, default_timezone: str = "UTC"):
        self.session_factory = session_factory
        self.default_timezone = default_timezone

    def get(self, user_id: str) -> UserProfile:
        with session_scope(self.session_factory) as db:
            row = db.get(UserProfileRow, user_id)
            if not row:
                raise NotFound(f"Profile {user_id} not found")
            return _profile(row)

    def list_ids(self) -> List[str]:
        with session_scope(self.session_factory) as db:
            return [uid for (uid,) in db.query(UserProfileRow.id).order_by(UserProfileRow.created_at).all()]

    def _create(self, user_id: str, fields: dict) -> UserProfile:
        fields.setdefault("timezone", self.default_timezone)
        try:
            with session_scope(self.session_factory) as db:
                if db.get(UserProfileRow, user_id):
                    raise AlreadyExists(f"Profile {user_id} already exists")
                row = UserProfileRow(id=user_id, **fields)
                db.add(row)
                db.flush()
                return _profile(row)
        except IntegrityError as e:
            # lost a create race against another request for the same id
            raise AlreadyExists(f"Profile {user_id} already exists") from e

    def _update(self, user_id: str, fields: dict) -> UserProfile:
        with session_scope(self.session_factory) as db:
            row = db.get(UserProfileRow, user_id)
            if not row:
                raise NotFound(f"Profile {user_id} not found")
            for key, value in fields.items():
                setattr(row, key, value)
            db.flush()
            return _profile(row)


class SqlCheckinStore(CheckinStore):

    def __init__(self, session_factory):
        self.session_factory = session_factory

    def upsert(self, user_id, day, emotion, stress, energy, sleep_hours, note=None) -> CheckIn:
        emotion = validate_emotion(emotion)
        with session_scope(self.session_factory) as db:
            row = db.query(DailyCheckinRow).filter_by(user_id=user_id, date=day).first()
            if row is None:
                row = DailyCheckinRow(user_id=user_id, date=day)
                db.add(row)
            row.emotion = emotion.value
            row.stress = stress
            row.energy = energy
            row.sleep_hours = sleep_hours
            row.note = note
            row.updated_at = datetime.utcnow()
            db.flush()
            return _checkin(row)

    def get(self, user_id: str, day: date) -> CheckIn:
        with session_scope(self.session_factory) as db:
            row = db.query(DailyCheckinRow).filter_by(user_id=user_id, date=day).first()
            if not row:
                raise NotFound(f"No check-in on {day.isoformat()}")
            return _checkin(row)

    def dates(self, user_id: str) -> List[date]:
        with session_scope(self.session_factory) as db:
            rows = (
                db.query(DailyCheckinRow.date)
                .filter(DailyCheckinRow.user_id == user_id)
                .order_by(DailyCheckinRow.date)
                .all()
            )
            return [d for (d,) in rows]

    def _list_range(self, user_id, start, end) -> List[CheckIn]:
        with session_scope(self.session_factory) as db:
            rows = (
                db.query(DailyCheckinRow)
                .filter(DailyCheckinRow.user_id == user_id)
                .filter(DailyCheckinRow.date >= start)
                .filter(DailyCheckinRow.date <= end)
                .order_by(DailyCheckinRow.date)
                .all()
            )
            return [_checkin(r) for r in rows]


class SqlMissionStore(MissionStore):

    def __init__(self, session_factory):
        self.session_factory = session_factory

    def _add(self, user_id, title, recurring, description, now, today) -> Mission:
        with session_scope(self.session_factory) as db:
            row = MissionRow(
                user_id=user_id,
                title=title,
                description=description,
                recurring=recurring,
                completed=False,
                created_at=now,
                last_reset_on=today,
            )
            db.add(row)
            db.flush()
            return _mission(row)

    def get(self, mission_id: int) -> Mission:
        with session_scope(self.session_factory) as db:
            row = db.get(MissionRow, mission_id)
            if not row:
                raise NotFound(f"Mission {mission_id} not found")
            return _mission(row)

    def toggle(self, mission_id: int, now: Optional[datetime] = None) -> Mission:
        with session_scope(self.session_factory) as db:
            row = db.get(MissionRow, mission_id)
            if not row:
                raise NotFound(f"Mission {mission_id} not found")
            row.completed = not row.completed
            row.completed_at = (now or datetime.utcnow()) if row.completed else None
            db.flush()
            return _mission(row)

    def remove(self, mission_id: int) -> None:
        with session_scope(self.session_factory) as db:
            row = db.get(MissionRow, mission_id)
            if not row:
                raise NotFound(f"Mission {mission_id} not found")
            db.delete(row)

    def list(self, user_id: str) -> List[Mission]:
        with session_scope(self.session_factory) as db:
            rows = db.query(MissionRow).filter(MissionRow.user_id == user_id).order_by(MissionRow.id).all()
            return [_mission(r) for r in rows]

    def reset_recurring(self, user_id: str, today: date) -> int:
        with session_scope(self.session_factory) as db:
            count = (
                db.query(MissionRow)
                .filter(
                    MissionRow.user_id == user_id,
                    MissionRow.recurring.is_(True),
                    or_(MissionRow.last_reset_on.is_(None), MissionRow.last_reset_on < today),
                )
                .update(
                    {"completed": False, "completed_at": None, "last_reset_on": today},
                    synchronize_session=False,
                )
            )
            return count


class SqlDiaryStore(DiaryStore):

    def __init__(self, session_factory):
        self.session_factory = session_factory

    def _upsert(self, user_id, day, content, emotion) -> DiaryEntry:
        now = datetime.utcnow()
        with session_scope(self.session_factory) as db:
            row = db.query(DiaryEntryRow).filter_by(user_id=user_id, date=day).first()
            if row is None:
                row = DiaryEntryRow(user_id=user_id, date=day, created_at=now)
                db.add(row)
            row.content = content
            row.emotion = emotion.value
            row.updated_at = now
            db.flush()
            return _diary(row)

    def get(self, user_id: str, day: date) -> DiaryEntry:
        with session_scope(self.session_factory) as db:
            row = db.query(DiaryEntryRow).filter_by(user_id=user_id, date=day).first()
            if not row:
                raise NotFound(f"No diary entry on {day.isoformat()}")
            return _diary(row)

    def recent(self, user_id: str, limit: int = 30) -> List[DiaryEntry]:
        with session_scope(self.session_factory) as db:
            rows = (
                db.query(DiaryEntryRow)
                .filter(DiaryEntryRow.user_id == user_id)
                .order_by(DiaryEntryRow.date.desc())
                .limit(limit)
                .all()
            )
            return [_diary(r) for r in rows]

    def _list_range(self, user_id, start, end) -> List[DiaryEntry]:
        with session_scope(self.session_factory) as db:
            rows = (
                db.query(DiaryEntryRow)
                .filter(DiaryEntryRow.user_id == user_id)
                .filter(DiaryEntryRow.date >= start)
                .filter(DiaryEntryRow.date <= end)
                .order_by(DiaryEntryRow.date)
                .all()
            )
            return [_diary(r) for r in rows]


class SqlLetterStore(LetterStore):

    def __init__(self, session_factory):
        self.session_factory = session_factory

    def _create(self, user_id, title, content, is_private, coach_id, now) -> Letter:
        with session_scope(self.session_factory) as db:
            row = LetterRow(
                user_id=user_id,
                title=title,
                content=content,
                is_private=is_private,
                coach_id=coach_id,
                created_at=now,
                updated_at=now,
            )
            db.add(row)
            db.flush()
            return _letter(row)

    def get(self, letter_id: int) -> Letter:
        with session_scope(self.session_factory) as db:
            row = db.get(LetterRow, letter_id)
            if not row:
                raise NotFound(f"Letter {letter_id} not found")
            return _letter(row)

    def _update(self, letter_id, fields, now) -> Letter:
        with session_scope(self.session_factory) as db:
            row = db.get(LetterRow, letter_id)
            if not row:
                raise NotFound(f"Letter {letter_id} not found")
            for key, value in fields.items():
                setattr(row, key, value)
            row.updated_at = now
            db.flush()
            return _letter(row)

    def _list(self, user_id, is_private, limit) -> List[Letter]:
        with session_scope(self.session_factory) as db:
            query = db.query(LetterRow)
            if user_id is not None:
                query = query.filter(LetterRow.user_id == user_id)
            if is_private is not None:
                query = query.filter(LetterRow.is_private.is_(is_private))
            query = query.order_by(LetterRow.created_at.desc(), LetterRow.id.desc())
            if limit is not None:
                query = query.limit(limit)
            return [_letter(r) for r in query.all()]

    def remove(self, letter_id: int) -> None:
        with session_scope(self.session_factory) as db:
            row = db.get(LetterRow, letter_id)
            if not row:
                raise NotFound(f"Letter {letter_id} not found")
            db.delete(row)


class SqlPostStore(PostStore):

    def __init__(self, session_factory):
        self.session_factory = session_factory

    def _create(self, user_id, author_name, category, title, content, is_anonymous, now) -> Post:
        with session_scope(self.session_factory) as db:
            row = PostRow(
                user_id=user_id,
                author_name=author_name,
                category=category.value,
                title=title,
                content=content,
                is_anonymous=is_anonymous,
                likes=0,
                comment_count=0,
                created_at=now,
            )
            db.add(row)
            db.flush()
            return _post(row)

    def get(self, post_id: int) -> Post:
        with session_scope(self.session_factory) as db:
            row = db.get(PostRow, post_id)
            if not row:
                raise NotFound(f"Post {post_id} not found")
            return _post(row)

    def _list(self, category, limit) -> List[Post]:
        with session_scope(self.session_factory) as db:
            query = db.query(PostRow)
            if category is not None:
                query = query.filter(PostRow.category == category.value)
            rows = query.order_by(PostRow.created_at.desc(), PostRow.id.desc()).limit(limit).all()
            return [_post(r) for r in rows]

    def _popular(self, limit) -> List[Post]:
        with session_scope(self.session_factory) as db:
            rows = (
                db.query(PostRow)
                .order_by(PostRow.likes.desc(), PostRow.created_at.desc(), PostRow.id.desc())
                .limit(limit)
                .all()
            )
            return [_post(r) for r in rows]

    def like(self, post_id: int) -> Post:
        with session_scope(self.session_factory) as db:
            # increment in SQL so concurrent likes all count
            updated = (
                db.query(PostRow)
                .filter(PostRow.id == post_id)
                .update({PostRow.likes: PostRow.likes + 1}, synchronize_session=False)
            )
            if not updated:
                raise NotFound(f"Post {post_id} not found")
            return _post(db.get(PostRow, post_id))

    def remove(self, post_id: int) -> None:
        with session_scope(self.session_factory) as db:
            row = db.get(PostRow, post_id)
            if not row:
                raise NotFound(f"Post {post_id} not found")
            # replies go with it through the relationship cascade
            db.delete(row)


class SqlCommentStore(CommentStore):

    def __init__(self, session_factory):
        self.session_factory = session_factory

    def _add(self, post_id, user_id, author_name, content, is_anonymous, now) -> Comment:
        with session_scope(self.session_factory) as db:
            updated = (
                db.query(PostRow)
                .filter(PostRow.id == post_id)
                .update({PostRow.comment_count: PostRow.comment_count + 1}, synchronize_session=False)
            )
            if not updated:
                raise NotFound(f"Post {post_id} not found")
            row = CommentRow(
                post_id=post_id,
                user_id=user_id,
                author_name=author_name,
                content=content,
                is_anonymous=is_anonymous,
                created_at=now,
            )
            db.add(row)
            db.flush()
            return _comment(row)

    def get(self, comment_id: int) -> Comment:
        with session_scope(self.session_factory) as db:
            row = db.get(CommentRow, comment_id)
            if not row:
                raise NotFound(f"Comment {comment_id} not found")
            return _comment(row)

    def list(self, post_id: int) -> List[Comment]:
        with session_scope(self.session_factory) as db:
            rows = (
                db.query(CommentRow)
                .filter(CommentRow.post_id == post_id)
                .order_by(CommentRow.created_at, CommentRow.id)
                .all()
            )
            return [_comment(r) for r in rows]

    def remove(self, comment_id: int) -> None:
        with session_scope(self.session_factory) as db:
            row = db.get(CommentRow, comment_id)
            if not row:
                raise NotFound(f"Comment {comment_id} not found")
            db.query(PostRow).filter(PostRow.id == row.post_id, PostRow.comment_count > 0).update(
                {PostRow.comment_count: PostRow.comment_count - 1}, synchronize_session=False
            )
            db.delete(row)
