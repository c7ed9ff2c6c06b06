# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

"""
Plain records handed out by every store implementation.

The SQL stores copy ORM rows into these so callers never hold a live
session object, and the in-memory stores keep them directly.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from mindlog.models.enums import Emotion, PostCategory


@dataclass
class UserProfile:
    id: str
    display_name: str = ""
    email: Optional[str] = None
    timezone: str = "UTC"
    streak: int = 0
    last_check_in: Optional[date] = None
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class CheckIn:
    user_id: str
    date: date
    emotion: Emotion
    stress: int
    energy: int
    sleep_hours: float
    note: Optional[str] = None
    updated_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class DiaryEntry:
    user_id: str
    date: date
    content: str
    emotion: Emotion
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Mission:
    id: int
    user_id: str
    title: str
    description: Optional[str] = None
    completed: bool = False
    recurring: bool = False
    created_at: datetime = field(default_factory=datetime.utcnow)
    completed_at: Optional[datetime] = None
    last_reset_on: Optional[date] = None


@dataclass
class Letter:
    id: int
    user_id: str
    title: str
    content: str
    ai_response: Optional[str] = None
    is_private: bool = False
    coach_id: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Post:
    id: int
    user_id: str
    author_name: str
    category: PostCategory
    title: str
    content: str
    is_anonymous: bool = False
    likes: int = 0
    comment_count: int = 0
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Comment:
    id: int
    post_id: int
    user_id: str
    author_name: str
    content: str
    is_anonymous: bool = False
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Achievement:
    key: str
    title: str
    description: str
    icon: str
    achieved: bool
