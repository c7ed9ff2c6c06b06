# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

from pydantic import BaseModel, ConfigDict
from typing import Optional, List
import datetime as dt

from mindlog.models.enums import Emotion, PostCategory


class _Record(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# ---------------------- Requests ----------------------

class SessionRequest(BaseModel):
    user_id: str
    display_name: Optional[str] = None
    email: Optional[str] = None
    timezone: Optional[str] = None

class ProfileUpdateRequest(BaseModel):
    display_name: Optional[str] = None
    timezone: Optional[str] = None

# emotion stays a plain string so unknown tags reach the domain validation
class CheckinRequest(BaseModel):
    emotion: str
    stress: int
    energy: int
    sleep_hours: float
    note: Optional[str] = None

class MissionCreateRequest(BaseModel):
    title: str
    recurring: bool = False
    description: Optional[str] = None

class DiaryUpsertRequest(BaseModel):
    content: str
    emotion: str
    date: Optional[dt.date] = None

class CoachRequest(BaseModel):
    title: str
    content: str

class LetterCreateRequest(BaseModel):
    title: str
    content: str
    is_private: bool = False
    coach_id: Optional[str] = None

class LetterPrivacyRequest(BaseModel):
    is_private: bool

# category stays a plain string so unknown values reach the domain validation
class PostCreateRequest(BaseModel):
    category: str
    title: str
    content: str
    is_anonymous: bool = False

class CommentCreateRequest(BaseModel):
    content: str
    is_anonymous: bool = False


# ---------------------- Responses ----------------------

class ProfileOut(_Record):
    id: str
    display_name: str
    email: Optional[str] = None
    timezone: str
    streak: int
    last_check_in: Optional[dt.date] = None
    created_at: dt.datetime

class CheckinOut(_Record):
    date: dt.date
    emotion: Emotion
    stress: int
    energy: int
    sleep_hours: float
    note: Optional[str] = None

class CheckinResult(BaseModel):
    message: str
    profile: ProfileOut
    checkin: CheckinOut

class MissionOut(_Record):
    id: int
    title: str
    description: Optional[str] = None
    completed: bool
    recurring: bool
    created_at: dt.datetime
    completed_at: Optional[dt.datetime] = None

class MissionList(BaseModel):
    missions: List[MissionOut]
    total: int
    completed: int
    completion_rate: float
    completion_percent: int

class DiaryOut(_Record):
    date: dt.date
    content: str
    emotion: Emotion
    created_at: dt.datetime
    updated_at: dt.datetime

class CoachResponse(BaseModel):
    success: bool = True
    response: str
    fallback: bool = False

class LetterOut(_Record):
    id: int
    title: str
    content: str
    ai_response: Optional[str] = None
    is_private: bool
    coach_id: Optional[str] = None
    created_at: dt.datetime
    updated_at: dt.datetime

class LetterReplyOut(BaseModel):
    success: bool = True
    fallback: bool = False
    letter: LetterOut

# author ids stay server-side; anonymous posts only show the placeholder name
class PostOut(_Record):
    id: int
    author_name: str
    category: PostCategory
    title: str
    content: str
    is_anonymous: bool
    likes: int
    comment_count: int
    created_at: dt.datetime

class CommentOut(_Record):
    id: int
    post_id: int
    author_name: str
    content: str
    is_anonymous: bool
    created_at: dt.datetime
