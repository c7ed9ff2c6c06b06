# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, Integer, String, Date, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from mindlog.models.database import Base


class UserProfileRow(Base):
    __tablename__ = "user_profiles"

    # Opaque id handed over by the identity provider
    id = Column(String, primary_key=True, index=True)
    display_name = Column(String, default="")
    email = Column(String, nullable=True)
    timezone = Column(String, default="UTC")

    # ✅ Attendance streak
    streak = Column(Integer, default=0, nullable=False)
    last_check_in = Column(Date, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    # ✅ Relationships
    daily_checkins = relationship("DailyCheckinRow", back_populates="user", cascade="all, delete-orphan")
    diary_entries = relationship("DiaryEntryRow", back_populates="user", cascade="all, delete-orphan")
    missions = relationship("MissionRow", back_populates="user", cascade="all, delete-orphan")
    letters = relationship("LetterRow", back_populates="user", cascade="all, delete-orphan")
    posts = relationship("PostRow", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<UserProfile id={self.id} streak={self.streak} last={self.last_check_in}>"
