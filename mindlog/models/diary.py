# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from mindlog.models.database import Base


class DiaryEntryRow(Base):
    __tablename__ = "diary_entries"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_diary_user_date"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("user_profiles.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)

    content = Column(Text, nullable=False)
    emotion = Column(String(16), nullable=False)  # e.g., happy, sad, anxious

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("UserProfileRow", back_populates="diary_entries")
