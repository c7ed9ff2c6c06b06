# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, Integer, Float, Text, Date, ForeignKey, DateTime, String, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from mindlog.models.database import Base


class DailyCheckinRow(Base):
    __tablename__ = "daily_checkins"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_checkin_user_date"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("user_profiles.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)

    emotion = Column(String(16), nullable=False)
    stress = Column(Integer, nullable=False)        # 1-5
    energy = Column(Integer, nullable=False)        # 1-5
    sleep_hours = Column(Float, nullable=False)
    note = Column(Text, nullable=True)

    updated_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("UserProfileRow", back_populates="daily_checkins")
