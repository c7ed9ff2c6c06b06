# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from mindlog.models.database import Base


class LetterRow(Base):
    __tablename__ = "coach_letters"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("user_profiles.id"), nullable=False, index=True)

    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)

    # ✅ Coach answer, filled in once the reply comes back
    ai_response = Column(Text, nullable=True)
    coach_id = Column(String(32), nullable=True)  # e.g., luna, sol

    is_private = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("UserProfileRow", back_populates="letters")

    def __repr__(self):
        return f"<Letter id={self.id} user={self.user_id} private={self.is_private}>"
