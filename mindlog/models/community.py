# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from mindlog.models.database import Base


class PostRow(Base):
    __tablename__ = "community_posts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("user_profiles.id"), nullable=False, index=True)
    author_name = Column(String, nullable=False)

    category = Column(String(16), nullable=False, index=True)  # challenge, concern, info, review
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    is_anonymous = Column(Boolean, default=False, nullable=False)

    # ✅ Counters kept next to the post so listings need no joins
    likes = Column(Integer, default=0, nullable=False)
    comment_count = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    user = relationship("UserProfileRow", back_populates="posts")
    replies = relationship("CommentRow", back_populates="post", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Post id={self.id} category={self.category} likes={self.likes}>"


class CommentRow(Base):
    __tablename__ = "community_comments"

    id = Column(Integer, primary_key=True, index=True)
    post_id = Column(Integer, ForeignKey("community_posts.id"), nullable=False, index=True)
    user_id = Column(String, ForeignKey("user_profiles.id"), nullable=False)
    author_name = Column(String, nullable=False)

    content = Column(Text, nullable=False)
    is_anonymous = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    post = relationship("PostRow", back_populates="replies")
