# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from typing import List

from mindlog.models.records import Comment, Post
from mindlog.stores.base import CommentStore, PostStore, ProfileStore
from mindlog.utils.clock import Clock
from mindlog.utils.errors import NotFound

logger = logging.getLogger(__name__)

ANONYMOUS_AUTHOR = "Anonymous"


class CommunityService:
    """Bulletin board: posts by category, likes, and comment threads."""

    def __init__(self, posts: PostStore, comments: CommentStore, profiles: ProfileStore, clock: Clock):
        self.posts = posts
        self.comments = comments
        self.profiles = profiles
        self.clock = clock

    def _author(self, user_id: str, is_anonymous: bool) -> str:
        profile = self.profiles.get(user_id)
        if is_anonymous:
            return ANONYMOUS_AUTHOR
        return profile.display_name or "User"

    def publish(self, user_id: str, category, title: str, content: str, is_anonymous: bool = False) -> Post:
        post = self.posts.create(
            user_id, self._author(user_id, is_anonymous), category, title, content,
            is_anonymous=is_anonymous, now=self.clock.now(),
        )
        logger.info(f"📝 Post {post.id} published in '{post.category.value}' by user {user_id}")
        return post

    def feed(self, category=None, limit: int = 30) -> List[Post]:
        return self.posts.list(category, limit)

    def popular(self, limit: int = 30) -> List[Post]:
        return self.posts.popular(limit)

    def get(self, post_id: int) -> Post:
        return self.posts.get(post_id)

    def like(self, post_id: int) -> Post:
        return self.posts.like(post_id)

    def remove_post(self, user_id: str, post_id: int) -> None:
        if self.posts.get(post_id).user_id != user_id:
            raise NotFound(f"Post {post_id} not found")
        self.posts.remove(post_id)

    def comment(self, user_id: str, post_id: int, content: str, is_anonymous: bool = False) -> Comment:
        return self.comments.add(
            post_id, user_id, self._author(user_id, is_anonymous), content,
            is_anonymous=is_anonymous, now=self.clock.now(),
        )

    def thread(self, post_id: int) -> List[Comment]:
        self.posts.get(post_id)
        return self.comments.list(post_id)

    def remove_comment(self, user_id: str, comment_id: int) -> None:
        comment = self.comments.get(comment_id)
        if comment.user_id != user_id:
            raise NotFound(f"Comment {comment_id} not found")
        self.comments.remove(comment_id)
