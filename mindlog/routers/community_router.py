# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from mindlog.dependencies import Container, get_container
from mindlog.schemas.wellness_schemas import CommentCreateRequest, CommentOut, PostCreateRequest, PostOut
from mindlog.utils.auth_utils import current_user_id

router = APIRouter(prefix="/community", tags=["Community"])


@router.get("/posts", response_model=List[PostOut])
def list_posts(
    category: Optional[str] = Query(None, description="challenge, concern, info or review"),
    limit: int = Query(30, ge=1, le=100),
    user_id: str = Depends(current_user_id),
    container: Container = Depends(get_container),
):
    return container.community.feed(category, limit)


@router.get("/posts/popular", response_model=List[PostOut])
def popular_posts(
    limit: int = Query(30, ge=1, le=100),
    user_id: str = Depends(current_user_id),
    container: Container = Depends(get_container),
):
    return container.community.popular(limit)


@router.post("/posts", response_model=PostOut, status_code=201)
def create_post(
    payload: PostCreateRequest,
    user_id: str = Depends(current_user_id),
    container: Container = Depends(get_container),
):
    return container.community.publish(
        user_id, payload.category, payload.title, payload.content, payload.is_anonymous
    )


@router.get("/posts/{post_id}", response_model=PostOut)
def get_post(post_id: int, user_id: str = Depends(current_user_id), container: Container = Depends(get_container)):
    return container.community.get(post_id)


@router.post("/posts/{post_id}/like", response_model=PostOut)
def like_post(post_id: int, user_id: str = Depends(current_user_id), container: Container = Depends(get_container)):
    return container.community.like(post_id)


@router.delete("/posts/{post_id}")
def delete_post(post_id: int, user_id: str = Depends(current_user_id), container: Container = Depends(get_container)):
    container.community.remove_post(user_id, post_id)
    return {"message": "🗑️ Post deleted successfully"}


@router.get("/posts/{post_id}/comments", response_model=List[CommentOut])
def list_comments(post_id: int, user_id: str = Depends(current_user_id), container: Container = Depends(get_container)):
    return container.community.thread(post_id)


@router.post("/posts/{post_id}/comments", response_model=CommentOut, status_code=201)
def add_comment(
    post_id: int,
    payload: CommentCreateRequest,
    user_id: str = Depends(current_user_id),
    container: Container = Depends(get_container),
):
    return container.community.comment(user_id, post_id, payload.content, payload.is_anonymous)


@router.delete("/comments/{comment_id}")
def delete_comment(comment_id: int, user_id: str = Depends(current_user_id), container: Container = Depends(get_container)):
    container.community.remove_comment(user_id, comment_id)
    return {"message": "🗑️ Comment deleted successfully"}
