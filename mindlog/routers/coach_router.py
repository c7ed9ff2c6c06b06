# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request

from mindlog.dependencies import Container, get_container
from mindlog.schemas.wellness_schemas import (
    CoachRequest,
    CoachResponse,
    LetterCreateRequest,
    LetterOut,
    LetterPrivacyRequest,
    LetterReplyOut,
)
from mindlog.utils.auth_utils import current_user_id
from mindlog.utils.rate_limit_utils import limiter

router = APIRouter(prefix="/coach", tags=["AI Coach"])


@router.post("/reply", response_model=CoachResponse)
@limiter.limit("10/minute")
def coach_reply(
    request: Request,
    payload: CoachRequest,
    user_id: str = Depends(current_user_id),
    container: Container = Depends(get_container),
):
    """Answer a coaching letter without keeping it. Provider failures come back as a canned reply, never as an error."""
    reply = container.coach.reply(payload.title, payload.content)
    return CoachResponse(success=True, response=reply.text, fallback=reply.fallback)


@router.post("/letters", response_model=LetterReplyOut, status_code=201)
@limiter.limit("10/minute")
def write_letter(
    request: Request,
    payload: LetterCreateRequest,
    user_id: str = Depends(current_user_id),
    container: Container = Depends(get_container),
):
    """Save a letter and store the coach's answer on it."""
    letter, reply = container.letter_service.write(
        user_id, payload.title, payload.content, payload.is_private, payload.coach_id
    )
    return LetterReplyOut(success=True, fallback=reply.fallback, letter=LetterOut.model_validate(letter))


@router.get("/letters", response_model=List[LetterOut])
def my_letters(
    is_private: Optional[bool] = Query(None),
    user_id: str = Depends(current_user_id),
    container: Container = Depends(get_container),
):
    return container.letter_service.mine(user_id, is_private)


@router.get("/letters/public", response_model=List[LetterOut])
def public_letters(
    limit: int = Query(30, ge=1, le=100),
    user_id: str = Depends(current_user_id),
    container: Container = Depends(get_container),
):
    return container.letter_service.public(limit)


@router.patch("/letters/{letter_id}", response_model=LetterOut)
def set_letter_privacy(
    letter_id: int,
    payload: LetterPrivacyRequest,
    user_id: str = Depends(current_user_id),
    container: Container = Depends(get_container),
):
    return container.letter_service.set_privacy(user_id, letter_id, payload.is_private)


@router.delete("/letters/{letter_id}")
def delete_letter(letter_id: int, user_id: str = Depends(current_user_id), container: Container = Depends(get_container)):
    container.letter_service.remove(user_id, letter_id)
    return {"message": "🗑️ Letter deleted successfully"}
