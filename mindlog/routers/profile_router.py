# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

from fastapi import APIRouter, Depends

from mindlog.dependencies import Container, get_container
from mindlog.schemas.wellness_schemas import ProfileOut, ProfileUpdateRequest
from mindlog.utils.auth_utils import current_user_id
from mindlog.utils.clock import resolve_timezone
from mindlog.utils.validators import require_text

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("", response_model=ProfileOut)
def get_profile(user_id: str = Depends(current_user_id), container: Container = Depends(get_container)):
    return container.engine.get_profile(user_id)


@router.patch("", response_model=ProfileOut)
def update_profile(
    payload: ProfileUpdateRequest,
    user_id: str = Depends(current_user_id),
    container: Container = Depends(get_container),
):
    updates = {}
    if payload.display_name is not None:
        updates["display_name"] = require_text("display_name", payload.display_name)
    if payload.timezone is not None:
        resolve_timezone(payload.timezone)
        updates["timezone"] = payload.timezone

    with container.locks.hold(user_id):
        if updates:
            container.profiles.update(user_id, **updates)
    return container.engine.get_profile(user_id)
