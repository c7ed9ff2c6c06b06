# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging

from fastapi import APIRouter, Depends

from mindlog.dependencies import Container, get_container
from mindlog.schemas.wellness_schemas import ProfileOut, SessionRequest
from mindlog.utils.clock import resolve_timezone
from mindlog.utils.errors import AlreadyExists, NotFound
from mindlog.utils.jwt_utils import issue_token
from mindlog.utils.validators import require_text

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/session")
def open_session(payload: SessionRequest, container: Container = Depends(get_container)):
    """
    Called after the identity provider has authenticated the user.
    Creates the profile on first sign-in and returns an API token.
    """
    user_id = require_text("user_id", payload.user_id)

    try:
        profile = container.profiles.get(user_id)
        message = "🔁 Returning user"
    except NotFound:
        fields = {"display_name": (payload.display_name or "").strip() or "User"}
        if payload.email:
            fields["email"] = payload.email
        if payload.timezone:
            resolve_timezone(payload.timezone)
            fields["timezone"] = payload.timezone
        try:
            profile = container.profiles.create(user_id, **fields)
            message = "🆕 New profile created"
            logger.info(f"🆕 Created profile for user {user_id}")
        except AlreadyExists:
            # a parallel sign-in got there first
            profile = container.profiles.get(user_id)
            message = "🔁 Returning user"

    token = issue_token(profile.id)
    return {
        "message": message,
        "token": token,
        "profile": ProfileOut.model_validate(container.engine.get_profile(profile.id)),
    }
