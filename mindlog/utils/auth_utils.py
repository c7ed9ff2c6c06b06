# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.


from fastapi import Depends, HTTPException, Header
from mindlog.utils.jwt_utils import read_token


# ✅ Dependency to extract token payload
def require_token(authorization: str = Header(...)) -> dict:
    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization format")
    token = authorization.replace("Bearer ", "", 1)
    return read_token(token)


# ✅ Authenticated user id (the identity provider's opaque id)
def current_user_id(user_data: dict = Depends(require_token)) -> str:
    return str(user_data["sub"])
