# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

from datetime import datetime, timedelta
from typing import Optional

from fastapi import HTTPException, status
from jose import ExpiredSignatureError, JWTError, jwt

from mindlog import config

# 🔐 Signing key for session tokens
SECRET_KEY = config.JWT_SECRET_KEY
if not SECRET_KEY:
    raise RuntimeError("JWT_SECRET_KEY environment variable is not set.")

ALGORITHM = "HS256"
TOKEN_ISSUER = "mindlog"


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def issue_token(user_id: str, expires_delta: Optional[timedelta] = None, now: Optional[datetime] = None) -> str:
    """Session token for the identity provider's user id."""
    issued_at = now or datetime.utcnow()
    lifetime = expires_delta or timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {
        "sub": user_id,
        "iss": TOKEN_ISSUER,
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    return jwt.encode(claims, SECRET_KEY, algorithm=ALGORITHM)


def read_token(token: str) -> dict:
    try:
        claims = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM], issuer=TOKEN_ISSUER)
    except ExpiredSignatureError:
        raise _unauthorized("Session expired, please sign in again")
    except JWTError:
        raise _unauthorized("Invalid token")

    if not claims.get("sub"):
        raise _unauthorized("Token has no subject")
    return claims
