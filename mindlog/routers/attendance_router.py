# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, Query

from mindlog.dependencies import Container, get_container
from mindlog.services import attendance_service
from mindlog.utils.auth_utils import current_user_id

router = APIRouter(prefix="/attendance", tags=["Attendance"])


@router.get("")
def attendance(
    year: Optional[int] = Query(None, ge=1970, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    user_id: str = Depends(current_user_id),
    container: Container = Depends(get_container),
):
    """
    Calendar of checked-in days for one month with totals and badges.
    Recomputed from the check-in history on every call.
    """
    today = container.engine.today_for(container.profiles.get(user_id))
    year = year or today.year
    month = month or today.month

    result = attendance_service.summarize(year, month, container.checkins.dates(user_id), today)
    result["achievements"] = [asdict(a) for a in result["achievements"]]
    return result
