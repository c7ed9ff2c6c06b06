# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

from datetime import date, timedelta
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from mindlog.dependencies import Container, get_container
from mindlog.schemas.wellness_schemas import CheckinOut, CheckinRequest, CheckinResult, ProfileOut
from mindlog.utils.auth_utils import current_user_id

router = APIRouter(prefix="/checkins", tags=["Check-in"])


@router.post("", response_model=CheckinResult)
def record_check_in(
    payload: CheckinRequest,
    user_id: str = Depends(current_user_id),
    container: Container = Depends(get_container),
):
    profile = container.engine.record_check_in(
        user_id,
        emotion=payload.emotion,
        stress=payload.stress,
        energy=payload.energy,
        sleep_hours=payload.sleep_hours,
        note=payload.note,
    )
    checkin = container.checkins.get(user_id, profile.last_check_in)
    return CheckinResult(
        message="Check-in recorded",
        profile=ProfileOut.model_validate(profile),
        checkin=CheckinOut.model_validate(checkin),
    )


@router.get("/today", response_model=Optional[CheckinOut])
def today_check_in(user_id: str = Depends(current_user_id), container: Container = Depends(get_container)):
    return container.engine.today_check_in(user_id)


@router.get("", response_model=List[CheckinOut])
def check_in_history(
    start_date: Optional[date] = Query(None, description="Start date in YYYY-MM-DD format"),
    end_date: Optional[date] = Query(None, description="End date in YYYY-MM-DD format"),
    user_id: str = Depends(current_user_id),
    container: Container = Depends(get_container),
):
    """Check-ins in [start_date, end_date], oldest first. Defaults to the last 30 days."""
    if end_date is None:
        end_date = container.engine.today_for(container.profiles.get(user_id))
    if start_date is None:
        start_date = end_date - timedelta(days=29)
    return container.engine.history(user_id, start_date, end_date)
