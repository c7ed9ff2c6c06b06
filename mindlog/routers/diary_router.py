# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

from collections import Counter
from datetime import date, timedelta
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from mindlog.dependencies import Container, get_container
from mindlog.schemas.wellness_schemas import DiaryOut, DiaryUpsertRequest
from mindlog.utils.auth_utils import current_user_id

router = APIRouter(prefix="/diary", tags=["Diary"])


def _today(container: Container, user_id: str) -> date:
    return container.engine.today_for(container.profiles.get(user_id))


@router.put("", response_model=DiaryOut)
def save_diary(
    payload: DiaryUpsertRequest,
    user_id: str = Depends(current_user_id),
    container: Container = Depends(get_container),
):
    """Write the one-line diary. Without a date it goes to today; saving again replaces the entry."""
    day = payload.date or _today(container, user_id)
    with container.locks.hold(user_id):
        return container.diary.upsert(user_id, day, payload.content, payload.emotion)


@router.get("/recent", response_model=List[DiaryOut])
def recent_entries(
    limit: int = Query(30, ge=1, le=365),
    user_id: str = Depends(current_user_id),
    container: Container = Depends(get_container),
):
    return container.diary.recent(user_id, limit)


@router.get("/summary")
def diary_summary(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    user_id: str = Depends(current_user_id),
    container: Container = Depends(get_container),
):
    """
    Counts of each emotion label over the given date range, plus how many
    distinct months were written in. Defaults to the last year.
    """
    end_date = end_date or _today(container, user_id)
    start_date = start_date or end_date - timedelta(days=364)
    entries = container.diary.list_range(user_id, start_date, end_date)

    emotion_counter = Counter(e.emotion.value for e in entries)
    return {
        "start_date": start_date,
        "end_date": end_date,
        "total_entries": len(entries),
        "happy_entries": emotion_counter.get("happy", 0),
        "months_written": len({(e.date.year, e.date.month) for e in entries}),
        "summary": [{"emotion": k, "count": v} for k, v in emotion_counter.items()],
    }


@router.get("/{day}", response_model=DiaryOut)
def get_entry(day: date, user_id: str = Depends(current_user_id), container: Container = Depends(get_container)):
    return container.diary.get(user_id, day)


@router.get("", response_model=List[DiaryOut])
def list_entries(
    start_date: date = Query(..., description="Start date in YYYY-MM-DD format"),
    end_date: date = Query(..., description="End date in YYYY-MM-DD format"),
    user_id: str = Depends(current_user_id),
    container: Container = Depends(get_container),
):
    return container.diary.list_range(user_id, start_date, end_date)
