# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

from fastapi import APIRouter, Depends

from mindlog.dependencies import Container, get_container
from mindlog.schemas.wellness_schemas import MissionCreateRequest, MissionList, MissionOut
from mindlog.services.mission_service import completion_percent, completion_rate
from mindlog.utils.auth_utils import current_user_id

router = APIRouter(prefix="/missions", tags=["Missions"])


@router.get("", response_model=MissionList)
def list_missions(user_id: str = Depends(current_user_id), container: Container = Depends(get_container)):
    missions = container.mission_service.list(user_id)
    return MissionList(
        missions=[MissionOut.model_validate(m) for m in missions],
        total=len(missions),
        completed=sum(1 for m in missions if m.completed),
        completion_rate=completion_rate(missions),
        completion_percent=completion_percent(missions),
    )


@router.post("", response_model=MissionOut, status_code=201)
def add_mission(
    payload: MissionCreateRequest,
    user_id: str = Depends(current_user_id),
    container: Container = Depends(get_container),
):
    return container.mission_service.add(user_id, payload.title, payload.recurring, payload.description)


@router.post("/{mission_id}/toggle", response_model=MissionOut)
def toggle_mission(mission_id: int, user_id: str = Depends(current_user_id), container: Container = Depends(get_container)):
    return container.mission_service.toggle(user_id, mission_id)


@router.delete("/{mission_id}")
def delete_mission(mission_id: int, user_id: str = Depends(current_user_id), container: Container = Depends(get_container)):
    container.mission_service.remove(user_id, mission_id)
    return {"message": "🗑️ Mission deleted successfully"}
