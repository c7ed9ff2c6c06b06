# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

from fastapi import APIRouter, Depends

from mindlog.dependencies import Container, get_container
from mindlog.services.quote_service import quote_of_the_day

router = APIRouter(tags=["Infra"])


@router.get("/")
def read_root():
    return {"message": "Welcome to Mindlog - daily wellness tracker backend Live"}


@router.get("/health")
def health_check():
    return {"status": "ok"}


@router.get("/quotes/today")
def today_quote(container: Container = Depends(get_container)):
    today = container.clock.today()
    return {"date": today, **quote_of_the_day(today)}
