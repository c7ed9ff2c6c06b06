# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging
from contextlib import asynccontextmanager

from apscheduler.schedulers.background import BackgroundScheduler
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from mindlog import __version__, config
from mindlog.dependencies import build_container
from mindlog.routers import (
    attendance_router,
    auth_router,
    checkin_router,
    coach_router,
    community_router,
    core_router,
    diary_router,
    mission_router,
    profile_router,
)
from mindlog.utils.errors import MindlogError
from mindlog.utils.rate_limit_utils import limiter
from mindlog.utils.schedulers.mission_rollover_cron import rollover_recurring_missions

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Tests put their own container on app.state before startup
    if getattr(app.state, "container", None) is None:
        app.state.container = build_container()
    container = app.state.container

    scheduler = None
    if config.SCHEDULER_ENABLED:
        # Scheduler setup
        scheduler = BackgroundScheduler(job_defaults={"misfire_grace_time": 300, "coalesce": True})

        # 🗓️ Runs every hour, five minutes past
        scheduler.add_job(
            rollover_recurring_missions,
            trigger="cron",
            minute=5,
            args=[container.profiles, container.mission_service],
            id="mission_rollover",
        )
        scheduler.start()
        logger.info("⏰ Scheduler started")

    yield

    if scheduler:
        scheduler.shutdown()


# Create FastAPI app with lifespan
app = FastAPI(
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    title="Mindlog API",
    description="Daily check-ins, streaks, missions and diary",
    version=__version__,
)

app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

# Include routers
app.include_router(core_router.router)
app.include_router(auth_router.router)
app.include_router(profile_router.router)
app.include_router(checkin_router.router)
app.include_router(mission_router.router)
app.include_router(diary_router.router)
app.include_router(attendance_router.router)
app.include_router(coach_router.router)
app.include_router(community_router.router)


# ---------------------- ADDING EXCEPTION HANDLER ----------------------
@app.exception_handler(RateLimitExceeded)
async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"detail": "Too many requests. Please slow down."}
    )


@app.exception_handler(MindlogError)
async def mindlog_error_handler(request: Request, exc: MindlogError):
    if exc.status_code >= 500:
        logger.error(f"🛑 {request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})
