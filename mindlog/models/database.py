# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

# ✅ Base model
Base = declarative_base()


def make_engine(url: str):
    """
    Build an engine for `url`. SQLite gets thread-sharing enabled (FastAPI runs
    sync routes in a threadpool); in-memory SQLite also pins one connection.
    Everything else gets the pooled setup used in production.
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)

    return create_engine(
        url,
        pool_size=10,          # Keep 10 connections open
        max_overflow=20,       # Allow 20 extra if under load
        pool_recycle=1800,     # Recycle every 30 mins
        pool_pre_ping=True     # Validate before using connection
    )


def make_session_factory(engine):
    # ✅ Session factory
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


def init_db(engine):
    # registers all tables on Base before creating them
    from mindlog import models  # noqa: F401
    Base.metadata.create_all(bind=engine)
