# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

import os

# ✅ Only load .env in local/dev
if os.environ.get("ENV") != "production":
    from dotenv import load_dotenv
    load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# ---------------------------
# ✅ Storage
# ---------------------------

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./mindlog.db")
USE_MOCK_STORE = _flag("USE_MOCK_STORE", "false")

# Calendar days are cut in this zone unless a profile carries its own.
APP_TIMEZONE = os.getenv("APP_TIMEZONE", "Asia/Seoul")

# ---------------------------
# ✅ Auth
# ---------------------------

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24 * 30))

# ---------------------------
# ✅ Rate limiting & jobs
# ---------------------------

RATE_LIMIT = os.getenv("RATE_LIMIT", "60/minute")
RATE_LIMIT_ENABLED = _flag("RATE_LIMIT_ENABLED", "true")
SCHEDULER_ENABLED = _flag("SCHEDULER_ENABLED", "true")

# ---------------------------
# ✅ AI coach
# ---------------------------

COACH_API_KEY = os.getenv("COACH_API_KEY") or os.getenv("OPENAI_API_KEY")
COACH_API_URL = os.getenv("COACH_API_URL", "https://api.openai.com/v1/chat/completions")
COACH_MODEL = os.getenv("COACH_MODEL", "gpt-4")
COACH_TIMEOUT = float(os.getenv("COACH_TIMEOUT", 30))
COACH_MAX_RETRIES = int(os.getenv("COACH_MAX_RETRIES", 2))
_seed = os.getenv("COACH_FALLBACK_SEED")
COACH_FALLBACK_SEED = int(_seed) if _seed else None

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
