# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

import math
from datetime import date
from numbers import Real
from typing import Union

from mindlog.models.enums import Emotion, PostCategory
from mindlog.utils.errors import InvalidInput

SCALE_MIN = 1
SCALE_MAX = 5


def validate_emotion(value: Union[str, Emotion]) -> Emotion:
    try:
        return Emotion(value)
    except ValueError:
        allowed = ", ".join(e.value for e in Emotion)
        raise InvalidInput(f"Unknown emotion '{value}'. Expected one of: {allowed}")


def validate_category(value: Union[str, PostCategory]) -> PostCategory:
    try:
        return PostCategory(value)
    except ValueError:
        allowed = ", ".join(c.value for c in PostCategory)
        raise InvalidInput(f"Unknown category '{value}'. Expected one of: {allowed}")


def validate_scale(name: str, value) -> int:
    # bool is an int subclass; True/False are not ratings
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(f"{name} must be an integer between {SCALE_MIN} and {SCALE_MAX}")
    if not SCALE_MIN <= value <= SCALE_MAX:
        raise InvalidInput(f"{name} must be between {SCALE_MIN} and {SCALE_MAX}, got {value}")
    return value


def validate_sleep_hours(value) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidInput("sleep_hours must be a number")
    if not math.isfinite(value):
        raise InvalidInput(f"sleep_hours must be a finite number, got {value}")
    if value < 0:
        raise InvalidInput(f"sleep_hours cannot be negative, got {value}")
    return float(value)


def require_text(name: str, value) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInput(f"{name} cannot be empty")
    return value.strip()


def validate_range(start: date, end: date):
    if start > end:
        raise InvalidInput("End date cannot be before start date.")
