# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

import enum


class Emotion(str, enum.Enum):
    happy = "happy"
    sad = "sad"
    anxious = "anxious"
    calm = "calm"
    stressed = "stressed"


class PostCategory(str, enum.Enum):
    challenge = "challenge"
    concern = "concern"
    info = "info"
    review = "review"
