# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

from .base import ProfileStore, CheckinStore, MissionStore, DiaryStore
from .base import LetterStore, PostStore, CommentStore
