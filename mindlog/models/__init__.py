# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.


from .user_profile import UserProfileRow
from .daily_checkin import DailyCheckinRow
from .diary import DiaryEntryRow
from .mission import MissionRow
from .letter import LetterRow
from .community import PostRow, CommentRow
