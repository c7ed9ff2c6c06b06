# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from typing import List, Optional, Tuple

from mindlog.models.records import Letter
from mindlog.services.coach_ai_service import CoachAIService, CoachReply
from mindlog.stores.base import LetterStore, ProfileStore
from mindlog.utils.clock import Clock
from mindlog.utils.errors import NotFound

logger = logging.getLogger(__name__)


class LetterService:
    """
    Letters to the AI coach. The letter is saved first, then the coach's
    answer (real or canned) is written onto it.
    """

    def __init__(self, letters: LetterStore, profiles: ProfileStore, coach: CoachAIService, clock: Clock):
        self.letters = letters
        self.profiles = profiles
        self.coach = coach
        self.clock = clock

    def _owned(self, user_id: str, letter_id: int) -> Letter:
        letter = self.letters.get(letter_id)
        if letter.user_id != user_id:
            raise NotFound(f"Letter {letter_id} not found")
        return letter

    def write(self, user_id: str, title: str, content: str, is_private: bool = False,
              coach_id: Optional[str] = None) -> Tuple[Letter, CoachReply]:
        self.profiles.get(user_id)
        letter = self.letters.create(user_id, title, content, is_private, coach_id, now=self.clock.now())

        reply = self.coach.reply(letter.title, letter.content)
        letter = self.letters.update(letter.id, ai_response=reply.text, now=self.clock.now())

        logger.info(f"✉️ Letter {letter.id} from user {user_id} answered (fallback={reply.fallback})")
        return letter, reply

    def mine(self, user_id: str, is_private: Optional[bool] = None) -> List[Letter]:
        return self.letters.list(user_id=user_id, is_private=is_private)

    def public(self, limit: int = 30) -> List[Letter]:
        return self.letters.list(is_private=False, limit=limit)

    def set_privacy(self, user_id: str, letter_id: int, is_private: bool) -> Letter:
        self._owned(user_id, letter_id)
        return self.letters.update(letter_id, is_private=is_private, now=self.clock.now())

    def remove(self, user_id: str, letter_id: int) -> None:
        self._owned(user_id, letter_id)
        self.letters.remove(letter_id)
