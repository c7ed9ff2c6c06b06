# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
import random
from dataclasses import dataclass
from time import sleep
from typing import Optional

import requests

from mindlog.utils.errors import Unavailable
from mindlog.utils.validators import require_text

# ---------------------------
# ✅ Logger Setup
# ---------------------------

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a warm, professional wellbeing coach. Listen to the user's worry, "
    "empathize, and offer practical advice and comfort in a friendly tone. "
    "Keep the answer to a short paragraph."
)

FALLBACK_REPLIES = [
    "Thank you for sharing this with me. Feeling this way is completely natural. "
    "How about being a little gentler with yourself today? Let your feelings be what they are.",
    "That sounds like a hard situation. Simply talking about it already takes courage. "
    "Start with something small. You are doing better than you think.",
    "I really understand how you feel. Maybe begin by accepting these emotions as they are, "
    "and practice being kind to yourself.",
]


@dataclass
class CoachReply:
    text: str
    fallback: bool = False


class CoachAIService:
    """
    Answers a coaching letter through an OpenAI-compatible chat endpoint.
    Any provider problem (no key, network, bad payload) is replaced with a
    canned reply; callers always get text back.
    """

    def __init__(
        self,
        api_key: Optional[str],
        api_url: str,
        model: str = "gpt-4",
        timeout: float = 30,
        max_retries: int = 2,
        seed: Optional[int] = None,
        retry_delay: float = 1.0,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.model = model
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay
        self.rng = random.Random(seed)

    def reply(self, title: str, content: str) -> CoachReply:
        title = require_text("title", title)
        content = require_text("content", content)

        try:
            return CoachReply(text=self._request_completion(title, content))
        except Unavailable as e:
            logger.warning(f"⚠️ Coach AI unavailable, using canned reply: {e.message}")
            return CoachReply(text=self.rng.choice(FALLBACK_REPLIES), fallback=True)

    def _request_completion(self, title: str, content: str) -> str:
        if not self.api_key:
            raise Unavailable("Coach AI key not configured")

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": f"Title: {title}\n\nContent: {content}"},
            ],
            "temperature": 0.7,
            "max_tokens": 500,
        }
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

        try_count = 0
        while True:
            try:
                logger.info(f"🔁 Sending coach letter to {self.api_url}")
                response = requests.post(self.api_url, headers=headers, json=payload, timeout=self.timeout)
                response.raise_for_status()
                result = response.json()
                break
            except requests.exceptions.RequestException as e:
                try_count += 1
                logger.warning("⚠️ Coach API request failed (attempt %d/%d).", try_count, self.max_retries)
                if try_count >= self.max_retries:
                    raise Unavailable(f"Coach API request failed after retries: {e}") from e
                sleep(self.retry_delay)  # brief pause before retry
            except ValueError as e:
                raise Unavailable("Coach API returned invalid JSON") from e

        try:
            text = result["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            logger.warning("⚠️ Unexpected coach response format: %s", result)
            raise Unavailable("Unexpected coach response format") from e

        if not isinstance(text, str) or not text.strip():
            raise Unavailable("Coach API returned an empty reply")
        return text.strip()
