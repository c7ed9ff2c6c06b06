# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
import time

from mindlog.services.mission_service import MissionService
from mindlog.stores.base import ProfileStore

logger = logging.getLogger("scheduler")


def rollover_recurring_missions(profiles: ProfileStore, mission_service: MissionService) -> int:
    """
    Reset recurring missions of every user whose local day has turned over.
    Runs hourly so each timezone is picked up shortly after its midnight;
    a second run on the same local day resets nothing.
    """
    start = time.time()
    total_reset = 0
    failed = 0

    for user_id in profiles.list_ids():
        try:
            total_reset += mission_service.rollover(user_id)
        except Exception as e:
            failed += 1
            logger.error(f"🛑 Mission rollover failed for user {user_id}: {e}", exc_info=True)

    duration = round(time.time() - start, 2)
    logger.info(
        f"✅ Mission rollover completed in {duration} sec. Reset: {total_reset}, failed users: {failed}"
    )
    return total_reset
