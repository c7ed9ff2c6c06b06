# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

import threading
import weakref
from contextlib import contextmanager


class UserLockRegistry:
    """
    One lock per user id. Writes for a single user are serialized;
    different users never wait on each other.

    Locks are held weakly: an entry lives as long as someone is holding or
    waiting on it, then drops out of the registry.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks = weakref.WeakValueDictionary()

    def __len__(self):
        with self._guard:
            return len(self._locks)

    def lock_for(self, user_id: str):
        with self._guard:
            lock = self._locks.get(user_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[user_id] = lock
            return lock

    @contextmanager
    def hold(self, user_id: str):
        lock = self.lock_for(user_id)
        with lock:
            yield
