# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.


class MindlogError(Exception):
    """Base class for every domain error. `status_code` is what the API returns."""

    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message or self.__class__.__name__


class NotFound(MindlogError):
    status_code = 404


class AlreadyExists(MindlogError):
    status_code = 409


class InvalidInput(MindlogError):
    status_code = 422


class Unavailable(MindlogError):
    """Storage backend or an external provider could not be reached."""

    status_code = 503
