# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Mindlog - Daily Wellness Tracker project.
# Licensed under the MIT License - see the LICENSE file for details.

from datetime import date

QUOTES = [
    {"text": "Happiness is not something ready made. It comes from your own actions.", "author": "Dalai Lama"},
    {"text": "You don't have to control your thoughts. You just have to stop letting them control you.", "author": "Dan Millman"},
    {"text": "Almost everything will work again if you unplug it for a few minutes, including you.", "author": "Anne Lamott"},
    {"text": "Rest is not idleness.", "author": "John Lubbock"},
    {"text": "What lies behind us and what lies before us are tiny matters compared to what lies within us.", "author": "Ralph Waldo Emerson"},
    {"text": "Small steps every day.", "author": "Unknown"},
]


def quote_of_the_day(day: date) -> dict:
    # Same quote for everyone on a given day
    return dict(QUOTES[day.toordinal() % len(QUOTES)])
