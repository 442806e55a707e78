"""
Streak computation over a set of completed calendar days.

Pure functions, no database access. Input dates may be unordered and may
contain duplicates; only distinct days count.

* **current streak**: consecutive days ending on ``today``, or on the day
  before if today has not been completed yet (the streak is still alive
  until the day is over).
* **longest streak**: the longest run of consecutive days anywhere in the
  history.
"""

from __future__ import annotations

import datetime
from typing import Iterable

_ONE_DAY = datetime.timedelta(days=1)


def current_streak(dates: Iterable[datetime.date], today: datetime.date) -> int:
    """Length of the run of consecutive completed days ending today or yesterday."""
    days = set(dates)
    if today in days:
        cursor = today
    elif today - _ONE_DAY in days:
        cursor = today - _ONE_DAY
    else:
        return 0

    streak = 0
    while cursor in days:
        streak += 1
        cursor -= _ONE_DAY
    return streak


def longest_streak(dates: Iterable[datetime.date]) -> int:
    """Length of the longest run of consecutive completed days."""
    ordered = sorted(set(dates))
    if not ordered:
        return 0

    best = run = 1
    for previous, day in zip(ordered, ordered[1:]):
        run = run + 1 if day - previous == _ONE_DAY else 1
        best = max(best, run)
    return best
