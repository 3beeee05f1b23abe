"""Sickness classification and illness-episode segmentation.

Pure functions over an in-memory snapshot of one profile's logs. No DB
access. Callers fetch the logs and key them by ISO date before calling in.
"""
import logging
import re
from collections.abc import Mapping
from datetime import date
from operator import itemgetter

from kidcare.models.logs import DailyLog
from kidcare.models.stats import Episode

logger = logging.getLogger(__name__)

# Largest gap, in calendar days, between two sick dates of the same episode.
EPISODE_GAP_TOLERANCE_DAYS = 1

_DATE_KEY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def is_sick(log: DailyLog | None) -> bool:
    """Return True if the log records at least one symptom or temperature.

    Medications and notes alone do not make a day sick. A missing log and an
    empty one are both not sick.
    """
    if log is None:
        return False
    return bool(log.symptoms) or bool(log.temperatures)


def parse_date_key(key: str | date) -> date:
    """Parse a canonical ``YYYY-MM-DD`` log key.

    Raises:
        ValueError: if the key is not a zero-padded ISO calendar date.
    """
    if isinstance(key, date):
        return key
    if not _DATE_KEY_PATTERN.match(key):
        raise ValueError(f"Log key must be YYYY-MM-DD, got {key!r}")
    return date.fromisoformat(key)


def sorted_sick_dates(logs: Mapping[str, DailyLog | None]) -> list[date]:
    """Return the dates whose logs are sick, ascending by calendar date."""
    parsed = sorted(
        ((parse_date_key(key), log) for key, log in logs.items()),
        key=itemgetter(0),
    )
    return [day for day, log in parsed if is_sick(log)]


def segment_episodes(logs: Mapping[str, DailyLog | None]) -> list[Episode]:
    """Group sick dates into illness episodes.

    Dates are scanned in calendar order. A sick date within
    ``EPISODE_GAP_TOLERANCE_DAYS`` of the previous sick date extends the
    current episode; a larger gap closes it and opens a new one. Days that
    are not sick (or not logged) are skipped and only matter through the
    gap they leave between sick dates.

    Duration counts logged sick days, not the calendar span: sick on the 1st
    and 2nd is one episode of 2, sick on the 1st and 3rd is two episodes of 1.

    Args:
        logs: Mapping of ``YYYY-MM-DD`` key → log (or None) for one profile.

    Returns:
        Episodes in chronological order.
    """
    episodes: list[Episode] = []
    current: list[date] = []
    last_sick_date: date | None = None

    for day in sorted_sick_dates(logs):
        if current and last_sick_date is not None:
            gap_days = abs((day - last_sick_date).days)
            if gap_days > EPISODE_GAP_TOLERANCE_DAYS:
                episodes.append(_close_episode(len(episodes), current))
                current = []
        current.append(day)
        last_sick_date = day

    if current:
        episodes.append(_close_episode(len(episodes), current))

    logger.debug("Segmented %d episode(s) from %d log(s)", len(episodes), len(logs))
    return episodes


def _close_episode(index: int, dates: list[date]) -> Episode:
    return Episode(
        index=index,
        start_date=dates[0],
        end_date=dates[-1],
        duration=len(dates),
        dates=list(dates),
    )
