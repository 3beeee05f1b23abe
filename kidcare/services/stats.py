"""Pure calculation functions for illness statistics.

Stateless helpers that operate on pre-fetched data. No DB access. Callers
are responsible for fetching a profile's logs and keying them by
``YYYY-MM-DD`` before calling these functions.
"""
import logging
import math
from collections import Counter
from collections.abc import Mapping

from kidcare.models.logs import DailyLog
from kidcare.models.stats import Episode, Stats
from kidcare.services.episodes import is_sick, parse_date_key, segment_episodes

logger = logging.getLogger(__name__)


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round halves away from zero for positive values (2.25 → 2.3, 2.5 → 3).

    The built-in ``round`` rounds halves to even, which would report an
    average of 2.5 days between episodes as 2.
    """
    factor = 10**ndigits
    return math.floor(value * factor + 0.5) / factor


def count_symptoms(logs: Mapping[str, DailyLog | None]) -> Counter[str]:
    """Count symptom occurrences across sick days in chronological order.

    Counts total occurrences, not unique days. Insertion order follows the
    first date each label was logged on, which is the tie-break order used
    by :func:`top_symptom`.
    """
    counts: Counter[str] = Counter()
    for key in sorted(logs, key=parse_date_key):
        log = logs[key]
        if not is_sick(log):
            continue
        for symptom in log.symptoms:
            counts[symptom] += 1
    return counts


def mean_days_between_onsets(episodes: list[Episode]) -> int:
    """Average calendar-day gap between consecutive episode start dates.

    Measures start-to-start spacing, not the healthy gap between one
    episode's end and the next one's start. Returns 0 with fewer than two
    episodes.
    """
    if len(episodes) < 2:
        return 0
    gaps = [
        abs((later.start_date - earlier.start_date).days)
        for earlier, later in zip(episodes, episodes[1:])
    ]
    return int(round_half_up(sum(gaps) / len(gaps)))


def aggregate_stats(
    logs: Mapping[str, DailyLog | None],
    episodes: list[Episode] | None = None,
) -> Stats:
    """Compute illness statistics for one profile's logs.

    Args:
        logs: Mapping of ``YYYY-MM-DD`` key → log (or None). Key order does
            not matter; dates are sorted internally.
        episodes: The result of :func:`segment_episodes` for ``logs``, when the
            caller already has it. Segmented here otherwise.

    Returns:
        A :class:`Stats` record. An empty mapping, or one with no sick days,
        yields all-zero values and an empty symptom mapping.
    """
    if episodes is None:
        episodes = segment_episodes(logs)
    durations = [episode.duration for episode in episodes]

    average_duration = (
        round_half_up(sum(durations) / len(durations), 1) if durations else 0
    )

    stats = Stats(
        # Every sick date belongs to exactly one episode.
        total_sick_days=sum(durations),
        episodes_count=len(episodes),
        average_duration=average_duration,
        mean_time_between_illness=mean_days_between_onsets(episodes),
        common_symptoms=dict(count_symptoms(logs)),
    )
    logger.debug(
        "Aggregated stats: sick_days=%d episodes=%d avg=%.1f mtbi=%d",
        stats.total_sick_days,
        stats.episodes_count,
        stats.average_duration,
        stats.mean_time_between_illness,
    )
    return stats


def top_symptom(stats: Stats) -> str | None:
    """Return the most frequently logged symptom, or None if there are none.

    Ties go to the symptom that was logged first.
    """
    if not stats.common_symptoms:
        return None
    # max() keeps the first of equal keys; dicts preserve first-seen order.
    return max(stats.common_symptoms.items(), key=lambda item: item[1])[0]
