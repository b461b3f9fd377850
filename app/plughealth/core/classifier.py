"""Recency classifier.

Maps the time since an extension was last updated to component scores,
a weighted health score and a status band. Every function here is pure:
the reference time is passed in, never read from the clock.
"""

import math
from dataclasses import dataclass

from plughealth.models.health import HealthStatus

# A "month" is a fixed 30 days
MONTH_MS = 30 * 24 * 60 * 60 * 1000

# Placeholder baselines until richer signals are available
SUPPORT_BASELINE = 40
ACTIVITY_BASELINE = 50
COMPATIBILITY_BASELINE = 70

UPDATE_WEIGHT = 0.40
SUPPORT_WEIGHT = 0.25
ACTIVITY_WEIGHT = 0.20
COMPATIBILITY_WEIGHT = 0.15

# Months after which an extension is considered abandoned
ABANDONED_MONTHS = 24
ABANDONED_SCORE_FLOOR = 15

# (upper bound in months, update score), checked in order
_UPDATE_BANDS: tuple[tuple[float, int], ...] = (
    (3, 100),
    (6, 85),
    (12, 60),
    (24, 30),
)

# (minimum score, status) for extensions updated within ABANDONED_MONTHS
_STATUS_BANDS: tuple[tuple[int, HealthStatus], ...] = (
    (80, HealthStatus.GREEN),
    (55, HealthStatus.YELLOW),
    (30, HealthStatus.RED),
)

_RECENCY_PHRASES: tuple[tuple[float, str], ...] = (
    (1, "this month"),
    (3, "recently"),
    (6, "within 6 months"),
    (12, "within a year"),
    (24, "over a year ago"),
)


@dataclass(frozen=True, slots=True)
class HealthScores:
    """Classifier output for a single extension.

    Attributes:
        update_score: Recency score (0-100).
        support_score: Support baseline.
        activity_score: Activity baseline.
        compatibility_score: Compatibility baseline.
        health_score: Rounded weighted score, floored for abandoned extensions.
        health_status: Status band.
        summary: Recency phrase and status label.
    """

    update_score: int
    support_score: int
    activity_score: int
    compatibility_score: int
    health_score: int
    health_status: HealthStatus
    summary: str


def months_since(last_updated: int | None, now: int) -> float:
    """Months elapsed between ``last_updated`` and ``now``.

    Args:
        last_updated: Epoch milliseconds, or None when unknown.
        now: Reference time in epoch milliseconds.

    Returns:
        Elapsed 30-day months, or ``math.inf`` when the timestamp is unknown.
    """
    if last_updated is None:
        return math.inf
    return (now - last_updated) / MONTH_MS


def score_update(months: float) -> int:
    """Score how recently an extension was updated.

    An unknown timestamp (``math.inf``) scores the same as any age past
    ABANDONED_MONTHS.
    """
    for upper, score in _UPDATE_BANDS:
        if months < upper:
            return score
    return 0


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up (70.5 -> 71)."""
    return math.floor(value + 0.5)


def weighted_score(update: int, support: int, activity: int, compatibility: int) -> float:
    """Combine component scores with their fixed weights."""
    return (
        update * UPDATE_WEIGHT
        + support * SUPPORT_WEIGHT
        + activity * ACTIVITY_WEIGHT
        + compatibility * COMPATIBILITY_WEIGHT
    )


def score_to_status(health_score: float, months: float) -> HealthStatus:
    """Map a health score to a status band.

    Recency overrides the score: anything not updated within
    ABANDONED_MONTHS (or with an unknown date) is BLACK.
    """
    if months >= ABANDONED_MONTHS:
        return HealthStatus.BLACK
    for minimum, status in _STATUS_BANDS:
        if health_score >= minimum:
            return status
    return HealthStatus.BLACK


def describe_recency(months: float) -> str:
    """Human-readable phrase for the time since the last update."""
    if math.isinf(months):
        return "date unavailable"
    for upper, phrase in _RECENCY_PHRASES:
        if months < upper:
            return phrase
    return "2+ years ago"


def classify(last_updated: int | None, now: int) -> HealthScores:
    """Classify an extension by the recency of its last update.

    Args:
        last_updated: Manifest modification time in epoch milliseconds,
            or None when unknown.
        now: Reference time in epoch milliseconds.

    Returns:
        HealthScores with component scores, weighted score, status and summary.
    """
    months = months_since(last_updated, now)

    update_score = score_update(months)
    raw = weighted_score(update_score, SUPPORT_BASELINE, ACTIVITY_BASELINE, COMPATIBILITY_BASELINE)
    if months >= ABANDONED_MONTHS:
        raw = max(raw, ABANDONED_SCORE_FLOOR)

    health_score = round_half_up(raw)
    health_status = score_to_status(health_score, months)
    summary = f"Last update {describe_recency(months)} · {health_status.label}"

    return HealthScores(
        update_score=update_score,
        support_score=SUPPORT_BASELINE,
        activity_score=ACTIVITY_BASELINE,
        compatibility_score=COMPATIBILITY_BASELINE,
        health_score=health_score,
        health_status=health_status,
        summary=summary,
    )
