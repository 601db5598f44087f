"""
Momentum (hot/cold) classification over a trailing window of matches.

A single lucky win cannot make a player hot: every bracket needs a minimum
number of matches in the window. Winning while being outfragged is damped by
a K/D penalty on the top-half finish rate before the brackets are checked.
"""

import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

from ladder.constants import MomentumConstants
from ladder.data_models.ladder import MatchResult, MomentumReading, MomentumState

logger = logging.getLogger(__name__)

# Checked in order: hottest inward, then coldest inward
_HOT_BRACKETS = (
    (MomentumState.BLAZING, MomentumConstants.BLAZING),
    (MomentumState.HOT, MomentumConstants.HOT),
    (MomentumState.WARM, MomentumConstants.WARM),
)
_COLD_BRACKETS = (
    (MomentumState.FROZEN, MomentumConstants.FROZEN),
    (MomentumState.COLD, MomentumConstants.COLD),
    (MomentumState.COOL, MomentumConstants.COOL),
)


def _as_aware(moment: datetime) -> datetime:
    return moment if moment.tzinfo is not None else moment.replace(tzinfo=timezone.utc)


def results_in_window(results: Iterable[MatchResult], now: datetime,
                      window_days: int = MomentumConstants.WINDOW_DAYS) -> List[MatchResult]:
    """Results played within the trailing window ending at ``now``; undated results are skipped."""
    window_start = _as_aware(now) - timedelta(days=window_days)
    return [
        result for result in results
        if result.played_at is not None and _as_aware(result.played_at) >= window_start
    ]


def is_top_half(result: MatchResult) -> bool:
    """Placement within the better half of the field; for 1v1 this is a win."""
    return result.placement <= math.ceil(result.total_players / 2)


def kd_penalty(kd_ratio: float) -> float:
    """Multiplier applied to the top-half rate for a poor K/D."""
    if kd_ratio < MomentumConstants.SEVERE_KD:
        return MomentumConstants.SEVERE_KD_MULTIPLIER
    if kd_ratio < MomentumConstants.NEGATIVE_KD:
        return MomentumConstants.NEGATIVE_KD_MULTIPLIER
    return 1.0


def classify_momentum(recent_results: Iterable[MatchResult], now: Optional[datetime] = None,
                      window_days: int = MomentumConstants.WINDOW_DAYS) -> MomentumReading:
    """
    Classify a player's current momentum.

    Args:
        recent_results: The player's match results (any order, may include old ones)
        now: Reference time; defaults to the current UTC time
        window_days: Length of the trailing window

    Returns:
        MomentumReading with the state and the window statistics behind it
    """
    now = now or datetime.now(timezone.utc)
    window = results_in_window(recent_results, now, window_days)

    if not window:
        return MomentumReading(MomentumState.NEUTRAL)

    total = len(window)
    top_half_rate = sum(1 for result in window if is_top_half(result)) * 100.0 / total

    kills = sum(result.kills for result in window)
    deaths = sum(result.deaths for result in window)
    kd_ratio = kills / deaths if deaths > 0 else float(kills)

    effective_rate = top_half_rate * kd_penalty(kd_ratio)

    logger.debug(
        f"Momentum: {total} matches, {top_half_rate:.1f}% top-half, "
        f"K/D: {kd_ratio:.2f}, effective: {effective_rate:.1f}%"
    )

    state = MomentumState.NEUTRAL
    for candidate, (min_matches, min_rate) in _HOT_BRACKETS:
        if total >= min_matches and effective_rate >= min_rate:
            state = candidate
            break
    else:
        for candidate, (min_matches, max_rate) in _COLD_BRACKETS:
            if total >= min_matches and effective_rate <= max_rate:
                state = candidate
                break

    return MomentumReading(
        state=state,
        window_matches=total,
        top_half_rate=top_half_rate,
        kd_ratio=kd_ratio,
        effective_rate=effective_rate,
    )
