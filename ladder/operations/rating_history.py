"""
Rating history entries.

One entry is created per rating update and never modified afterwards. An
entry records the first milestone the update crossed, if any.
"""

from datetime import datetime, timezone
from typing import Optional, Sequence, Tuple

from ladder.constants import FfaConstants
from ladder.data_models.ladder import MilestoneCrossing, RatingHistoryEntry

Milestones = Sequence[Tuple[str, float]]


def check_milestone_crossing(previous_rating: float, new_rating: float,
                             milestones: Milestones = FfaConstants.MILESTONES) -> Optional[MilestoneCrossing]:
    """
    Find the first milestone crossed between two ratings.

    Args:
        previous_rating: Rating before the update
        new_rating: Rating after the update
        milestones: (name, rating) pairs, highest first

    Returns:
        MilestoneCrossing, or None if no milestone was crossed
    """
    for name, threshold in milestones:
        if previous_rating < threshold <= new_rating:
            return MilestoneCrossing(name=name, direction='up', rating=threshold)
        if new_rating < threshold <= previous_rating:
            return MilestoneCrossing(name=name, direction='down', rating=threshold)
    return None


def build_history_entry(player_id: str, previous_rating: int, new_rating: int,
                        match_id: Optional[str] = None, timestamp: Optional[datetime] = None,
                        milestones: Milestones = FfaConstants.MILESTONES) -> RatingHistoryEntry:
    """Create the history record for one rating update."""
    return RatingHistoryEntry(
        player_id=player_id,
        previous_rating=previous_rating,
        new_rating=new_rating,
        match_id=match_id,
        timestamp=timestamp or datetime.now(timezone.utc),
        milestone=check_milestone_crossing(previous_rating, new_rating, milestones),
    )
