"""
Ladder position maintenance for challenge ladders.

Positions form a dense, duplicate-free 1..N sequence. A match only moves
anyone when the lower-ranked player wins: the winner takes the loser's
position and everyone from the loser down to (but not including) the winner
slides back one slot. Callers must serialize these transitions per ladder;
this module does no locking.
"""

import math
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from ladder.data_models.ladder import Player, PositionChange, PositionUpdate
from ladder.utils.ladder_exceptions import InvariantViolationError, PlayerNotFoundError
from ladder.utils.logger import setup_logger

logger = setup_logger(__name__)


def validate_positions(roster: Sequence[Player]) -> None:
    """
    Check the dense-unique-position invariant.

    Raises:
        InvariantViolationError: If positions are not exactly {1..N}
    """
    positions = [player.position for player in roster]
    expected = set(range(1, len(roster) + 1))
    seen = set(positions)

    if len(seen) != len(positions):
        duplicates = sorted({p for p in positions if positions.count(p) > 1})
        raise InvariantViolationError(f"duplicate positions {duplicates}")
    if seen != expected:
        missing = sorted(expected - seen)
        extra = sorted(seen - expected)
        raise InvariantViolationError(f"missing positions {missing}, unexpected positions {extra}")


def _index_roster(roster: Sequence[Player]) -> Dict[str, Player]:
    return {player.player_id: player for player in roster}


def apply_match_result(roster: Sequence[Player], winner_id: str, loser_id: str,
                       now: Optional[datetime] = None) -> PositionUpdate:
    """
    Apply a decided match to a challenge ladder roster.

    Args:
        roster: Current roster; positions must be exactly 1..N
        winner_id: ID of the winning player
        loser_id: ID of the losing player
        now: Timestamp used for a new first-place streak; defaults to UTC now

    Returns:
        PositionUpdate holding the new roster and the minimal position diff

    Raises:
        PlayerNotFoundError: If winner or loser is not on the roster
        InvariantViolationError: If the roster (or the result) breaks the position invariant
    """
    players = _index_roster(roster)

    for player_id in (winner_id, loser_id):
        if player_id not in players:
            logger.warning(f"Aborting position update: player {player_id} not found in roster")
            raise PlayerNotFoundError(player_id)

    if winner_id == loser_id:
        raise ValueError("Winner and loser must be different players")

    validate_positions(roster)

    winner = players[winner_id]
    loser = players[loser_id]

    if winner.position <= loser.position:
        logger.debug(
            f"Winner {winner_id} (#{winner.position}) already ranked above "
            f"loser {loser_id} (#{loser.position}) - keeping positions"
        )
        return PositionUpdate(updated_roster=list(roster))

    loser_position = loser.position
    winner_position = winner.position
    now = now or datetime.now(timezone.utc)

    diff: List[PositionChange] = []
    streak_started = None
    streak_cleared = None
    updated: List[Player] = []

    for player in roster:
        if player.player_id == winner_id:
            new_player = replace(player, position=loser_position)
            if loser_position == 1 and player.first_place_at is None:
                new_player = replace(new_player, first_place_at=now)
                streak_started = player.player_id
        elif loser_position <= player.position < winner_position:
            new_player = replace(player, position=player.position + 1)
            if player.position == 1 and player.first_place_at is not None:
                new_player = replace(new_player, first_place_at=None)
                streak_cleared = player.player_id
        else:
            updated.append(player)
            continue

        diff.append(PositionChange(new_player.player_id, new_player.position))
        updated.append(new_player)

    validate_positions(updated)

    logger.info(
        f"Winner {winner_id} moved #{winner_position} -> #{loser_position}; "
        f"{len(diff) - 1} player(s) shifted down"
    )

    return PositionUpdate(
        updated_roster=updated,
        roster_diff=diff,
        streak_started=streak_started,
        streak_cleared=streak_cleared,
    )


def streak_days(first_place_at: Optional[datetime], now: Optional[datetime] = None) -> int:
    """Days held at position 1, rounded up with a minimum of 1; 0 when there is no streak."""
    if first_place_at is None:
        return 0
    now = now or datetime.now(timezone.utc)
    if first_place_at.tzinfo is None:
        first_place_at = first_place_at.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    elapsed_days = (now - first_place_at).total_seconds() / 86400
    return max(1, math.ceil(elapsed_days))
