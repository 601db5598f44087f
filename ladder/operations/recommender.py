"""
Next-opponent and teammate suggestions.

Opponents are scored on rating proximity, how much rating a win would be
worth and whether they share the player's tier. Teammates on the team ladder
are simply the closest-rated players who are not already on a team.
"""

import logging
from typing import Iterable, Optional

from ladder.constants import RatingConstants, RecommendationConstants
from ladder.data_models.ladder import OpponentSuggestion, Player, TeammateSuggestion
from ladder.operations.tiers import ELO_TIER_TABLE, TierTable, tier_for_player
from ladder.utils.elo import EloCalculator

logger = logging.getLogger(__name__)


def is_same_player(player: Player, candidate: Player) -> bool:
    """Match on unique id or on normalized username; blank usernames never match."""
    if candidate.player_id == player.player_id:
        return True
    return bool(player.normalized_username) and candidate.normalized_username == player.normalized_username


def proximity_score(rating_gap: float) -> float:
    return max(
        0.0,
        RecommendationConstants.PROXIMITY_BASE - RecommendationConstants.PROXIMITY_PER_POINT * abs(rating_gap),
    )


def gain_score(expected_gain: int) -> int:
    low, high = RecommendationConstants.SWEET_SPOT_GAIN
    if low <= expected_gain <= high:
        return RecommendationConstants.SWEET_SPOT_SCORE
    if 0 < expected_gain < RecommendationConstants.MAX_USEFUL_GAIN:
        return RecommendationConstants.USEFUL_GAIN_SCORE
    return RecommendationConstants.FALLBACK_GAIN_SCORE


def recommend_opponent(player: Player, pool: Iterable[Player],
                       k_factor: int = RatingConstants.DEFAULT_K_FACTOR,
                       table: TierTable = ELO_TIER_TABLE) -> Optional[OpponentSuggestion]:
    """
    Pick the opponent with the most competitive value for ``player``.

    Args:
        player: Player asking for a suggestion
        pool: Candidate opponents (may include the player)
        k_factor: K-factor of the ladder
        table: Tier table of the ladder

    Returns:
        Best OpponentSuggestion, or None when no candidate offers a rating gain
    """
    player_tier = tier_for_player(player, table)
    best = None

    for candidate in pool:
        if is_same_player(player, candidate):
            continue

        expected_gain = EloCalculator.compute_rating_change(
            player.rating, candidate.rating, k_factor
        ).winner_delta
        if expected_gain <= 0:
            continue

        proximity = proximity_score(candidate.rating - player.rating)
        gain = gain_score(expected_gain)
        tier_bonus = (
            RecommendationConstants.SAME_TIER_BONUS
            if tier_for_player(candidate, table) == player_tier else 0
        )
        score = proximity + gain + tier_bonus

        # Strictly greater keeps the first candidate on ties
        if best is None or score > best.score:
            best = OpponentSuggestion(
                player=candidate,
                score=score,
                expected_gain=expected_gain,
                proximity_score=proximity,
                gain_score=gain,
                tier_bonus=tier_bonus,
            )

    if best is None:
        logger.debug(f"No suitable opponent for {player.username}")
    return best


def recommend_teammate(player: Player, pool: Iterable[Player]) -> Optional[TeammateSuggestion]:
    """
    Pick the closest-rated player without a team.

    Forming a team is not a win/loss event, so there is no gain filter.

    Returns:
        Best TeammateSuggestion, or None when nobody is available
    """
    best = None

    for candidate in pool:
        if is_same_player(player, candidate) or candidate.team_id is not None:
            continue

        rating_gap = abs(candidate.rating - player.rating)
        if best is None or rating_gap < best.rating_gap:
            best = TeammateSuggestion(
                player=candidate,
                compatibility=proximity_score(rating_gap),
                rating_gap=rating_gap,
            )

    return best
