import math
from typing import Dict, List, Tuple

from ladder.constants import RatingConstants
from ladder.data_models.ladder import FfaParticipant, RatingChange


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)"""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def apply_rating_floor(rating: int, floor: int = None) -> int:
    """Clamp a stored rating at the ladder's floor, if it has one"""
    if floor is None:
        return rating
    return max(floor, rating)


class EloCalculator:
    """Handles rating calculations for all ladders"""

    @staticmethod
    def calculate_expected_score(rating_a: float, rating_b: float) -> float:
        """
        Calculate the expected score for player A against player B

        Args:
            rating_a: Player A's current rating
            rating_b: Player B's current rating

        Returns:
            Expected score (strictly between 0.0 and 1.0) for player A
        """
        return 1 / (1 + math.pow(10, (rating_b - rating_a) / RatingConstants.RATING_SCALE))

    @staticmethod
    def compute_rating_change(winner_rating: float, loser_rating: float,
                              k_factor: float = RatingConstants.DEFAULT_K_FACTOR) -> RatingChange:
        """
        Calculate rating deltas for both sides of a decided match

        Args:
            winner_rating: Winner's rating before the match
            loser_rating: Loser's rating before the match
            k_factor: Maximum rating swing

        Returns:
            RatingChange with integer deltas and both expected scores
        """
        if k_factor < 0:
            raise ValueError(f"k_factor must be non-negative, got {k_factor}")

        winner_expected = EloCalculator.calculate_expected_score(winner_rating, loser_rating)
        loser_expected = EloCalculator.calculate_expected_score(loser_rating, winner_rating)

        return RatingChange(
            winner_delta=round_half_away_from_zero(k_factor * (1 - winner_expected)),
            loser_delta=round_half_away_from_zero(k_factor * (0 - loser_expected)),
            winner_expected=winner_expected,
            loser_expected=loser_expected,
        )

    @staticmethod
    def compute_tier_value_change(winner_value: float, loser_value: float) -> Tuple[int, int]:
        """
        Calculate the team ladder's tier-value changes

        Uses a smaller K-factor than the head-to-head ladders and guarantees every
        decided match moves both sides by at least one point.

        Returns:
            Tuple of (winner_change, loser_change)
        """
        change = EloCalculator.compute_rating_change(
            winner_value, loser_value, RatingConstants.TIER_VALUE_K_FACTOR
        )
        return (
            max(RatingConstants.TIER_VALUE_MIN_GAIN, change.winner_delta),
            min(RatingConstants.TIER_VALUE_MIN_LOSS, change.loser_delta),
        )

    @staticmethod
    def apply_tier_value_change(winner_value: int, loser_value: int) -> Tuple[int, int]:
        """Return the new (winner, loser) tier-values with the loser floor applied"""
        winner_change, loser_change = EloCalculator.compute_tier_value_change(winner_value, loser_value)
        return (
            winner_value + winner_change,
            max(RatingConstants.TIER_VALUE_FLOOR, loser_value + loser_change),
        )

    @staticmethod
    def ffa_k_factor(placement: int, total_players: int) -> float:
        """K-factor for a free-for-all finisher, scaled by placement"""
        k_factor = RatingConstants.FFA_BASE_K_FACTOR
        if placement == 1:
            k_factor *= RatingConstants.FFA_WINNER_MULTIPLIER
        elif placement <= 3:
            k_factor *= RatingConstants.FFA_TOP3_MULTIPLIER
        elif placement > math.ceil(total_players / 2):
            k_factor *= RatingConstants.FFA_BOTTOM_HALF_MULTIPLIER
        return k_factor

    @staticmethod
    def compute_ffa_ratings(participants: List[FfaParticipant],
                            rating_floor: int = RatingConstants.FFA_RATING_FLOOR) -> Dict[str, int]:
        """
        Calculate new ratings for every participant of a free-for-all match

        Each participant is compared against every other one; expected and actual
        scores are averaged over the N-1 comparisons. Equal placements count as draws.

        Args:
            participants: Participants with their current rating and placement
            rating_floor: Minimum rating after the update

        Returns:
            Dictionary mapping player_id to new rating
        """
        n = len(participants)
        if n < 2:
            return {p.player_id: p.rating for p in participants}

        comparisons = n - 1
        new_ratings = {}
        for player in participants:
            total_expected = 0.0
            total_actual = 0.0
            for opponent in participants:
                if opponent.player_id == player.player_id:
                    continue
                total_expected += EloCalculator.calculate_expected_score(player.rating, opponent.rating)
                if player.placement < opponent.placement:
                    total_actual += 1.0
                elif player.placement == opponent.placement:
                    total_actual += 0.5

            k_factor = EloCalculator.ffa_k_factor(player.placement, n)
            change = k_factor * (total_actual / comparisons - total_expected / comparisons)
            new_ratings[player.player_id] = apply_rating_floor(
                round_half_away_from_zero(player.rating + change), rating_floor
            )

        return new_ratings

    @staticmethod
    def calculate_win_probability(rating_a: float, rating_b: float) -> float:
        """
        Calculate win probability for player A against player B

        Returns:
            Win probability as percentage (0.0 to 100.0)
        """
        return EloCalculator.calculate_expected_score(rating_a, rating_b) * 100

    @staticmethod
    def format_rating_change(change: int) -> str:
        """
        Format a rating change for display

        Args:
            change: The rating change value

        Returns:
            Formatted string with an explicit sign
        """
        if change > 0:
            return f"+{change}"
        elif change < 0:
            return str(change)
        else:
            return "±0"
