"""
Scoring Strategy Pattern for Ladder Rating Calculations

This module implements the Strategy pattern for the rating algorithms used by
the different ladders, so one shared finalization path can serve head-to-head
divisions, the team ladder's tier-value and free-for-all matches.

Includes:
- Head-to-head Elo with a per-ladder K-factor and rating floor
- Tier-value updates with minimum movement for the team ladder
- Pairwise free-for-all Elo with placement-scaled K-factors
- Placement points for free-for-all matches
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Optional
from dataclasses import dataclass
from ladder.constants import FfaConstants, RatingConstants
from ladder.data_models.ladder import FfaParticipant
from ladder.utils.elo import EloCalculator, apply_rating_floor
import logging

logger = logging.getLogger(__name__)

@dataclass
class ParticipantResult:
    """Represents a participant's result in a match"""
    player_id: str
    current_rating: int
    placement: int  # 1 = first place, 2 = second place, etc.

@dataclass
class ScoringResult:
    """Result of scoring calculation for a participant"""
    player_id: str
    previous_rating: int
    new_rating: int
    points_earned: int = 0

    @property
    def rating_change(self) -> int:
        return self.new_rating - self.previous_rating

class ScoringStrategy(ABC):
    """
    Abstract base class for scoring strategies.

    Each strategy implements a different approach to calculating rating changes
    based on match results and participant placements.
    """

    @abstractmethod
    def calculate_results(self, participants: List[ParticipantResult]) -> Dict[str, ScoringResult]:
        """
        Calculate scoring results for all participants.

        Args:
            participants: List of participant results with placements

        Returns:
            Dictionary mapping player_id to their ScoringResult
        """
        pass

    @abstractmethod
    def get_strategy_name(self) -> str:
        """Get human-readable name of this strategy"""
        pass

    @staticmethod
    def _split_head_to_head(participants: List[ParticipantResult]):
        if len(participants) != 2:
            raise ValueError(f"Head-to-head scoring requires exactly 2 participants, got {len(participants)}")
        p1, p2 = participants
        if p1.placement == p2.placement:
            raise ValueError("Head-to-head matches cannot end in a draw")
        return (p1, p2) if p1.placement < p2.placement else (p2, p1)

class Elo1v1Strategy(ScoringStrategy):
    """
    Traditional head-to-head Elo calculation strategy.

    Validates that exactly 2 participants with distinct placements are provided.
    """

    def __init__(self, k_factor: int = RatingConstants.DEFAULT_K_FACTOR, rating_floor: Optional[int] = None):
        self.k_factor = k_factor
        self.rating_floor = rating_floor

    def calculate_results(self, participants: List[ParticipantResult]) -> Dict[str, ScoringResult]:
        """Calculate head-to-head Elo changes"""
        winner, loser = self._split_head_to_head(participants)

        change = EloCalculator.compute_rating_change(
            winner.current_rating, loser.current_rating, self.k_factor
        )

        logger.info(
            f"1v1 Elo calculation: winner({winner.player_id}): {change.winner_delta}, "
            f"loser({loser.player_id}): {change.loser_delta}"
        )

        return {
            winner.player_id: ScoringResult(
                winner.player_id, winner.current_rating,
                winner.current_rating + change.winner_delta
            ),
            loser.player_id: ScoringResult(
                loser.player_id, loser.current_rating,
                apply_rating_floor(loser.current_rating + change.loser_delta, self.rating_floor)
            ),
        }

    def get_strategy_name(self) -> str:
        return "1v1 Elo"

class TierValueStrategy(ScoringStrategy):
    """
    Team ladder tier-value strategy.

    Smaller K-factor, at least one point of movement for both sides and a floor
    on the loser's tier-value.
    """

    def calculate_results(self, participants: List[ParticipantResult]) -> Dict[str, ScoringResult]:
        """Calculate tier-value changes for a decided team ladder match"""
        winner, loser = self._split_head_to_head(participants)

        new_winner, new_loser = EloCalculator.apply_tier_value_change(
            winner.current_rating, loser.current_rating
        )

        logger.info(
            f"Tier-value calculation: winner({winner.player_id}): {new_winner - winner.current_rating}, "
            f"loser({loser.player_id}): {new_loser - loser.current_rating}"
        )

        return {
            winner.player_id: ScoringResult(winner.player_id, winner.current_rating, new_winner),
            loser.player_id: ScoringResult(loser.player_id, loser.current_rating, new_loser),
        }

    def get_strategy_name(self) -> str:
        return "Tier Value"

class EloFfaStrategy(ScoringStrategy):
    """
    Free-For-All Elo calculation using pairwise comparison approach.

    - Averages expected/actual scores over the N-1 comparisons
    - Scales K-factor up for the podium and down for the bottom half
    - Handles placement ties as draws
    - Awards placement points alongside the rating change
    """

    def __init__(self, rating_floor: int = RatingConstants.FFA_RATING_FLOOR):
        self.rating_floor = rating_floor

    def calculate_results(self, participants: List[ParticipantResult]) -> Dict[str, ScoringResult]:
        """Calculate FFA Elo changes using pairwise comparison method"""
        n = len(participants)

        if n < 2:
            raise ValueError(f"FFA strategy requires at least 2 participants, got {n}")

        if n > 50:  # Sanity check for performance
            logger.warning(f"Large FFA calculation with {n} participants ({n*(n-1)//2} comparisons)")

        new_ratings = EloCalculator.compute_ffa_ratings(
            [FfaParticipant(p.player_id, p.current_rating, p.placement) for p in participants],
            self.rating_floor,
        )

        logger.info(f"FFA Elo calculation: {n} players, {n * (n - 1) // 2} comparisons")

        results = {}
        for participant in participants:
            results[participant.player_id] = ScoringResult(
                participant.player_id,
                participant.current_rating,
                new_ratings[participant.player_id],
                points_earned=placement_points(participant.placement),
            )
            logger.debug(
                f"Player {participant.player_id}: placement {participant.placement}, "
                f"rating change: {results[participant.player_id].rating_change}"
            )

        return results

    def get_strategy_name(self) -> str:
        return "FFA Elo (Pairwise)"

def placement_points(placement: int) -> int:
    """Points awarded for a free-for-all placement"""
    return FfaConstants.PLACEMENT_POINTS.get(placement, FfaConstants.DEFAULT_PLACEMENT_POINTS)

class ScoringStrategyFactory:
    """Factory for creating scoring strategies based on ladder configuration"""

    @staticmethod
    def create_strategy(scoring_type: str, **kwargs) -> ScoringStrategy:
        """
        Create appropriate scoring strategy based on type.

        Args:
            scoring_type: Type of scoring ("1v1", "FFA", "TierValue")
            **kwargs: k_factor / rating_floor for the rating strategies

        Returns:
            Configured ScoringStrategy instance
        """
        scoring_type = scoring_type.upper()

        if scoring_type == "1V1":
            return Elo1v1Strategy(
                k_factor=kwargs.get('k_factor', RatingConstants.DEFAULT_K_FACTOR),
                rating_floor=kwargs.get('rating_floor'),
            )
        elif scoring_type == "FFA":
            floor = kwargs.get('rating_floor')
            return EloFfaStrategy(RatingConstants.FFA_RATING_FLOOR if floor is None else floor)
        elif scoring_type == "TIERVALUE":
            return TierValueStrategy()
        else:
            raise ValueError(f"Unknown scoring type: {scoring_type}")

    @staticmethod
    def get_available_strategies() -> List[str]:
        """Get list of available strategy types"""
        return ["1v1", "FFA", "TierValue"]
