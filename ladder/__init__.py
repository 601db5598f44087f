"""
Rating & ranking engine for a competitive game ladder.

The engine is pure computation: given rosters and approved matches it
returns new ratings, positions, tiers, momentum, suggestions and scorecards.
Persistence and presentation live outside this package.
"""

from ladder.data_models import (
    Match,
    MatchResult,
    MomentumState,
    Player,
    PositionUpdate,
    RankTier,
    RatingChange,
    TeamTier,
)
from ladder.data_models.scorecard import InsufficientData, Scorecard
from ladder.ladders import LADDERS, LadderConfig, get_ladder_config
from ladder.operations.momentum import classify_momentum
from ladder.operations.positions import apply_match_result
from ladder.operations.recommender import recommend_opponent, recommend_teammate
from ladder.operations.scorecard import grade_scorecard
from ladder.operations.tiers import classify_tier
from ladder.utils.elo import EloCalculator
from ladder.utils.ladder_exceptions import (
    InvariantViolationError,
    LadderException,
    PlayerNotFoundError,
    UnknownLadderError,
)

__version__ = '1.0.0'


def compute_rating_change(winner_rating: float, loser_rating: float, k_factor: float = 32) -> RatingChange:
    """Rating deltas for a decided head-to-head match."""
    return EloCalculator.compute_rating_change(winner_rating, loser_rating, k_factor)


__all__ = [
    'compute_rating_change', 'classify_tier', 'classify_momentum', 'apply_match_result',
    'recommend_opponent', 'recommend_teammate', 'grade_scorecard',
    'EloCalculator', 'LadderConfig', 'LADDERS', 'get_ladder_config',
    'Match', 'MatchResult', 'MomentumState', 'Player', 'PositionUpdate', 'RankTier',
    'RatingChange', 'TeamTier', 'InsufficientData', 'Scorecard',
    'LadderException', 'PlayerNotFoundError', 'InvariantViolationError', 'UnknownLadderError',
]
