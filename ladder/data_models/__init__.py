from .ladder import (
    FfaParticipant,
    Match,
    MatchResult,
    MilestoneCrossing,
    MomentumReading,
    MomentumState,
    OpponentSuggestion,
    Player,
    PlayerStats,
    PositionChange,
    PositionUpdate,
    RankTier,
    RatingChange,
    RatingHistoryEntry,
    TeammateSuggestion,
    TeamTier,
)
from .scorecard import InsufficientData, Scorecard, ScorecardMetric

__all__ = [
    'FfaParticipant', 'Match', 'MatchResult', 'MilestoneCrossing', 'MomentumReading',
    'MomentumState', 'OpponentSuggestion', 'Player', 'PlayerStats', 'PositionChange',
    'PositionUpdate', 'RankTier', 'RatingChange', 'RatingHistoryEntry',
    'TeammateSuggestion', 'TeamTier', 'InsufficientData', 'Scorecard', 'ScorecardMetric',
]
