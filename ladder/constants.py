"""
Engine-wide constants for the ladder rating & ranking engine.

This module contains the numeric rule tables used throughout the engine:
rating formula parameters, tier thresholds, momentum brackets, scorecard
grading tables and cache lifetimes.
"""

class RatingConstants:
    """Constants related to rating calculations."""

    # Logistic scale of the expected-score formula
    RATING_SCALE = 400

    # Head-to-head ladders
    DEFAULT_K_FACTOR = 32

    # Team ladder secondary rating (tier-value)
    TIER_VALUE_K_FACTOR = 25
    TIER_VALUE_START = 1000
    TIER_VALUE_FLOOR = 500
    TIER_VALUE_MIN_GAIN = 1
    TIER_VALUE_MIN_LOSS = -1

    # Free-for-all K-factor multipliers by placement
    FFA_BASE_K_FACTOR = 32
    FFA_WINNER_MULTIPLIER = 1.5   # 1st place
    FFA_TOP3_MULTIPLIER = 1.2     # 2nd-3rd place
    FFA_BOTTOM_HALF_MULTIPLIER = 0.8
    FFA_RATING_FLOOR = 100
    FFA_STARTING_RATING = 1000


class TierConstants:
    """Thresholds for rank tiers."""

    BRONZE_MIN_RATING = 200
    SILVER_MIN_RATING = 500
    GOLD_MIN_RATING = 700
    EMERALD_MIN_RATING = 1000
    EMERALD_MIN_WIN_RATE = 80
    EMERALD_MIN_MATCHES = 20

    # Placement incentive used by a single ladder
    RANK_FLOOR_MATCHES = 5

    # Team ladder, win-rate percent
    CHAMPION_MIN_WIN_RATE = 90
    ELITE_MIN_WIN_RATE = 80
    VETERAN_MIN_WIN_RATE = 70
    SKILLED_MIN_WIN_RATE = 60
    TEAM_MIN_MATCHES_FOR_RANKING = 6


class MomentumConstants:
    """Hot/cold brackets over a trailing window of matches."""

    WINDOW_DAYS = 7

    # (min matches, min effective rate %)
    BLAZING = (5, 80)
    HOT = (3, 65)
    WARM = (2, 50)

    # (min matches, max effective rate %)
    FROZEN = (5, 15)
    COLD = (3, 25)
    COOL = (2, 40)

    # K/D penalty applied to the top-half rate
    SEVERE_KD = 0.5
    SEVERE_KD_MULTIPLIER = 0.6
    NEGATIVE_KD = 1.0
    NEGATIVE_KD_MULTIPLIER = 0.8


class RecommendationConstants:
    """Weights for opponent and teammate scoring."""

    PROXIMITY_BASE = 100
    PROXIMITY_PER_POINT = 0.5

    SWEET_SPOT_GAIN = (3, 8)
    SWEET_SPOT_SCORE = 50
    MAX_USEFUL_GAIN = 15
    USEFUL_GAIN_SCORE = 30
    FALLBACK_GAIN_SCORE = 10

    SAME_TIER_BONUS = 40


class ScorecardConstants:
    """Eligibility, fairness and grading tables for player scorecards."""

    MIN_MATCHES = 30
    MIN_OPPONENTS = 6

    # Fairness adjustment
    MAX_OPPONENT_SHARE = 30  # percent of total matches
    MAX_MATCHES_PER_OPPONENT = 30

    DOMINANT_WIN_MARGIN = 10
    CLOSE_GAME_MARGIN = 3
    DOMINANT_WEIGHT = 0.7
    CLOSE_WEIGHT = 0.3

    MAX_COUNTED_MAPS = 10
    POINTS_PER_MAP = 3
    BEST_MAP_WEIGHT = 0.7
    BEST_MAP_COUNT = 3
    BEST_MAP_MIN_MATCHES = 3

    # Letter thresholds, S through D; anything lower is F
    WIN_RATE_THRESHOLDS = (95, 80, 65, 55, 45)
    AVERAGE_SCORE_THRESHOLDS = (19.0, 17.5, 16.0, 14.5, 13.0)
    MASTERY_THRESHOLDS = (50, 40, 30, 20, 10)
    MAP_MASTERY_THRESHOLDS = (95, 85, 75, 65, 55)
    KD_THRESHOLDS = (1.8, 1.5, 1.2, 1.0, 0.8)
    OVERALL_THRESHOLDS = (95, 82, 68, 54, 40)

    GRADE_POINTS = {'S': 100, 'A': 85, 'B': 70, 'C': 55, 'D': 40, 'F': 20}

    WEIGHTS = {
        'win_rate': 0.30,
        'scoring': 0.25,
        'opponent_mastery': 0.20,
        'map_mastery': 0.15,
        'kd': 0.10,
    }


class CacheConstants:
    """Constants for caching behavior."""

    ROSTER_TTL = 300          # 5 minutes
    PROFILE_TTL = 600         # 10 minutes
    MATCH_STATS_TTL = 180     # 3 minutes
    RATING_HISTORY_TTL = 120  # 2 minutes

    # Maximum cache size (number of entries)
    DEFAULT_MAX_CACHE_SIZE = 1000


class FfaConstants:
    """Free-for-all placement points and rating milestones."""

    PLACEMENT_POINTS = {1: 100, 2: 75, 3: 55, 4: 40, 5: 30, 6: 20, 7: 15, 8: 10}
    DEFAULT_PLACEMENT_POINTS = 5

    # (name, rating), highest first
    MILESTONES = (
        ('Legend', 2000),
        ('Expert', 1500),
        ('Veteran', 1200),
        ('Regular', 1000),
        ('Newcomer', 800),
    )
