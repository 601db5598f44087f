"""
Rank tier classification.

Tiers are never stored as ground truth; they are recomputed from rating,
win rate and match count every time a ladder is viewed. A tier table is an
ordered set of brackets checked from the highest tier down so that the extra
conditions of a high tier never leak into a lower one.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from ladder.constants import TierConstants
from ladder.data_models.ladder import Player, RankTier, TeamTier

Tier = Union[RankTier, TeamTier]


@dataclass(frozen=True)
class TierBracket:
    """Minimum requirements for one tier; None means no requirement."""
    tier: Tier
    min_rating: Optional[float] = None
    min_win_rate: Optional[float] = None
    min_matches: int = 0

    def admits(self, rating: float, match_count: int, win_rate: float) -> bool:
        if self.min_rating is not None and rating < self.min_rating:
            return False
        if self.min_win_rate is not None and win_rate < self.min_win_rate:
            return False
        return match_count >= self.min_matches


@dataclass(frozen=True)
class TierTable:
    """Ordered brackets, highest tier first."""
    name: str
    brackets: Tuple[TierBracket, ...]
    unranked: Tier
    min_matches: int = 1
    rank_floor_matches: Optional[int] = None

    @property
    def lowest_ranked(self) -> Tier:
        return self.brackets[-1].tier

    def with_rank_floor(self, matches: int = TierConstants.RANK_FLOOR_MATCHES) -> "TierTable":
        return TierTable(self.name, self.brackets, self.unranked, self.min_matches, matches)


ELO_TIER_TABLE = TierTable(
    name="elo",
    brackets=(
        TierBracket(
            RankTier.EMERALD,
            min_rating=TierConstants.EMERALD_MIN_RATING,
            min_win_rate=TierConstants.EMERALD_MIN_WIN_RATE,
            min_matches=TierConstants.EMERALD_MIN_MATCHES,
        ),
        TierBracket(RankTier.GOLD, min_rating=TierConstants.GOLD_MIN_RATING),
        TierBracket(RankTier.SILVER, min_rating=TierConstants.SILVER_MIN_RATING),
        TierBracket(RankTier.BRONZE, min_rating=TierConstants.BRONZE_MIN_RATING),
    ),
    unranked=RankTier.UNRANKED,
)

# D3 starts everyone at 1000, so its brackets sit higher and are rating-only
D3_TIER_TABLE = TierTable(
    name="d3",
    brackets=(
        TierBracket(RankTier.EMERALD, min_rating=2000),
        TierBracket(RankTier.GOLD, min_rating=1800),
        TierBracket(RankTier.SILVER, min_rating=1600),
        TierBracket(RankTier.BRONZE, min_rating=1400),
    ),
    unranked=RankTier.UNRANKED,
)

TEAM_TIER_TABLE = TierTable(
    name="team",
    brackets=(
        TierBracket(TeamTier.CHAMPION, min_win_rate=TierConstants.CHAMPION_MIN_WIN_RATE),
        TierBracket(TeamTier.ELITE, min_win_rate=TierConstants.ELITE_MIN_WIN_RATE),
        TierBracket(TeamTier.VETERAN, min_win_rate=TierConstants.VETERAN_MIN_WIN_RATE),
        TierBracket(TeamTier.SKILLED, min_win_rate=TierConstants.SKILLED_MIN_WIN_RATE),
        TierBracket(TeamTier.ROOKIE),
    ),
    unranked=TeamTier.UNRANKED,
    min_matches=TierConstants.TEAM_MIN_MATCHES_FOR_RANKING,
)


def classify_tier(rating: float, match_count: int, win_rate_percent: float,
                  table: TierTable = ELO_TIER_TABLE) -> Tier:
    """
    Classify a player into a tier.

    Args:
        rating: Current rating
        match_count: Matches played on this ladder
        win_rate_percent: Win rate (0-100)
        table: Tier table of the ladder

    Returns:
        Highest tier whose bracket admits the player
    """
    if match_count <= 0 or match_count < table.min_matches:
        return table.unranked

    for bracket in table.brackets:
        if bracket.admits(rating, match_count, win_rate_percent):
            return bracket.tier

    # Participation incentive: enough matches guarantees the first ranked tier
    if table.rank_floor_matches is not None and match_count >= table.rank_floor_matches:
        return table.lowest_ranked

    return table.unranked


def tier_for_player(player: Player, table: TierTable = ELO_TIER_TABLE) -> Tier:
    """Classify a roster row using its own counters."""
    return classify_tier(player.rating, player.matches, player.win_rate, table)


def tier_thresholds(table: TierTable = ELO_TIER_TABLE) -> Tuple[Tuple[str, float], ...]:
    """Rating thresholds of a table as (tier label, rating), highest first."""
    return tuple(
        (bracket.tier.label, bracket.min_rating)
        for bracket in table.brackets
        if bracket.min_rating is not None
    )
