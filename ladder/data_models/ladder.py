"""
Ladder data models.

Provides immutable records for players, matches and the results the engine
computes from them. The store layer normalizes whatever it persists into
these shapes before handing them to the engine.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import List, Optional, Tuple


class RankTier(IntEnum):
    """Rating-based tiers, lowest first."""
    UNRANKED = 0
    BRONZE = 1
    SILVER = 2
    GOLD = 3
    EMERALD = 4

    @property
    def label(self) -> str:
        return self.name.title()


class TeamTier(IntEnum):
    """Win-rate based tiers used by the team ladder."""
    UNRANKED = 0
    ROOKIE = 1
    SKILLED = 2
    VETERAN = 3
    ELITE = 4
    CHAMPION = 5

    @property
    def label(self) -> str:
        return self.name.title()


class MomentumState(IntEnum):
    """Short-window hot/cold state, coldest first."""
    FROZEN = 0
    COLD = 1
    COOL = 2
    NEUTRAL = 3
    WARM = 4
    HOT = 5
    BLAZING = 6

    @property
    def label(self) -> str:
        return self.name.title()


@dataclass(frozen=True)
class Player:
    """Single roster row."""
    player_id: str
    username: str
    rating: int
    position: int
    tier_value: int = 1000
    matches: int = 0
    wins: int = 0
    losses: int = 0
    first_place_at: Optional[datetime] = None
    team_id: Optional[str] = None
    country: Optional[str] = None

    @property
    def win_rate(self) -> float:
        """Win rate as a percentage (0.0 to 100.0)"""
        if self.matches <= 0:
            return 0.0
        return self.wins * 100.0 / self.matches

    @property
    def normalized_username(self) -> str:
        return self.username.strip().casefold()


@dataclass(frozen=True)
class MatchResult:
    """One player's view of an approved match (1v1 or free-for-all)."""
    player_id: str
    won: bool
    placement: int
    total_players: int
    kills: int = 0
    deaths: int = 0
    played_at: Optional[datetime] = None
    opponent_id: Optional[str] = None
    map_name: Optional[str] = None
    match_id: Optional[str] = None
    points_earned: int = 0


@dataclass(frozen=True)
class Match:
    """Approved head-to-head match."""
    match_id: str
    winner_id: str
    loser_id: str
    winner_score: int = 0
    loser_score: int = 0
    winner_suicides: int = 0
    loser_suicides: int = 0
    map_name: Optional[str] = None
    approved_at: Optional[datetime] = None
    ladder: Optional[str] = None

    def involves(self, player_id: str) -> bool:
        return player_id in (self.winner_id, self.loser_id)

    def opponent_of(self, player_id: str) -> str:
        return self.loser_id if player_id == self.winner_id else self.winner_id

    def result_for(self, player_id: str) -> MatchResult:
        """
        Build the per-player view of this match.

        Kills are the player's own score and deaths the opponent's score.

        Raises:
            ValueError: If the player did not take part in the match
        """
        if not self.involves(player_id):
            raise ValueError(f"Player '{player_id}' did not play match '{self.match_id}'")

        won = player_id == self.winner_id
        kills, deaths = (
            (self.winner_score, self.loser_score) if won
            else (self.loser_score, self.winner_score)
        )
        return MatchResult(
            player_id=player_id,
            won=won,
            placement=1 if won else 2,
            total_players=2,
            kills=kills,
            deaths=deaths,
            played_at=self.approved_at,
            opponent_id=self.opponent_of(player_id),
            map_name=self.map_name,
            match_id=self.match_id,
        )


@dataclass(frozen=True)
class RatingChange:
    """Result of a head-to-head rating calculation."""
    winner_delta: int
    loser_delta: int
    winner_expected: float
    loser_expected: float


@dataclass(frozen=True)
class FfaParticipant:
    """Participant in a free-for-all match."""
    player_id: str
    rating: int
    placement: int


@dataclass(frozen=True)
class MilestoneCrossing:
    """A rating milestone crossed by a single update."""
    name: str
    direction: str  # 'up' or 'down'
    rating: int


@dataclass(frozen=True)
class RatingHistoryEntry:
    """Append-only record of one rating update."""
    player_id: str
    previous_rating: int
    new_rating: int
    match_id: Optional[str]
    timestamp: datetime
    milestone: Optional[MilestoneCrossing] = None

    @property
    def change(self) -> int:
        return self.new_rating - self.previous_rating


@dataclass(frozen=True)
class PositionChange:
    """One row of a position batch write."""
    player_id: str
    new_position: int


@dataclass(frozen=True)
class PositionUpdate:
    """Outcome of applying a match result to a roster."""
    updated_roster: List[Player]
    roster_diff: List[PositionChange] = field(default_factory=list)
    streak_started: Optional[str] = None
    streak_cleared: Optional[str] = None

    @property
    def changed(self) -> bool:
        return bool(self.roster_diff)


@dataclass(frozen=True)
class MomentumReading:
    """Momentum state plus the window statistics it was derived from."""
    state: MomentumState
    window_matches: int = 0
    top_half_rate: float = 0.0
    kd_ratio: float = 0.0
    effective_rate: float = 0.0


@dataclass(frozen=True)
class OpponentSuggestion:
    """Best next opponent and how it was scored."""
    player: Player
    score: float
    expected_gain: int
    proximity_score: float
    gain_score: int
    tier_bonus: int


@dataclass(frozen=True)
class TeammateSuggestion:
    """Closest-rated player without a team."""
    player: Player
    compatibility: float
    rating_gap: int


@dataclass(frozen=True)
class PlayerStats:
    """Aggregated match history for one player."""
    player_id: str
    matches: int = 0
    wins: int = 0
    losses: int = 0
    kills: int = 0
    deaths: int = 0
    top3: int = 0
    points: int = 0
    maps: Tuple[str, ...] = ()

    @property
    def win_rate(self) -> float:
        return self.wins * 100.0 / self.matches if self.matches else 0.0

    @property
    def kd_ratio(self) -> float:
        return self.kills / self.deaths if self.deaths else float(self.kills)
