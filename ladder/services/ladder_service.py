"""
Ladder service: composes the engine operations for one ladder.

Wraps rating updates, position maintenance and the read-only ladder views
(tiers, momentum, suggested opponents, scorecards) behind per-data-class
TTL caches. Everything here is synchronous; fetching rosters and persisting
the returned values is the caller's job, as is serializing finalize calls
for the same ladder.
"""

import time
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from ladder.config import Config
from ladder.data_models.ladder import (
    Match,
    MatchResult,
    MomentumReading,
    OpponentSuggestion,
    Player,
    PlayerStats,
    PositionUpdate,
    RatingHistoryEntry,
)
from ladder.data_models.scorecard import InsufficientData, Scorecard
from ladder.constants import FfaConstants
from ladder.ladders import ORDER_BY_RATING, ORDER_BY_WIN_RATE, LadderConfig
from ladder.operations.momentum import classify_momentum
from ladder.operations.player_stats import summarize_results
from ladder.operations.positions import apply_match_result, streak_days
from ladder.operations.rating_history import build_history_entry
from ladder.operations.recommender import recommend_opponent
from ladder.operations.scorecard import grade_scorecard
from ladder.operations.standings import position_diff, rank_by_rating, rank_by_win_rate
from ladder.operations.tiers import Tier, tier_for_player, tier_thresholds
from ladder.services.result_cache import ResultCache
from ladder.utils.ladder_exceptions import PlayerNotFoundError
from ladder.utils.logger import setup_logger
from ladder.utils.scoring_strategies import ParticipantResult, ScoringResult, ScoringStrategyFactory

logger = setup_logger(__name__)


@dataclass(frozen=True)
class LadderEntry:
    """One computed ladder row."""
    player: Player
    tier: Tier
    momentum: MomentumReading
    suggestion: Optional[OpponentSuggestion]
    stats: PlayerStats
    streak_days: int = 0


@dataclass(frozen=True)
class MatchFinalization:
    """Everything the store layer must persist after a match is approved."""
    ladder: str
    ratings: Dict[str, ScoringResult]
    position_update: PositionUpdate
    history: List[RatingHistoryEntry] = field(default_factory=list)

    @property
    def updated_roster(self) -> List[Player]:
        return self.position_update.updated_roster


class LadderService:
    """Cached engine facade for a single ladder."""

    def __init__(self, ladder_config: LadderConfig, clock: Callable[[], float] = time.monotonic,
                 ttls: Optional[Mapping[str, float]] = None, max_size: int = None):
        """
        Initialize the service.

        Args:
            ladder_config: Rules of the ladder this service computes for
            clock: Monotonic clock used by the caches
            ttls: Optional TTL overrides per data class (roster, profile, match_stats, rating_history)
            max_size: Maximum entries per cache
        """
        self.ladder = ladder_config
        self.strategy = ScoringStrategyFactory.create_strategy(
            ladder_config.scoring_type,
            k_factor=ladder_config.k_factor,
            rating_floor=ladder_config.rating_floor,
        )
        cache_ttls = dict(Config.cache_ttls())
        cache_ttls.update(ttls or {})
        size = max_size or Config.CACHE_MAX_SIZE
        self.roster_cache = ResultCache(cache_ttls['roster'], size, clock, name=f'{ladder_config.name}:roster')
        self.profile_cache = ResultCache(cache_ttls['profile'], size, clock, name=f'{ladder_config.name}:profile')
        self.match_stats_cache = ResultCache(
            cache_ttls['match_stats'], size, clock, name=f'{ladder_config.name}:match_stats'
        )
        self.rating_history_cache = ResultCache(
            cache_ttls['rating_history'], size, clock, name=f'{ladder_config.name}:rating_history'
        )

    # ------------------------------------------------------------------
    # Match finalization
    # ------------------------------------------------------------------

    def _milestones(self):
        if self.ladder.ordering == ORDER_BY_RATING:
            return FfaConstants.MILESTONES
        return tier_thresholds(self.ladder.tier_table)

    def _rating_of(self, player: Player) -> int:
        return player.tier_value if self.ladder.uses_tier_value else player.rating

    def _with_rating(self, player: Player, new_rating: int) -> Player:
        if self.ladder.uses_tier_value:
            return replace(player, tier_value=new_rating)
        return replace(player, rating=new_rating)

    def _reorder(self, roster: Sequence[Player], winner_id: str, loser_id: str,
                 now: datetime) -> PositionUpdate:
        if self.ladder.ordering == ORDER_BY_RATING:
            ranked = rank_by_rating(roster)
        elif self.ladder.ordering == ORDER_BY_WIN_RATE:
            ranked = rank_by_win_rate(roster, self.ladder.tier_table.min_matches)
        else:
            return apply_match_result(roster, winner_id, loser_id, now)
        return PositionUpdate(updated_roster=ranked, roster_diff=position_diff(roster, ranked))

    def finalize_match(self, roster: Sequence[Player], match: Match,
                       now: Optional[datetime] = None) -> MatchFinalization:
        """
        Compute new ratings, counters and positions for an approved 1v1 match.

        Args:
            roster: Current roster of this ladder
            match: Approved match
            now: Timestamp for history entries and streaks

        Returns:
            MatchFinalization with the values to persist

        Raises:
            ValueError: If the winner and loser are the same player
            PlayerNotFoundError: If either player is missing from the roster
            InvariantViolationError: If a challenge ladder's positions are not dense
        """
        if match.winner_id == match.loser_id:
            raise ValueError(f"Match {match.match_id}: winner and loser must be different players")

        now = now or match.approved_at or datetime.now(timezone.utc)
        players = {player.player_id: player for player in roster}
        for player_id in (match.winner_id, match.loser_id):
            if player_id not in players:
                logger.warning(f"Cannot finalize match {match.match_id}: {player_id} not on {self.ladder.name}")
                raise PlayerNotFoundError(player_id, self.ladder.name)

        winner = players[match.winner_id]
        loser = players[match.loser_id]
        ratings = self.strategy.calculate_results([
            ParticipantResult(winner.player_id, self._rating_of(winner), 1),
            ParticipantResult(loser.player_id, self._rating_of(loser), 2),
        ])

        rated = []
        for player in roster:
            if player.player_id == winner.player_id:
                player = replace(self._with_rating(player, ratings[player.player_id].new_rating),
                                 matches=player.matches + 1, wins=player.wins + 1)
            elif player.player_id == loser.player_id:
                player = replace(self._with_rating(player, ratings[player.player_id].new_rating),
                                 matches=player.matches + 1, losses=player.losses + 1)
            rated.append(player)

        position_update = self._reorder(rated, winner.player_id, loser.player_id, now)

        milestones = self._milestones()
        history = [
            build_history_entry(
                result.player_id, result.previous_rating, result.new_rating,
                match.match_id, now, milestones,
            )
            for result in (ratings[winner.player_id], ratings[loser.player_id])
        ]

        self.invalidate_for_match(winner, loser)
        logger.info(
            f"Finalized match {match.match_id} on {self.ladder.name}: "
            f"{len(position_update.roster_diff)} position change(s)"
        )
        return MatchFinalization(self.ladder.name, ratings, position_update, history)

    def finalize_ffa_match(self, roster: Sequence[Player], placements: Mapping[str, int],
                           match_id: Optional[str] = None,
                           now: Optional[datetime] = None) -> MatchFinalization:
        """
        Compute new ratings and standings for a free-for-all match.

        Args:
            roster: Current roster of this ladder
            placements: player_id -> placement (1 = winner; equal placements are ties)
            match_id: Match reference for the history entries
            now: Timestamp for history entries
        """
        now = now or datetime.now(timezone.utc)
        players = {player.player_id: player for player in roster}
        for player_id in placements:
            if player_id not in players:
                logger.warning(f"Cannot finalize FFA match {match_id}: {player_id} not on {self.ladder.name}")
                raise PlayerNotFoundError(player_id, self.ladder.name)

        ratings = self.strategy.calculate_results([
            ParticipantResult(player_id, players[player_id].rating, placement)
            for player_id, placement in placements.items()
        ])

        rated = []
        for player in roster:
            if player.player_id in ratings:
                first = placements[player.player_id] == 1
                player = replace(
                    player,
                    rating=ratings[player.player_id].new_rating,
                    matches=player.matches + 1,
                    wins=player.wins + (1 if first else 0),
                    losses=player.losses + (0 if first else 1),
                )
            rated.append(player)

        ranked = rank_by_rating(rated)
        position_update = PositionUpdate(updated_roster=ranked, roster_diff=position_diff(rated, ranked))
        history = [
            build_history_entry(result.player_id, result.previous_rating, result.new_rating,
                                match_id, now, FfaConstants.MILESTONES)
            for result in ratings.values()
        ]

        self.invalidate_for_match(*(players[player_id] for player_id in placements))
        return MatchFinalization(self.ladder.name, ratings, position_update, history)

    def invalidate_for_match(self, *players: Player) -> None:
        """Drop every cached value a finalized match makes stale."""
        self.roster_cache.invalidate_all()
        for player in players:
            self.match_stats_cache.invalidate(player.player_id)
            self.match_stats_cache.invalidate(('stats', player.player_id))
            self.profile_cache.invalidate(player.username)
            self.rating_history_cache.invalidate(player.player_id)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    def momentum(self, player_id: str, results: Iterable[MatchResult],
                 now: Optional[datetime] = None) -> MomentumReading:
        return self.match_stats_cache.get_or_compute(
            player_id, lambda: classify_momentum(results, now)
        )

    def player_stats(self, player_id: str, results: Iterable[MatchResult]) -> PlayerStats:
        return self.match_stats_cache.get_or_compute(
            ('stats', player_id), lambda: summarize_results(player_id, results)
        )

    def ladder_view(self, roster: Sequence[Player], results_by_player: Mapping[str, Iterable[MatchResult]],
                    now: Optional[datetime] = None, force_refresh: bool = False) -> List[LadderEntry]:
        """
        Build the computed ladder rows, ordered by position.

        Args:
            roster: Current roster
            results_by_player: player_id -> that player's match results
            now: Reference time for momentum and streaks
            force_refresh: Ignore the cached view
        """
        if force_refresh:
            self.roster_cache.invalidate('view')
            self.match_stats_cache.invalidate_all()

        def build() -> List[LadderEntry]:
            table = self.ladder.tier_table
            entries = []
            for player in sorted(roster, key=lambda p: p.position):
                results = list(results_by_player.get(player.player_id, ()))
                entries.append(LadderEntry(
                    player=player,
                    tier=tier_for_player(player, table),
                    momentum=self.momentum(player.player_id, results, now),
                    suggestion=recommend_opponent(player, roster, self.ladder.k_factor, table),
                    stats=self.player_stats(player.player_id, results),
                    streak_days=streak_days(player.first_place_at, now),
                ))
            logger.debug(f"Built {self.ladder.name} ladder view with {len(entries)} entries")
            return entries

        return self.roster_cache.get_or_compute('view', build)

    def scorecard(self, username: str, matches: Iterable[Match],
                  force_refresh: bool = False) -> Union[Scorecard, InsufficientData]:
        if force_refresh:
            self.profile_cache.invalidate(username)
        return self.profile_cache.get_or_compute(username, lambda: grade_scorecard(username, matches))

    def recent_rating_change(self, player_id: str, history: Iterable[RatingHistoryEntry],
                             limit: int = 10) -> int:
        """Net rating change over the player's latest ``limit`` history entries."""
        def compute() -> int:
            entries = sorted(
                (entry for entry in history if entry.player_id == player_id),
                key=lambda entry: entry.timestamp,
                reverse=True,
            )[:limit]
            return sum(entry.change for entry in entries)

        return self.rating_history_cache.get_or_compute(player_id, compute)
