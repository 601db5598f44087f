"""
Player scorecard grading.

Grades a player's head-to-head history on five metrics and an overall grade.
Players need a minimum history before they are graded. When a single opponent
makes up too large a share of the history, every opponent's contribution is
capped so one heavily-farmed rival cannot dominate the grades.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple, Union

from ladder.constants import ScorecardConstants as SC
from ladder.data_models.ladder import Match
from ladder.data_models.scorecard import InsufficientData, Scorecard, ScorecardMetric
from ladder.utils.elo import round_half_away_from_zero
from ladder.utils.logger import setup_logger

logger = setup_logger(__name__)

_LETTERS = ('S', 'A', 'B', 'C', 'D')


def letter_grade(value: float, thresholds: Sequence[float]) -> str:
    """Map a value onto S..D thresholds (highest first); anything below is F."""
    for letter, threshold in zip(_LETTERS, thresholds):
        if value >= threshold:
            return letter
    return 'F'


@dataclass
class _Tally:
    matches: int = 0
    wins: int = 0
    kills: int = 0
    deaths: int = 0
    dominant_wins: int = 0

    def add(self, other: "_Tally") -> None:
        self.matches += other.matches
        self.wins += other.wins
        self.kills += other.kills
        self.deaths += other.deaths
        self.dominant_wins += other.dominant_wins

    def capped(self, cap: int) -> "_Tally":
        if self.matches <= cap:
            return self
        ratio = cap / self.matches
        return _Tally(
            matches=cap,
            wins=round_half_away_from_zero(self.wins * ratio),
            kills=round_half_away_from_zero(self.kills * ratio),
            deaths=round_half_away_from_zero(self.deaths * ratio),
            dominant_wins=round_half_away_from_zero(self.dominant_wins * ratio),
        )


def _player_matches(username: str, matches: Iterable[Match]) -> List[Match]:
    return [match for match in matches if match.involves(username)]


def check_eligibility(username: str, matches: Sequence[Match]) -> Union[InsufficientData, None]:
    """Return InsufficientData when the history is too thin to grade, else None."""
    opponents = {match.opponent_of(username) for match in matches}
    matches_needed = max(0, SC.MIN_MATCHES - len(matches))
    opponents_needed = max(0, SC.MIN_OPPONENTS - len(opponents))

    if matches_needed or opponents_needed:
        return InsufficientData(
            username=username,
            matches_played=len(matches),
            opponents_faced=len(opponents),
            matches_needed=matches_needed,
            opponents_needed=opponents_needed,
        )
    return None


def _map_mastery(username: str, matches: Sequence[Match]) -> Tuple[float, int]:
    """Versatility score and number of distinct maps played."""
    map_records: Dict[str, List[int]] = defaultdict(lambda: [0, 0])  # map -> [wins, played]
    for match in matches:
        if not match.map_name:
            continue
        record = map_records[match.map_name]
        record[1] += 1
        if match.winner_id == username:
            record[0] += 1

    map_count = len(map_records)
    eligible = [
        wins * 100.0 / played
        for wins, played in map_records.values()
        if played >= SC.BEST_MAP_MIN_MATCHES
    ]
    if not eligible:
        return 0.0, map_count

    best = sorted(eligible, reverse=True)[:SC.BEST_MAP_COUNT]
    average_best = sum(best) / len(best)
    score = average_best * SC.BEST_MAP_WEIGHT + min(map_count, SC.MAX_COUNTED_MAPS) * SC.POINTS_PER_MAP
    return score, map_count


def grade_scorecard(username: str, matches: Iterable[Match]) -> Union[Scorecard, InsufficientData]:
    """
    Grade a player's match history.

    Args:
        username: Identifier the player appears under as winner_id / loser_id
        matches: Match history (matches the player did not play are ignored)

    Returns:
        Scorecard, or InsufficientData naming how many matches/opponents are missing
    """
    history = _player_matches(username, matches)

    insufficient = check_eligibility(username, history)
    if insufficient is not None:
        return insufficient

    per_opponent: Dict[str, _Tally] = defaultdict(_Tally)
    raw = _Tally()
    close_games = 0

    for match in history:
        won = match.winner_id == username
        result = match.result_for(username)
        margin = abs(result.kills - result.deaths)

        tally = _Tally(
            matches=1,
            wins=1 if won else 0,
            kills=result.kills,
            deaths=result.deaths,
            dominant_wins=1 if won and margin >= SC.DOMINANT_WIN_MARGIN else 0,
        )
        raw.add(tally)
        per_opponent[result.opponent_id].add(tally)
        if margin <= SC.CLOSE_GAME_MARGIN:
            close_games += 1

    total = raw.matches
    top_opponent_matches = max(tally.matches for tally in per_opponent.values())
    top_opponent_share = top_opponent_matches * 100.0 / total
    adjusted = top_opponent_share > SC.MAX_OPPONENT_SHARE

    counted = raw
    if adjusted:
        counted = _Tally()
        for tally in per_opponent.values():
            counted.add(tally.capped(SC.MAX_MATCHES_PER_OPPONENT))
        logger.info(
            f"Scorecard for {username} adjusted: {top_opponent_matches} matches "
            f"({top_opponent_share:.1f}%) against one opponent"
        )

    raw_kd = raw.kills / raw.deaths if raw.deaths > 0 else 0.0
    win_rate = counted.wins * 100.0 / counted.matches
    average_score = counted.kills / counted.matches
    kd_ratio = counted.kills / counted.deaths if counted.deaths > 0 else raw_kd

    dominant_rate = counted.dominant_wins * 100.0 / total
    close_rate = (raw.wins / total) * (close_games / total) * 100 if close_games else 0.0
    mastery = dominant_rate * SC.DOMINANT_WEIGHT + close_rate * SC.CLOSE_WEIGHT

    versatility, map_count = _map_mastery(username, history)

    note = " (adjusted for opponent distribution)" if adjusted else ""
    metrics = [
        ScorecardMetric(
            key='win_rate', name='Total Win Rate',
            grade=letter_grade(win_rate, SC.WIN_RATE_THRESHOLDS), value=win_rate,
            description=f"Overall win percentage: {win_rate:.1f}%{note}",
        ),
        ScorecardMetric(
            key='scoring', name='Average Score',
            grade=letter_grade(average_score, SC.AVERAGE_SCORE_THRESHOLDS), value=average_score,
            description=f"Average kills per match: {average_score:.1f}{note}",
        ),
        ScorecardMetric(
            key='opponent_mastery', name='Opponent Mastery',
            grade=letter_grade(mastery, SC.MASTERY_THRESHOLDS), value=mastery,
            description=f"{counted.dominant_wins} dominant wins ({SC.DOMINANT_WIN_MARGIN}+ kill margin){note}",
        ),
        ScorecardMetric(
            key='map_mastery', name='Map Mastery',
            grade=letter_grade(versatility, SC.MAP_MASTERY_THRESHOLDS), value=versatility,
            description=f"Performance across {map_count} different maps",
        ),
        ScorecardMetric(
            key='kd', name='K/D Ratio',
            grade=letter_grade(kd_ratio, SC.KD_THRESHOLDS), value=kd_ratio,
            description=f"{kd_ratio:.2f} total kills vs opponent kills{note}",
        ),
    ]

    # Weighted sum rounded to 6 places before thresholding
    overall_score = round(
        sum(SC.GRADE_POINTS[metric.grade] * SC.WEIGHTS[metric.key] for metric in metrics), 6
    )
    overall = ScorecardMetric(
        key='overall', name='Overall Rating',
        grade=letter_grade(overall_score, SC.OVERALL_THRESHOLDS), value=overall_score,
        description=(
            "Weighted score: Win Rate (30%), Scoring (25%), Opponent Mastery (20%), "
            f"Map Mastery (15%), K/D (10%){note}"
        ),
    )

    return Scorecard(
        username=username,
        metrics=metrics,
        overall=overall,
        total_matches=total,
        unique_opponents=len(per_opponent),
        adjusted=adjusted,
    )
