"""
Per-player aggregation of match history.
"""

from collections import defaultdict
from typing import Dict, Iterable, List

from ladder.data_models.ladder import Match, MatchResult, PlayerStats


def results_for_player(player_id: str, matches: Iterable[Match]) -> List[MatchResult]:
    """Every head-to-head match the player took part in, from their side."""
    return [match.result_for(player_id) for match in matches if match.involves(player_id)]


def results_by_player(matches: Iterable[Match]) -> Dict[str, List[MatchResult]]:
    """Split head-to-head matches into per-player result lists."""
    grouped: Dict[str, List[MatchResult]] = defaultdict(list)
    for match in matches:
        grouped[match.winner_id].append(match.result_for(match.winner_id))
        grouped[match.loser_id].append(match.result_for(match.loser_id))
    return dict(grouped)


def summarize_results(player_id: str, results: Iterable[MatchResult]) -> PlayerStats:
    """
    Aggregate a player's results.

    Args:
        player_id: Player the results belong to
        results: The player's match results

    Returns:
        PlayerStats totals
    """
    matches = wins = kills = deaths = top3 = points = 0
    maps = []

    for result in results:
        matches += 1
        if result.won:
            wins += 1
        if result.placement <= 3 and result.total_players > 2:
            top3 += 1
        kills += result.kills
        deaths += result.deaths
        points += result.points_earned
        if result.map_name and result.map_name not in maps:
            maps.append(result.map_name)

    return PlayerStats(
        player_id=player_id,
        matches=matches,
        wins=wins,
        losses=matches - wins,
        kills=kills,
        deaths=deaths,
        top3=top3,
        points=points,
        maps=tuple(maps),
    )
