"""
Full re-ranking for ladders that are not ordered by challenges.

The free-for-all ladder is ordered by rating and the team ladder by win rate;
both are recomputed from scratch and assigned dense 1..N positions. Players
who have not met the ladder's match requirement sink to the bottom.
"""

from dataclasses import replace
from typing import Callable, List, Mapping, Sequence

from ladder.data_models.ladder import Player, PositionChange


def _assign_positions(ordered: Sequence[Player]) -> List[Player]:
    return [
        player if player.position == index else replace(player, position=index)
        for index, player in enumerate(ordered, start=1)
    ]


def _sorted(players: Sequence[Player], key: Callable[[Player], tuple]) -> List[Player]:
    # sorted() is stable, so equal keys keep roster order
    return _assign_positions(sorted(players, key=key))


def rank_by_rating(players: Sequence[Player], match_counts: Mapping[str, int] = None) -> List[Player]:
    """
    Order players by rating, highest first.

    Args:
        players: Roster rows
        match_counts: Optional match totals by player_id; defaults to Player.matches

    Returns:
        New roster with dense positions
    """
    def matches_of(player: Player) -> int:
        if match_counts is None:
            return player.matches
        return match_counts.get(player.player_id, 0)

    return _sorted(players, key=lambda p: (matches_of(p) == 0, -p.rating))


def rank_by_win_rate(players: Sequence[Player], min_matches: int = 1) -> List[Player]:
    """
    Order players by win rate, then by matches played.

    Players below ``min_matches`` are placed after everyone who qualifies,
    ordered among themselves the same way.
    """
    return _sorted(
        players,
        key=lambda p: (p.matches < min_matches, -p.win_rate, -p.matches, -p.tier_value),
    )


def position_diff(before: Sequence[Player], after: Sequence[Player]) -> List[PositionChange]:
    """Rows whose position differs between two versions of a roster."""
    previous = {player.player_id: player.position for player in before}
    return [
        PositionChange(player.player_id, player.position)
        for player in after
        if previous.get(player.player_id) != player.position
    ]
