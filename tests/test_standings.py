"""
Tests for full re-ranking, rating history and per-player aggregation.
"""

from datetime import timedelta

from conftest import NOW
from ladder.data_models.ladder import Match, MatchResult, Player, PositionChange
from ladder.operations.player_stats import results_by_player, results_for_player, summarize_results
from ladder.operations.rating_history import build_history_entry, check_milestone_crossing
from ladder.operations.standings import position_diff, rank_by_rating, rank_by_win_rate


def row(player_id, rating=1000, position=1, matches=0, wins=0, tier_value=1000):
    return Player(player_id, player_id, rating=rating, position=position, tier_value=tier_value,
                  matches=matches, wins=wins, losses=matches - wins)


class TestRankByRating:

    def test_highest_rating_first(self):
        ranked = rank_by_rating([row('a', 900, 1, 3), row('b', 1100, 2, 3), row('c', 1000, 3, 3)])
        assert [p.player_id for p in ranked] == ['b', 'c', 'a']
        assert [p.position for p in ranked] == [1, 2, 3]

    def test_players_without_matches_sink(self):
        ranked = rank_by_rating([row('new', 1500, 1, 0), row('vet', 900, 2, 10)])
        assert [p.player_id for p in ranked] == ['vet', 'new']

    def test_explicit_match_counts(self):
        ranked = rank_by_rating([row('a', 1500, 1), row('b', 900, 2)], match_counts={'b': 4})
        assert ranked[0].player_id == 'b'


class TestRankByWinRate:

    def test_order(self):
        ranked = rank_by_win_rate([
            row('half', matches=10, wins=5),
            row('best', matches=10, wins=9),
            row('rookie', matches=2, wins=2),
        ], min_matches=6)
        assert [p.player_id for p in ranked] == ['best', 'half', 'rookie']

    def test_more_matches_breaks_ties(self):
        ranked = rank_by_win_rate([row('few', matches=6, wins=3), row('many', matches=12, wins=6)], 6)
        assert ranked[0].player_id == 'many'


def test_position_diff():
    before = [row('a', position=1), row('b', position=2)]
    after = [row('b', position=1), row('a', position=2)]
    assert position_diff(before, after) == [PositionChange('b', 1), PositionChange('a', 2)]
    assert position_diff(before, before) == []


class TestRatingHistory:

    def test_milestone_up(self):
        crossing = check_milestone_crossing(990, 1010)
        assert (crossing.name, crossing.direction, crossing.rating) == ('Regular', 'up', 1000)

    def test_milestone_down(self):
        crossing = check_milestone_crossing(1205, 1190)
        assert (crossing.name, crossing.direction) == ('Veteran', 'down')

    def test_no_milestone(self):
        assert check_milestone_crossing(1010, 1020) is None

    def test_entry(self):
        entry = build_history_entry('p1', 1190, 1205, 'm1', NOW)
        assert entry.change == 15
        assert entry.timestamp == NOW
        assert entry.milestone.name == 'Veteran'


class TestPlayerStats:

    def test_head_to_head_results(self):
        matches = [
            Match('m1', 'a', 'b', 15, 10, map_name='Arena', approved_at=NOW),
            Match('m2', 'b', 'a', 15, 12, map_name='Bridge', approved_at=NOW - timedelta(days=1)),
        ]
        results = results_for_player('a', matches)
        assert [r.won for r in results] == [True, False]
        assert results[1].kills == 12 and results[1].deaths == 15
        assert set(results_by_player(matches)) == {'a', 'b'}

        stats = summarize_results('a', results)
        assert (stats.matches, stats.wins, stats.losses) == (2, 1, 1)
        assert stats.kd_ratio == 27 / 25
        assert stats.maps == ('Arena', 'Bridge')
        assert stats.top3 == 0

    def test_free_for_all_results(self):
        results = [
            MatchResult('a', True, 1, 8, kills=10, deaths=0, points_earned=100),
            MatchResult('a', False, 3, 8, kills=4, deaths=0, points_earned=55),
            MatchResult('a', False, 6, 8, points_earned=20),
        ]
        stats = summarize_results('a', results)
        assert stats.top3 == 2
        assert stats.points == 175
        assert stats.kd_ratio == 14.0
        assert stats.win_rate == 100 / 3
