"""
Tests for opponent and teammate suggestions.
"""

import pytest

from ladder.data_models.ladder import Player
from ladder.operations.recommender import (
    gain_score,
    is_same_player,
    proximity_score,
    recommend_opponent,
    recommend_teammate,
)


def player(player_id, rating, username=None, matches=10, team_id=None):
    username = player_id.upper() if username is None else username
    return Player(player_id, username, rating=rating, position=1,
                  matches=matches, wins=matches // 2, losses=matches - matches // 2, team_id=team_id)


class TestScores:

    @pytest.mark.parametrize("gap, score", [(0, 100), (100, 50), (-100, 50), (200, 0), (500, 0)])
    def test_proximity(self, gap, score):
        assert proximity_score(gap) == score

    @pytest.mark.parametrize("gain, score", [(3, 50), (8, 50), (2, 30), (9, 30), (14, 30), (15, 10), (0, 10)])
    def test_gain(self, gain, score):
        assert gain_score(gain) == score

    def test_same_player_by_username(self):
        assert is_same_player(player('a', 1000, 'Ace'), player('b', 1000, '  ace '))
        assert not is_same_player(player('a', 1000, 'Ace'), player('b', 1000, 'Bee'))

    def test_blank_usernames_are_distinct_players(self):
        assert not is_same_player(player('me', 1000, ''), player('x', 1000, '  '))
        suggestion = recommend_opponent(player('me', 1000, ''), [player('x', 1000, '')])
        assert suggestion.player.player_id == 'x'


class TestOpponent:

    def test_prefers_close_same_tier_opponent(self):
        me = player('me', 1000)
        pool = [player('c', 900), me, player('b', 1000), player('d', 800)]
        suggestion = recommend_opponent(me, pool)
        assert suggestion.player.player_id == 'b'
        assert suggestion.expected_gain == 16
        assert suggestion.score == pytest.approx(100 + 10 + 40)

    def test_score_components(self):
        me = player('me', 1000)
        suggestion = recommend_opponent(me, [player('c', 900)])
        assert suggestion.expected_gain == 12
        assert suggestion.proximity_score == 50
        assert suggestion.gain_score == 30
        assert suggestion.tier_bonus == 40

    def test_tier_bonus_only_for_same_tier(self):
        me = player('me', 1000)
        suggestion = recommend_opponent(me, [player('low', 600)])
        assert suggestion.tier_bonus == 0

    def test_zero_gain_candidates_discarded(self):
        me = player('me', 1000)
        assert recommend_opponent(me, [player('weak', 200), player('weaker', 100)]) is None

    def test_never_suggests_self(self):
        me = player('me', 1000, 'Ace')
        assert recommend_opponent(me, [me, player('alt', 1000, 'ACE')]) is None

    def test_ties_keep_pool_order(self):
        me = player('me', 1000)
        suggestion = recommend_opponent(me, [player('first', 1050), player('second', 1050)])
        assert suggestion.player.player_id == 'first'

    def test_empty_pool(self):
        assert recommend_opponent(player('me', 1000), []) is None


class TestTeammate:

    def test_closest_unteamed_player(self):
        me = player('me', 1000)
        pool = [player('far', 1300), player('teamed', 1000, team_id='t1'), player('near', 950), me]
        suggestion = recommend_teammate(me, pool)
        assert suggestion.player.player_id == 'near'
        assert suggestion.rating_gap == 50
        assert suggestion.compatibility == 75

    def test_ties_keep_pool_order(self):
        me = player('me', 1000)
        suggestion = recommend_teammate(me, [player('up', 1100), player('down', 900)])
        assert suggestion.player.player_id == 'up'

    def test_nobody_available(self):
        me = player('me', 1000)
        assert recommend_teammate(me, [me, player('teamed', 1000, team_id='t1')]) is None
