"""
Tests for challenge ladder position maintenance.
"""

from dataclasses import replace
from datetime import timedelta

import pytest
from hypothesis import given, settings, strategies as st

from conftest import NOW, make_roster
from ladder.data_models.ladder import PositionChange
from ladder.operations.positions import apply_match_result, streak_days, validate_positions
from ladder.utils.ladder_exceptions import InvariantViolationError, PlayerNotFoundError


def positions(roster):
    return {player.player_id: player.position for player in roster}


class TestLeapfrog:

    def test_winner_takes_loser_position(self, roster):
        update = apply_match_result(roster, 'p3', 'p1', NOW)
        assert positions(update.updated_roster) == {'p1': 2, 'p2': 3, 'p3': 1, 'p4': 4, 'p5': 5}

    def test_minimal_diff(self, roster):
        update = apply_match_result(roster, 'p4', 'p2', NOW)
        assert sorted(update.roster_diff, key=lambda c: c.player_id) == [
            PositionChange('p2', 3), PositionChange('p3', 4), PositionChange('p4', 2),
        ]
        assert update.changed

    def test_adjacent_swap(self, roster):
        update = apply_match_result(roster, 'p5', 'p4', NOW)
        assert positions(update.updated_roster)['p5'] == 4
        assert positions(update.updated_roster)['p4'] == 5
        assert len(update.roster_diff) == 2

    def test_higher_ranked_winner_keeps_positions(self, roster):
        update = apply_match_result(roster, 'p1', 'p4', NOW)
        assert update.updated_roster == roster
        assert update.roster_diff == []
        assert not update.changed

    def test_input_roster_not_mutated(self, roster):
        before = list(roster)
        apply_match_result(roster, 'p5', 'p1', NOW)
        assert roster == before


class TestStreaks:

    def test_new_leader_starts_streak(self, roster):
        update = apply_match_result(roster, 'p2', 'p1', NOW)
        leader = next(p for p in update.updated_roster if p.position == 1)
        assert leader.player_id == 'p2'
        assert leader.first_place_at == NOW
        assert update.streak_started == 'p2'

    def test_old_leader_streak_cleared(self, roster):
        roster[0] = replace(roster[0], first_place_at=NOW - timedelta(days=3))
        update = apply_match_result(roster, 'p2', 'p1', NOW)
        old_leader = next(p for p in update.updated_roster if p.player_id == 'p1')
        assert old_leader.first_place_at is None
        assert update.streak_cleared == 'p1'

    def test_no_streak_change_below_first(self, roster):
        update = apply_match_result(roster, 'p4', 'p2', NOW)
        assert update.streak_started is None
        assert update.streak_cleared is None

    def test_streak_days(self):
        assert streak_days(None, NOW) == 0
        assert streak_days(NOW, NOW) == 1
        assert streak_days(NOW - timedelta(days=2, hours=1), NOW) == 3


class TestErrors:

    def test_unknown_winner(self, roster):
        with pytest.raises(PlayerNotFoundError) as exc_info:
            apply_match_result(roster, 'ghost', 'p1', NOW)
        assert exc_info.value.player_id == 'ghost'

    def test_unknown_loser(self, roster):
        with pytest.raises(PlayerNotFoundError):
            apply_match_result(roster, 'p1', 'ghost', NOW)

    def test_same_player(self, roster):
        with pytest.raises(ValueError):
            apply_match_result(roster, 'p1', 'p1', NOW)

    def test_gap_in_positions(self, roster):
        roster[4] = replace(roster[4], position=7)
        with pytest.raises(InvariantViolationError):
            apply_match_result(roster, 'p3', 'p1', NOW)

    def test_duplicate_positions(self, roster):
        roster[4] = replace(roster[4], position=4)
        with pytest.raises(InvariantViolationError) as exc_info:
            validate_positions(roster)
        assert "duplicate" in str(exc_info.value)

    def test_user_message(self, roster):
        roster[0] = replace(roster[0], position=0)
        with pytest.raises(InvariantViolationError) as exc_info:
            validate_positions(roster)
        assert exc_info.value.user_message.startswith("❌")


class TestInvariantProperty:

    @given(
        size=st.integers(min_value=2, max_value=12),
        pairs=st.lists(st.tuples(st.integers(0, 11), st.integers(0, 11)), max_size=40),
    )
    @settings(max_examples=100)
    def test_positions_stay_dense(self, size, pairs):
        roster = make_roster([1000] * size)
        for winner_index, loser_index in pairs:
            winner_index %= size
            loser_index %= size
            if winner_index == loser_index:
                continue
            update = apply_match_result(roster, f"p{winner_index + 1}", f"p{loser_index + 1}", NOW)
            roster = update.updated_roster
            assert sorted(p.position for p in roster) == list(range(1, size + 1))
            assert sum(1 for p in roster if p.first_place_at is not None) <= 1
