"""
Tests for rank tier classification.
"""

import pytest
from hypothesis import given, settings, strategies as st

from ladder.data_models.ladder import Player, RankTier, TeamTier
from ladder.ladders import D2
from ladder.operations.tiers import (
    D3_TIER_TABLE,
    ELO_TIER_TABLE,
    TEAM_TIER_TABLE,
    classify_tier,
    tier_for_player,
    tier_thresholds,
)


class TestEloTiers:

    @pytest.mark.parametrize("rating, matches, win_rate, tier", [
        (1000, 20, 80, RankTier.EMERALD),
        (1100, 20, 79.9, RankTier.GOLD),
        (1100, 19, 95, RankTier.GOLD),
        (700, 1, 0, RankTier.GOLD),
        (699, 1, 0, RankTier.SILVER),
        (500, 3, 50, RankTier.SILVER),
        (200, 3, 50, RankTier.BRONZE),
        (199, 30, 100, RankTier.UNRANKED),
    ])
    def test_brackets(self, rating, matches, win_rate, tier):
        assert classify_tier(rating, matches, win_rate) == tier

    def test_no_matches_is_unranked(self):
        assert classify_tier(5000, 0, 100) == RankTier.UNRANKED

    @pytest.mark.parametrize("table", [ELO_TIER_TABLE, D3_TIER_TABLE, TEAM_TIER_TABLE, D2.tier_table])
    def test_zero_everything_is_unranked(self, table):
        assert classify_tier(0, 0, 0, table) == table.unranked

    @given(rating=st.integers(0, 3000), matches=st.integers(0, 100), win_rate=st.floats(0, 100))
    @settings(max_examples=200)
    def test_higher_rating_never_lowers_tier(self, rating, matches, win_rate):
        lower = classify_tier(rating, matches, win_rate)
        higher = classify_tier(rating + 100, matches, win_rate)
        assert higher >= lower


class TestRankFloor:

    def test_floor_grants_bronze_after_five_matches(self):
        assert classify_tier(50, 5, 0, D2.tier_table) == RankTier.BRONZE

    def test_floor_needs_five_matches(self):
        assert classify_tier(50, 4, 0, D2.tier_table) == RankTier.UNRANKED

    def test_floor_only_on_d2(self):
        assert classify_tier(50, 5, 0, ELO_TIER_TABLE) == RankTier.UNRANKED

    def test_floor_does_not_cap_higher_tiers(self):
        assert classify_tier(750, 5, 0, D2.tier_table) == RankTier.GOLD


class TestD3Tiers:

    @pytest.mark.parametrize("rating, tier", [
        (2000, RankTier.EMERALD),
        (1800, RankTier.GOLD),
        (1600, RankTier.SILVER),
        (1500, RankTier.BRONZE),
        (1300, RankTier.UNRANKED),
    ])
    def test_brackets(self, rating, tier):
        assert classify_tier(rating, 1, 0, D3_TIER_TABLE) == tier


class TestTeamTiers:

    def test_needs_six_matches(self):
        assert classify_tier(1000, 5, 100, TEAM_TIER_TABLE) == TeamTier.UNRANKED

    @pytest.mark.parametrize("win_rate, tier", [
        (90, TeamTier.CHAMPION),
        (85, TeamTier.ELITE),
        (70, TeamTier.VETERAN),
        (60, TeamTier.SKILLED),
        (10, TeamTier.ROOKIE),
    ])
    def test_brackets(self, win_rate, tier):
        assert classify_tier(1000, 6, win_rate, TEAM_TIER_TABLE) == tier


def test_tier_for_player_uses_counters():
    player = Player('p1', 'Ace', rating=1200, position=1, matches=25, wins=21, losses=4)
    assert tier_for_player(player) == RankTier.EMERALD


def test_thresholds_highest_first():
    assert tier_thresholds() == (('Emerald', 1000), ('Gold', 700), ('Silver', 500), ('Bronze', 200))
    assert tier_thresholds(TEAM_TIER_TABLE) == ()
