"""
Shared fixtures for ladder engine tests.
"""

import os

# Keep test runs from writing log files; must run before ladder.config is imported
os.environ.setdefault('LADDER_LOG_TO_FILE', 'false')

from datetime import datetime, timedelta, timezone

import pytest

from ladder.data_models.ladder import Match, MatchResult, Player


NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_roster(ratings):
    """Roster with positions 1..N in the given order."""
    return [
        Player(player_id=f"p{index}", username=f"Player{index}", rating=rating, position=index)
        for index, rating in enumerate(ratings, start=1)
    ]


def make_result(won, kills=0, deaths=0, days_ago=1, placement=None, total_players=2):
    return MatchResult(
        player_id='p1',
        won=won,
        placement=placement if placement is not None else (1 if won else 2),
        total_players=total_players,
        kills=kills,
        deaths=deaths,
        played_at=NOW - timedelta(days=days_ago),
    )


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start=0.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def roster():
    return make_roster([900, 800, 700, 600, 500])


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sample_match():
    return Match(match_id='m1', winner_id='p3', loser_id='p1', winner_score=15, loser_score=10,
                 map_name='Arena', approved_at=NOW)
