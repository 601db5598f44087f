"""
Tests for the TTL result cache.
"""

import pytest

from ladder.services.result_cache import MISS, ResultCache


class TestResultCache:

    def test_miss_then_hit(self, clock):
        cache = ResultCache(60, clock=clock)
        assert cache.get('roster') is MISS
        cache.set('roster', [1, 2, 3])
        assert cache.get('roster') == [1, 2, 3]

    def test_expiry(self, clock):
        cache = ResultCache(60, clock=clock)
        cache.set('key', 'value')
        clock.advance(30)
        assert "key" in cache
        clock.advance(30)
        assert cache.get('key') is MISS
        assert len(cache) == 0

    def test_falsy_values_are_cached(self, clock):
        cache = ResultCache(60, clock=clock)
        cache.set('empty', [])
        assert cache.get('empty') == []
        assert not MISS

    def test_get_or_compute_calls_once_while_fresh(self, clock):
        cache = ResultCache(60, clock=clock)
        calls = []

        def compute():
            calls.append(1)
            return len(calls)

        assert cache.get_or_compute('k', compute) == 1
        assert cache.get_or_compute('k', compute) == 1
        clock.advance(61)
        assert cache.get_or_compute('k', compute) == 2

    def test_invalidate(self, clock):
        cache = ResultCache(60, clock=clock)
        cache.set('a', 1)
        cache.set('b', 2)
        cache.invalidate('a')
        cache.invalidate('missing')
        assert 'a' not in cache
        assert 'b' in cache
        cache.invalidate_all()
        assert len(cache) == 0

    def test_oldest_entries_dropped_when_full(self, clock):
        cache = ResultCache(600, max_size=3, clock=clock)
        for key in 'abcd':
            cache.set(key, key)
            clock.advance(1)
        assert len(cache) == 3
        assert 'a' not in cache
        assert 'd' in cache

    @pytest.mark.parametrize("ttl", [0, -5])
    def test_rejects_non_positive_ttl(self, ttl):
        with pytest.raises(ValueError):
            ResultCache(ttl)
