"""Unit tests for the load-once fixture cache."""

import pytest

from rcc_deployer.fixtures import FixtureCache, default_cache, load_fixture


class Counter:
    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return object()


class TestFixtureCache:
    def test_factory_runs_once_per_key(self):
        cache = FixtureCache()
        factory = Counter()

        first = cache.get("deployment", factory)
        second = cache.get("deployment", factory)

        assert first is second
        assert factory.calls == 1
        assert "deployment" in cache
        assert len(cache) == 1

    def test_keys_are_independent(self):
        cache = FixtureCache()
        factory = Counter()

        assert cache.get("a", factory) is not cache.get("b", factory)
        assert factory.calls == 2

    def test_reset_single_key(self):
        cache = FixtureCache()
        factory = Counter()
        a = cache.get("a", factory)
        b = cache.get("b", factory)

        cache.reset("a")

        assert "a" not in cache
        assert cache.get("b", factory) is b
        assert cache.get("a", factory) is not a
        assert factory.calls == 3

    def test_reset_all(self):
        cache = FixtureCache()
        cache.get("a", Counter())
        cache.get("b", Counter())

        cache.reset()

        assert len(cache) == 0

    def test_reset_unknown_key_is_noop(self):
        cache = FixtureCache()
        cache.reset("never-loaded")
        assert len(cache) == 0

    def test_failed_factory_error_is_reused_until_reset(self):
        cache = FixtureCache()
        attempts = []

        def flaky():
            attempts.append(1)
            if len(attempts) == 1:
                raise ConnectionError("node down")
            return "handle"

        with pytest.raises(ConnectionError) as first:
            cache.get("deployment", flaky)
        with pytest.raises(ConnectionError) as second:
            cache.get("deployment", flaky)

        assert second.value is first.value
        assert len(attempts) == 1
        assert "deployment" in cache
        assert cache.failure("deployment") is first.value

        cache.reset("deployment")

        assert cache.failure("deployment") is None
        assert cache.get("deployment", flaky) == "handle"
        assert len(attempts) == 2

    def test_reset_all_clears_failures(self):
        cache = FixtureCache()

        def broken():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            cache.get("deployment", broken)

        cache.reset()

        assert len(cache) == 0
        assert cache.get("deployment", lambda: "ok") == "ok"


def deploy_something():
    return object()


class TestLoadFixture:
    def test_keyed_by_factory_name(self):
        cache = FixtureCache()

        first = load_fixture(deploy_something, cache=cache)
        second = load_fixture(deploy_something, cache=cache)

        assert first is second
        assert f"{__name__}.deploy_something" in cache

    def test_explicit_key(self):
        cache = FixtureCache()
        factory = Counter()

        load_fixture(factory, cache=cache, key="rcc_stake")

        assert "rcc_stake" in cache

    def test_default_cache(self):
        try:
            first = load_fixture(deploy_something)
            assert load_fixture(deploy_something) is first
        finally:
            default_cache.reset()
