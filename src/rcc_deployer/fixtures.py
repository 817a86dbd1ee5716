"""Load-once fixture cache for test harnesses."""

import logging
from typing import Any, Callable, Dict, Hashable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FixtureCache:
    """
    Memoizes fixture results by identifier.

    The first get() for a key runs the factory; later calls return the stored
    value until reset() drops it. A factory that raises is not run again either:
    later calls re-raise the same error until reset(), so a deployment whose
    outcome is unknown is never resubmitted behind the caller's back.
    """

    def __init__(self) -> None:
        self._values: Dict[Hashable, Any] = {}
        self._failures: Dict[Hashable, BaseException] = {}

    def __contains__(self, key: Hashable) -> bool:
        return key in self._values or key in self._failures

    def __len__(self) -> int:
        return len(self._values) + len(self._failures)

    def failure(self, key: Hashable) -> Optional[BaseException]:
        """The error a key's factory raised, if it failed."""
        return self._failures.get(key)

    def get(self, key: Hashable, factory: Callable[[], T]) -> T:
        if key in self._values:
            return self._values[key]
        if key in self._failures:
            raise self._failures[key]

        logger.debug("Fixture %r: running factory", key)
        try:
            value = factory()
        except Exception as e:
            self._failures[key] = e
            raise
        self._values[key] = value
        return value

    def reset(self, key: Optional[Hashable] = None) -> None:
        """Forget one fixture, or all of them when ``key`` is None."""
        if key is None:
            self._values.clear()
            self._failures.clear()
        else:
            self._values.pop(key, None)
            self._failures.pop(key, None)


default_cache = FixtureCache()


def load_fixture(
    factory: Callable[[], T],
    cache: Optional[FixtureCache] = None,
    key: Optional[Hashable] = None,
) -> T:
    """
    Run ``factory`` once per cache and reuse its result (or its error).

    Args:
        factory: Zero-argument setup function
        cache: Cache to use (defaults to the module-wide one)
        key: Identifier (defaults to the factory's module and qualified name)
    """
    if cache is None:
        cache = default_cache
    if key is None:
        key = f"{factory.__module__}.{factory.__qualname__}"
    return cache.get(key, factory)
