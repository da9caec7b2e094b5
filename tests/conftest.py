"""
Shared fixtures for the Contour engine tests.

Nothing here touches the network or real time: interval scheduling,
resolvers, the clock and the RNG are all injected fakes.
"""

from __future__ import annotations
import asyncio
import random
from datetime import datetime, timezone
from typing import Callable, List

import pytest

from contour.models.module import ModuleId, ResolvableResult
from contour.services.commands import CommandRegistry, register_all_commands
from contour.services.detectors.currency import apply_rate
from contour.services.detectors.translator import apply_translation
from contour.services.engine import ContourEngine
from contour.services.resolvers import BaseResolver, ResolverRegistry

# Monday 19 October 2026, 09:30 UTC
FIXED_NOW = datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Fake interval scheduler
# ---------------------------------------------------------------------------

class FakeInterval:
    def __init__(self, callback: Callable[[], None], seconds: float):
        self.callback = callback
        self.seconds = seconds
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeIntervalScheduler:
    """Records every interval; `advance(n)` fires the live ones n times."""

    def __init__(self):
        self.intervals: List[FakeInterval] = []

    def set_interval(self, callback, seconds):
        interval = FakeInterval(callback, seconds)
        self.intervals.append(interval)
        return interval

    @property
    def active(self) -> List[FakeInterval]:
        return [i for i in self.intervals if not i.cancelled]

    def advance(self, ticks: int = 1) -> None:
        for _ in range(ticks):
            for interval in self.active:
                interval.callback()


# ---------------------------------------------------------------------------
# Fake resolvers
# ---------------------------------------------------------------------------

class GatedResolver(BaseResolver):
    """
    Each call parks on a future the test settles by hand, so tests decide
    the order in which lookups finish.
    """

    def __init__(self, module_id: ModuleId, complete: Callable[[ResolvableResult, object], ResolvableResult]):
        self._module_id = module_id
        self._complete = complete
        self.calls: List[tuple] = []

    @property
    def module_id(self) -> ModuleId:
        return self._module_id

    async def _resolve(self, partial):
        future = asyncio.get_running_loop().create_future()
        self.calls.append((partial, future))
        value = await future
        if isinstance(value, Exception):
            raise value
        return self._complete(partial, value)

    def settle(self, index: int, value) -> None:
        self.calls[index][1].set_result(value)


class InstantResolver(BaseResolver):
    def __init__(self, module_id: ModuleId, complete: Callable[[ResolvableResult], ResolvableResult]):
        self._module_id = module_id
        self._complete = complete
        self.calls = 0

    @property
    def module_id(self) -> ModuleId:
        return self._module_id

    async def _resolve(self, partial):
        self.calls += 1
        return self._complete(partial)


async def settle_tasks() -> None:
    """Give scheduled tasks a few loop iterations to run."""
    for _ in range(5):
        await asyncio.sleep(0)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def intervals() -> FakeIntervalScheduler:
    return FakeIntervalScheduler()


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture()
def clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture()
def commands() -> CommandRegistry:
    return register_all_commands(CommandRegistry())


@pytest.fixture()
def currency_resolver() -> GatedResolver:
    return GatedResolver(ModuleId.CURRENCY, lambda partial, rate: apply_rate(partial, rate))


@pytest.fixture()
def translator_resolver() -> InstantResolver:
    return InstantResolver(ModuleId.TRANSLATOR, lambda partial: apply_translation(partial, f"<{partial.text}>"))


@pytest.fixture()
def resolvers(currency_resolver, translator_resolver) -> ResolverRegistry:
    registry = ResolverRegistry()
    registry.register(currency_resolver)
    registry.register(translator_resolver)
    return registry


@pytest.fixture()
def completed_timers() -> list:
    return []


@pytest.fixture()
def navigations() -> list:
    return []


@pytest.fixture()
def engine(resolvers, commands, intervals, clock, rng, completed_timers, navigations) -> ContourEngine:
    return ContourEngine(
        resolvers=resolvers,
        commands=commands,
        interval_scheduler=intervals,
        clock=clock,
        rng=rng,
        on_navigate=navigations.append,
        on_timer_complete=completed_timers.append,
    )


@pytest.fixture()
def engine_factory(resolvers, commands, intervals, clock, rng) -> Callable[..., ContourEngine]:
    def build(**overrides) -> ContourEngine:
        kwargs = dict(
            resolvers=resolvers,
            commands=commands,
            interval_scheduler=intervals,
            clock=clock,
            rng=rng,
        )
        kwargs.update(overrides)
        return ContourEngine(**kwargs)

    return build
