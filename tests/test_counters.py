from __future__ import annotations

import allure

from job_autopilot.engine.counters import CounterState
from job_autopilot.models import CounterKind, Counters

pytestmark = [
    allure.epic("Orchestration"),
    allure.feature("Counters"),
]


def test_increment_persists_each_snapshot() -> None:
    saved: list[Counters] = []
    counters = CounterState(persist=saved.append, initial=Counters(completed=2, skipped=1))

    counters.increment(CounterKind.COMPLETED)
    snapshot = counters.increment(CounterKind.ERRORED)

    assert snapshot == Counters(completed=3, skipped=1, errored=1)
    assert saved == [
        Counters(completed=3, skipped=1, errored=0),
        Counters(completed=3, skipped=1, errored=1),
    ]
    assert snapshot.skipped_plus_errored == 2
    assert snapshot.total == 5


def test_persist_failure_does_not_lose_increment() -> None:
    def explode(_: Counters) -> None:
        raise OSError("disk full")

    counters = CounterState(persist=explode)
    counters.increment(CounterKind.SKIPPED)

    assert counters.snapshot() == Counters(skipped=1)


def test_reset_replaces_all_values() -> None:
    counters = CounterState()
    counters.increment(CounterKind.ERRORED)

    counters.reset(Counters(completed=7, skipped=3))

    assert counters.snapshot() == Counters(completed=7, skipped=3, errored=0)
    counters.reset()
    assert counters.snapshot() == Counters()
