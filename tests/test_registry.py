from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from pledge import Env, Future, MemorySink, Registry, ValidationError

if TYPE_CHECKING:
    from pledge.schedulers import StepScheduler


@pytest.mark.parametrize("capacity", [0, -1, 1.5, "20"])
def test_capacity_must_be_positive(capacity: object) -> None:
    with pytest.raises(ValidationError):
        Registry(capacity)  # type: ignore[arg-type]


def test_outstanding_until_settled(scheduler: StepScheduler) -> None:
    registry = Registry()
    env = Env(scheduler=scheduler, sink=MemorySink(), registry=registry)

    a, b, c = Future[int](env=env), Future[int](env=env), Future[int](env=env)
    assert registry.outstanding == [a, b, c]
    assert len(registry) == 3
    assert b in registry

    b.resolve(1)
    assert b in registry
    scheduler.run()
    assert b not in registry
    assert registry.outstanding == [a, c]
    assert registry.recent == [b]


def test_recent_evicts_oldest(scheduler: StepScheduler) -> None:
    registry = Registry()
    env = Env(scheduler=scheduler, sink=MemorySink(), registry=registry)

    futures = [Future[int](env=env).resolve(i) for i in range(25)]
    scheduler.run()

    assert registry.capacity == 20
    assert registry.outstanding == []
    assert registry.recent == futures[5:]


def test_registries_are_independent(scheduler: StepScheduler) -> None:
    r1, r2 = Registry(), Registry(capacity=1)
    f1 = Future[int](env=Env(scheduler=scheduler, sink=MemorySink(), registry=r1))
    f2 = Future[int](env=Env(scheduler=scheduler, sink=MemorySink(), registry=r2))

    assert r1.outstanding == [f1]
    assert r2.outstanding == [f2]


def test_futures_without_a_registry_are_not_tracked(scheduler: StepScheduler) -> None:
    registry = Registry()
    Future[int](env=Env(scheduler=scheduler, sink=MemorySink()))
    assert registry.outstanding == []


def test_report(scheduler: StepScheduler) -> None:
    registry = Registry()
    env = Env(scheduler=scheduler, sink=MemorySink(), registry=registry)

    pending = Future[int]("waiting on db", env=env)
    done = Future[int](env=env).resolve(7)
    scheduler.run()

    sink = MemorySink()
    registry.report(sink)
    assert sink.lines() == [
        "Outstanding futures: 1",
        f"{pending} trace = waiting on db",
        "Recent futures: 1",
        f"{done} FULFILLED value = 7",
    ]


def test_clear(scheduler: StepScheduler) -> None:
    registry = Registry()
    env = Env(scheduler=scheduler, sink=MemorySink(), registry=registry)
    Future[int](env=env)
    Future[int](env=env).resolve(1)
    scheduler.run()

    registry.clear()
    assert registry.outstanding == []
    assert registry.recent == []


def test_contains_only_tracked_futures(scheduler: StepScheduler) -> None:
    registry = Registry()
    tracked = Future[int](env=Env(scheduler=scheduler, sink=MemorySink(), registry=registry))
    untracked = Future[int](env=Env(scheduler=scheduler, sink=MemorySink()))

    assert tracked in registry
    assert untracked not in registry
    assert object() not in registry
    assert tracked.id not in registry
