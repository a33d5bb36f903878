from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import pytest

from pledge import AlreadyCompletedError, AsyncioScheduler, Env, Future, MemorySink, Registry, group, use

if TYPE_CHECKING:
    from pledge.schedulers import StepScheduler


def test_resolve_then_observe_on_a_later_turn(env: Env, scheduler: StepScheduler) -> None:
    captured: list[int] = []

    f = Future[int]()
    f.resolve(5)
    scheduler.run()
    f.then(captured.append)

    assert captured == [5]


def test_resolve_twice(env: Env) -> None:
    f = Future[int]()
    f.resolve(1)
    with pytest.raises(AlreadyCompletedError):
        f.resolve(2)


def test_group_short_circuits(env: Env, scheduler: StepScheduler) -> None:
    a, b, c = Future[int](), Future[int](), Future[int]()
    g = group([a, b, c]).then(None, lambda _: None)

    b.reject("boom")
    scheduler.run()
    a.resolve(1)
    c.resolve(2)
    scheduler.run()

    assert g.is_rejected()
    assert g.value == "boom"


def test_chain_promise_throws(env: Env, scheduler: StepScheduler) -> None:
    def bad(_: int) -> int:
        raise ValueError("bad")

    a = Future[int]()
    chained = a.chain_promise(bad)
    a.resolve(1)
    scheduler.run()

    assert chained.is_rejected()
    assert str(chained.value) == "bad"


def test_trap_recovers(env: Env, scheduler: StepScheduler) -> None:
    a = Future[str]()
    result = a.trap(lambda e: "recovered")
    a.reject("boom")
    scheduler.run()

    assert result.is_resolved()
    assert result.value == "recovered"


def test_always_on_rejection(env: Env, scheduler: StepScheduler) -> None:
    side_effect_ran = False

    def side_effect() -> None:
        nonlocal side_effect_ran
        side_effect_ran = True

    a = Future[int]()
    result = a.always(side_effect)
    a.reject("x")
    scheduler.run()

    assert side_effect_ran
    assert result.is_rejected()
    assert result.value == "x"


def test_pipeline_on_asyncio() -> None:
    async def main() -> tuple[Any, Registry]:
        registry = Registry()
        with use(Env(scheduler=AsyncioScheduler(), sink=MemorySink(), registry=registry)):
            a, b = Future[int](), Future[int]()
            total = group(a, b).chain_promise(sum).always(lambda: None)

            asyncio.get_running_loop().call_soon(a.resolve, 2)
            asyncio.get_running_loop().call_soon(b.resolve, 3)
            return await total, registry

    value, registry = asyncio.run(main())
    assert value == 5
    assert registry.outstanding == []
    assert len(registry.recent) == 5
