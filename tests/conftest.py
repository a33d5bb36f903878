from __future__ import annotations

import logging
import random
import sys
from typing import TYPE_CHECKING

import pytest

from pledge.env import Env, use
from pledge.registry import Registry
from pledge.schedulers import StepScheduler
from pledge.sinks import MemorySink

if TYPE_CHECKING:
    from collections.abc import Generator


def pytest_configure() -> None:
    logging.basicConfig(level=logging.ERROR)  # set log levels very high for tests


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption("--seed", action="store")


@pytest.fixture
def seed(request: pytest.FixtureRequest) -> str:
    seed = request.config.getoption("--seed")

    if not isinstance(seed, str):
        return str(random.randint(0, sys.maxsize))

    return seed


@pytest.fixture
def scheduler() -> StepScheduler:
    return StepScheduler()


@pytest.fixture
def sink() -> MemorySink:
    return MemorySink()


@pytest.fixture
def registry() -> Registry:
    return Registry()


@pytest.fixture
def env(scheduler: StepScheduler, sink: MemorySink, registry: Registry) -> Generator[Env, None, None]:
    with use(Env(scheduler=scheduler, sink=sink, registry=registry)) as env:
        yield env
