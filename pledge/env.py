from __future__ import annotations

import functools
import os
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pledge.errors import ValidationError
from pledge.models.scheduler import Scheduler
from pledge.models.sink import Sink
from pledge.registry import Registry
from pledge.schedulers import AsyncioScheduler
from pledge.sinks import LoggerSink, NoopSink

if TYPE_CHECKING:
    from collections.abc import Generator, Mapping

# settlement runs as soon as possible, never in the current turn
DEFAULT_DELAY = 0.001
DEFAULT_RECENT = 20


@dataclass(frozen=True)
class Env:
    scheduler: Scheduler = field(default_factory=AsyncioScheduler)
    sink: Sink = field(default_factory=LoggerSink)
    registry: Registry | None = None
    delay: float = DEFAULT_DELAY

    def __post_init__(self) -> None:
        if not isinstance(self.scheduler, Scheduler):
            msg = f"scheduler must be `Scheduler`, got {type(self.scheduler).__name__}"
            raise ValidationError(msg)
        if self.sink is None:
            object.__setattr__(self, "sink", NoopSink())
        if not isinstance(self.sink, Sink):
            msg = f"sink must be `Sink | None`, got {type(self.sink).__name__}"
            raise ValidationError(msg)
        if self.registry is not None and not isinstance(self.registry, Registry):
            msg = f"registry must be `Registry | None`, got {type(self.registry).__name__}"
            raise ValidationError(msg)
        if not isinstance(self.delay, (int, float)) or not (self.delay >= 0):
            msg = "delay must be greater or equal than 0"
            raise ValidationError(msg)

    def merge(self, *, scheduler: Scheduler | None = None, sink: Sink | None = None, registry: Registry | None = None, delay: float | None = None) -> Env:
        """Return a copy with the given fields replaced.

        Arguments left as None keep the current value, so `merge` cannot detach
        a registry; use `dataclasses.replace(env, registry=None)` for that.
        """
        return Env(
            scheduler=scheduler if scheduler is not None else self.scheduler,
            sink=sink if sink is not None else self.sink,
            registry=registry if registry is not None else self.registry,
            delay=delay if delay is not None else self.delay,
        )

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> Env:
        """Build an env from `PLEDGE_*` variables.

        PLEDGE_DELAY      settlement delay in seconds
        PLEDGE_DEBUG      attach a registry when truthy
        PLEDGE_RECENT     capacity of the registry's recent log

        PLEDGE_LOG_LEVEL is read by `pledge.logging` when the package logger
        is set up.
        """
        environ = os.environ if environ is None else environ

        delay = _parse(environ, "PLEDGE_DELAY", float, DEFAULT_DELAY)
        recent = _parse(environ, "PLEDGE_RECENT", int, DEFAULT_RECENT)
        debug = environ.get("PLEDGE_DEBUG", "").strip().lower() in ("1", "true", "yes", "on")

        return cls(
            registry=Registry(recent) if debug else None,
            delay=delay,
        )


_current: ContextVar[Env | None] = ContextVar("pledge_env", default=None)


@functools.cache
def default() -> Env:
    return Env.from_environ()


def current() -> Env:
    return _current.get() or default()


@contextmanager
def use(env: Env) -> Generator[Env, None, None]:
    """Make `env` the env of futures created within the block."""
    if not isinstance(env, Env):
        msg = f"env must be `Env`, got {type(env).__name__}"
        raise TypeError(msg)

    token = _current.set(env)
    try:
        yield env
    finally:
        _current.reset(token)


def _parse[T: (int, float)](environ: Mapping[str, str], key: str, kind: type[T], default: T) -> T:
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return kind(raw)
    except ValueError:
        msg = f"{key} must be `{kind.__name__}`, got {raw!r}"
        raise ValidationError(msg) from None

