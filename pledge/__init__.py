from __future__ import annotations

from .env import Env, current, use
from .errors import AlreadyCompletedError, PledgeError, RejectedError, ValidationError
from .future import Future
from .group import group
from .models.result import Ko, Ok, Result
from .models.thenable import Thenable
from .registry import Registry
from .schedulers import AsyncioScheduler, StepScheduler
from .sinks import LoggerSink, MemorySink, NoopSink

__all__ = [
    "AlreadyCompletedError",
    "AsyncioScheduler",
    "Env",
    "Future",
    "Ko",
    "LoggerSink",
    "MemorySink",
    "NoopSink",
    "Ok",
    "PledgeError",
    "RejectedError",
    "Registry",
    "Result",
    "StepScheduler",
    "Thenable",
    "ValidationError",
    "current",
    "group",
    "use",
]
