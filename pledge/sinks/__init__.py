from __future__ import annotations

from .logger import LoggerSink
from .memory import MemorySink
from .noop import NoopSink

__all__ = ["LoggerSink", "MemorySink", "NoopSink"]
