from __future__ import annotations

from .loop import AsyncioScheduler
from .step import StepScheduler

__all__ = ["AsyncioScheduler", "StepScheduler"]
