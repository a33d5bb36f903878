from __future__ import annotations

from .step import StepClock

__all__ = ["StepClock"]
