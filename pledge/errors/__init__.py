from __future__ import annotations

from .errors import AlreadyCompletedError, PledgeError, RejectedError, ValidationError

__all__ = ["AlreadyCompletedError", "PledgeError", "RejectedError", "ValidationError"]
