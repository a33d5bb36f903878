from __future__ import annotations

import json
from typing import Any


class PledgeError(Exception):
    def __init__(self, mesg: str, code: int, details: Any = None) -> None:
        super().__init__(mesg)
        self.mesg = mesg
        self.code = code
        try:
            self.details = json.dumps(details, indent=2) if details else None
        except Exception:
            self.details = details

    def __str__(self) -> str:
        return f"[{self.code:03d}] {self.mesg}{'\n' + self.details if self.details else ''}"

    def __reduce__(self) -> str | tuple[Any, ...]:
        return (self.__class__, (self.mesg, self.code, self.details))


# Error codes 100-199


class AlreadyCompletedError(PledgeError):
    def __init__(self, id: int, attempted: str, value: Any, prev_status: str, prev_value: Any) -> None:
        super().__init__(
            f"Future {id} already complete, attempted {attempted}()",
            100,
            {"attempted": attempted, "value": _repr(value), "prev_status": prev_status, "prev_value": _repr(prev_value)},
        )
        self.id = id
        self.attempted = attempted
        self.value = value
        self.prev_status = prev_status
        self.prev_value = prev_value

    def __reduce__(self) -> str | tuple[Any, ...]:
        return (self.__class__, (self.id, self.attempted, self.value, self.prev_status, self.prev_value))


# Error codes 200-299


class RejectedError(PledgeError):
    def __init__(self, reason: Any) -> None:
        super().__init__(f"Future rejected with {_repr(reason)}", 200)
        self.reason = reason

    def __reduce__(self) -> str | tuple[Any, ...]:
        return (self.__class__, (self.reason,))


# Error codes 300-399


class ValidationError(PledgeError):
    def __init__(self, mesg: str) -> None:
        super().__init__(mesg, 300)

    def __reduce__(self) -> str | tuple[Any, ...]:
        return (self.__class__, (self.mesg,))


def _repr(value: Any) -> str:
    try:
        return repr(value)
    except Exception:
        return f"<unrepresentable {type(value).__name__}>"
