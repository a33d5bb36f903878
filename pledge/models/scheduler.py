from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable


@runtime_checkable
class Scheduler(Protocol):
    def schedule(self, callback: Callable[[], Any], delay: float) -> Any: ...
