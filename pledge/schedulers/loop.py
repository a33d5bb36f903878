from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable


class AsyncioScheduler:
    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def schedule(self, callback: Callable[[], Any], delay: float) -> asyncio.TimerHandle:
        # without an explicit loop, settlement must happen inside a running one
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)
