from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Any

from pledge.errors import ValidationError

if TYPE_CHECKING:
    from pledge.future import Future
    from pledge.models.sink import Sink


class Registry:
    """Bookkeeping of futures for debugging.

    Outstanding futures are held until they settle, so a future that is never
    settled stays here for the lifetime of the registry. Settled futures are
    kept in a bounded log of the most recent ones, oldest evicted first.
    """

    def __init__(self, capacity: int = 20) -> None:
        if not isinstance(capacity, int) or capacity <= 0:
            msg = f"capacity must be a positive int, got {capacity!r}"
            raise ValidationError(msg)

        self._outstanding: dict[int, Future[Any]] = {}
        self._recent: deque[Future[Any]] = deque(maxlen=capacity)

    def __len__(self) -> int:
        return len(self._outstanding)

    def __contains__(self, future: object) -> bool:
        return self._outstanding.get(getattr(future, "id", None)) is future

    @property
    def capacity(self) -> int:
        assert self._recent.maxlen is not None
        return self._recent.maxlen

    @property
    def outstanding(self) -> list[Future[Any]]:
        return [self._outstanding[id] for id in sorted(self._outstanding)]

    @property
    def recent(self) -> list[Future[Any]]:
        return list(self._recent)

    def add(self, future: Future[Any]) -> None:
        self._outstanding[future.id] = future

    def settle(self, future: Future[Any]) -> None:
        self._outstanding.pop(future.id, None)
        self._recent.append(future)

    def clear(self) -> None:
        self._outstanding.clear()
        self._recent.clear()

    def report(self, sink: Sink) -> None:
        sink.warn(f"Outstanding futures: {len(self._outstanding)}")
        for future in self.outstanding:
            if future.trace is not None:
                sink.warn(future, "trace =", future.trace)
            else:
                sink.warn(future)

        sink.warn(f"Recent futures: {len(self._recent)}")
        for future in self._recent:
            sink.warn(future, future.status, "value =", repr(future.value))
