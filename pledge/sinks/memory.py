from __future__ import annotations

from typing import Any


class MemorySink:
    def __init__(self) -> None:
        self.messages: list[tuple[Any, ...]] = []

    def warn(self, *values: Any) -> None:
        self.messages.append(values)

    def lines(self) -> list[str]:
        return [" ".join(str(v) for v in values) for values in self.messages]

    def clear(self) -> None:
        self.messages.clear()
