from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Self

if TYPE_CHECKING:
    from collections.abc import Callable


class Thenable[T](ABC):
    """Marker for values that can be consumed by `group`.

    Membership is nominal: a class is a thenable by subclassing (or
    registering with) this ABC, never by merely exposing a `then` attribute.
    """

    @abstractmethod
    def then(self, on_success: Callable[[T], Any] | None = None, on_error: Callable[[Any], Any] | None = None) -> Self: ...
