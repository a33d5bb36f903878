from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pledge.future import Future
from pledge.models.thenable import Thenable

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from pledge.env import Env


def group(futures: Iterable[Thenable[Any]] | Thenable[Any] = (), *rest: Thenable[Any], env: Env | None = None) -> Future[list[Any]]:
    """Return a future fulfilled with the values of all `futures`, in order.

    Accepts either one iterable of futures or the futures themselves as
    positional arguments. The group rejects with the first rejection to
    arrive; whatever settles afterwards has no effect on it.
    """
    if isinstance(futures, Thenable):
        items = [futures, *rest]
    elif rest:
        msg = "group takes either one iterable of futures or futures as positional arguments"
        raise TypeError(msg)
    else:
        items = list(futures)

    for item in items:
        if not isinstance(item, Thenable):
            msg = f"group items must be `Thenable`, got {type(item).__name__}"
            raise TypeError(msg)

    # nothing to wait for
    if not items:
        return Future[list[Any]](env=env).resolve([])

    aggregate = Future[list[Any]](env=env)
    results: list[Any] = [None] * len(items)
    fulfilled = 0
    failed = False

    def on_success_at(index: int) -> Callable[[Any], None]:
        def on_success(value: Any) -> None:
            nonlocal fulfilled
            results[index] = value
            fulfilled += 1
            # once the group has failed extra results are dropped
            if fulfilled == len(items) and not failed:
                aggregate.resolve(results)

        return on_success

    def on_failure(reason: Any) -> None:
        nonlocal failed
        if not failed:
            failed = True
            aggregate.reject(reason)

    for index, item in enumerate(items):
        item.then(on_success_at(index), on_failure)

    return aggregate
