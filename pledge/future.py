from __future__ import annotations

import asyncio
import itertools
import traceback
import weakref
from typing import TYPE_CHECKING, Any, Literal, Self

from pledge.env import Env, current
from pledge.errors import AlreadyCompletedError, RejectedError
from pledge.models.result import Ko, Ok, Result
from pledge.models.thenable import Thenable

if TYPE_CHECKING:
    from collections.abc import Callable, Generator, Iterable

type Status = Literal["PENDING", "FULFILLED", "REJECTED"]

_ids = itertools.count()


class Future[T](Thenable[T]):
    """A value that will exist later.

    A future is settled exactly once, from the outside, by calling `resolve`
    or `reject`. Settlement is deferred through the env's scheduler: the call
    returns immediately and the status changes (and queued handlers run) on a
    later turn. Handlers attached with `then` after settlement run
    synchronously, before `then` returns.
    """

    def __init__(self, trace: Any = None, *, env: Env | None = None) -> None:
        if env is not None and not isinstance(env, Env):
            msg = f"env must be `Env | None`, got {type(env).__name__}"
            raise TypeError(msg)

        self._env = env or current()
        self._id = next(_ids)
        self._trace = trace
        self._status: Status = "PENDING"
        self._value: Any = None

        # set as soon as resolve/reject is accepted, status follows on settlement
        self._outcome: Result[T] | None = None

        self._on_success: list[Callable[[T], Any]] = []
        self._on_error: list[Callable[[Any], Any]] = []
        self._chained_from: weakref.ref[Future[Any]] | None = None

        if self._env.registry is not None:
            self._env.registry.add(self)

    @property
    def id(self) -> int:
        return self._id

    @property
    def env(self) -> Env:
        return self._env

    @property
    def trace(self) -> Any:
        return self._trace

    @property
    def status(self) -> Status:
        return self._status

    @property
    def value(self) -> Any:
        """The fulfillment value or rejection reason, None while pending."""
        return self._value

    @property
    def result(self) -> Result[T] | None:
        match self._status:
            case "FULFILLED":
                return Ok(self._value)
            case "REJECTED":
                return Ko(self._value)
            case "PENDING":
                return None

    @property
    def chained_from(self) -> Future[Any] | None:
        return self._chained_from() if self._chained_from is not None else None

    def is_complete(self) -> bool:
        return self._status != "PENDING"

    def is_resolved(self) -> bool:
        return self._status == "FULFILLED"

    def is_rejected(self) -> bool:
        return self._status == "REJECTED"

    def then(self, on_success: Callable[[T], Any] | None = None, on_error: Callable[[Any], Any] | None = None) -> Self:
        if callable(on_success):
            if self._status == "FULFILLED":
                on_success(self._value)
            elif self._status == "PENDING":
                self._on_success.append(on_success)

        if callable(on_error):
            if self._status == "REJECTED":
                on_error(self._value)
            elif self._status == "PENDING":
                self._on_error.append(on_error)

        return self

    def resolve(self, value: T) -> Self:
        return self._complete(Ok(value), "resolve")

    def reject(self, reason: Any) -> Self:
        return self._complete(Ko(reason), "reject")

    def chain_promise[U](self, on_success: Callable[[T], U]) -> Future[U]:
        """Like `then`, but return a new future for the result of `on_success`.

        A rejection of this future is passed through without calling
        `on_success`; an exception raised by `on_success` rejects the new one.
        """
        chain = Future[U](env=self._env)
        chain._chained_from = weakref.ref(self)
        self.then(lambda value: _forward(chain, _attempt(on_success, value)), chain.reject)
        return chain

    def trap(self, recover: Callable[[Any], T]) -> Future[T]:
        """Counterpart of `except`.

        If this future rejects, the new future resolves with whatever
        `recover(reason)` returns, as if nothing had failed. If `recover`
        raises, the new future rejects with that exception instead.
        Fulfillment passes through untouched.

            f.chain_promise(a)  # may reject
             .chain_promise(b)  # may reject
             .trap(c)           # handles a rejection from f, a or b
             .chain_promise(d)  # runs unless c raised
        """
        trapped = Future[T](env=self._env)
        self.then(trapped.resolve, lambda reason: _forward(trapped, _attempt(recover, reason)))
        return trapped

    def always(self, side_effect: Callable[[], Any]) -> Future[T]:
        """Counterpart of `finally`.

        `side_effect` runs once whichever way this future settles, and the new
        future carries the same outcome, unless `side_effect` raises, in which
        case it rejects with the raised exception.
        """
        final = Future[T](env=self._env)

        def on_success(value: T) -> None:
            match _attempt(side_effect):
                case Ok():
                    final.resolve(value)
                case Ko(exc):
                    final.reject(exc)

        def on_error(reason: Any) -> None:
            match _attempt(side_effect):
                case Ok():
                    final.reject(reason)
                case Ko(exc):
                    final.reject(exc)

        self.then(on_success, on_error)
        return final

    @staticmethod
    def group(futures: Iterable[Thenable[Any]] | Thenable[Any] = (), *rest: Thenable[Any], env: Env | None = None) -> Future[list[Any]]:
        from pledge.group import group

        return group(futures, *rest, env=env)

    def __await__(self) -> Generator[Any, None, T]:
        f: asyncio.Future[T] = asyncio.get_running_loop().create_future()

        def on_success(value: T) -> None:
            if not f.done():
                f.set_result(value)

        def on_error(reason: Any) -> None:
            if not f.done():
                f.set_exception(reason if isinstance(reason, BaseException) else RejectedError(reason))

        self.then(on_success, on_error)
        return f.__await__()

    def __str__(self) -> str:
        return f"[Future {self._id}]"

    def __repr__(self) -> str:
        return f"Future(id={self._id}, status={self._status})"

    def _complete(self, outcome: Result[T], name: str) -> Self:
        sink = self._env.sink

        if self._outcome is not None:
            sink.warn(f"Future complete. Attempted {name}() with", outcome.value)
            sink.warn("Prev status =", self._status, ", value =", self._outcome)
            raise AlreadyCompletedError(self._id, name, outcome.value, self._status, self._outcome.value)

        if isinstance(outcome, Ko) and not self._on_error:
            self._unhandled(outcome.value)

        # a failure to schedule leaves the future completable
        self._env.scheduler.schedule(self._settle, self._env.delay)
        self._outcome = outcome
        return self

    def _settle(self) -> None:
        match self._outcome:
            case Ok(value):
                status: Status = "FULFILLED"
                handlers: list[Callable[[Any], Any]] = self._on_success
            case Ko(value):
                status = "REJECTED"
                handlers = self._on_error
            case None:
                raise AssertionError("settlement scheduled without an outcome")

        self._status = status
        self._value = value
        self._on_success = []
        self._on_error = []

        try:
            for handler in handlers:
                handler(value)
        finally:
            if self._env.registry is not None:
                self._env.registry.settle(self)

    def _unhandled(self, reason: Any) -> None:
        sink = self._env.sink
        sink.warn("Future rejection ignored and silently dropped")
        sink.warn(reason)

        if self._trace is not None:
            sink.warn("Original trace")
            sink.warn(self._trace)

        if isinstance(reason, BaseException) and reason.__traceback__ is not None:
            sink.warn("Printing original stack")
            for frame in traceback.format_tb(reason.__traceback__):
                sink.warn(frame.rstrip())
        elif getattr(reason, "filename", None) and getattr(reason, "lineno", None):
            sink.warn(f"Error originating at {reason.filename}, line {reason.lineno}")
        else:
            sink.warn("Original stack not available. Printing current stack")
            # skip the frames of this module
            for frame in traceback.format_stack()[:-3]:
                sink.warn(frame.rstrip())


def _attempt(func: Callable[..., Any], *args: Any) -> Result[Any]:
    try:
        return Ok(func(*args))
    except Exception as e:
        return Ko(e)


def _forward(future: Future[Any], result: Result[Any]) -> None:
    match result:
        case Ok(value):
            future.resolve(value)
        case Ko(reason):
            future.reject(reason)
