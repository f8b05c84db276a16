"""
Extended promise
================

A promise type layered over `asyncio.Future`, with the Bluebird combinator
vocabulary as instance and class methods.

Architecture:
- Settlement lives on one `asyncio.Future` per promise. Fulfilment is the
  future's result; rejection is its exception (non-exception reasons boxed in
  RejectionError). Continuations go through `add_done_callback`, so handlers
  always run on a later loop iteration.
- Every factory and combinator constructs through the calling class
  (`cls` / `type(self)`), so subclasses and library copies keep their
  identity through chains.
- Combinators live in their own modules as functions taking the promise
  class first; this module wires them onto the class.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import typing
from collections.abc import Callable, Generator
from functools import partial
from types import MethodType

from kungfu import Error, LazyCoroResult, Ok, Result

from ._errors import AggregateError, RangeError, box, unbox
from ._helpers import invoke, is_thenable
from ._types import Executor, Reason, Reject, Resolve
from .collection.fold import each as _each
from .collection.fold import map_series as _map_series
from .collection.fold import reduce as _reduce
from .collection.props import props as _props
from .collection.traverse import filter_ as _filter
from .collection.traverse import map_ as _map
from .concurrency.gather import all_ as _all
from .concurrency.gather import join as _join
from .concurrency.race import race as _race
from .concurrency.some import any_ as _any
from .concurrency.some import some as _some
from .control.attempt import attempt as _attempt
from .control.attempt import method as _method
from .control.coroutine import coroutine as _coroutine
from .control.coroutine import spawn as _spawn
from .deferred import defer as _defer
from .lift.callback import as_callback as _as_callback
from .lift.down import to_lazy as _to_lazy
from .lift.down import to_result as _to_result
from .lift.up import from_result as _from_result
from .matching import to_selector
from .time.delay import delay as _delay
from .time.delay import delay_value as _delay_value
from .transform.effects import call as _call
from .transform.effects import get as _get
from .transform.effects import return_ as _return
from .transform.effects import spread as _spread
from .transform.effects import tap as _tap
from .transform.effects import throw as _throw

logger = logging.getLogger(__name__)


def settlement_of[T](future: asyncio.Future[T]) -> Result[T, Reason]:
    """Snapshot a finished future as Ok(value) or Error(reason)."""
    if future.cancelled():
        return Error(asyncio.CancelledError())
    error = future.exception()
    if error is not None:
        return Error(unbox(error))
    return Ok(future.result())


class hybridmethod:
    """
    One name, two bindings.

    Accessed on the class, the wrapped combinator is bound to the class like a
    classmethod. Accessed on an instance, it becomes sugar passing the
    instance as the combinator's input, unless an explicit instance form is
    given.
    """

    __slots__ = ("_combinator", "_instance_form")

    def __init__(
        self,
        combinator: Callable[..., typing.Any],
        instance_form: Callable[..., typing.Any] | None = None,
    ) -> None:
        self._combinator = combinator
        self._instance_form = instance_form

    def __get__(self, instance: object, owner: type | None = None) -> Callable[..., typing.Any]:
        if instance is None:
            return MethodType(self._combinator, owner)
        if self._instance_form is not None:
            return MethodType(self._instance_form, instance)
        return partial(self._combinator, type(instance), instance)


class ExtendedPromise[T]:
    """
    Promise with the Bluebird combinator surface.

    Construct with an executor, `P(lambda resolve, reject: ...)`, or through
    the class factories (`P.resolve`, `P.all`, `P.delay`, ...). Requires a
    running event loop. Awaiting a promise yields its value or raises its
    reason.
    """

    __slots__ = ("_future", "__weakref__")

    _future: asyncio.Future[T]

    # Re-exported error types (per library copy)
    TypeError = TypeError
    RangeError = RangeError
    AggregateError = AggregateError

    def __init__(self, executor: Executor) -> None:
        self._future = asyncio.get_running_loop().create_future()
        resolve, reject = self._resolving_functions()
        try:
            executor(resolve, reject)
        except Exception as exc:
            reject(exc)

    @classmethod
    def _pending(cls) -> typing.Self:
        promise = cls.__new__(cls)
        promise._future = asyncio.get_running_loop().create_future()
        return promise

    # ------------------------------------------------------------------------
    # Resolution procedure
    # ------------------------------------------------------------------------

    def _resolving_functions(self) -> tuple[Resolve, Reject]:
        already_resolved = False

        def resolve(value: typing.Any = None) -> None:
            nonlocal already_resolved
            if already_resolved:
                return
            already_resolved = True
            self._resolve(value)

        def reject(reason: Reason = None) -> None:
            nonlocal already_resolved
            if already_resolved:
                return
            already_resolved = True
            self._reject(reason)

        return resolve, reject

    def _resolve(self, value: typing.Any) -> None:
        if self._future.done():
            return
        if value is self:
            logger.debug("Chaining cycle detected for %r", self)
            self._reject(TypeError("Chaining cycle detected for promise"))
            return

        match value:
            case ExtendedPromise():
                value._future.add_done_callback(self._adopt)
            case LazyCoroResult():
                asyncio.ensure_future(value()).add_done_callback(self._adopt_result)
            case Ok() | Error():
                # kungfu results have a `then` of their own; they are values here
                self._fulfill(value)
            case _ if inspect.isawaitable(value):
                asyncio.ensure_future(value).add_done_callback(self._adopt)
            case _ if is_thenable(value):
                self._future.get_loop().call_soon(self._adopt_thenable, value)
            case _:
                self._fulfill(value)

    def _adopt(self, future: asyncio.Future[typing.Any]) -> None:
        match settlement_of(future):
            case Ok(value):
                self._resolve(value)
            case Error(reason):
                self._reject(reason)

    def _adopt_result(self, future: asyncio.Future[Result[typing.Any, Reason]]) -> None:
        match settlement_of(future):
            case Ok(Ok(value)):
                self._resolve(value)
            case Ok(Error(reason)) | Error(reason):
                self._reject(reason)
            case Ok(other):
                self._resolve(other)

    def _adopt_thenable(self, thenable: typing.Any) -> None:
        resolve, reject = self._resolving_functions()
        try:
            thenable.then(resolve, reject)
        except Exception as exc:
            reject(exc)

    def _fulfill(self, value: typing.Any) -> None:
        if not self._future.done():
            self._future.set_result(value)

    def _reject(self, reason: Reason) -> None:
        if not self._future.done():
            self._future.set_exception(box(reason))

    def _settle_with(self, handler: Callable[..., typing.Any], argument: typing.Any) -> None:
        try:
            outcome = invoke(handler, argument)
        except Exception as exc:
            self._reject(exc)
        else:
            self._resolve(outcome)

    # ------------------------------------------------------------------------
    # Core chaining
    # ------------------------------------------------------------------------

    def then[R](
        self,
        on_fulfilled: Callable[..., typing.Any] | None = None,
        on_rejected: Callable[..., typing.Any] | None = None,
    ) -> ExtendedPromise[R]:
        """Register continuations; non-callable handlers pass the outcome through."""
        if not callable(on_fulfilled):
            on_fulfilled = None
        if not callable(on_rejected):
            on_rejected = None
        child = type(self)._pending()

        def settle(future: asyncio.Future[T]) -> None:
            match settlement_of(future):
                case Ok(value) if on_fulfilled is None:
                    child._fulfill(value)
                case Error(reason) if on_rejected is None:
                    child._reject(reason)
                case Ok(value):
                    child._settle_with(on_fulfilled, value)
                case Error(reason):
                    child._settle_with(on_rejected, reason)

        self._future.add_done_callback(settle)
        return child

    def catch(self, *args: typing.Any) -> ExtendedPromise[typing.Any]:
        """
        `catch(handler)` handles every rejection.

        `catch(*selectors, handler)` handles a rejection only when one of the
        selectors matches it (see `bluebirdish.matching`); otherwise the
        rejection passes through unchanged.
        """
        match args:
            case ():
                raise TypeError("catch() requires a handler")
            case (handler,):
                return self.then(None, handler)
            case (*raw_selectors, handler):
                pass

        selectors = [to_selector(raw) for raw in raw_selectors]
        P = type(self)

        def filtered(reason: Reason) -> typing.Any:
            if not any(selector is not None and selector.matches(reason) for selector in selectors):
                return P.reject(reason)
            return invoke(handler, reason)

        return self.then(None, filtered)

    caught = catch

    def finally_(self, handler: Callable[[], typing.Any]) -> ExtendedPromise[T]:
        """Run `handler()` on either outcome, then restore the outcome."""
        P = type(self)
        return self.then(
            lambda value: P.try_(handler).return_(value),
            lambda reason: P.try_(handler).throw(reason),
        )

    lastly = finally_

    def catch_return(self, *args: typing.Any) -> ExtendedPromise[typing.Any]:
        *selectors, value = args
        return self.catch(*selectors, lambda _reason: value)

    def catch_throw(self, *args: typing.Any) -> ExtendedPromise[typing.Any]:
        *selectors, reason = args
        P = type(self)
        return self.catch(*selectors, lambda _reason: P.reject(reason))

    # ------------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------------

    @classmethod
    def resolve[V](cls, value: V | None = None) -> ExtendedPromise[V]:
        if type(value) is cls:
            return value
        promise = cls._pending()
        promise._resolve(value)
        return promise

    @classmethod
    def reject(cls, reason: Reason = None) -> ExtendedPromise[typing.Never]:
        promise = cls._pending()
        promise._reject(reason)
        return promise

    @classmethod
    def get_new_library_copy(cls) -> type[ExtendedPromise[typing.Any]]:
        """An independent promise class: own static state, own AggregateError."""
        return make_promise_class(cls.__name__)

    defer = classmethod(_defer)
    from_result = classmethod(_from_result)

    # Collections
    all = hybridmethod(_all)
    race = hybridmethod(_race)
    props = hybridmethod(_props)
    map = hybridmethod(_map)
    filter = hybridmethod(_filter)
    reduce = hybridmethod(_reduce)
    map_series = hybridmethod(_map_series)
    each = hybridmethod(_each)
    some = hybridmethod(_some)
    any = hybridmethod(_any)
    join = classmethod(_join)

    # Control
    try_ = classmethod(_attempt)
    attempt = try_
    method = classmethod(_method)
    spawn = classmethod(_spawn)
    coroutine = classmethod(_coroutine)

    # Time
    delay = hybridmethod(_delay, _delay_value)

    # Value transforms
    spread = _spread
    tap = _tap
    call = _call
    get = _get
    return_ = _return
    then_return = _return
    throw = _throw

    # Leaving the promise world
    as_callback = _as_callback
    nodeify = _as_callback
    to_result = _to_result
    to_lazy = _to_lazy

    # ------------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------------

    @property
    def is_pending(self) -> bool:
        return not self._future.done()

    @property
    def is_fulfilled(self) -> bool:
        # NOTE: reading the exception marks a rejection as observed
        future = self._future
        return future.done() and not future.cancelled() and future.exception() is None

    @property
    def is_rejected(self) -> bool:
        return self._future.done() and not self.is_fulfilled

    def __await__(self) -> Generator[typing.Any, None, T]:
        return self._future.__await__()

    def __repr__(self) -> str:
        return f"<{type(self).__qualname__} {self._future!r}>"


def make_promise_class(name: str = "Promise") -> type[ExtendedPromise[typing.Any]]:
    """
    Build a fresh promise class.

    Each class has its own static namespace and its own AggregateError, so
    attributes set on one never leak into another.
    """
    aggregate = type("AggregateError", (AggregateError,), {"__module__": AggregateError.__module__})
    namespace = {
        "__slots__": (),
        "__module__": __name__,
        "__qualname__": name,
        "AggregateError": aggregate,
    }
    return type(name, (ExtendedPromise,), namespace)


Promise = make_promise_class("Promise")

__all__ = ("ExtendedPromise", "Promise", "hybridmethod", "make_promise_class", "settlement_of")
