"""
Coroutine runner
================

Drive generator-based coroutines on top of promises.

Each `yield` hands the driver an eventual value (a list or tuple of them is
waited on with `all`). The driver resumes the generator through one of two
channels: `send(value)` on fulfilment, `throw(error)` on rejection. Native
`async def` coroutines need no driver and are adopted directly.
"""

from __future__ import annotations

import inspect
import logging
import typing
from collections.abc import Awaitable, Callable, Generator
from functools import wraps

from kungfu import Error, Ok, Result

from .._errors import box
from .._helpers import is_eventual

if typing.TYPE_CHECKING:
    from ..promise import ExtendedPromise

logger = logging.getLogger(__name__)


class GeneratorDriver[T]:
    """Holds exclusive control of one generator for the duration of its run."""

    __slots__ = ("_promise_cls", "_generator", "_deferred")

    def __init__(
        self,
        promise_cls: type[ExtendedPromise[typing.Any]],
        generator: Generator[typing.Any, typing.Any, T],
    ) -> None:
        self._promise_cls = promise_cls
        self._generator = generator
        self._deferred = promise_cls.defer()

    def run(self) -> ExtendedPromise[T]:
        self._step(Ok(None))
        return self._deferred.promise

    def _step(self, resumption: Result[typing.Any, BaseException]) -> None:
        P = self._promise_cls
        while True:
            try:
                match resumption:
                    case Ok(value):
                        yielded = self._generator.send(value)
                    case Error(error):
                        yielded = self._generator.throw(error)
            except StopIteration as stop:
                self._deferred.resolve(stop.value)
                return
            except Exception as exc:
                self._deferred.reject(exc)
                return

            if isinstance(yielded, list | tuple):
                yielded = P.all(yielded)
            if not is_eventual(yielded):
                logger.debug("spawn: generator yielded %r, resuming with TypeError", yielded)
                resumption = Error(TypeError(f"spawn: must yield a promise or awaitable, got {type(yielded).__name__}"))
                continue

            P.resolve(yielded).then(self._resume_with_value, self._resume_with_error)
            return

    def _resume_with_value(self, value: typing.Any) -> None:
        self._step(Ok(value))

    def _resume_with_error(self, reason: typing.Any) -> None:
        self._step(Error(box(reason)))


def _drive(P: type[ExtendedPromise[typing.Any]], computation: object) -> typing.Any:
    if inspect.isgenerator(computation):
        return GeneratorDriver(P, computation).run()
    if inspect.isawaitable(computation):
        return computation
    raise TypeError(f"spawn: expected a generator or a coroutine, got {type(computation).__name__}")


def spawn[T](
    P: type[ExtendedPromise[typing.Any]],
    fn: Callable[[], Generator[typing.Any, typing.Any, T] | Awaitable[T]],
) -> ExtendedPromise[T]:
    """
    Run `fn()` as a coroutine, starting one loop iteration later.

    The result fulfils with the generator's return value and rejects with any
    exception escaping it.
    """
    return P.resolve(None).then(lambda _: _drive(P, fn()))


def coroutine[**A, T](
    P: type[ExtendedPromise[typing.Any]],
    fn: Callable[A, Generator[typing.Any, typing.Any, T] | Awaitable[T]],
) -> Callable[A, ExtendedPromise[T]]:
    """Decorator: calling the result spawns `fn(*args, **kwargs)`."""

    @wraps(fn)
    def runner(*args: A.args, **kwargs: A.kwargs) -> ExtendedPromise[T]:
        return P.spawn(lambda: fn(*args, **kwargs))

    return runner


__all__ = ("GeneratorDriver", "coroutine", "spawn")
