"""
Lift synchronous calls into promises.
"""

from __future__ import annotations

import typing
from collections.abc import Callable
from functools import wraps

if typing.TYPE_CHECKING:
    from ..promise import ExtendedPromise


def attempt[T](
    P: type[ExtendedPromise[typing.Any]],
    factory: Callable[[], T],
) -> ExtendedPromise[T]:
    """
    Call `factory()` right away.

    A raised exception becomes a rejection; a returned value or eventual value
    becomes the fulfilment chain.
    """
    try:
        value = factory()
    except Exception as exc:
        return P.reject(exc)
    return P.resolve(value)


def method[**A, T](
    P: type[ExtendedPromise[typing.Any]],
    fn: Callable[A, T],
) -> Callable[A, ExtendedPromise[T]]:
    """
    Decorator: make `fn` always return a promise.

    Example:
        @Promise.method
        def load(path):
            if not path:
                raise ValueError("empty path")
            return read(path)

        load("")  # rejected promise, no exception at the call site
    """

    @wraps(fn)
    def wrapper(*args: A.args, **kwargs: A.kwargs) -> ExtendedPromise[T]:
        return P.try_(lambda: fn(*args, **kwargs))

    return wrapper


__all__ = ("attempt", "method")
