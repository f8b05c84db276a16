"""
Lift kungfu results into promises.
"""

from __future__ import annotations

import typing

from kungfu import Error, Ok, Result

if typing.TYPE_CHECKING:
    from ..promise import ExtendedPromise


def from_result[T, E](P: type[ExtendedPromise[typing.Any]], result: Result[T, E]) -> ExtendedPromise[T]:
    """
    Settle a promise from an already-computed Result.

    Example:
        Promise.from_result(Ok(1))                 # fulfilled with 1
        Promise.from_result(Error(NotFound()))     # rejected with NotFound()

    NOTE: A LazyCoroResult needs no lifting; `Promise.resolve(lazy)` runs it.
    """
    match result:
        case Ok(value):
            return P.resolve(value)
        case Error(error):
            return P.reject(error)
        case _:
            return P.reject(TypeError(f"from_result: expected Ok or Error, got {type(result).__name__}"))


__all__ = ("from_result",)
