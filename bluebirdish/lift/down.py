"""
Lower promises into kungfu values.

`to_result` keeps the promise world (a promise of a Result); `to_lazy` leaves
it for a LazyCoroResult pipeline.
"""

from __future__ import annotations

import typing

from kungfu import Error, LazyCoroResult, Ok, Result

from .._types import Reason

if typing.TYPE_CHECKING:
    from ..promise import ExtendedPromise


def to_result[T](promise: ExtendedPromise[T]) -> ExtendedPromise[Result[T, Reason]]:
    """
    A promise that always fulfils: Ok(value) or Error(reason).

    Example:
        match await Promise.reject("nope").to_result():
            case Ok(value): ...
            case Error(reason): ...     # reason == "nope"
    """
    return promise.then(lambda value: Ok(value), lambda reason: Error(reason))


def to_lazy[T](promise: ExtendedPromise[T]) -> LazyCoroResult[T, Reason]:
    """Wrap as a LazyCoroResult; running it waits on this promise."""

    async def run() -> Result[T, Reason]:
        return await promise.to_result()

    return LazyCoroResult(run)


__all__ = ("to_lazy", "to_result")
