"""
Partial-success combinators
===========================

Fulfil once a target number of elements fulfilled, in arrival order.
"""

from __future__ import annotations

import logging
import math
import typing
from collections.abc import Iterable

from .._helpers import as_sequence

if typing.TYPE_CHECKING:
    from ..promise import ExtendedPromise

logger = logging.getLogger(__name__)


def _is_count(count: object) -> bool:
    if isinstance(count, bool) or not isinstance(count, int | float):
        return False
    return math.isfinite(count) and count >= 0


def some[T](
    P: type[ExtendedPromise[typing.Any]],
    arg: Iterable[T] | typing.Any,
    count: int,
) -> ExtendedPromise[list[T]]:
    """
    Fulfil with the first `count` fulfilment values, in arrival order.

    Rejects with TypeError for a bad `count` or a non-list input, with
    RangeError when the input has fewer than `count` elements, and with the
    class's AggregateError of every rejection seen once `count` fulfilments
    became impossible. Settlements after the target is reached are ignored.
    """
    if not _is_count(count):
        return P.reject(TypeError("some: count must be a non-negative number"))

    def collect(items: typing.Any) -> typing.Any:
        if not isinstance(items, list | tuple):
            raise TypeError(f"some: expected a list, got {type(items).__name__}")
        items = as_sequence(items, "some")
        if len(items) < count:
            raise P.RangeError("some: impossible to resolve, not enough promises")
        if count == 0:
            return []

        deferred = P.defer()
        fulfilled: list[T] = []
        rejected: list[typing.Any] = []

        def check() -> None:
            if len(fulfilled) >= count:
                deferred.resolve(list(fulfilled))
            elif len(rejected) + len(fulfilled) >= len(items):
                logger.debug("some: %d of %d rejected, wanted %d", len(rejected), len(items), count)
                deferred.reject(P.AggregateError(rejected))

        def on_fulfilled(value: T) -> None:
            if len(fulfilled) >= count:
                return
            fulfilled.append(value)
            check()

        def on_rejected(reason: typing.Any) -> None:
            if len(fulfilled) >= count:
                return
            rejected.append(reason)
            check()

        for item in items:
            P.resolve(item).then(on_fulfilled, on_rejected)
        return deferred.promise

    return P.resolve(arg).then(collect)


def any_[T](
    P: type[ExtendedPromise[typing.Any]],
    arg: Iterable[T] | typing.Any,
) -> ExtendedPromise[T]:
    """The first element to fulfil."""
    return P.some(arg, 1).get(0)


__all__ = ("any_", "some")
