"""
Race combinators
================

Settle with whichever element settles first.
"""

from __future__ import annotations

import typing
from collections.abc import Iterable

from .._helpers import as_sequence

if typing.TYPE_CHECKING:
    from ..promise import ExtendedPromise


def race[T](
    P: type[ExtendedPromise[typing.Any]],
    arg: Iterable[T] | typing.Any,
) -> ExtendedPromise[T]:
    """
    Resolve the input, drop holes, then settle like the first element to settle.

    With no surviving elements the result stays pending forever.
    """

    def settle_first(items: typing.Any) -> ExtendedPromise[T]:
        deferred = P.defer()
        for item in as_sequence(items, "race", drop_holes=True):
            P.resolve(item).then(deferred.resolve, deferred.reject)
        return deferred.promise

    return P.resolve(arg).then(settle_first)


__all__ = ("race",)
