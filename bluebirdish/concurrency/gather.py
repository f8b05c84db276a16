"""
Gather combinators
==================

Wait on every element of a collection, keeping input order.
"""

from __future__ import annotations

import asyncio
import typing
from collections.abc import Callable, Iterable

from .._helpers import as_sequence

if typing.TYPE_CHECKING:
    from ..promise import ExtendedPromise


def all_[T](
    P: type[ExtendedPromise[typing.Any]],
    arg: Iterable[T] | typing.Any,
) -> ExtendedPromise[list[T]]:
    """
    Resolve the input, then wait on every element.

    Fulfils with the results in input order; rejects with the first rejection
    to settle. The waiting itself is `asyncio.gather`.
    """

    def gather(items: typing.Any) -> typing.Any:
        promises = [P.resolve(item) for item in as_sequence(items, "all")]
        if not promises:
            return []
        return asyncio.gather(*promises)

    return P.resolve(arg).then(gather)


def join[R](P: type[ExtendedPromise[typing.Any]], *args: typing.Any) -> ExtendedPromise[R]:
    """`join(a, b, ..., fn)`: wait on the leading arguments, then `fn(*values)`."""
    if not args:
        return P.reject(TypeError("join: expected a trailing function"))

    *promises, fn = args
    fn = typing.cast(Callable[..., R], fn)
    return P.all(promises).then(lambda results: fn(*results))


__all__ = ("all_", "join")
