"""Traverse combinators

Concurrent map and filter over a collection, keeping input order."""

from __future__ import annotations

import typing
from collections.abc import Iterable

from .._helpers import as_sequence, invoke
from .._types import Mapper

if typing.TYPE_CHECKING:
    from ..promise import ExtendedPromise


def _mapped[T, R](
    P: type[ExtendedPromise[typing.Any]],
    mapper: Mapper[T, R],
    item: typing.Any,
    index: int,
    length: int,
) -> ExtendedPromise[R]:
    return P.resolve(item).then(lambda value: invoke(mapper, value, index, length, required=1))


def map_[T, R](
    P: type[ExtendedPromise[typing.Any]],
    arg: Iterable[T] | typing.Any,
    mapper: Mapper[T, R],
) -> ExtendedPromise[list[R]]:
    """
    Call `mapper(value, index, length)` on every resolved element, concurrently.

    The mapper sees resolved values, never the raw promises, and its own
    eventual results are awaited before they land in the output list.
    """

    def dispatch(items: typing.Any) -> ExtendedPromise[list[R]]:
        items = as_sequence(items, "map")
        length = len(items)
        return P.all([_mapped(P, mapper, item, index, length) for index, item in enumerate(items)])

    return P.resolve(arg).then(dispatch)


def filter_[T](
    P: type[ExtendedPromise[typing.Any]],
    arg: Iterable[T] | typing.Any,
    filterer: Mapper[T, object],
) -> ExtendedPromise[list[T]]:
    """Keep, in input order, the elements whose `filterer(value, index, length)` is truthy."""

    def verdict(value: T, index: int, length: int) -> ExtendedPromise[list[typing.Any]]:
        return P.all([invoke(filterer, value, index, length, required=1), value])

    def keep(pairs: list[list[typing.Any]]) -> list[T]:
        return [value for passed, value in pairs if passed]

    return P.map(arg, verdict).then(keep)


__all__ = ("filter_", "map_")
