"""
Fold combinators
================

Strictly sequential traversal: step i+1 starts only after step i settled.
"""

from __future__ import annotations

import typing
from collections.abc import Iterable

from .._helpers import MISSING, as_sequence, invoke
from .._types import Mapper, Reducer

if typing.TYPE_CHECKING:
    from ..promise import ExtendedPromise


def _step[A, T](
    P: type[ExtendedPromise[typing.Any]],
    reducer: Reducer[A, T],
    accumulator: typing.Any,
    item: typing.Any,
    index: int,
    length: int,
) -> ExtendedPromise[A]:
    def apply(acc: typing.Any) -> ExtendedPromise[A]:
        return P.resolve(item).then(lambda value: invoke(reducer, acc, value, index, length, required=2))

    return P.resolve(accumulator).then(apply)


def reduce[A, T](
    P: type[ExtendedPromise[typing.Any]],
    arg: Iterable[T] | typing.Any,
    reducer: Reducer[A, T],
    initial: A | typing.Any = MISSING,
) -> ExtendedPromise[A]:
    """
    Left fold with `reducer(acc, value, index, length)`.

    Without `initial` the first element seeds the fold and reduction starts
    at index 1. An empty input resolves to `initial`, or None without one.
    The first rejection (initial value, element or reducer) short-circuits.
    """

    def fold(items: typing.Any) -> typing.Any:
        items = as_sequence(items, "reduce")
        length = len(items)
        if not items:
            return None if initial is MISSING else initial

        if initial is MISSING:
            accumulator, start = items[0], 1
        else:
            accumulator, start = initial, 0

        for index in range(start, length):
            accumulator = _step(P, reducer, accumulator, items[index], index, length)
        return accumulator

    return P.resolve(arg).then(fold)


def map_series[T, R](
    P: type[ExtendedPromise[typing.Any]],
    arg: Iterable[T] | typing.Any,
    mapper: Mapper[T, R],
) -> ExtendedPromise[list[R]]:
    """Like map, but each `mapper` call waits for the previous result."""

    def collect(results: list[R], value: T, index: int, length: int) -> ExtendedPromise[list[R]]:
        def append(result: R) -> list[R]:
            results.append(result)
            return results

        return P.resolve(invoke(mapper, value, index, length, required=1)).then(append)

    return P.reduce(arg, collect, [])


def each[T](
    P: type[ExtendedPromise[typing.Any]],
    arg: Iterable[T] | typing.Any,
    iterator: Mapper[T, object],
) -> ExtendedPromise[list[T]]:
    """
    Call `iterator(value, index, length)` in order, awaiting each call.

    Resolves to the input values, not the iterator's results.
    """

    def visit(values: list[T], value: T, index: int, length: int) -> ExtendedPromise[list[T]]:
        values.append(value)
        return P.resolve(invoke(iterator, value, index, length, required=1)).then(lambda _: values)

    return P.reduce(arg, visit, [])


__all__ = ("each", "map_series", "reduce")
