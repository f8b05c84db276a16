"""Delay combinators

Timed settlement on the running loop. Durations are in seconds, as asyncio
measures them."""

from __future__ import annotations

import asyncio
import typing

if typing.TYPE_CHECKING:
    from ..promise import ExtendedPromise


def delay[T](
    P: type[ExtendedPromise[typing.Any]],
    seconds: float,
    value: T | None = None,
) -> ExtendedPromise[T]:
    """
    Resolve with `value` after `seconds`.

    The timer starts immediately; an eventual `value` is adopted when the
    timer fires, so its own wait runs after the delay.
    """
    loop = asyncio.get_running_loop()
    return P(lambda resolve, _reject: loop.call_later(seconds, resolve, value))


def delay_value[T](promise: ExtendedPromise[T], seconds: float) -> ExtendedPromise[T]:
    """Hold this promise's value for `seconds` after it fulfils. Rejections pass through at once."""
    P = type(promise)
    return promise.then(lambda value: P.delay(seconds, value))


__all__ = ("delay", "delay_value")
