"""Value transforms

Instance-side sugar over `then`: side effects, fixed outcomes and reads from
the fulfilment value."""

from __future__ import annotations

import typing
from collections.abc import Callable, Mapping

from .._helpers import invoke, is_array_like
from .._types import Reason

if typing.TYPE_CHECKING:
    from ..promise import ExtendedPromise


# ============================================================================
# Effects
# ============================================================================

def tap[T](promise: ExtendedPromise[T], effect: Callable[[T], typing.Any]) -> ExtendedPromise[T]:
    """
    Run `effect(value)` for its side effect, keep the original value.

    An eventual returned by the effect is awaited first; its rejection (or an
    exception raised by the effect) becomes the chain's rejection.
    """
    P = type(promise)

    def run(value: T) -> ExtendedPromise[T]:
        return P.resolve(invoke(effect, value)).then(lambda _: value)

    return promise.then(run)


def spread[R](promise: ExtendedPromise[typing.Any], fn: Callable[..., R]) -> ExtendedPromise[R]:
    """Call `fn(*value)` with the fulfilled sequence's elements as arguments."""

    def run(values: typing.Any) -> R:
        if not callable(fn):
            raise TypeError(f"spread: expected a function, got {type(fn).__name__}")
        if not is_array_like(values):
            raise TypeError(f"spread: cannot unpack {type(values).__name__}")
        return fn(*values)

    return promise.then(run)


def call(
    promise: ExtendedPromise[typing.Any],
    method: str,
    *args: typing.Any,
    **kwargs: typing.Any,
) -> ExtendedPromise[typing.Any]:
    """Call `value.<method>(*args, **kwargs)` on the fulfilment value."""

    def run(obj: typing.Any) -> typing.Any:
        bound = getattr(obj, method, None) if obj is not None else None
        if not callable(bound):
            raise TypeError(f"call: object has no method {method!r}")
        return bound(*args, **kwargs)

    return promise.then(run)


# ============================================================================
# Reads
# ============================================================================

def _read(obj: typing.Any, key: typing.Any) -> typing.Any:
    match key:
        case int() if not isinstance(key, bool) and is_array_like(obj):
            index = max(0, len(obj) + key) if key < 0 else key
            return obj[index] if index < len(obj) else None
        case _ if isinstance(obj, Mapping):
            return obj.get(key)
        case str():
            return getattr(obj, key)
        case _:
            return obj[key]


def get(promise: ExtendedPromise[typing.Any], key: typing.Any) -> ExtendedPromise[typing.Any]:
    """
    Read `key` from the fulfilment value.

    - Sequences: integer index; a negative index counts from the end and is
      clamped to 0, an index past the end reads as None.
    - Mappings: `value.get(key)`.
    - Anything else: attribute for a string key, subscript otherwise.

    Example:
        await Promise.resolve([1, 2, 3]).get(-1)    # 3
        await Promise.resolve([1, 2, 3]).get(-10)   # 1
    """
    return promise.then(lambda obj: _read(obj, key))


# ============================================================================
# Fixed outcomes
# ============================================================================

def return_[V](promise: ExtendedPromise[typing.Any], value: V) -> ExtendedPromise[V]:
    """Discard the fulfilment value, fulfil with `value`."""
    return promise.then(lambda _: value)


def throw(promise: ExtendedPromise[typing.Any], reason: Reason) -> ExtendedPromise[typing.Never]:
    """Discard the fulfilment value, reject with `reason`."""
    P = type(promise)
    return promise.then(lambda _: P.reject(reason))


__all__ = ("call", "get", "return_", "spread", "tap", "throw")
