"""
Core type definitions for bluebirdish.

Aliases used across the library.
"""

from __future__ import annotations

import typing
from collections.abc import Callable

# ============================================================================
# Type aliases
# ============================================================================

# Resolve = settles a promise with a value (or adopts an eventual value)
type Resolve = Callable[..., None]

# Reject = settles a promise with a reason (any object, not only exceptions)
type Reject = Callable[..., None]

# Executor = setup routine handed to the promise constructor
type Executor = Callable[[Resolve, Reject], object]

# Mapper = function called as mapper(value, index, length)
type Mapper[T, R] = Callable[..., R]

# Reducer = function called as reducer(acc, value, index, length)
type Reducer[A, T] = Callable[..., A]

# NodeCallback = node-style callback, called as callback(err) or callback(None, *values)
type NodeCallback = Callable[..., object]

# Reason = a rejection reason; promises may reject with any object
# NOTE: Exceptions are the common case, but `reject("x")` is valid.
type Reason = typing.Any

__all__ = (
    "Executor",
    "Mapper",
    "NodeCallback",
    "Reason",
    "Reducer",
    "Reject",
    "Resolve",
)
