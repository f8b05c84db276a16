"""
Bluebird-style promises for asyncio.

A promise type with the Bluebird combinator vocabulary (filtered catch,
map/filter/reduce, some/any, props, join, delay, spawn, node-style callbacks)
built on `asyncio.Future`.

Architecture:
- ExtendedPromise carries settlement on one asyncio.Future per promise
- Combinators are functions taking the promise class first, wired onto the
  class as class methods and instance sugar
- Promise is the default class; get_new_library_copy() makes independent ones
- kungfu Results bridge in (from_result) and out (to_result, to_lazy)
"""

# Core types
from ._errors import AggregateError, RangeError, RejectionError
from ._helpers import HOLE, MISSING
from .deferred import Deferred
from .promise import ExtendedPromise, Promise, hybridmethod, make_promise_class, settlement_of

# Predicate matching (filtered catch)
from . import matching
from .matching import matches_predicate

# Coroutine runner
from .control import GeneratorDriver

__all__ = (
    # Core
    "ExtendedPromise",
    "Promise",
    "Deferred",
    "make_promise_class",
    "hybridmethod",
    "settlement_of",
    # Errors
    "AggregateError",
    "RangeError",
    "RejectionError",
    # Sentinels
    "HOLE",
    "MISSING",
    # Matching
    "matching",
    "matches_predicate",
    # Coroutines
    "GeneratorDriver",
)
