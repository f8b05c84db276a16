"""
Props combinator
================

Resolve the values of a mapping or object into a new dict.
"""

from __future__ import annotations

import copy
import typing
from collections.abc import Mapping

if typing.TYPE_CHECKING:
    from ..promise import ExtendedPromise


def _entries(obj: object) -> tuple[list[typing.Any], list[typing.Any]]:
    match obj:
        case Mapping():
            return list(obj.keys()), list(obj.values())
        case list() | tuple():
            return list(range(len(obj))), list(obj)
        case _ if hasattr(obj, "__dict__") and not isinstance(obj, type):
            attrs = vars(obj)
            return list(attrs.keys()), list(attrs.values())
        case _:
            raise TypeError(f"props: expected a mapping or an object, got {type(obj).__name__}")


def _rebuild(obj: object, keys: list[typing.Any], results: list[typing.Any]) -> dict[typing.Any, typing.Any]:
    if type(obj) is dict or not isinstance(obj, dict):
        return dict(zip(keys, results))
    # dict subclasses keep their kind (OrderedDict, defaultdict's factory, ...)
    rebuilt = copy.copy(obj)
    rebuilt.clear()
    rebuilt.update(zip(keys, results))
    return rebuilt


def props(
    P: type[ExtendedPromise[typing.Any]],
    arg: typing.Any,
) -> ExtendedPromise[dict[typing.Any, typing.Any]]:
    """
    Resolve every value concurrently and rebuild a new mapping with the same keys.

    Keys are never awaited. A dict subclass comes back as the same subclass,
    any other mapping as a plain dict. Lists and tuples are keyed by index;
    other objects contribute their attributes. The input is never mutated.
    """

    def rebuild(obj: object) -> ExtendedPromise[dict[typing.Any, typing.Any]]:
        keys, values = _entries(obj)
        return P.all(values).then(lambda results: _rebuild(obj, keys, results))

    return P.resolve(arg).then(rebuild)


__all__ = ("props",)
