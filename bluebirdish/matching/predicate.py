"""
Predicate matcher
=================

Decides whether a rejection reason is handled by a filtered `catch`.

A raw selector is classified once into a closed set of variants, each with
its own matching rule:

- ClassSelector: the reason is an instance of the class
- PredicateSelector: the predicate returns something truthy for the reason
- ShapeSelector: every listed key is present on the reason with an equal value
"""

from __future__ import annotations

import typing
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from .._helpers import invoke

_ABSENT = object()


@dataclass(frozen=True, slots=True)
class ClassSelector:
    """Matches reasons that are instances of `cls` (exception classes and plain classes alike)."""

    cls: type

    def matches(self, reason: typing.Any) -> bool:
        return isinstance(reason, self.cls)


@dataclass(frozen=True, slots=True)
class PredicateSelector:
    """Matches reasons for which `predicate(reason)` is truthy."""

    predicate: Callable[[typing.Any], object]

    def matches(self, reason: typing.Any) -> bool:
        return bool(invoke(self.predicate, reason))


@dataclass(frozen=True, slots=True)
class ShapeSelector:
    """
    Matches reasons carrying every key of `shape` with a strictly equal value.

    Strict means same type and equal: `{"code": 1}` does not match
    `code=True` or `code=1.0`.
    """

    shape: Mapping[str, typing.Any]

    def matches(self, reason: typing.Any) -> bool:
        return all(_strictly_equal(_lookup(reason, key), expected) for key, expected in self.shape.items())


def _strictly_equal(actual: typing.Any, expected: typing.Any) -> bool:
    return type(actual) is type(expected) and actual == expected


type Selector = ClassSelector | PredicateSelector | ShapeSelector


def _lookup(reason: typing.Any, key: str) -> typing.Any:
    if isinstance(reason, Mapping):
        return reason.get(key, _ABSENT)
    if not isinstance(key, str):
        return _ABSENT
    return getattr(reason, key, _ABSENT)


def to_selector(raw: object) -> Selector | None:
    """Classify a raw selector. Returns None for values that never match."""
    match raw:
        case type():
            return ClassSelector(raw)
        case Mapping():
            return ShapeSelector(raw)
        case _ if callable(raw):
            return PredicateSelector(raw)
        case _:
            return None


def matches_predicate(reason: typing.Any, selector: object) -> bool:
    """Check whether a rejection `reason` matches a raw or classified `selector`."""
    if not isinstance(selector, ClassSelector | PredicateSelector | ShapeSelector):
        selector = to_selector(selector)
    if selector is None:
        return False
    return selector.matches(reason)


__all__ = (
    "ClassSelector",
    "PredicateSelector",
    "Selector",
    "ShapeSelector",
    "matches_predicate",
    "to_selector",
)
