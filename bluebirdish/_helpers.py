"""Internal helpers for bluebirdish.

Input normalisation and calling conventions shared by the combinator modules.
These are not part of the public API."""

from __future__ import annotations

import inspect
import typing
from collections.abc import Callable, Iterable, Mapping, Sequence


class _Missing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"


class _Hole:
    __slots__ = ()

    def __repr__(self) -> str:
        return "HOLE"


# Marks an argument the caller did not supply (None is a valid initial value)
MISSING: typing.Final = _Missing()

# Marks a never-assigned slot in a sequence, as opposed to a slot holding None
HOLE: typing.Final = _Hole()

_TEXT = (str, bytes, bytearray)


def as_sequence(value: object, operation: str, *, drop_holes: bool = False) -> list[typing.Any]:
    """
    Normalise a resolved combinator input into a list.

    Holes read as None unless `drop_holes` is set, in which case they are
    skipped entirely.
    """
    if isinstance(value, _TEXT) or isinstance(value, Mapping) or not isinstance(value, Iterable):
        raise TypeError(f"{operation}: expected a sequence, got {type(value).__name__}")
    if drop_holes:
        return unsparse(value)
    return [None if item is HOLE else item for item in value]


def unsparse(items: Iterable[typing.Any]) -> list[typing.Any]:
    """Drop holes, keep slots that hold None."""
    return [item for item in items if item is not HOLE]


def is_array_like(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, _TEXT)


def is_thenable(value: object) -> bool:
    if isinstance(value, type):
        return False
    return callable(getattr(value, "then", None))


def is_eventual(value: object) -> bool:
    """True for anything the resolution procedure would wait on."""
    return inspect.isawaitable(value) or is_thenable(value)


def positional_arity(fn: Callable[..., typing.Any]) -> int | None:
    """
    Number of positional parameters `fn` accepts, or None for "any".

    Raises ValueError (or TypeError) when the signature cannot be read, as for
    many builtins such as `bool`, `str` and `max`.
    """
    signature = inspect.signature(fn)

    count = 0
    for parameter in signature.parameters.values():
        match parameter.kind:
            case inspect.Parameter.VAR_POSITIONAL:
                return None
            case inspect.Parameter.POSITIONAL_ONLY | inspect.Parameter.POSITIONAL_OR_KEYWORD:
                count += 1
            case _:
                pass
    return count


def invoke[R](fn: Callable[..., R], *args: typing.Any, required: int | None = None) -> R:
    """
    Call `fn` with as many leading positional arguments as it accepts.

    Mappers receive (value, index, length), but `lambda x: x * 2` is a valid
    mapper; surplus arguments are dropped. Classes and builtins (`str`,
    `bool`, `max`, ...) and callables whose signature cannot be read get the
    first `required` arguments (all of them if not given).

    Example:
        invoke(max, acc, value, index, length, required=2)  # max(acc, value)
    """
    # optional constructor parameters (int's `base`) are not callback slots
    if required is not None and (isinstance(fn, type) or inspect.isbuiltin(fn)):
        return fn(*args[:required])
    try:
        arity = positional_arity(fn)
    except (TypeError, ValueError):
        arity = required
    if arity is None:
        return fn(*args)
    return fn(*args[:arity])


__all__ = (
    "HOLE",
    "MISSING",
    "as_sequence",
    "invoke",
    "is_array_like",
    "is_eventual",
    "is_thenable",
    "positional_arity",
    "unsparse",
)
