from __future__ import annotations

import typing
from collections.abc import Iterable, Iterator


class RangeError(ValueError):
    """A requested count exceeds what the input can satisfy."""


class AggregateError(Exception):
    """Rejection reasons collected by a partial-success combinator, in arrival order."""

    errors: tuple[typing.Any, ...]

    def __init__(self, errors: Iterable[typing.Any]) -> None:
        self.errors = tuple(errors)
        super().__init__(f"{len(self.errors)} promise(s) rejected")

    @property
    def length(self) -> int:
        return len(self.errors)

    def __getitem__(self, index: int) -> typing.Any:
        return self.errors[index]

    def __len__(self) -> int:
        return len(self.errors)

    def __iter__(self) -> Iterator[typing.Any]:
        return iter(self.errors)


class RejectionError(Exception):
    """
    Carries a rejection reason that is not an exception.

    Promises may reject with any object. asyncio futures only hold exceptions,
    so other reasons travel boxed in this error and are unboxed before they
    reach handlers and selectors. Awaiting such a promise raises the box.
    """

    reason: typing.Any

    def __init__(self, reason: typing.Any = None) -> None:
        self.reason = reason
        super().__init__(f"promise rejected with {reason!r}")

    @property
    def cause(self) -> typing.Any:
        """The original reason (name used by node-style callback consumers)."""
        return self.reason


def box(reason: typing.Any) -> BaseException:
    """Turn any rejection reason into something an asyncio future can hold."""
    # asyncio refuses StopIteration in set_exception
    if isinstance(reason, BaseException) and not isinstance(reason, StopIteration):
        return reason
    return RejectionError(reason)


def unbox(error: BaseException) -> typing.Any:
    if isinstance(error, RejectionError):
        return error.reason
    return error


__all__ = ("AggregateError", "RangeError", "RejectionError", "box", "unbox")
