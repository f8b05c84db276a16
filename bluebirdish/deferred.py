from __future__ import annotations

import typing
from dataclasses import dataclass

from ._types import Reject, Resolve

if typing.TYPE_CHECKING:
    from .promise import ExtendedPromise


@dataclass(frozen=True, slots=True)
class Deferred[T]:
    """
    A promise together with the power to settle it from outside.

    `resolve` and `reject` are the promise's own resolving functions: the
    first call wins and later calls are no-ops.
    """

    promise: ExtendedPromise[T]
    resolve: Resolve
    reject: Reject

    @property
    def fulfill(self) -> Resolve:
        return self.resolve


def defer[T](P: type[ExtendedPromise[T]]) -> Deferred[T]:
    resolving: list[Resolve | Reject] = []

    def capture(resolve: Resolve, reject: Reject) -> None:
        resolving.extend((resolve, reject))

    promise = P(capture)
    resolve, reject = resolving
    return Deferred(promise, resolve, reject)


__all__ = ("Deferred", "defer")
