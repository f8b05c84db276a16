"""
Callback bridge
===============

Hand a promise's outcome to a node-style callback, `callback(error, *values)`.

The callback runs outside the promise chain: an exception it raises does not
reject anything. It is reported to the running loop's exception handler, the
same place asyncio reports errors from its own callbacks.
"""

from __future__ import annotations

import asyncio
import logging
import typing

from .._errors import RejectionError
from .._helpers import is_array_like
from .._types import NodeCallback, Reason

if typing.TYPE_CHECKING:
    from ..promise import ExtendedPromise

logger = logging.getLogger(__name__)


def _as_error(reason: Reason) -> Reason:
    # A falsy reason would read as "no error" on the callback side
    if not isinstance(reason, BaseException) and not reason:
        return RejectionError(reason)
    return reason


def as_callback(
    promise: ExtendedPromise[typing.Any],
    callback: NodeCallback | None = None,
    *,
    spread: bool = False,
) -> ExtendedPromise[None]:
    """
    Deliver the outcome to `callback`.

    - fulfilled with None      -> callback(None)
    - fulfilled, spread=True   -> callback(None, *value)   (array-like values)
    - fulfilled                -> callback(None, value)
    - rejected                 -> callback(reason)

    Without a callback, returns a plain forwarding promise so the call can
    still be awaited.

    Example:
        def done(error, value=None):
            ...

        Promise.resolve(42).as_callback(done)   # done(None, 42)
    """
    if callback is None:
        return promise.then()

    loop = asyncio.get_running_loop()

    def deliver(*args: typing.Any) -> None:
        try:
            callback(*args)
        except Exception as exc:
            logger.debug("as_callback: callback %r raised %r", callback, exc)
            loop.call_exception_handler(
                {
                    "message": "Exception in callback passed to as_callback()",
                    "exception": exc,
                    "promise": promise,
                }
            )

    def on_fulfilled(value: typing.Any) -> None:
        if value is None:
            deliver(None)
        elif spread and is_array_like(value):
            deliver(None, *value)
        else:
            deliver(None, value)

    def on_rejected(reason: Reason) -> None:
        deliver(_as_error(reason))

    return promise.then(on_fulfilled, on_rejected)


__all__ = ("as_callback",)
