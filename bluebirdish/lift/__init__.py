"""
Bridges out of and into the promise world.

- `as_callback` - node-style callbacks
- `up.from_result` - kungfu Result -> promise
- `down.to_result`, `down.to_lazy` - promise -> kungfu
"""

from __future__ import annotations

from . import down, up
from .callback import as_callback
from .down import to_lazy, to_result
from .up import from_result

__all__ = (
    "as_callback",
    "down",
    "from_result",
    "to_lazy",
    "to_result",
    "up",
)
