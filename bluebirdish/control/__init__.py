from .attempt import attempt, method
from .coroutine import GeneratorDriver, coroutine, spawn

__all__ = (
    "GeneratorDriver",
    "attempt",
    "coroutine",
    "method",
    "spawn",
)
