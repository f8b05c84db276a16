from .effects import call, get, return_, spread, tap, throw

__all__ = ("call", "get", "return_", "spread", "tap", "throw")
