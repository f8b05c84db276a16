from .gather import all_, join
from .race import race
from .some import any_, some

__all__ = (
    "all_",
    "any_",
    "join",
    "race",
    "some",
)
