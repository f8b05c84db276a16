from .fold import each, map_series, reduce
from .props import props
from .traverse import filter_, map_

__all__ = (
    "each",
    "filter_",
    "map_",
    "map_series",
    "props",
    "reduce",
)
