from .predicate import (
    ClassSelector,
    PredicateSelector,
    Selector,
    ShapeSelector,
    matches_predicate,
    to_selector,
)

__all__ = (
    "ClassSelector",
    "PredicateSelector",
    "Selector",
    "ShapeSelector",
    "matches_predicate",
    "to_selector",
)
