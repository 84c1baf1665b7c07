"""Comparators over dynamic values: scalar, list, and flattening families."""

from .scalar import NumberComparator, TextComparator
from .lists import NumberListComparator, TextListComparator
from .flattening import MapListComparator, NestedListComparator
from .comparator import Comparator, ComparatorVariant

__all__ = [
    "Comparator",
    "ComparatorVariant",
    "MapListComparator",
    "NestedListComparator",
    "NumberComparator",
    "NumberListComparator",
    "TextComparator",
    "TextListComparator",
]
