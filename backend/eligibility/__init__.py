"""Scholarship eligibility: dynamic values, composable comparators, and rules."""

from .models.domain.value import Value
from .models.domain.record import Record
from .services.comparison import (
    Comparator,
    MapListComparator,
    NestedListComparator,
    NumberComparator,
    NumberListComparator,
    TextComparator,
    TextListComparator,
)
from .models.domain.rule import Rule, apply
from .services.wire import from_wire, to_wire

__all__ = [
    "Comparator",
    "MapListComparator",
    "NestedListComparator",
    "NumberComparator",
    "NumberListComparator",
    "Record",
    "Rule",
    "TextComparator",
    "TextListComparator",
    "Value",
    "apply",
    "from_wire",
    "to_wire",
]
