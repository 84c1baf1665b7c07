"""Closed union over every comparator family, with a single dispatch point."""

from dataclasses import dataclass
from typing import Union

from eligibility.core.enums import ComparatorKind
from eligibility.models.domain.value import Value
from eligibility.services.comparison.flattening import (
    MapListComparator,
    NestedListComparator,
)
from eligibility.services.comparison.lists import (
    NumberListComparator,
    TextListComparator,
)
from eligibility.services.comparison.scalar import NumberComparator, TextComparator

ComparatorVariant = Union[
    NumberComparator,
    TextComparator,
    TextListComparator,
    NumberListComparator,
    MapListComparator,
    NestedListComparator,
]

_VARIANT_TYPES = {
    ComparatorKind.NUMBER: NumberComparator,
    ComparatorKind.TEXT: TextComparator,
    ComparatorKind.TEXT_LIST: TextListComparator,
    ComparatorKind.NUMBER_LIST: NumberListComparator,
    ComparatorKind.MAP_LIST: MapListComparator,
    ComparatorKind.NESTED_LIST: NestedListComparator,
}


@dataclass(frozen=True)
class Comparator:
    """
    A comparator from any family, tagged with its kind.

    Attributes:
        kind: The comparator family
        variant: The family-specific comparator
    """

    kind: ComparatorKind
    variant: ComparatorVariant

    def __post_init__(self):
        """Ensure the variant belongs to the declared family."""
        expected = _VARIANT_TYPES[self.kind]
        if not isinstance(self.variant, expected):
            raise ValueError(
                f"{self.kind.value} comparator requires a {expected.__name__}, "
                f"got {type(self.variant).__name__}"
            )

    @classmethod
    def of(cls, variant: ComparatorVariant) -> "Comparator":
        """Wrap a family comparator, inferring its kind."""
        for kind, variant_type in _VARIANT_TYPES.items():
            if isinstance(variant, variant_type):
                return cls(kind, variant)
        raise ValueError(f"Unknown comparator type: {type(variant).__name__}")

    @classmethod
    def number(cls, variant: NumberComparator) -> "Comparator":
        return cls(ComparatorKind.NUMBER, variant)

    @classmethod
    def text(cls, variant: TextComparator) -> "Comparator":
        return cls(ComparatorKind.TEXT, variant)

    @classmethod
    def text_list(cls, variant: TextListComparator) -> "Comparator":
        return cls(ComparatorKind.TEXT_LIST, variant)

    @classmethod
    def number_list(cls, variant: NumberListComparator) -> "Comparator":
        return cls(ComparatorKind.NUMBER_LIST, variant)

    @classmethod
    def map_list(cls, variant: MapListComparator) -> "Comparator":
        return cls(ComparatorKind.MAP_LIST, variant)

    @classmethod
    def nested_list(cls, variant: NestedListComparator) -> "Comparator":
        return cls(ComparatorKind.NESTED_LIST, variant)

    def evaluate(self, subject: Value, target: Value) -> bool:
        """
        Evaluate the wrapped comparator.

        Args:
            subject: The record's value for the rule's field
            target: The rule's target value

        Returns:
            Whether the subject satisfies the comparison

        Raises:
            ComparisonError: Whatever the wrapped comparator raises, unchanged
        """
        return self.variant.evaluate(subject, target)

    def __repr__(self) -> str:
        return f"Comparator({self.kind.value}, {self.variant!r})"
