"""Flattening comparators for nested lists and lists of maps.

Nested containers are normalised into a flat list before comparison, and the
flat list is then handed to a list comparator. The two flatteners handle
badly shaped input differently:

- ``NestedListComparator`` raises ``ShapeMismatchError`` on any element that
  is not the expected shape.
- ``MapListComparator`` raises on elements that are not maps, but silently
  skips maps whose value under the key is missing or has another tag.
"""

import logging
from dataclasses import dataclass
from typing import List, Union

from eligibility.core.enums import MapListOperation, NestedListOperation, ValueKind
from eligibility.core.exceptions import ShapeMismatchError, TypeMismatchError
from eligibility.models.domain.value import Value
from eligibility.services.comparison.lists import (
    NumberListComparator,
    TextListComparator,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NestedListComparator:
    """
    Flattens a list of lists into a single list, then compares it.

    For example, ``[["9", "10"], ["11", "12"]]`` flattens to
    ``["9", "10", "11", "12"]`` before ``inner`` is evaluated.

    Attributes:
        operation: The flattening operation
        inner: The comparator applied to the flattened list
    """

    operation: NestedListOperation
    inner: TextListComparator

    def __post_init__(self):
        """Validate the inner comparator type."""
        if not isinstance(self.inner, TextListComparator):
            raise ValueError(
                f"{self.operation.value} requires a TextListComparator, "
                f"got {type(self.inner).__name__}"
            )

    @classmethod
    def flatten_to_text_list(
        cls, inner: TextListComparator
    ) -> "NestedListComparator":
        return cls(NestedListOperation.FLATTEN_TO_TEXT_LIST, inner)

    def evaluate(self, subject: Value, target: Value) -> bool:
        """
        Flatten ``subject`` and evaluate ``inner`` on the result.

        Raises:
            TypeMismatchError: If the subject is not a present list
            ShapeMismatchError: If an element is not a present list, or an
                inner element is not text
        """
        if subject.kind != ValueKind.SEQUENCE or subject.payload is None:
            raise TypeMismatchError(
                "Expected a list of values",
                details={"side": "subject", "actual": repr(subject)},
            )

        flattened: List[Value] = []
        for index, sub_list in enumerate(subject.payload):
            if sub_list.kind != ValueKind.SEQUENCE or sub_list.payload is None:
                raise ShapeMismatchError(
                    "Expected a list of lists",
                    details={"index": index, "actual": repr(sub_list)},
                )

            for item in sub_list.payload:
                # Absent text entries are kept; only the tag is checked
                if item.kind != ValueKind.TEXT:
                    raise ShapeMismatchError(
                        "Expected a list of strings",
                        details={"index": index, "actual": repr(item)},
                    )
                flattened.append(item)

        return self.inner.evaluate(Value.sequence(flattened), target)

    def __repr__(self) -> str:
        return f"NestedList.{self.operation.value}({self.inner.value})"


MapListInner = Union[TextListComparator, NumberListComparator, NestedListComparator]

# Expected extracted tag and inner comparator type per operation
_MAP_LIST_SHAPES = {
    MapListOperation.FLATTEN_TO_TEXT_LIST: (ValueKind.TEXT, TextListComparator),
    MapListOperation.FLATTEN_TO_NUMBER_LIST: (
        ValueKind.NUMBER,
        NumberListComparator,
    ),
    MapListOperation.FLATTEN_TO_NESTED_LIST: (
        ValueKind.SEQUENCE,
        NestedListComparator,
    ),
}


@dataclass(frozen=True)
class MapListComparator:
    """
    Flattens a list of maps by extracting one key, then compares the result.

    For example, flattening ``[{"sport_name": "Football"}, {"sport_name":
    "Golf"}]`` on ``sport_name`` yields ``["Football", "Golf"]``.

    An absent list is treated as empty. Maps that lack the key, or whose
    value under the key has a different tag than the operation extracts, are
    skipped without error.

    Attributes:
        operation: Which tag to extract
        key: The map key to extract from every element
        inner: The comparator applied to the extracted list
    """

    operation: MapListOperation
    key: str
    inner: MapListInner

    def __post_init__(self):
        """Validate the inner comparator type against the operation."""
        _, inner_type = _MAP_LIST_SHAPES[self.operation]
        if not isinstance(self.inner, inner_type):
            raise ValueError(
                f"{self.operation.value} requires a {inner_type.__name__}, "
                f"got {type(self.inner).__name__}"
            )

    @classmethod
    def flatten_to_text_list(
        cls, key: str, inner: TextListComparator
    ) -> "MapListComparator":
        return cls(MapListOperation.FLATTEN_TO_TEXT_LIST, key, inner)

    @classmethod
    def flatten_to_number_list(
        cls, key: str, inner: NumberListComparator
    ) -> "MapListComparator":
        return cls(MapListOperation.FLATTEN_TO_NUMBER_LIST, key, inner)

    @classmethod
    def flatten_to_nested_list(
        cls, key: str, inner: NestedListComparator
    ) -> "MapListComparator":
        return cls(MapListOperation.FLATTEN_TO_NESTED_LIST, key, inner)

    def evaluate(self, subject: Value, target: Value) -> bool:
        """
        Extract ``key`` from every map in ``subject`` and evaluate ``inner``.

        Raises:
            TypeMismatchError: If the subject is not a list value
            ShapeMismatchError: If an element is not a present map
        """
        if subject.kind != ValueKind.SEQUENCE:
            raise TypeMismatchError(
                "Expected a list",
                details={"side": "subject", "actual": repr(subject)},
            )

        expected_kind, _ = _MAP_LIST_SHAPES[self.operation]
        extracted: List[Value] = []
        skipped = 0

        for index, item in enumerate(subject.payload or ()):
            if item.kind != ValueKind.MAPPING or item.payload is None:
                raise ShapeMismatchError(
                    "Expected a map",
                    details={"index": index, "actual": repr(item)},
                )

            value = item.payload.get(self.key)
            if value is not None and value.kind == expected_kind:
                extracted.append(value)
            else:
                skipped += 1

        if skipped:
            logger.debug(
                f"Skipped {skipped} map(s) without a {expected_kind.value} "
                f"value under {self.key!r}"
            )

        return self.inner.evaluate(Value.sequence(extracted), target)

    def __repr__(self) -> str:
        return f"MapList.{self.operation.value}({self.key!r}, {self.inner!r})"
