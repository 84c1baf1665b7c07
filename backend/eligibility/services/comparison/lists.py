"""List comparators over sequence values."""

from dataclasses import dataclass
from decimal import Decimal, DecimalException, Inexact, Overflow, localcontext
from enum import Enum
from typing import Optional

from eligibility.core.enums import NumberListOperation, ValueKind
from eligibility.core.exceptions import (
    MalformedScalarError,
    ShapeMismatchError,
    TypeMismatchError,
    UnsupportedOperationError,
)
from eligibility.models.domain.value import Value
from eligibility.services.comparison.scalar import (
    NumberComparator,
    format_number,
    parse_number,
)

# Significant digits available to an exact Sum
SUM_PRECISION = 100


def _list_or_absent(subject: Value) -> Optional[tuple]:
    """Get a sequence payload, allowing it to be absent."""
    if subject.kind != ValueKind.SEQUENCE:
        raise TypeMismatchError(
            "Expected a list",
            details={"side": "subject", "actual": repr(subject)},
        )
    return subject.payload


def _present_list(subject: Value) -> tuple:
    """Get a sequence payload that must be present."""
    items = _list_or_absent(subject)
    if items is None:
        raise TypeMismatchError(
            "Expected a list, but the list is not set",
            details={"side": "subject", "actual": repr(subject)},
        )
    return items


class TextListComparator(str, Enum):
    """
    Membership and emptiness checks on a list.

    An absent list (``List(None)``) is treated as empty here rather than as
    an error. Contains uses structural equality and does not check element
    types, so a list of numbers simply never contains a text target.
    """

    CONTAINS = "Contains"
    NOT_CONTAINS = "NotContains"
    IS_EMPTY = "IsEmpty"
    IS_NOT_EMPTY = "IsNotEmpty"

    def evaluate(self, subject: Value, target: Value) -> bool:
        """
        Evaluate the list check. ``target`` is ignored by IsEmpty/IsNotEmpty.

        Raises:
            TypeMismatchError: If the subject is not a list value
        """
        items = _list_or_absent(subject)

        if self is TextListComparator.CONTAINS:
            return items is not None and target in items
        elif self is TextListComparator.NOT_CONTAINS:
            return items is None or target not in items
        elif self is TextListComparator.IS_EMPTY:
            return not items
        else:
            return bool(items)


@dataclass(frozen=True)
class NumberListComparator:
    """
    Comparisons on a list of numeric values.

    ``Sum`` adds every element and compares the total using ``inner``.
    ``Contains`` is a structural membership test that accepts elements of any
    tag. ``NotContains`` is declared but not implemented.

    Attributes:
        operation: The list operation
        inner: The number comparison applied to the sum (Sum only)
    """

    operation: NumberListOperation
    inner: Optional[NumberComparator] = None

    def __post_init__(self):
        """Ensure only Sum carries an inner comparator."""
        if self.operation == NumberListOperation.SUM and self.inner is None:
            raise ValueError("Sum requires an inner NumberComparator")
        if self.operation != NumberListOperation.SUM and self.inner is not None:
            raise ValueError(
                f"{self.operation.value} does not take an inner comparator"
            )

    @classmethod
    def sum(cls, inner: NumberComparator) -> "NumberListComparator":
        return cls(NumberListOperation.SUM, inner)

    @classmethod
    def contains(cls) -> "NumberListComparator":
        return cls(NumberListOperation.CONTAINS)

    @classmethod
    def not_contains(cls) -> "NumberListComparator":
        return cls(NumberListOperation.NOT_CONTAINS)

    def evaluate(self, subject: Value, target: Value) -> bool:
        """
        Evaluate the list operation.

        Raises:
            TypeMismatchError: If the subject is not a present list
            ShapeMismatchError: If Sum finds an element that is not a present number
            MalformedScalarError: If Sum finds unparseable numeric text or the
                total cannot be held exactly
            UnsupportedOperationError: For NotContains
        """
        if self.operation == NumberListOperation.SUM:
            return self._evaluate_sum(subject, target)
        elif self.operation == NumberListOperation.CONTAINS:
            return target in _present_list(subject)
        else:
            raise UnsupportedOperationError(
                "NumberList NotContains is not implemented",
                details={"operation": self.operation.value},
            )

    def _evaluate_sum(self, subject: Value, target: Value) -> bool:
        # Sums are exact: rounding or overflow is an error
        with localcontext() as ctx:
            ctx.prec = SUM_PRECISION
            ctx.traps[Inexact] = True
            ctx.traps[Overflow] = True

            total = Decimal("0")
            for index, item in enumerate(_present_list(subject)):
                if item.kind != ValueKind.NUMBER or item.payload is None:
                    raise ShapeMismatchError(
                        "Expected a list of numbers",
                        details={"index": index, "actual": repr(item)},
                    )
                number = parse_number(item.payload, "subject")
                try:
                    total += number
                except DecimalException:
                    raise MalformedScalarError(
                        f"Sum cannot be represented exactly in {SUM_PRECISION} digits",
                        details={"side": "subject", "index": index, "text": item.payload},
                    )

        return self.inner.evaluate(Value.number(format_number(total)), target)

    def __repr__(self) -> str:
        if self.inner is not None:
            return f"NumberList.{self.operation.value}({self.inner.value})"
        return f"NumberList.{self.operation.value}"
