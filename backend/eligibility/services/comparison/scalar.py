"""Scalar comparators over numeric and text values."""

from decimal import Decimal, InvalidOperation
from enum import Enum

from eligibility.core.enums import ValueKind
from eligibility.core.exceptions import MalformedScalarError, TypeMismatchError
from eligibility.models.domain.value import Value


def parse_number(text: str, side: str = "subject") -> Decimal:
    """
    Parse a numeric payload into a Decimal.

    Args:
        text: The payload text of a numeric value
        side: Which operand the text came from, used in error details

    Returns:
        The parsed number

    Raises:
        MalformedScalarError: If the text is not a finite decimal number
    """
    try:
        number = Decimal(text.strip())
    except (InvalidOperation, AttributeError):
        raise MalformedScalarError(
            f"{side.capitalize()} value {text!r} is not a number",
            details={"side": side, "text": text},
        )

    if not number.is_finite():
        raise MalformedScalarError(
            f"{side.capitalize()} value {text!r} is not a finite number",
            details={"side": side, "text": text},
        )

    return number


def format_number(number: Decimal) -> str:
    """Render a Decimal as numeric payload text, without exponent notation."""
    text = format(number, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


def _require_number(value: Value, side: str) -> Decimal:
    if value.kind != ValueKind.NUMBER or value.payload is None:
        raise TypeMismatchError(
            f"{side.capitalize()} value is not a number",
            details={"side": side, "actual": repr(value)},
        )
    return parse_number(value.payload, side)


def _require_text(value: Value, side: str) -> str:
    if value.kind != ValueKind.TEXT or value.payload is None:
        raise TypeMismatchError(
            f"{side.capitalize()} value is not a string",
            details={"side": side, "actual": repr(value)},
        )
    return value.payload


class NumberComparator(str, Enum):
    """Ordering and equality between two numeric values."""

    GREATER_THAN = "GreaterThan"
    LESS_THAN = "LessThan"
    EQUAL = "Equal"
    NOT_EQUAL = "NotEqual"
    GREATER_THAN_OR_EQUAL = "GreaterThanOrEqual"
    LESS_THAN_OR_EQUAL = "LessThanOrEqual"

    def evaluate(self, subject: Value, target: Value) -> bool:
        """
        Compare ``subject`` against ``target``.

        Both sides must be present numeric values.

        Raises:
            TypeMismatchError: If either side is not ``Number(Some(_))``
            MalformedScalarError: If either side's text is not a number
        """
        left = _require_number(subject, "subject")
        right = _require_number(target, "target")

        if self is NumberComparator.GREATER_THAN:
            return left > right
        elif self is NumberComparator.LESS_THAN:
            return left < right
        elif self is NumberComparator.EQUAL:
            return left == right
        elif self is NumberComparator.NOT_EQUAL:
            return left != right
        elif self is NumberComparator.GREATER_THAN_OR_EQUAL:
            return left >= right
        else:
            return left <= right


class TextComparator(str, Enum):
    """Exact and substring matching between two text values."""

    MATCHES = "Matches"
    NOT_MATCHES = "NotMatches"
    CONTAINS = "Contains"
    NOT_CONTAINS = "NotContains"

    def evaluate(self, subject: Value, target: Value) -> bool:
        """
        Compare ``subject`` against ``target``.

        Contains checks whether the target text occurs within the subject.

        Raises:
            TypeMismatchError: If either side is not ``String(Some(_))``
        """
        left = _require_text(subject, "subject")
        right = _require_text(target, "target")

        if self is TextComparator.MATCHES:
            return left == right
        elif self is TextComparator.NOT_MATCHES:
            return left != right
        elif self is TextComparator.CONTAINS:
            return right in left
        else:
            return right not in left
