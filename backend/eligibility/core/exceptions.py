"""Exception hierarchy for rule evaluation failures.

Every error raised while evaluating a rule is a ``ComparisonError``. The
``code`` attribute is stable and safe to persist or show in reports; the
``details`` dict carries structured context (which side failed, the offending
value, and so on).
"""

from typing import Any, Dict, Optional


class ComparisonError(ValueError):
    """Base exception for rule evaluation errors."""

    code = "COMPARISON_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class TypeMismatchError(ComparisonError):
    """A value's tag did not match what an operation required."""

    code = "TYPE_MISMATCH"


class ValueKindMismatchError(TypeMismatchError):
    """
    Raised by ``Value.as_*`` accessors when the tag does not match.

    The original value is kept, unchanged, on ``.value``.
    """

    def __init__(self, value: Any, expected: str):
        self.value = value
        super().__init__(
            f"Expected a {expected} value, got {value.kind.value}",
            details={"expected": expected, "actual": value.kind.value},
        )


class ShapeMismatchError(ComparisonError):
    """A container's elements did not have the shape an operation required."""

    code = "SHAPE_MISMATCH"


class MalformedScalarError(ComparisonError):
    """A numeric payload could not be parsed as a number."""

    code = "MALFORMED_SCALAR"


class FieldNotFoundError(ComparisonError):
    """The rule's field is absent from the record."""

    code = "FIELD_NOT_FOUND"

    def __init__(self, field: str, subject: str):
        self.field = field
        self.subject = subject
        super().__init__(
            f"Couldn't find field {field!r} in record {subject!r}",
            details={"field": field, "subject": subject},
        )


class UnsupportedOperationError(ComparisonError):
    """A declared comparator variant has no implementation."""

    code = "UNSUPPORTED_OPERATION"


class RuleNotFoundError(ComparisonError):
    """A scholarship references a rule id that is not known."""

    code = "RULE_NOT_FOUND"


class WireFormatError(ComparisonError):
    """A persisted attribute or rule document is malformed."""

    code = "WIRE_FORMAT"
