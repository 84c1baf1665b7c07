"""Eligibility rule domain model."""

from dataclasses import dataclass

from eligibility.core.exceptions import FieldNotFoundError
from eligibility.models.domain.record import Record
from eligibility.models.domain.value import Value
from eligibility.services.comparison.comparator import Comparator


@dataclass(frozen=True)
class Rule:
    """
    A single eligibility criterion: a field, a comparator, and a target.

    Attributes:
        id: Unique rule identifier, referenced from scholarship requirements
        field: The record field the rule inspects
        comparator: The comparison to perform
        target: The value to compare against
        category: Display category on the provider side (e.g., "Residency")
        label: Display text on the provider side (e.g., "20+ service hours")
    """

    id: str
    field: str
    comparator: Comparator
    target: Value
    category: str = ""
    label: str = ""

    def apply(self, record: Record) -> bool:
        """
        Evaluate this rule against a record.

        Args:
            record: The applicant record

        Returns:
            Whether the record satisfies the rule

        Raises:
            FieldNotFoundError: If the record has no value for ``field``
            ComparisonError: Any comparator error, propagated unchanged
        """
        value = record.get(self.field)
        if value is None:
            raise FieldNotFoundError(self.field, record.subject)

        return self.comparator.evaluate(value, self.target)

    def __repr__(self) -> str:
        return (
            f"<Rule(id={self.id!r}, field={self.field!r}, "
            f"comparator={self.comparator!r}, target={self.target!r})>"
        )


def apply(rule: Rule, record: Record) -> bool:
    """Evaluate ``rule`` against ``record``. See ``Rule.apply``."""
    return rule.apply(record)
