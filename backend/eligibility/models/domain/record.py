"""Open-ended record model for applicants and scholarships."""

from dataclasses import dataclass, field
from typing import Dict, Optional

from eligibility.models.domain.value import Value


@dataclass
class Record:
    """
    A named, schema-less mapping from field name to ``Value``.

    Applicants and scholarships are both records. Any field may be absent;
    the comparison engine only ever reads from a record.

    Attributes:
        subject: Key of the record in the backing store
        data: Field values by field name
    """

    subject: str
    data: Dict[str, Value] = field(default_factory=dict)

    def get(self, field_name: str) -> Optional[Value]:
        """Get a field's value, or None if the record has no such field."""
        return self.data.get(field_name)

    def __contains__(self, field_name: str) -> bool:
        return field_name in self.data

    def __repr__(self) -> str:
        return f"<Record(subject={self.subject!r}, fields={sorted(self.data)})>"
