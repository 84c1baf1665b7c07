"""Dynamic value model shared by records, rules, and comparators."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence, Union

from eligibility.core.enums import ValueKind
from eligibility.core.exceptions import ValueKindMismatchError

Payload = Union[str, tuple, Mapping[str, "Value"], None]


@dataclass(frozen=True)
class Value:
    """
    A tagged dynamic value.

    The tag (``kind``) and the presence of the payload are independent facts:
    ``Value.sequence(None)`` means "field not set" while
    ``Value.sequence([])`` means "field set to an empty list". Comparators
    rely on that distinction, so the two are never collapsed.

    Payload shapes per kind:
        TEXT: ``str``
        NUMBER: ``str`` holding the number's text, parsed on demand
        SEQUENCE: ``tuple`` of ``Value``
        MAPPING: read-only mapping of ``str`` to ``Value``

    Equality is structural and tag-aware: ``Value.number("3")`` never equals
    ``Value.text("3")``.

    Attributes:
        kind: The value's tag
        payload: The tagged payload, or None when absent
    """

    kind: ValueKind
    payload: Payload = field(default=None)

    # Constructors

    @classmethod
    def text(cls, text: Optional[str]) -> "Value":
        return cls(ValueKind.TEXT, text)

    @classmethod
    def number(cls, number: Optional[Any]) -> "Value":
        """Create a numeric value. Non-string numbers are stored as their text."""
        if number is not None and not isinstance(number, str):
            number = str(number)
        return cls(ValueKind.NUMBER, number)

    @classmethod
    def sequence(cls, items: Optional[Sequence["Value"]]) -> "Value":
        return cls(ValueKind.SEQUENCE, None if items is None else tuple(items))

    @classmethod
    def mapping(cls, entries: Optional[Mapping[str, "Value"]]) -> "Value":
        if entries is None:
            return cls(ValueKind.MAPPING, None)
        return cls(ValueKind.MAPPING, MappingProxyType(dict(entries)))

    @classmethod
    def default(cls) -> "Value":
        """The value a newly created form field starts with: empty text."""
        return cls.text("")

    # Presence

    @property
    def is_present(self) -> bool:
        """Whether the payload is set, regardless of the tag."""
        return self.payload is not None

    # Predicates

    def is_text(self) -> bool:
        return self.kind == ValueKind.TEXT

    def is_number(self) -> bool:
        return self.kind == ValueKind.NUMBER

    def is_sequence(self) -> bool:
        return self.kind == ValueKind.SEQUENCE

    def is_mapping(self) -> bool:
        return self.kind == ValueKind.MAPPING

    # Accessors

    def as_text(self) -> Optional[str]:
        """
        Get the text payload.

        Returns:
            The text, or None when the text value is absent

        Raises:
            ValueKindMismatchError: If this is not a text value. The error
                carries this value unchanged on ``.value``.
        """
        if not self.is_text():
            raise ValueKindMismatchError(self, ValueKind.TEXT.value)
        return self.payload

    def as_number(self) -> Optional[str]:
        """Get the numeric payload as its unparsed text."""
        if not self.is_number():
            raise ValueKindMismatchError(self, ValueKind.NUMBER.value)
        return self.payload

    def as_sequence(self) -> Optional[tuple]:
        """Get the list payload. Elements are themselves ``Value`` instances."""
        if not self.is_sequence():
            raise ValueKindMismatchError(self, ValueKind.SEQUENCE.value)
        return self.payload

    def as_mapping(self) -> Optional[Mapping[str, "Value"]]:
        if not self.is_mapping():
            raise ValueKindMismatchError(self, ValueKind.MAPPING.value)
        return self.payload

    def _debug_payload(self) -> Any:
        if isinstance(self.payload, MappingProxyType):
            return dict(self.payload)
        return self.payload

    def __hash__(self) -> int:
        if isinstance(self.payload, MappingProxyType):
            return hash((self.kind, frozenset(self.payload.items())))
        return hash((self.kind, self.payload))

    def __str__(self) -> str:
        if self.kind in (ValueKind.TEXT, ValueKind.NUMBER):
            return self.payload if self.payload is not None else ""
        return repr(self._debug_payload())

    def __repr__(self) -> str:
        return f"{self.kind.value}({self._debug_payload()!r})"
