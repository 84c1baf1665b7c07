"""Conversion between domain objects and the persisted attribute format.

Values are stored in the typed attribute format of a schema-less document
store (``{"S": ...}``, ``{"N": ...}``, ``{"L": [...]}``, ``{"M": {...}}``,
``{"NULL": True}``). Every value is wrapped in a one-key map naming its tag,
so the tag survives even when the payload is absent:

    Value.text("a")        -> {"M": {"String": {"S": "a"}}}
    Value.number("5")      -> {"M": {"Number": {"N": "5"}}}
    Value.sequence(None)   -> {"M": {"List": {"NULL": True}}}

Comparators use an externally tagged encoding: unit variants are their name
(``"Contains"``) and variants with a payload are one-key maps
(``{"Sum": "Equal"}``, ``{"FlattenToTextList": ["sport_name", "Contains"]}``).
"""

from typing import Any, Dict, Union

from pydantic import ValidationError

from eligibility.core.enums import (
    ComparatorKind,
    MapListOperation,
    NestedListOperation,
    NumberListOperation,
    ValueKind,
)
from eligibility.core.exceptions import WireFormatError
from eligibility.models.domain.record import Record
from eligibility.models.domain.rule import Rule
from eligibility.models.domain.value import Value
from eligibility.models.schemas.rule import RuleSchema
from eligibility.services.comparison import (
    Comparator,
    MapListComparator,
    NestedListComparator,
    NumberComparator,
    NumberListComparator,
    TextComparator,
    TextListComparator,
)

Attribute = Dict[str, Any]
EncodedComparator = Union[str, Dict[str, Any]]

SUBJECT_KEY = "subject"

_NULL = {"NULL": True}


# ==================== Values ====================


def to_wire(value: Value) -> Attribute:
    """
    Encode a value as a typed attribute.

    Args:
        value: The value to encode

    Returns:
        A one-key ``{"M": {tag: attribute}}`` map
    """
    if value.payload is None:
        inner = dict(_NULL)
    elif value.kind == ValueKind.TEXT:
        inner = {"S": value.payload}
    elif value.kind == ValueKind.NUMBER:
        inner = {"N": value.payload}
    elif value.kind == ValueKind.SEQUENCE:
        inner = {"L": [to_wire(item) for item in value.payload]}
    else:
        inner = {"M": {key: to_wire(item) for key, item in value.payload.items()}}

    return {"M": {value.kind.value: inner}}


def from_wire(attr: Attribute) -> Value:
    """
    Decode a typed attribute produced by ``to_wire``.

    Args:
        attr: The attribute to decode

    Returns:
        The decoded value

    Raises:
        WireFormatError: If the attribute is not a tagged value
    """
    tagged = _single_entry(attr, "value attribute")
    type_key, tag_map = tagged
    if type_key != "M" or not isinstance(tag_map, dict):
        raise WireFormatError(
            f"Expected a tagged map attribute, got {type_key!r}",
            details={"attribute": attr},
        )

    tag, inner = _single_entry(tag_map, "value tag")
    try:
        kind = ValueKind(tag)
    except ValueError:
        raise WireFormatError(
            f"Unknown value tag {tag!r}", details={"attribute": attr}
        )

    inner_key, payload = _single_entry(inner, f"{tag} payload")
    if inner_key == "NULL":
        return Value(kind, None)

    expected = {
        ValueKind.TEXT: "S",
        ValueKind.NUMBER: "N",
        ValueKind.SEQUENCE: "L",
        ValueKind.MAPPING: "M",
    }[kind]
    if inner_key != expected:
        raise WireFormatError(
            f"{tag} value must be stored as {expected!r}, got {inner_key!r}",
            details={"attribute": attr},
        )

    if kind == ValueKind.TEXT:
        return Value.text(_check_type(payload, str, attr))
    elif kind == ValueKind.NUMBER:
        return Value.number(_check_type(payload, str, attr))
    elif kind == ValueKind.SEQUENCE:
        return Value.sequence([from_wire(item) for item in _check_type(payload, list, attr)])
    else:
        return Value.mapping(
            {key: from_wire(item) for key, item in _check_type(payload, dict, attr).items()}
        )


def _single_entry(attr: Any, what: str) -> tuple:
    if not isinstance(attr, dict) or len(attr) != 1:
        raise WireFormatError(
            f"Malformed {what}: expected a single-key map",
            details={"attribute": attr},
        )
    return next(iter(attr.items()))


def _check_type(payload: Any, expected: type, attr: Attribute) -> Any:
    if not isinstance(payload, expected):
        raise WireFormatError(
            f"Expected {expected.__name__} payload, got {type(payload).__name__}",
            details={"attribute": attr},
        )
    return payload


# ==================== Records ====================


def record_to_item(record: Record) -> Dict[str, Attribute]:
    """
    Encode a record as a flat item: the subject key beside every field.

    Raises:
        WireFormatError: If a data field would collide with the subject key
    """
    if SUBJECT_KEY in record.data:
        raise WireFormatError(
            f"Record {record.subject!r} has a field named {SUBJECT_KEY!r}",
            details={"subject": record.subject, "field": SUBJECT_KEY},
        )

    item: Dict[str, Attribute] = {SUBJECT_KEY: {"S": record.subject}}
    for field_name, value in record.data.items():
        item[field_name] = to_wire(value)
    return item


def record_from_item(item: Dict[str, Attribute]) -> Record:
    """
    Decode an item produced by ``record_to_item``.

    Raises:
        WireFormatError: If the subject key is missing or any field is malformed
    """
    subject_attr = item.get(SUBJECT_KEY)
    if not isinstance(subject_attr, dict) or not isinstance(subject_attr.get("S"), str):
        raise WireFormatError(
            "Item is missing a string subject key", details={"keys": sorted(item)}
        )

    data = {
        field_name: from_wire(attr)
        for field_name, attr in item.items()
        if field_name != SUBJECT_KEY
    }
    return Record(subject=subject_attr["S"], data=data)


# ==================== Comparators ====================


def comparator_to_wire(comparator: Comparator) -> Dict[str, EncodedComparator]:
    """Encode a comparator as ``{kind: encoded_variant}``."""
    return {comparator.kind.value: _encode_variant(comparator.variant)}


def _encode_variant(variant: Any) -> EncodedComparator:
    if isinstance(variant, (NumberComparator, TextComparator, TextListComparator)):
        return variant.value
    elif isinstance(variant, NumberListComparator):
        if variant.operation == NumberListOperation.SUM:
            return {variant.operation.value: variant.inner.value}
        return variant.operation.value
    elif isinstance(variant, NestedListComparator):
        return {variant.operation.value: variant.inner.value}
    elif isinstance(variant, MapListComparator):
        return {variant.operation.value: [variant.key, _encode_variant(variant.inner)]}

    raise ValueError(f"Cannot encode comparator type: {type(variant).__name__}")


def comparator_from_wire(encoded: Any) -> Comparator:
    """
    Decode a comparator produced by ``comparator_to_wire``.

    Raises:
        WireFormatError: If the encoding names an unknown variant or is malformed
    """
    kind_name, body = _single_entry(encoded, "comparator")
    try:
        kind = ComparatorKind(kind_name)
        if kind == ComparatorKind.NUMBER:
            variant = NumberComparator(body)
        elif kind == ComparatorKind.TEXT:
            variant = TextComparator(body)
        elif kind == ComparatorKind.TEXT_LIST:
            variant = TextListComparator(body)
        elif kind == ComparatorKind.NUMBER_LIST:
            variant = _decode_number_list(body)
        elif kind == ComparatorKind.NESTED_LIST:
            variant = _decode_nested_list(body)
        else:
            variant = _decode_map_list(body)
    except WireFormatError:
        raise
    except (ValueError, TypeError) as e:
        raise WireFormatError(
            f"Malformed comparator: {e}", details={"comparator": encoded}
        )

    return Comparator(kind, variant)


def _decode_number_list(body: Any) -> NumberListComparator:
    if isinstance(body, str):
        return NumberListComparator(NumberListOperation(body))

    operation, inner = _single_entry(body, "NumberList comparator")
    return NumberListComparator(NumberListOperation(operation), NumberComparator(inner))


def _decode_nested_list(body: Any) -> NestedListComparator:
    operation, inner = _single_entry(body, "NestedList comparator")
    return NestedListComparator(NestedListOperation(operation), TextListComparator(inner))


def _decode_map_list(body: Any) -> MapListComparator:
    operation_name, args = _single_entry(body, "MapList comparator")
    operation = MapListOperation(operation_name)
    if not isinstance(args, list) or len(args) != 2 or not isinstance(args[0], str):
        raise WireFormatError(
            f"{operation_name} expects [key, comparator]", details={"comparator": body}
        )

    key, inner = args
    if operation == MapListOperation.FLATTEN_TO_TEXT_LIST:
        inner_variant = TextListComparator(inner)
    elif operation == MapListOperation.FLATTEN_TO_NUMBER_LIST:
        inner_variant = _decode_number_list(inner)
    else:
        inner_variant = _decode_nested_list(inner)

    return MapListComparator(operation, key, inner_variant)


# ==================== Rules ====================


def rule_to_item(rule: Rule) -> Dict[str, Any]:
    """Encode a rule as a persisted document."""
    schema = RuleSchema(
        id=rule.id,
        field=rule.field,
        comparator=comparator_to_wire(rule.comparator),
        target=to_wire(rule.target),
        category=rule.category,
        label=rule.label,
    )
    return schema.model_dump()


def rule_from_item(item: Dict[str, Any]) -> Rule:
    """
    Decode and validate a persisted rule document.

    Raises:
        WireFormatError: If the document fails validation or any part is malformed
    """
    try:
        schema = RuleSchema.model_validate(item)
    except ValidationError as e:
        raise WireFormatError(
            f"Invalid rule document: {e.error_count()} validation error(s)",
            details={"errors": e.errors(include_url=False)},
        )

    return Rule(
        id=schema.id,
        field=schema.field,
        comparator=comparator_from_wire(schema.comparator),
        target=from_wire(schema.target),
        category=schema.category,
        label=schema.label,
    )
