"""Core enums for type safety across the comparison engine."""

from enum import Enum


class ValueKind(str, Enum):
    """Tags of the dynamic value model, named as they are persisted."""

    TEXT = "String"
    NUMBER = "Number"
    SEQUENCE = "List"
    MAPPING = "Map"


class ComparatorKind(str, Enum):
    """Top-level comparator families."""

    NUMBER = "Number"
    TEXT = "Text"
    TEXT_LIST = "TextList"
    NUMBER_LIST = "NumberList"
    MAP_LIST = "MapList"
    NESTED_LIST = "NestedList"


class NumberListOperation(str, Enum):
    """Operations on a list of numeric values."""

    SUM = "Sum"
    CONTAINS = "Contains"
    NOT_CONTAINS = "NotContains"


class NestedListOperation(str, Enum):
    """Operations on a list of lists."""

    FLATTEN_TO_TEXT_LIST = "FlattenToTextList"


class MapListOperation(str, Enum):
    """Operations on a list of maps, each extracting a single key."""

    FLATTEN_TO_TEXT_LIST = "FlattenToTextList"
    FLATTEN_TO_NUMBER_LIST = "FlattenToNumberList"
    FLATTEN_TO_NESTED_LIST = "FlattenToNestedList"
