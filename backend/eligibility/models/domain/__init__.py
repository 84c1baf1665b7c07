"""Domain models for the comparison engine.

``Rule`` lives in ``eligibility.models.domain.rule`` and is imported from
there, since it depends on the comparator package.
"""

from .value import Value
from .record import Record

__all__ = [
    "Record",
    "Value",
]
