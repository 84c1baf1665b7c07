"""Pydantic schemas for persisted rules and eligibility reports."""

from .rule import RuleOutcome, RuleSchema, ScholarshipEligibilityResponse

__all__ = [
    "RuleOutcome",
    "RuleSchema",
    "ScholarshipEligibilityResponse",
]
