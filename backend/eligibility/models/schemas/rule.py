"""Pydantic schemas for persisted rules and eligibility reports."""

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


# ==================== Rule Schemas ====================


class RuleSchema(BaseModel):
    """
    Persisted shape of a rule.

    ``comparator`` and ``target`` hold the encoded forms produced by
    ``eligibility.services.wire``. Documents written with the older field
    names (``member``, ``comparison``, ``target_value``, ``display_text``)
    are accepted as well.
    """

    id: str = Field(..., min_length=1)
    field: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("field", "member"),
        description="Record field the rule inspects",
    )
    comparator: dict[str, Any] = Field(
        ...,
        validation_alias=AliasChoices("comparator", "comparison"),
        description="Externally tagged comparator (e.g., {'Number': 'GreaterThanOrEqual'})",
    )
    target: dict[str, Any] = Field(
        ...,
        validation_alias=AliasChoices("target", "target_value"),
        description="Target value as a tagged attribute",
    )
    category: str = ""
    label: str = Field(
        default="",
        validation_alias=AliasChoices("label", "display_text"),
    )

    model_config = ConfigDict(extra="ignore")


# ==================== Evaluation Report Schemas ====================


class RuleOutcome(BaseModel):
    """Outcome of one rule within a scholarship evaluation."""

    rule_id: str
    passed: Optional[bool] = Field(
        None, description="None when the rule could not be evaluated"
    )
    error_code: Optional[str] = None
    error_message: Optional[str] = None


class ScholarshipEligibilityResponse(BaseModel):
    """
    Eligibility of one applicant for one scholarship.

    ``is_eligible`` is None when evaluation stopped on an error; the error is
    reported in ``error_code``/``error_message`` instead of being folded into
    an ineligible result.
    """

    scholarship_subject: str
    scholarship_name: Optional[str] = None
    applicant_subject: str
    is_eligible: Optional[bool] = None
    rules_evaluated: int = Field(default=0, ge=0)
    rule_results: list[RuleOutcome] = Field(default_factory=list)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def has_error(self) -> bool:
        """Whether evaluation stopped on an error."""
        return self.error_code is not None
