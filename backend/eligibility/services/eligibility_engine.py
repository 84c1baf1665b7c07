"""Eligibility engine for evaluating applicants against scholarship requirements."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Optional

from eligibility.config import settings
from eligibility.core.enums import ValueKind
from eligibility.core.exceptions import ComparisonError, RuleNotFoundError
from eligibility.models.domain.record import Record
from eligibility.models.domain.rule import Rule
from eligibility.models.schemas.rule import RuleOutcome, ScholarshipEligibilityResponse

logger = logging.getLogger(__name__)


class EligibilityEngine:
    """
    Evaluates applicant records against scholarship requirement lists.

    A scholarship is a record whose requirements field lists rule ids. An
    applicant is eligible when every referenced rule passes. This class:
    - Maintains an index of rules by id
    - Resolves each scholarship's requirements to rules
    - Reports per-rule outcomes, stopping at the first error
    - Fans batch evaluations out over a thread pool
    """

    def __init__(
        self,
        rules: Iterable[Rule],
        requirements_field: Optional[str] = None,
        name_field: Optional[str] = None,
    ):
        """
        Initialize the engine with a rule index.

        Args:
            rules: All rules scholarships may reference
            requirements_field: Scholarship field listing rule ids
            name_field: Scholarship field holding its display name
        """
        self._rules: Dict[str, Rule] = {}
        for rule in rules:
            if rule.id in self._rules:
                logger.warning(f"Duplicate rule id {rule.id!r}, keeping the last definition")
            self._rules[rule.id] = rule

        self.requirements_field = requirements_field or settings.REQUIREMENTS_FIELD
        self.name_field = name_field or settings.SCHOLARSHIP_NAME_FIELD

    @property
    def rules(self) -> Dict[str, Rule]:
        """Rules by id."""
        return dict(self._rules)

    def get_rule(self, rule_id: str) -> Rule:
        """
        Look up a rule by id.

        Raises:
            RuleNotFoundError: If no rule has this id
        """
        rule = self._rules.get(rule_id)
        if rule is None:
            raise RuleNotFoundError(
                f"No rule with id {rule_id!r}", details={"rule_id": rule_id}
            )
        return rule

    def requirement_ids(self, scholarship: Record) -> List[Optional[str]]:
        """
        Get the rule ids a scholarship requires.

        A missing or non-list requirements field means the scholarship has
        no requirements. Entries that are not text come back as None so that
        resolving them fails loudly.
        """
        requirements = scholarship.get(self.requirements_field)
        if requirements is None or requirements.kind != ValueKind.SEQUENCE:
            return []

        ids: List[Optional[str]] = []
        for item in requirements.payload or ():
            ids.append(item.payload if item.kind == ValueKind.TEXT else None)
        return ids

    def resolve_requirements(self, scholarship: Record) -> List[Rule]:
        """
        Resolve a scholarship's requirement ids to rules.

        Raises:
            RuleNotFoundError: If any id is unknown or not text
        """
        return [
            self._resolve(rule_id, scholarship)
            for rule_id in self.requirement_ids(scholarship)
        ]

    def _resolve(self, rule_id: Optional[str], scholarship: Record) -> Rule:
        if rule_id is None:
            raise RuleNotFoundError(
                f"Scholarship {scholarship.subject!r} has a requirement that is not a rule id",
                details={"scholarship": scholarship.subject},
            )
        return self.get_rule(rule_id)

    def scholarship_name(self, scholarship: Record) -> Optional[str]:
        """Get the scholarship's display name, if it has a text one."""
        name = scholarship.get(self.name_field)
        if name is None or name.kind != ValueKind.TEXT:
            return None
        return name.payload

    def is_eligible(self, scholarship: Record, applicant: Record) -> bool:
        """
        Decide whether an applicant meets every requirement of a scholarship.

        Args:
            scholarship: The scholarship record
            applicant: The applicant record

        Returns:
            True if every required rule passes (or there are none)

        Raises:
            RuleNotFoundError: If a requirement references an unknown rule
            ComparisonError: The first error raised by any rule, unchanged
        """
        for rule in self.resolve_requirements(scholarship):
            if not rule.apply(applicant):
                return False
        return True

    def evaluate_scholarship(
        self,
        scholarship: Record,
        applicant: Record,
    ) -> ScholarshipEligibilityResponse:
        """
        Evaluate every requirement of a scholarship and report the outcome.

        Unlike ``is_eligible``, all rules are evaluated so the report shows
        each one, but evaluation still stops at the first error. Errors are
        reported explicitly, never converted to an ineligible result.

        Args:
            scholarship: The scholarship record
            applicant: The applicant record

        Returns:
            ScholarshipEligibilityResponse with per-rule outcomes
        """
        response = ScholarshipEligibilityResponse(
            scholarship_subject=scholarship.subject,
            scholarship_name=self.scholarship_name(scholarship),
            applicant_subject=applicant.subject,
        )

        all_passed = True
        for requirement in self.requirement_ids(scholarship):
            rule_id = requirement or ""
            try:
                passed = self._resolve(requirement, scholarship).apply(applicant)
            except ComparisonError as e:
                logger.warning(
                    f"Rule {rule_id!r} could not be evaluated for applicant "
                    f"{applicant.subject!r}: {e.message}"
                )
                response.rule_results.append(
                    RuleOutcome(rule_id=rule_id, error_code=e.code, error_message=e.message)
                )
                response.rules_evaluated += 1
                response.error_code = e.code
                response.error_message = e.message
                return response

            response.rule_results.append(RuleOutcome(rule_id=rule_id, passed=passed))
            response.rules_evaluated += 1
            all_passed = all_passed and passed

        response.is_eligible = all_passed
        return response

    def eligible_scholarships(
        self,
        scholarships: Iterable[Record],
        applicant: Record,
    ) -> List[ScholarshipEligibilityResponse]:
        """
        Get the scholarships an applicant is eligible for.

        Scholarships that could not be evaluated are left out and logged.
        """
        eligible = []
        for scholarship in scholarships:
            result = self.evaluate_scholarship(scholarship, applicant)
            if result.has_error:
                logger.warning(
                    f"Skipping scholarship {scholarship.subject!r}: {result.error_message}"
                )
            elif result.is_eligible:
                eligible.append(result)
        return eligible

    def evaluate_batch(
        self,
        scholarships: Iterable[Record],
        applicants: Iterable[Record],
        max_workers: Optional[int] = None,
    ) -> List[ScholarshipEligibilityResponse]:
        """
        Evaluate every applicant against every scholarship in parallel.

        Each (scholarship, applicant) pair is an independent task with its
        own result; an error in one pair never affects another.

        Args:
            scholarships: Scholarship records
            applicants: Applicant records
            max_workers: Thread pool size; defaults to ``settings.BATCH_MAX_WORKERS``

        Returns:
            One result per pair, ordered by scholarship then applicant
        """
        scholarship_list = list(scholarships)
        applicant_list = list(applicants)
        pairs = [
            (scholarship, applicant)
            for scholarship in scholarship_list
            for applicant in applicant_list
        ]
        if not pairs:
            return []

        workers = max_workers or settings.BATCH_MAX_WORKERS
        logger.info(
            f"Evaluating {len(applicant_list)} applicant(s) against "
            f"{len(scholarship_list)} scholarship(s) with {workers} worker(s)"
        )

        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(
                executor.map(lambda pair: self.evaluate_scholarship(*pair), pairs)
            )

        failed = sum(1 for result in results if result.has_error)
        if failed:
            logger.warning(f"{failed} of {len(results)} evaluation(s) stopped on an error")

        return results
