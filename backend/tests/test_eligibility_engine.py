"""Tests for scholarship eligibility evaluation."""

from dataclasses import replace

import pytest

from eligibility.core.exceptions import FieldNotFoundError, RuleNotFoundError
from eligibility.models.domain.record import Record
from eligibility.models.domain.value import Value
from eligibility.services.eligibility_engine import EligibilityEngine
from eligibility.services.rule_catalog import default_rules


def scholarship(subject, name, requirements):
    data = {"name": Value.text(name)}
    if requirements is not None:
        data["requirements"] = Value.sequence([Value.text(rule_id) for rule_id in requirements])
    return Record(subject=subject, data=data)


@pytest.fixture
def engine() -> EligibilityEngine:
    return EligibilityEngine(default_rules())


class TestEvaluateScholarship:
    def test_all_requirements_pass(self, engine, student_record):
        result = engine.evaluate_scholarship(
            scholarship("s1", "Southbury Athletes", ["residency_southbury", "sports_football"]),
            student_record,
        )

        assert result.is_eligible is True
        assert result.scholarship_name == "Southbury Athletes"
        assert result.applicant_subject == "test"
        assert result.rules_evaluated == 2
        assert [outcome.passed for outcome in result.rule_results] == [True, True]
        assert not result.has_error

    def test_one_failing_requirement(self, engine, student_record):
        result = engine.evaluate_scholarship(
            scholarship("s2", "Service Award", ["service_hours_20", "service_hours_25", "gpa_3"]),
            student_record,
        )

        assert result.is_eligible is False
        assert result.rules_evaluated == 3
        assert [outcome.passed for outcome in result.rule_results] == [True, False, True]

    def test_no_requirements_is_eligible(self, engine, student_record):
        result = engine.evaluate_scholarship(
            scholarship("s3", "Open Scholarship", None), student_record
        )

        assert result.is_eligible is True
        assert result.rules_evaluated == 0

    def test_error_stops_evaluation_and_is_reported(self, engine, student_record):
        # math_sat is not in the record, so the second rule cannot be evaluated
        result = engine.evaluate_scholarship(
            scholarship("s4", "STEM", ["gpa_3", "math_sat_comp", "residency_southbury"]),
            student_record,
        )

        assert result.is_eligible is None
        assert result.has_error
        assert result.error_code == "FIELD_NOT_FOUND"
        assert result.rules_evaluated == 2
        assert result.rule_results[-1].rule_id == "math_sat_comp"
        assert result.rule_results[-1].passed is None

    def test_unknown_rule_is_reported(self, engine, student_record):
        result = engine.evaluate_scholarship(
            scholarship("s5", "Mystery", ["does_not_exist"]), student_record
        )

        assert result.error_code == "RULE_NOT_FOUND"
        assert result.is_eligible is None

    def test_non_text_requirement_is_reported(self, engine, student_record):
        bad = Record(
            subject="s6",
            data={"requirements": Value.sequence([Value.number("1")])},
        )

        result = engine.evaluate_scholarship(bad, student_record)

        assert result.error_code == "RULE_NOT_FOUND"
        assert result.scholarship_name is None


class TestIsEligible:
    def test_raises_first_error(self, engine, student_record):
        with pytest.raises(FieldNotFoundError):
            engine.is_eligible(scholarship("s", "STEM", ["math_sat_comp"]), student_record)

    def test_unknown_rule_raises(self, engine, student_record):
        with pytest.raises(RuleNotFoundError):
            engine.is_eligible(scholarship("s", "Mystery", ["nope"]), student_record)

    def test_returns_bool(self, engine, student_record):
        assert engine.is_eligible(scholarship("s", "Music", ["major_music"]), student_record)
        assert not engine.is_eligible(scholarship("s", "Nursing", ["major_nursing"]), student_record)


class TestBatch:
    def test_eligible_scholarships(self, engine, student_record):
        scholarships = [
            scholarship("s1", "Football", ["sports_football"]),
            scholarship("s2", "Golf", ["sports_golf"]),
            scholarship("s3", "Broken", ["math_sat_comp"]),
        ]

        eligible = engine.eligible_scholarships(scholarships, student_record)

        assert [result.scholarship_name for result in eligible] == ["Football"]

    def test_evaluate_batch_is_independent_per_pair(self, engine, student_record):
        other = Record(
            subject="other",
            data={
                "town": Value.text("Middlebury"),
                "math_sat": Value.number("700"),
            },
        )
        scholarships = [
            scholarship("s1", "Southbury", ["residency_southbury"]),
            scholarship("s2", "Math", ["math_sat_comp"]),
        ]

        results = engine.evaluate_batch(scholarships, [student_record, other], max_workers=4)

        outcomes = {
            (result.scholarship_subject, result.applicant_subject): (
                result.is_eligible,
                result.error_code,
            )
            for result in results
        }
        assert len(results) == 4
        assert outcomes[("s1", "test")] == (True, None)
        assert outcomes[("s1", "other")] == (False, None)
        assert outcomes[("s2", "test")] == (None, "FIELD_NOT_FOUND")
        assert outcomes[("s2", "other")] == (True, None)

    def test_evaluate_batch_preserves_order(self, engine, student_record):
        scholarships = [scholarship(f"s{i}", f"S{i}", None) for i in range(3)]

        results = engine.evaluate_batch(scholarships, [student_record])

        assert [result.scholarship_subject for result in results] == ["s0", "s1", "s2"]

    def test_evaluate_batch_survives_unsummable_hours(self, engine, student_record):
        bad = Record(
            subject="bad",
            data={
                "community_involvement": Value.sequence(
                    [Value.mapping({"service_hours": Value.number("1E+1000000")})]
                ),
            },
        )

        results = engine.evaluate_batch(
            [scholarship("s1", "Service Award", ["service_hours_20"])],
            [student_record, bad],
        )

        assert [(result.applicant_subject, result.is_eligible) for result in results] == [
            ("test", True),
            ("bad", None),
        ]
        assert results[1].error_code == "MALFORMED_SCALAR"

    def test_evaluate_batch_empty(self, engine):
        assert engine.evaluate_batch([], []) == []


def test_get_rule(engine):
    assert engine.get_rule("gpa_3").field == "weighted_gpa"

    with pytest.raises(RuleNotFoundError):
        engine.get_rule("nope")


def test_custom_requirements_field(student_record):
    engine = EligibilityEngine(default_rules(), requirements_field="criteria")
    record = Record(
        subject="s",
        data={"criteria": Value.sequence([Value.text("sports_golf")])},
    )

    assert engine.is_eligible(record, student_record) is False


def test_duplicate_rule_ids_keep_last_definition():
    rules = default_rules()
    relabelled = replace(rules[0], label="Weighted GPA of 3.0 or more")

    engine = EligibilityEngine(rules + [relabelled])

    assert len(engine.rules) == len(rules)
    assert engine.rules[relabelled.id].label == "Weighted GPA of 3.0 or more"
