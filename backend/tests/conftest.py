"""Shared fixtures for comparison engine tests."""

import pytest

from eligibility.models.domain.record import Record
from eligibility.models.domain.value import Value


@pytest.fixture
def student_record() -> Record:
    """An applicant with scalar fields and nested activity data."""
    return Record(
        subject="test",
        data={
            "first_name": Value.text("John"),
            "last_name": Value.text("Doe"),
            "gender": Value.text("Male"),
            "sat_score": Value.number("1190"),
            "major": Value.text("Music Education"),
            "town": Value.text("Southbury"),
            "weighted_gpa": Value.number("3.4"),
            "sports_participation": Value.sequence(
                [
                    Value.mapping(
                        {
                            "sport_name": Value.text("Football"),
                            "grades_participated": Value.sequence(
                                [Value.text("9"), Value.text("10")]
                            ),
                            "special_achievement": Value.text("N/A"),
                        }
                    ),
                ]
            ),
            "community_involvement": Value.sequence(
                [
                    Value.mapping(
                        {
                            "activity_name": Value.text("Raking"),
                            "service_hours": Value.number("12"),
                        }
                    ),
                    Value.mapping(
                        {
                            "activity_name": Value.text("Food Drive"),
                            "service_hours": Value.number("10"),
                        }
                    ),
                ]
            ),
        },
    )


@pytest.fixture
def map_list() -> Value:
    """Two people with text, number, and nested list fields."""
    john = Value.mapping(
        {
            "first_name": Value.text("John"),
            "last_name": Value.text("Doe"),
            "gender": Value.text("Male"),
            "sat_score": Value.number("1200"),
            "grades_participated": Value.sequence([Value.text("9"), Value.text("10")]),
        }
    )
    jane = Value.mapping(
        {
            "first_name": Value.text("Jane"),
            "last_name": Value.text("Doe"),
            "gender": Value.text("Female"),
            "sat_score": Value.number("1000"),
            "grades_participated": Value.sequence([Value.text("11"), Value.text("12")]),
        }
    )
    return Value.sequence([john, jane])


@pytest.fixture
def number_list() -> Value:
    return Value.sequence([Value.number(n) for n in range(1, 6)])


@pytest.fixture
def text_list() -> Value:
    return Value.sequence(
        [Value.text(word) for word in ["one", "two", "three", "four", "five"]]
    )


@pytest.fixture
def absent_list() -> Value:
    return Value.sequence(None)


@pytest.fixture
def empty_list() -> Value:
    return Value.sequence([])
