"""Default scholarship rule catalog and rule categorisation."""

from typing import Dict, Iterable, List

from eligibility.models.domain.rule import Rule
from eligibility.models.domain.value import Value
from eligibility.services.comparison import (
    Comparator,
    MapListComparator,
    NumberComparator,
    NumberListComparator,
    TextComparator,
    TextListComparator,
)

SPORTS = [
    "Football",
    "Soccer",
    "Cheerleading",
    "Field Hockey",
    "Swimming",
    "Golf",
    "Basketball",
    "Track",
    "Gymnastics",
    "Ice Hockey",
    "Ski",
    "Wrestling",
    "Lacrosse",
    "Softball",
    "Tennis",
]

MAJORS = [
    "Music",
    "Education",
    "Special Education",
    "Speech Pathology",
    "School Psychology",
    "School Counseling",
    "Occupational Therapy",
    "Physical Therapy",
    "Nursing",
    "Allied Health",
    "Fine/Performing Arts",
    "Writing/Communication",
    "History",
    "Government",
    "Political Science",
    "Social Work",
    "Sports Medicine",
    "Athletic Training",
    "Horticulture",
    "Conservation Studies",
    "Ecology",
    "Environmental Studies",
    "Urban Planning",
    "Landscaping",
    "Legal Studies",
    "Criminal Justice",
]

# (rule id, record field, display text) for yes/no eligibility questions
YES_NO_FACTORS = [
    ("attended_bas", "attended_bas", "Attended BAS"),
    ("midd_south", "middsouth_church", "Member of Midd-South Church"),
    ("family_military", "family_military_service", "Family with Military Service"),
]

RESIDENCY_TOWNS = ["Southbury", "Middlebury"]

SERVICE_HOUR_THRESHOLDS = [20, 25, 30]


def slugify(prefix: str, display_text: str) -> str:
    """Build a rule id such as ``major_fine_performing_arts``."""
    slug = display_text.lower().replace(" ", "_").replace("/", "_")
    return f"{prefix}_{slug}"


def sports_rules() -> List[Rule]:
    """Rules checking that a sport appears in the applicant's sports participation."""
    comparator = Comparator.map_list(
        MapListComparator.flatten_to_text_list("sport_name", TextListComparator.CONTAINS)
    )
    return [
        Rule(
            id=slugify("sports", sport),
            field="sports_participation",
            comparator=comparator,
            target=Value.text(sport),
            category="Sports Participation",
            label=sport,
        )
        for sport in SPORTS
    ]


def major_rules() -> List[Rule]:
    """Rules checking that the applicant's intended major mentions a subject."""
    return [
        Rule(
            id=slugify("major", major),
            field="major",
            comparator=Comparator.text(TextComparator.CONTAINS),
            target=Value.text(major),
            category="Majors",
            label=major,
        )
        for major in MAJORS
    ]


def service_hour_rules() -> List[Rule]:
    """Rules summing community service hours across all activities."""
    comparator = Comparator.map_list(
        MapListComparator.flatten_to_number_list(
            "service_hours",
            NumberListComparator.sum(NumberComparator.GREATER_THAN_OR_EQUAL),
        )
    )
    return [
        Rule(
            id=f"service_hours_{hours}",
            field="community_involvement",
            comparator=comparator,
            target=Value.number(hours),
            category="Community Service",
            label=f"{hours}+ service hours",
        )
        for hours in SERVICE_HOUR_THRESHOLDS
    ]


def default_rules() -> List[Rule]:
    """
    Build the default rule catalog.

    Returns:
        Academic, community service, residency, eligibility factor, sports,
        and major rules, in that order
    """
    rules = [
        Rule(
            id="gpa_3",
            field="weighted_gpa",
            comparator=Comparator.number(NumberComparator.GREATER_THAN_OR_EQUAL),
            target=Value.number("3.0"),
            category="GPA Limits",
            label="GPA >= 3.0",
        ),
        Rule(
            id="math_sat_comp",
            field="math_sat",
            comparator=Comparator.number(NumberComparator.GREATER_THAN_OR_EQUAL),
            target=Value.number(650),
            category="Academic Information",
            label="Math SAT Score >= 650",
        ),
    ]
    rules.extend(service_hour_rules())

    for town in RESIDENCY_TOWNS:
        rules.append(
            Rule(
                id=slugify("residency", town),
                field="town",
                comparator=Comparator.text(TextComparator.MATCHES),
                target=Value.text(town),
                category="Residency",
                label=town,
            )
        )

    for rule_id, field_name, label in YES_NO_FACTORS:
        rules.append(
            Rule(
                id=rule_id,
                field=field_name,
                comparator=Comparator.text(TextComparator.MATCHES),
                target=Value.text("Yes"),
                category="Additional Eligibility Factors",
                label=label,
            )
        )

    rules.extend(sports_rules())
    rules.extend(major_rules())
    return rules


def categorize_rules(rules: Iterable[Rule]) -> Dict[str, List[Rule]]:
    """
    Group rules by display category, keeping their original order.

    Args:
        rules: Rules to group

    Returns:
        Rules by category, categories in order of first appearance
    """
    categorized: Dict[str, List[Rule]] = {}
    for rule in rules:
        categorized.setdefault(rule.category, []).append(rule)
    return categorized

