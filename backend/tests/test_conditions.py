"""
Tests for pricing rule conditions
"""
import pytest

from application.services.pricing import (
    EmployerContext,
    JobDraft,
    conditions_match,
    evaluate_condition,
    flatten_context,
)
from domain.entities import RuleCondition
from domain.enums import ConditionOperator as Op, JobCategory, JobType, Seniority
from domain.value_objects import JobLocation, PlatformCategories


@pytest.fixture
def context():
    draft = JobDraft(
        category=JobCategory.TEKNOLOGJI,
        job_type=JobType.PART_TIME,
        location=JobLocation(city="Durrës", region="Durrës", remote=True),
        seniority=Seniority.SENIOR,
        platform_categories=PlatformCategories(diaspora=True),
    )
    employer = EmployerContext(account_age_days=10, total_spent=250.0, company_size="large")
    return flatten_context(draft, employer)


class TestFlattenContext:
    """Field namespace"""

    def test_dotted_and_alias_fields(self, context):
        assert context["location.city"] == "Durrës"
        assert context["location.remote"] is True
        assert context["platform_categories.diaspora"] is True
        assert context["platform_categories.sezonale"] is False
        assert context["industry"] == context["category"] == "Teknologji"
        assert context["job_type"] == "part-time"


class TestOperators:
    """Each operator against the flattened context"""

    @pytest.mark.parametrize("field,operator,value,expected", [
        ("category", Op.EQUALS, "Teknologji", True),
        ("category", Op.NOT_EQUALS, "Marketing", True),
        ("location.city", Op.CONTAINS, "durr", True),
        ("location.city", Op.NOT_CONTAINS, "Tiran", True),
        ("total_spent", Op.GREATER_THAN, 200, True),
        ("total_spent", Op.LESS_THAN, 200, False),
        ("account_age_days", Op.GREATER_EQUAL, 10, True),
        ("account_age_days", Op.LESS_EQUAL, 9, False),
        ("seniority", Op.IN_ARRAY, ["senior", "lead"], True),
        ("seniority", Op.NOT_IN_ARRAY, ["junior"], True),
        ("platform_categories.diaspora", Op.EQUALS, True, True),
    ])
    def test_operator(self, context, field, operator, value, expected):
        assert evaluate_condition(RuleCondition(field, operator, value), context) is expected

    def test_numeric_operator_on_text_is_false(self, context):
        assert evaluate_condition(RuleCondition("category", Op.GREATER_THAN, 1), context) is False

    def test_unknown_field_resolves_to_none(self, context):
        assert evaluate_condition(RuleCondition("salary.bonus", Op.EQUALS, None), context) is True
        assert evaluate_condition(RuleCondition("salary.bonus", Op.GREATER_THAN, 0), context) is False
        assert evaluate_condition(RuleCondition("salary.bonus", Op.CONTAINS, "x"), context) is False

    def test_in_array_requires_list(self, context):
        assert evaluate_condition(RuleCondition("seniority", Op.IN_ARRAY, "senior"), context) is False


class TestConditionsMatch:
    """All conditions must hold"""

    def test_empty_conditions_match(self, context):
        assert conditions_match((), context) is True

    def test_any_failure_fails(self, context):
        conditions = [
            RuleCondition("category", Op.EQUALS, "Teknologji"),
            RuleCondition("company_size", Op.EQUALS, "small"),
        ]
        assert conditions_match(conditions, context) is False
