"""
Rule Condition Interpreter
Evaluates data-driven pricing rule conditions against a flattened context
"""
from typing import Any, Callable, Dict, Optional

from domain.entities import RuleCondition
from domain.enums import ConditionOperator


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _numeric(compare: Callable[[float, float], bool]) -> Callable[[Any, Any], bool]:
    def check(actual: Any, expected: Any) -> bool:
        a, b = _as_number(actual), _as_number(expected)
        if a is None or b is None:
            return False
        return compare(a, b)
    return check


def _contains(actual: Any, expected: Any) -> bool:
    if actual is None or actual == "":
        return False
    return str(expected).lower() in str(actual).lower()


def _in_array(actual: Any, expected: Any) -> bool:
    return isinstance(expected, (list, tuple, set)) and actual in expected


_OPERATORS: Dict[ConditionOperator, Callable[[Any, Any], bool]] = {
    ConditionOperator.EQUALS: lambda a, b: a == b,
    ConditionOperator.NOT_EQUALS: lambda a, b: a != b,
    ConditionOperator.CONTAINS: _contains,
    ConditionOperator.NOT_CONTAINS: lambda a, b: not _contains(a, b),
    ConditionOperator.GREATER_THAN: _numeric(lambda a, b: a > b),
    ConditionOperator.LESS_THAN: _numeric(lambda a, b: a < b),
    ConditionOperator.GREATER_EQUAL: _numeric(lambda a, b: a >= b),
    ConditionOperator.LESS_EQUAL: _numeric(lambda a, b: a <= b),
    ConditionOperator.IN_ARRAY: _in_array,
    ConditionOperator.NOT_IN_ARRAY: lambda a, b: not _in_array(a, b),
}


def evaluate_condition(condition: RuleCondition, context: Dict[str, Any]) -> bool:
    """Evaluate one condition; unknown fields resolve to None"""
    actual = context.get(condition.field)
    return _OPERATORS[condition.operator](actual, condition.value)


def conditions_match(conditions, context: Dict[str, Any]) -> bool:
    """All conditions must hold; a rule without conditions always matches"""
    return all(evaluate_condition(c, context) for c in conditions)
