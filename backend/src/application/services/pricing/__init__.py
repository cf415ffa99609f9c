"""
Pricing Service Package
"""
from .context import CONDITION_FIELDS, JobDraft, EmployerContext, flatten_context
from .conditions import evaluate_condition, conditions_match
from .engine import PricingEngine, PriceTable, round_money

__all__ = [
    "CONDITION_FIELDS",
    "JobDraft",
    "EmployerContext",
    "flatten_context",
    "evaluate_condition",
    "conditions_match",
    "PricingEngine",
    "PriceTable",
    "round_money",
]
