"""Domain Entities - Core business objects"""

from .user import User
from .job import Job
from .location import Location
from .pricing_rule import PricingRule, RuleCondition, RuleEffect
from .campaign import BusinessCampaign
__all__ = [
    "User",
    "Job",
    "Location",
    "PricingRule",
    "RuleCondition",
    "RuleEffect",
    "BusinessCampaign",
]
