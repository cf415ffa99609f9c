"""ORM Models Package"""

from .campaign import BusinessCampaignModel
from .job import JobModel
from .location import LocationModel
from .pricing_rule import PricingRuleModel
from .user import UserModel

__all__ = [
    "BusinessCampaignModel",
    "JobModel",
    "LocationModel",
    "PricingRuleModel",
    "UserModel",
]
