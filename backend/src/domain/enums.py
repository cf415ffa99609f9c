"""
Domain Enums
Business enumerations for the application
"""
from enum import Enum
from typing import List


class JobCategory(str, Enum):
    """Job categories offered on the platform (Albanian labels)"""
    TEKNOLOGJI = "Teknologji"
    MARKETING = "Marketing"
    SHITJE = "Shitje"
    FINANCE = "Financë"
    BURIME_NJERZORE = "Burime Njerëzore"
    INXHINIERI = "Inxhinieri"
    DIZAJN = "Dizajn"
    MENAXHIM = "Menaxhim"
    SHENDETESI = "Shëndetësi"
    ARSIM = "Arsim"
    TURIZEM = "Turizëm"
    NDERTIM = "Ndërtim"
    TRANSPORT = "Transport"
    TJETER = "Tjetër"


class JobType(str, Enum):
    """Employment type"""
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    INTERNSHIP = "internship"


class Seniority(str, Enum):
    """Experience level requested by a job"""
    JUNIOR = "junior"
    MID = "mid"
    SENIOR = "senior"
    LEAD = "lead"


class JobTier(str, Enum):
    """Posting tier; premium jobs are listed first"""
    BASIC = "basic"
    PREMIUM = "premium"


class RemoteType(str, Enum):
    """Remote work arrangement"""
    FULL = "full"
    HYBRID = "hybrid"
    NONE = "none"


class Currency(str, Enum):
    """Salary currencies"""
    EUR = "EUR"
    ALL = "ALL"


class PaymentStatus(str, Enum):
    """Payment state of a job posting"""
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class UserType(str, Enum):
    """Account type"""
    JOBSEEKER = "jobseeker"
    EMPLOYER = "employer"
    ADMIN = "admin"


class RuleCategory(str, Enum):
    """Grouping of pricing rules for administration"""
    INDUSTRY = "industry"
    LOCATION = "location"
    DEMAND_BASED = "demand_based"
    COMPANY_SIZE = "company_size"
    SEASONAL = "seasonal"
    TIME_BASED = "time_based"


class ConditionOperator(str, Enum):
    """Comparison used by a pricing rule condition"""
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    GREATER_EQUAL = "greater_equal"
    LESS_EQUAL = "less_equal"
    IN_ARRAY = "in_array"
    NOT_IN_ARRAY = "not_in_array"


class AdjustmentKind(str, Enum):
    """Direction of a price adjustment"""
    DISCOUNT = "discount"
    INCREASE = "increase"


class AdjustmentMode(str, Enum):
    """How an adjustment value is interpreted"""
    FIXED = "fixed"
    PERCENTAGE = "percentage"


class CampaignType(str, Enum):
    """Marketing campaign types"""
    FLASH_SALE = "flash_sale"
    REFERRAL = "referral"
    NEW_USER_BONUS = "new_user_bonus"
    SEASONAL = "seasonal"
    INDUSTRY_SPECIFIC = "industry_specific"
    BULK_DISCOUNT = "bulk_discount"


class CampaignStatus(str, Enum):
    """Campaign lifecycle"""
    DRAFT = "draft"
    SCHEDULED = "scheduled"
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class CampaignDiscountType(str, Enum):
    """How a campaign discount is interpreted"""
    PERCENTAGE = "percentage"
    FIXED_AMOUNT = "fixed_amount"


class TargetAudience(str, Enum):
    """Employers a campaign is meant for"""
    ALL = "all"
    NEW_EMPLOYERS = "new_employers"
    RETURNING_EMPLOYERS = "returning_employers"
    ENTERPRISE = "enterprise"
    SPECIFIC_INDUSTRY = "specific_industry"


# Platform category flags shown as quick filters on the job board
PLATFORM_CATEGORY_FLAGS: List[str] = [
    "diaspora",
    "nga_shtepia",
    "part_time",
    "administrata",
    "sezonale",
]


def get_all_categories() -> List[str]:
    """Get list of all job category labels"""
    return [category.value for category in JobCategory]
