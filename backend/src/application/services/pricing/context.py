"""
Pricing Context
Inputs the pricing engine evaluates rules and campaigns against
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from uuid import UUID

from domain.enums import JobCategory, JobTier, JobType, Seniority, UserType
from domain.value_objects import JobLocation, PlatformCategories


@dataclass(frozen=True)
class JobDraft:
    """Attributes of a posting that pricing rules may look at"""
    category: JobCategory
    job_type: JobType
    location: JobLocation
    tier: JobTier = JobTier.BASIC
    seniority: Seniority = Seniority.MID
    platform_categories: PlatformCategories = field(default_factory=PlatformCategories)


@dataclass(frozen=True)
class EmployerContext:
    """Employer facts known at pricing time"""
    employer_id: Optional[UUID] = None
    user_type: UserType = UserType.EMPLOYER
    free_posting_enabled: bool = False
    account_age_days: int = 0
    total_spent: float = 0.0
    company_size: Optional[str] = None
    posted_jobs_count: int = 0


def _value(v: Any) -> Any:
    return v.value if hasattr(v, "value") else v


def flatten_context(draft: JobDraft, employer: EmployerContext) -> Dict[str, Any]:
    """
    Build the field namespace rule conditions are resolved against.

    Nested attributes use dotted keys ("location.city",
    "platform_categories.diaspora"). "industry" is kept as an alias of
    category for rules written against the older field name.
    """
    context: Dict[str, Any] = {
        "category": _value(draft.category),
        "industry": _value(draft.category),
        "job_type": _value(draft.job_type),
        "tier": _value(draft.tier),
        "seniority": _value(draft.seniority),
        "location.city": draft.location.city,
        "location.region": draft.location.region,
        "location.remote": draft.location.remote,
        "user_type": _value(employer.user_type),
        "account_age_days": employer.account_age_days,
        "total_spent": employer.total_spent,
        "company_size": employer.company_size,
        "posted_jobs_count": employer.posted_jobs_count,
    }
    for flag, enabled in draft.platform_categories.to_dict().items():
        context[f"platform_categories.{flag}"] = enabled
    return context


# Field names a rule condition may reference
CONDITION_FIELDS = (
    "category",
    "industry",
    "job_type",
    "tier",
    "seniority",
    "location.city",
    "location.region",
    "location.remote",
    "user_type",
    "account_age_days",
    "total_spent",
    "company_size",
    "posted_jobs_count",
) + tuple(f"platform_categories.{flag}" for flag in PlatformCategories().to_dict())
