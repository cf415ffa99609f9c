"""
Job Request/Response Schemas
Pydantic v2 models with strict validation
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from domain.entities import Job
from domain.enums import Currency, JobCategory, JobTier, JobType, RemoteType, Seniority
from domain.value_objects import JobStatus


class LocationInput(BaseModel):
    """Job location as submitted by the employer"""

    city: str = Field(..., min_length=1, max_length=100, examples=["Tiranë"])
    remote: bool = False
    remote_type: RemoteType = RemoteType.NONE


class SalaryInput(BaseModel):
    """Monthly salary range"""

    min: Optional[float] = Field(None, ge=0)
    max: Optional[float] = Field(None, ge=0)
    currency: Currency = Currency.EUR
    negotiable: bool = True
    show_public: bool = True


class PlatformCategoriesInput(BaseModel):
    """Board sections the job is listed under"""

    diaspora: bool = False
    nga_shtepia: bool = False
    part_time: bool = False
    administrata: bool = False
    sezonale: bool = False


def _clean_list(values: List[str]) -> List[str]:
    return [v.strip() for v in values if v and v.strip()]


class PricingQuoteRequest(BaseModel):
    """Job attributes that decide the posting price"""

    category: JobCategory
    job_type: JobType = JobType.FULL_TIME
    seniority: Seniority = Seniority.MID
    tier: JobTier = JobTier.BASIC
    location: LocationInput
    platform_categories: PlatformCategoriesInput = Field(default_factory=PlatformCategoriesInput)


class JobCreateRequest(PricingQuoteRequest):
    """Create a job posting"""

    title: str = Field(..., min_length=5, max_length=100, examples=["Zhvillues Python"])
    description: str = Field(..., min_length=50, max_length=5000)
    requirements: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list, max_length=10)
    salary: Optional[SalaryInput] = None

    @field_validator('title', 'description')
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    @field_validator('requirements', 'benefits', 'tags')
    @classmethod
    def clean_lists(cls, v: List[str]) -> List[str]:
        return _clean_list(v)


class JobUpdateRequest(BaseModel):
    """Partial update of a job posting; pricing is never recomputed"""

    title: Optional[str] = Field(None, min_length=5, max_length=100)
    description: Optional[str] = Field(None, min_length=50, max_length=5000)
    category: Optional[JobCategory] = None
    job_type: Optional[JobType] = None
    seniority: Optional[Seniority] = None
    location: Optional[LocationInput] = None
    salary: Optional[SalaryInput] = None
    requirements: Optional[List[str]] = None
    benefits: Optional[List[str]] = None
    tags: Optional[List[str]] = Field(None, max_length=10)
    platform_categories: Optional[PlatformCategoriesInput] = None

    @field_validator('requirements', 'benefits', 'tags')
    @classmethod
    def clean_lists(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _clean_list(v) if v is not None else v


# Statuses an employer may request directly
_EMPLOYER_TARGETS = (JobStatus.ACTIVE, JobStatus.PAUSED, JobStatus.CLOSED)


class JobStatusUpdateRequest(BaseModel):
    """Move a job to another lifecycle state"""

    status: JobStatus

    @field_validator('status')
    @classmethod
    def validate_target(cls, v: JobStatus) -> JobStatus:
        if v not in _EMPLOYER_TARGETS:
            raise ValueError(f"status must be one of: {', '.join(s.value for s in _EMPLOYER_TARGETS)}")
        return v


class JobResponse(BaseModel):
    """Job posting as returned by the API"""

    id: str
    employer_id: str
    title: str
    slug: str
    description: str
    category: str
    job_type: str
    seniority: str
    tier: str
    location: Dict[str, Any]
    salary: Optional[Dict[str, Any]] = None
    requirements: List[str] = []
    benefits: List[str] = []
    tags: List[str] = []
    platform_categories: Dict[str, bool]
    status: str
    pricing: Optional[Dict[str, Any]] = None
    payment_required: float = 0.0
    payment_status: str
    view_count: int = 0
    application_count: int = 0
    posted_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, job: Job) -> "JobResponse":
        salary = None
        if job.salary is not None:
            salary = {
                "min": job.salary.min_salary,
                "max": job.salary.max_salary,
                "currency": job.salary.currency.value,
                "negotiable": job.salary.negotiable,
                "show_public": job.salary.show_public,
            }
        return cls(
            id=str(job.id),
            employer_id=str(job.employer_id),
            title=job.title,
            slug=job.slug,
            description=job.description,
            category=job.category.value,
            job_type=job.job_type.value,
            seniority=job.seniority.value,
            tier=job.tier.value,
            location={
                "city": job.location.city,
                "region": job.location.region,
                "remote": job.location.remote,
                "remote_type": job.location.remote_type.value,
            },
            salary=salary,
            requirements=list(job.requirements),
            benefits=list(job.benefits),
            tags=list(job.tags),
            platform_categories=job.platform_categories.to_dict(),
            status=job.status.value,
            pricing=job.pricing.to_dict() if job.pricing else None,
            payment_required=job.payment_required,
            payment_status=job.payment_status.value,
            view_count=job.view_count,
            application_count=job.application_count,
            posted_at=job.posted_at,
            expires_at=job.expires_at,
            created_at=job.created_at,
            updated_at=job.updated_at,
        )


class SimilarJobResponse(BaseModel):
    """Similar job with its similarity to the viewed job"""

    job: JobResponse
    similarity_score: float

