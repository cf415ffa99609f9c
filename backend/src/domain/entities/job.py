"""
Job Domain Entity
Immutable job posting business object
"""
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from ..value_objects import (
    SalaryRange,
    JobStatus,
    JobLocation,
    PlatformCategories,
    JobPricing,
)
from ..enums import JobCategory, JobType, Seniority, JobTier, PaymentStatus


@dataclass(frozen=True)
class Job:
    """Job posting domain entity - immutable"""

    id: UUID
    employer_id: UUID
    title: str
    description: str
    category: JobCategory
    job_type: JobType
    location: JobLocation
    slug: str

    seniority: Seniority = Seniority.MID
    tier: JobTier = JobTier.BASIC
    requirements: List[str] = field(default_factory=list)
    benefits: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    salary: Optional[SalaryRange] = None
    platform_categories: PlatformCategories = field(default_factory=PlatformCategories)

    # Lifecycle
    status: JobStatus = JobStatus.DRAFT
    is_deleted: bool = False

    # Pricing & payment
    pricing: Optional[JobPricing] = None
    payment_required: float = 0.0
    payment_status: PaymentStatus = PaymentStatus.PENDING

    # Stats
    view_count: int = 0
    application_count: int = 0

    # Timestamps
    posted_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate job data"""
        if not self.title or len(self.title.strip()) == 0:
            raise ValueError("Job title cannot be empty")

        if not self.slug:
            raise ValueError("Job slug cannot be empty")

    def is_owned_by(self, user_id: UUID) -> bool:
        return self.employer_id == user_id

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Check if the posting period is over"""
        if self.expires_at is None:
            return False
        return (now or datetime.utcnow()) > self.expires_at

    def is_active(self, now: Optional[datetime] = None) -> bool:
        """Check if job is visible on the board"""
        return (
            not self.is_deleted
            and self.status == JobStatus.ACTIVE
            and not self.is_expired(now)
        )

    def with_status(self, target: JobStatus) -> "Job":
        """Return a copy moved to target status (caller validates the transition)"""
        return replace(self, status=target, updated_at=datetime.utcnow())

    def soft_deleted(self) -> "Job":
        """Return a copy marked deleted; deleted jobs are always closed"""
        return replace(
            self,
            is_deleted=True,
            status=JobStatus.CLOSED,
            updated_at=datetime.utcnow(),
        )

    def __str__(self) -> str:
        return f"Job({self.title} in {self.location.city})"
