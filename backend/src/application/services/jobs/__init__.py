"""
Job Service Interface
Posting, pricing and browsing of job listings
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from application.repositories.criteria import JobSearchCriteria, Page
from application.services.similarity import ScoredJob
from domain.entities import Job, User
from domain.value_objects import JobPricing, JobStatus
from presentation.api.v1.schemas.job import (
    JobCreateRequest,
    JobUpdateRequest,
    PricingQuoteRequest,
)

from .job_parser import build_search_criteria, parse_csv, parse_uuid, slugify


class IJobService(ABC):
    """Job service interface"""

    @abstractmethod
    async def quote_pricing(self, employer: User, request: PricingQuoteRequest) -> JobPricing:
        """Preview the price of a posting without persisting anything"""
        pass

    @abstractmethod
    async def create_job(self, employer: User, request: JobCreateRequest) -> Job:
        """
        Create and price a job posting

        Raises:
            ValidationException: unknown city or salary range inverted
            ConfigurationException: no base price for the job
        """
        pass

    @abstractmethod
    async def get_job(self, job_id: UUID, viewer: Optional[User] = None) -> Job:
        """Job detail; counts a view unless the viewer owns the job"""
        pass

    @abstractmethod
    async def update_job(self, employer: User, job_id: UUID, request: JobUpdateRequest) -> Job:
        """Edit an owned job; pricing stays as computed at creation"""
        pass

    @abstractmethod
    async def delete_job(self, employer: User, job_id: UUID) -> None:
        """Soft delete an owned job"""
        pass

    @abstractmethod
    async def update_status(self, employer: User, job_id: UUID, target: JobStatus) -> Job:
        """Move an owned job through its lifecycle"""
        pass

    @abstractmethod
    async def list_employer_jobs(
        self,
        employer: User,
        status: Optional[JobStatus] = None,
        page: int = 1,
        limit: int = 10
    ) -> Tuple[List[Job], Page]:
        """Employer's own jobs"""
        pass

    @abstractmethod
    async def search_jobs(self, criteria: JobSearchCriteria) -> Tuple[List[Job], Page]:
        """Public job board search"""
        pass

    @abstractmethod
    async def get_similar_jobs(
        self,
        job_id: UUID,
        limit: int = 4,
        viewer: Optional[User] = None
    ) -> List[ScoredJob]:
        """Jobs most similar to job_id, best first; job_id must be visible to the viewer"""
        pass


__all__ = [
    "IJobService",
    "build_search_criteria",
    "parse_csv",
    "parse_uuid",
    "slugify",
]
