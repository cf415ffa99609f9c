"""
Repository Interfaces (Abstract Base Classes)
Define contracts for data access without implementation details
"""
from abc import ABC, abstractmethod
from typing import Optional, List, Sequence, Tuple
from uuid import UUID
from datetime import datetime

from domain.entities import User, Job, Location, PricingRule, BusinessCampaign
from domain.enums import CampaignStatus, RuleCategory
from domain.value_objects import JobStatus

from .criteria import JobSearchCriteria


class IUserRepository(ABC):
    """User repository interface"""

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def list_free_posting(self) -> List[User]:
        """Employers currently on the free posting whitelist"""
        pass


class IJobRepository(ABC):
    """Job posting repository interface"""

    @abstractmethod
    async def get_by_id(self, job_id: UUID, include_deleted: bool = False) -> Optional[Job]:
        """Get job by ID; soft-deleted jobs are hidden unless asked for"""
        pass

    @abstractmethod
    async def create(self, job: Job) -> Job:
        """Create new job"""
        pass

    @abstractmethod
    async def update(self, job: Job) -> Job:
        """Persist every mutable field of job"""
        pass

    @abstractmethod
    async def slug_exists(self, slug: str) -> bool:
        """Check if a slug is already taken"""
        pass

    @abstractmethod
    async def search(self, criteria: JobSearchCriteria, now: datetime) -> Tuple[List[Job], int]:
        """Active, unexpired jobs matching criteria plus the total match count"""
        pass

    @abstractmethod
    async def list_by_employer(
        self,
        employer_id: UUID,
        status: Optional[JobStatus] = None,
        page: int = 1,
        limit: int = 10
    ) -> Tuple[List[Job], int]:
        """Employer's own non-deleted jobs, newest first"""
        pass

    @abstractmethod
    async def find_similar_candidates(self, job: Job, now: datetime, limit: int = 20) -> List[Job]:
        """Active jobs sharing category or city with job, excluding job itself"""
        pass

    @abstractmethod
    async def increment_view_count(self, job_id: UUID) -> None:
        """Atomically add one view"""
        pass

    @abstractmethod
    async def count_by_employer(self, employer_id: UUID) -> int:
        """Number of jobs an employer has ever posted (deleted included)"""
        pass


class ILocationRepository(ABC):
    """Location catalog repository interface"""

    @abstractmethod
    async def get_active_by_city(self, city: str) -> Optional[Location]:
        """Get active location by exact city name"""
        pass

    @abstractmethod
    async def list_active(self) -> List[Location]:
        """Active locations in display order"""
        pass

    @abstractmethod
    async def create(self, location: Location) -> Location:
        """Create new location"""
        pass


class IPricingRuleRepository(ABC):
    """Pricing rule repository interface"""

    @abstractmethod
    async def get_by_id(self, rule_id: UUID) -> Optional[PricingRule]:
        """Get rule by ID"""
        pass

    @abstractmethod
    async def list_active(self) -> List[PricingRule]:
        """Rules with is_active set, highest priority first"""
        pass

    @abstractmethod
    async def list_rules(
        self,
        category: Optional[RuleCategory] = None,
        is_active: Optional[bool] = None,
        page: int = 1,
        limit: int = 20
    ) -> Tuple[List[PricingRule], int]:
        """Admin listing, highest priority first"""
        pass

    @abstractmethod
    async def create(self, rule: PricingRule) -> PricingRule:
        """Create new rule"""
        pass

    @abstractmethod
    async def update(self, rule: PricingRule) -> PricingRule:
        """Update existing rule"""
        pass

    @abstractmethod
    async def record_applications(self, rule_ids: Sequence[UUID], applied_at: datetime) -> None:
        """Bump usage counters of rules that priced a job"""
        pass


class ICampaignRepository(ABC):
    """Business campaign repository interface"""

    @abstractmethod
    async def get_by_id(self, campaign_id: UUID) -> Optional[BusinessCampaign]:
        """Get campaign by ID"""
        pass

    @abstractmethod
    async def list_running(self, now: datetime) -> List[BusinessCampaign]:
        """Active campaigns scheduled for now with uses left"""
        pass

    @abstractmethod
    async def list_campaigns(
        self,
        status: Optional[CampaignStatus] = None,
        page: int = 1,
        limit: int = 20
    ) -> Tuple[List[BusinessCampaign], int]:
        """Admin listing, newest first"""
        pass

    @abstractmethod
    async def create(self, campaign: BusinessCampaign) -> BusinessCampaign:
        """Create new campaign"""
        pass

    @abstractmethod
    async def update(self, campaign: BusinessCampaign) -> BusinessCampaign:
        """Update existing campaign"""
        pass

    @abstractmethod
    async def increment_uses(self, campaign_id: UUID) -> bool:
        """Atomically consume one campaign use; False when the campaign is used up"""
        pass
