"""
JobService Implementation
Creates, prices, edits and serves job postings
"""
from dataclasses import replace
from datetime import datetime, timedelta
from typing import List, Optional, Tuple
from uuid import UUID, uuid4

from application.repositories.criteria import JobSearchCriteria, Page
from application.repositories.interfaces import (
    ICampaignRepository,
    IJobRepository,
    ILocationRepository,
    IPricingRuleRepository,
)
from application.services.jobs import IJobService, slugify
from application.services.pricing import EmployerContext, JobDraft, PricingEngine
from application.services.similarity import ScoredJob, rank_similar_jobs
from core.config import settings
from core.exceptions import (
    InvalidStatusTransitionException,
    ResourceNotFoundException,
    ValidationException,
)
from core.logging_config import logger
from domain.entities import Job, User
from domain.enums import PaymentStatus
from domain.value_objects import (
    JobLocation,
    JobPricing,
    JobStatus,
    PlatformCategories,
    SalaryRange,
)
from presentation.api.v1.schemas.job import (
    JobCreateRequest,
    JobUpdateRequest,
    LocationInput,
    PricingQuoteRequest,
    SalaryInput,
)


class JobService(IJobService):
    """Job service implementation"""

    def __init__(
        self,
        job_repository: IJobRepository,
        location_repository: ILocationRepository,
        rule_repository: IPricingRuleRepository,
        campaign_repository: ICampaignRepository,
        pricing_engine: PricingEngine,
    ):
        self.job_repo = job_repository
        self.location_repo = location_repository
        self.rule_repo = rule_repository
        self.campaign_repo = campaign_repository
        self.pricing_engine = pricing_engine

    async def quote_pricing(self, employer: User, request: PricingQuoteRequest) -> JobPricing:
        now = datetime.utcnow()
        location = await self._resolve_location(request.location)
        return await self._price(self._draft(request, location), employer, now)

    async def create_job(self, employer: User, request: JobCreateRequest) -> Job:
        now = datetime.utcnow()
        salary = self._salary(request.salary)
        location = await self._resolve_location(request.location)
        draft = self._draft(request, location)

        pricing = await self._price(draft, employer, now, claim_campaign=True)

        if pricing.is_free:
            status, payment_status = JobStatus.ACTIVE, PaymentStatus.PAID
        else:
            status, payment_status = JobStatus.PENDING_PAYMENT, PaymentStatus.PENDING

        job = Job(
            id=uuid4(),
            employer_id=employer.id,
            title=request.title,
            description=request.description,
            category=request.category,
            job_type=request.job_type,
            location=location,
            slug=await self._unique_slug(request.title),
            seniority=request.seniority,
            tier=request.tier,
            requirements=request.requirements,
            benefits=request.benefits,
            tags=request.tags[:settings.JOB_MAX_TAGS],
            salary=salary,
            platform_categories=PlatformCategories(**request.platform_categories.model_dump()),
            status=status,
            pricing=pricing,
            payment_required=pricing.final_price,
            payment_status=payment_status,
            posted_at=now,
            expires_at=now + timedelta(days=settings.JOB_EXPIRY_DAYS),
            created_at=now,
            updated_at=now,
        )
        job = await self.job_repo.create(job)

        if pricing.applied_rules:
            await self.rule_repo.record_applications([UUID(r) for r in pricing.applied_rules], now)
        if pricing.campaign_applied:
            logger.info(f"Campaign {pricing.campaign_applied} applied to job {job.id}")

        if pricing.free_posting:
            logger.info(f"Free posting applied for employer {employer.id} on job {job.id}")
        logger.info(
            f"Job created: {job.id} '{job.title}' by {employer.id} "
            f"(final price {pricing.final_price} {pricing.currency}, status {job.status.value})"
        )
        return job

    async def get_job(self, job_id: UUID, viewer: Optional[User] = None) -> Job:
        job = await self._visible_job(job_id, viewer)
        if viewer is not None and job.is_owned_by(viewer.id):
            return job

        await self.job_repo.increment_view_count(job.id)
        return replace(job, view_count=job.view_count + 1)

    async def update_job(self, employer: User, job_id: UUID, request: JobUpdateRequest) -> Job:
        job = await self._owned_job(employer, job_id)

        if job.status == JobStatus.CLOSED:
            raise ValidationException("status", "Closed jobs cannot be edited")
        if job.is_expired():
            raise ValidationException("expires_at", "Expired jobs cannot be edited")

        changes = request.model_dump(exclude_unset=True)
        fields = {}
        for name in ("title", "description", "category", "job_type", "seniority",
                     "requirements", "benefits", "tags"):
            if changes.get(name) is not None:
                fields[name] = getattr(request, name)

        if request.location is not None:
            fields["location"] = await self._resolve_location(request.location)
        if "salary" in changes:
            fields["salary"] = self._salary(request.salary)
        if request.platform_categories is not None:
            fields["platform_categories"] = PlatformCategories(**request.platform_categories.model_dump())

        if not fields:
            return job

        updated = await self.job_repo.update(replace(job, **fields, updated_at=datetime.utcnow()))
        logger.info(f"Job updated: {job.id} ({', '.join(sorted(fields))})")
        return updated

    async def delete_job(self, employer: User, job_id: UUID) -> None:
        job = await self._owned_job(employer, job_id)
        await self.job_repo.update(job.soft_deleted())
        logger.info(f"Job deleted: {job.id} by {employer.id}")

    async def update_status(self, employer: User, job_id: UUID, target: JobStatus) -> Job:
        job = await self._owned_job(employer, job_id)

        if not job.status.can_transition_to(target):
            raise InvalidStatusTransitionException(job.status.value, target.value)

        if target == JobStatus.ACTIVE:
            if job.status == JobStatus.PENDING_PAYMENT and job.payment_status != PaymentStatus.PAID:
                raise ValidationException("payment_status", "Payment is required before the job can be activated")
            if job.is_expired():
                raise ValidationException("expires_at", "Expired jobs cannot be activated")

        updated = await self.job_repo.update(job.with_status(target))
        logger.info(f"Job {job.id} status changed: {job.status.value} -> {target.value}")
        return updated

    async def list_employer_jobs(
        self,
        employer: User,
        status: Optional[JobStatus] = None,
        page: int = 1,
        limit: int = 10
    ) -> Tuple[List[Job], Page]:
        jobs, total = await self.job_repo.list_by_employer(employer.id, status, page, limit)
        return jobs, Page.build(page, limit, total)

    async def search_jobs(self, criteria: JobSearchCriteria) -> Tuple[List[Job], Page]:
        if criteria.match_nothing:
            return [], Page.build(criteria.page, criteria.limit, 0)

        jobs, total = await self.job_repo.search(criteria, datetime.utcnow())
        return jobs, Page.build(criteria.page, criteria.limit, total)

    async def get_similar_jobs(
        self,
        job_id: UUID,
        limit: int = 4,
        viewer: Optional[User] = None
    ) -> List[ScoredJob]:
        job = await self._visible_job(job_id, viewer)

        candidates = await self.job_repo.find_similar_candidates(
            job, datetime.utcnow(), settings.SIMILAR_JOBS_CANDIDATE_POOL
        )
        return rank_similar_jobs(job, candidates, limit)

    async def _visible_job(self, job_id: UUID, viewer: Optional[User]) -> Job:
        """Owners see their jobs in any state; everyone else only live postings"""
        job = await self.job_repo.get_by_id(job_id)
        if not job:
            raise ResourceNotFoundException("Job", str(job_id))

        if viewer is not None and job.is_owned_by(viewer.id):
            return job

        if not job.is_active():
            raise ResourceNotFoundException("Job", str(job_id))
        return job

    async def _owned_job(self, employer: User, job_id: UUID) -> Job:
        """Load a job the employer owns; anything else looks like a missing job"""
        job = await self.job_repo.get_by_id(job_id)
        if not job or not job.is_owned_by(employer.id):
            logger.warning(f"Job {job_id} not found for employer {employer.id}")
            raise ResourceNotFoundException("Job", str(job_id))
        return job

    async def _resolve_location(self, location: LocationInput) -> JobLocation:
        city = location.city.strip()
        known = await self.location_repo.get_active_by_city(city)
        if not known:
            raise ValidationException("location.city", f"'{city}' is not a supported city")
        return JobLocation(
            city=known.city,
            region=known.region,
            remote=location.remote,
            remote_type=location.remote_type,
        )

    @staticmethod
    def _salary(salary: Optional[SalaryInput]) -> Optional[SalaryRange]:
        if salary is None:
            return None
        if salary.min is not None and salary.max is not None and salary.min > salary.max:
            raise ValidationException("salary", "Minimum salary cannot be greater than maximum salary")
        return SalaryRange(
            min_salary=salary.min,
            max_salary=salary.max,
            currency=salary.currency,
            negotiable=salary.negotiable,
            show_public=salary.show_public,
        )

    @staticmethod
    def _draft(request: PricingQuoteRequest, location: JobLocation) -> JobDraft:
        return JobDraft(
            category=request.category,
            job_type=request.job_type,
            location=location,
            tier=request.tier,
            seniority=request.seniority,
            platform_categories=PlatformCategories(**request.platform_categories.model_dump()),
        )

    async def _price(
        self,
        draft: JobDraft,
        employer: User,
        now: datetime,
        claim_campaign: bool = False
    ) -> JobPricing:
        """
        Price a draft for an employer

        With claim_campaign the chosen campaign use is consumed here, before the
        job is saved. A campaign used up in the meantime is dropped and the
        draft is priced again with the remaining campaigns.
        """
        context = EmployerContext(
            employer_id=employer.id,
            user_type=employer.user_type,
            free_posting_enabled=employer.free_posting_enabled,
            account_age_days=employer.account_age_days(now),
            total_spent=employer.total_spent,
            company_size=employer.company_size,
            posted_jobs_count=await self.job_repo.count_by_employer(employer.id),
        )
        if employer.free_posting_enabled:
            return self.pricing_engine.compute_pricing(draft, context, [], None, now)

        rules = await self.rule_repo.list_active()
        campaigns = await self.campaign_repo.list_running(now)
        while True:
            pricing = self.pricing_engine.quote(draft, context, rules, campaigns, now)
            if not claim_campaign or not pricing.campaign_applied:
                return pricing

            campaign_id = UUID(pricing.campaign_applied)
            if await self.campaign_repo.increment_uses(campaign_id):
                return pricing

            logger.warning(f"Campaign {campaign_id} reached its use limit, pricing without it")
            campaigns = [c for c in campaigns if c.id != campaign_id]

    async def _unique_slug(self, title: str) -> str:
        base = slugify(title)
        slug, suffix = base, 1
        while await self.job_repo.slug_exists(slug):
            slug = f"{base}-{suffix}"
            suffix += 1
        return slug
