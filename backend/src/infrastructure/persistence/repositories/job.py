"""
Job Repository Implementation
SQLAlchemy-based job posting repository
"""
from datetime import datetime
from typing import Any, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select, update, func, or_, case
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from domain.entities import Job
from domain.enums import (
    Currency,
    JobCategory,
    JobTier,
    JobType,
    PaymentStatus,
    RemoteType,
    Seniority,
)
from domain.value_objects import (
    JobLocation,
    JobPricing,
    JobStatus,
    PlatformCategories,
    SalaryRange,
)
from application.repositories.criteria import JobSearchCriteria
from application.repositories.interfaces import IJobRepository
from infrastructure.persistence.models.job import JobModel
from core.exceptions import RepositoryException


_SORT_COLUMNS = {
    "posted_at": JobModel.posted_at,
    "salary": JobModel.salary_max,
    "title": JobModel.title,
    "view_count": JobModel.view_count,
}

# Premium postings are listed before basic ones
_PREMIUM_FIRST = case((JobModel.tier == JobTier.PREMIUM.value, 1), else_=0).desc()


def _board_conditions(now: datetime) -> List[Any]:
    """Jobs visible on the public board"""
    return [
        JobModel.is_deleted.is_(False),
        JobModel.status == JobStatus.ACTIVE.value,
        JobModel.expires_at > now,
    ]


class SQLAlchemyJobRepository(IJobRepository):
    """SQLAlchemy implementation of job repository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, job_id: UUID, include_deleted: bool = False) -> Optional[Job]:
        """Get job by ID"""
        try:
            query = select(JobModel).where(JobModel.id == job_id)
            if not include_deleted:
                query = query.where(JobModel.is_deleted.is_(False))

            result = await self.session.execute(query)
            model = result.scalar_one_or_none()

            if model:
                return self._to_entity(model)
            return None

        except Exception as e:
            logger.error(f"Failed to get job by ID {job_id}: {str(e)}")
            raise RepositoryException(f"Failed to get job: {str(e)}")

    async def create(self, job: Job) -> Job:
        """Create new job"""
        try:
            model = JobModel(id=job.id, employer_id=job.employer_id)
            self._copy_to_model(job, model)
            self.session.add(model)
            await self.session.flush()
            await self.session.refresh(model)

            return self._to_entity(model)

        except Exception as e:
            logger.error(f"Failed to create job '{job.title}': {str(e)}")
            raise RepositoryException(f"Failed to create job: {str(e)}")

    async def update(self, job: Job) -> Job:
        """Update existing job"""
        try:
            result = await self.session.execute(
                select(JobModel).where(JobModel.id == job.id)
            )
            model = result.scalar_one_or_none()

            if not model:
                raise RepositoryException(f"Job not found: {job.id}")

            self._copy_to_model(job, model)
            model.updated_at = datetime.utcnow()

            await self.session.flush()
            await self.session.refresh(model)

            return self._to_entity(model)

        except RepositoryException:
            raise
        except Exception as e:
            logger.error(f"Failed to update job {job.id}: {str(e)}")
            raise RepositoryException(f"Failed to update job: {str(e)}")

    async def slug_exists(self, slug: str) -> bool:
        try:
            result = await self.session.execute(
                select(JobModel.id).where(JobModel.slug == slug)
            )
            return result.first() is not None

        except Exception as e:
            logger.error(f"Failed to check slug {slug}: {str(e)}")
            raise RepositoryException(f"Failed to check slug: {str(e)}")

    async def search(self, criteria: JobSearchCriteria, now: datetime) -> Tuple[List[Job], int]:
        """
        Search the public job board

        Multi-value filters (cities, job types) are OR-ed within themselves and
        AND-ed with every other filter.
        """
        try:
            conditions = _board_conditions(now)

            if criteria.search:
                pattern = f"%{criteria.search}%"
                conditions.append(or_(
                    JobModel.title.ilike(pattern),
                    JobModel.description.ilike(pattern),
                ))

            if criteria.cities:
                conditions.append(JobModel.city.in_(criteria.cities))

            if criteria.job_types:
                conditions.append(JobModel.job_type.in_(criteria.job_types))

            if criteria.category:
                conditions.append(JobModel.category == criteria.category)

            if criteria.company_id:
                conditions.append(JobModel.employer_id == criteria.company_id)

            if criteria.min_salary is not None:
                conditions.append(or_(
                    JobModel.salary_min >= criteria.min_salary,
                    JobModel.salary_max >= criteria.min_salary,
                ))

            if criteria.max_salary is not None:
                conditions.append(or_(
                    JobModel.salary_min <= criteria.max_salary,
                    JobModel.salary_max <= criteria.max_salary,
                ))

            for flag in criteria.platform_flags:
                conditions.append(getattr(JobModel, flag).is_(True))

            total = await self.session.scalar(
                select(func.count()).select_from(JobModel).where(*conditions)
            )

            query = (
                select(JobModel)
                .where(*conditions)
                .order_by(*self._ordering(criteria.sort_by, criteria.sort_order))
                .limit(criteria.limit)
                .offset(criteria.offset)
            )
            result = await self.session.execute(query)

            return [self._to_entity(m) for m in result.scalars().all()], total or 0

        except Exception as e:
            logger.error(f"Failed to search jobs: {str(e)}")
            raise RepositoryException(f"Failed to search jobs: {str(e)}")

    async def list_by_employer(
        self,
        employer_id: UUID,
        status: Optional[JobStatus] = None,
        page: int = 1,
        limit: int = 10
    ) -> Tuple[List[Job], int]:
        try:
            conditions = [
                JobModel.employer_id == employer_id,
                JobModel.is_deleted.is_(False),
            ]
            if status is not None:
                conditions.append(JobModel.status == status.value)

            total = await self.session.scalar(
                select(func.count()).select_from(JobModel).where(*conditions)
            )
            result = await self.session.execute(
                select(JobModel)
                .where(*conditions)
                .order_by(JobModel.created_at.desc())
                .limit(limit)
                .offset((page - 1) * limit)
            )

            return [self._to_entity(m) for m in result.scalars().all()], total or 0

        except Exception as e:
            logger.error(f"Failed to list jobs for employer {employer_id}: {str(e)}")
            raise RepositoryException(f"Failed to list employer jobs: {str(e)}")

    async def find_similar_candidates(self, job: Job, now: datetime, limit: int = 20) -> List[Job]:
        """Candidate pool for similar jobs: same category or same city"""
        try:
            result = await self.session.execute(
                select(JobModel)
                .where(
                    *_board_conditions(now),
                    JobModel.id != job.id,
                    or_(
                        JobModel.category == job.category.value,
                        JobModel.city == job.location.city,
                    ),
                )
                .order_by(_PREMIUM_FIRST, JobModel.posted_at.desc())
                .limit(limit)
            )
            return [self._to_entity(m) for m in result.scalars().all()]

        except Exception as e:
            logger.error(f"Failed to load similar job candidates for {job.id}: {str(e)}")
            raise RepositoryException(f"Failed to load similar jobs: {str(e)}")

    async def increment_view_count(self, job_id: UUID) -> None:
        try:
            await self.session.execute(
                update(JobModel)
                .where(JobModel.id == job_id)
                .values(view_count=JobModel.view_count + 1)
            )

        except Exception as e:
            logger.error(f"Failed to increment views of job {job_id}: {str(e)}")
            raise RepositoryException(f"Failed to increment view count: {str(e)}")

    async def count_by_employer(self, employer_id: UUID) -> int:
        try:
            total = await self.session.scalar(
                select(func.count()).select_from(JobModel).where(JobModel.employer_id == employer_id)
            )
            return total or 0

        except Exception as e:
            logger.error(f"Failed to count jobs of employer {employer_id}: {str(e)}")
            raise RepositoryException(f"Failed to count employer jobs: {str(e)}")

    @staticmethod
    def _ordering(sort_by: str, sort_order: str) -> List[Any]:
        if sort_by == "posted_at" and sort_order == "desc":
            return [_PREMIUM_FIRST, JobModel.posted_at.desc()]

        column = _SORT_COLUMNS.get(sort_by, JobModel.posted_at)
        primary = column.asc() if sort_order == "asc" else column.desc()
        return [primary, JobModel.posted_at.desc()]

    def _copy_to_model(self, job: Job, model: JobModel) -> None:
        """Write every mutable job field onto the ORM model"""
        model.title = job.title
        model.slug = job.slug
        model.description = job.description
        model.requirements = list(job.requirements)
        model.benefits = list(job.benefits)
        model.tags = list(job.tags)

        model.category = job.category.value
        model.job_type = job.job_type.value
        model.seniority = job.seniority.value
        model.tier = job.tier.value

        model.city = job.location.city
        model.region = job.location.region
        model.remote = job.location.remote
        model.remote_type = job.location.remote_type.value

        salary = job.salary or SalaryRange()
        model.salary_min = salary.min_salary
        model.salary_max = salary.max_salary
        model.salary_currency = salary.currency.value
        model.salary_negotiable = salary.negotiable
        model.salary_show_public = salary.show_public

        for flag, enabled in job.platform_categories.to_dict().items():
            setattr(model, flag, enabled)

        model.status = job.status.value
        model.is_deleted = job.is_deleted

        model.pricing = job.pricing.to_dict() if job.pricing else None
        model.payment_required = job.payment_required
        model.payment_status = job.payment_status.value

        model.view_count = job.view_count
        model.application_count = job.application_count

        if job.posted_at is not None:
            model.posted_at = job.posted_at
        model.expires_at = job.expires_at

    def _to_entity(self, model: JobModel) -> Job:
        """Convert ORM model to domain entity"""
        salary = None
        if model.salary_min is not None or model.salary_max is not None:
            salary = SalaryRange(
                min_salary=model.salary_min,
                max_salary=model.salary_max,
                currency=Currency(model.salary_currency or "EUR"),
                negotiable=bool(model.salary_negotiable),
                show_public=bool(model.salary_show_public),
            )

        return Job(
            id=model.id,
            employer_id=model.employer_id,
            title=model.title,
            description=model.description,
            category=JobCategory(model.category),
            job_type=JobType(model.job_type),
            location=JobLocation(
                city=model.city,
                region=model.region,
                remote=bool(model.remote),
                remote_type=RemoteType(model.remote_type or "none"),
            ),
            slug=model.slug,
            seniority=Seniority(model.seniority or "mid"),
            tier=JobTier(model.tier or "basic"),
            requirements=list(model.requirements or []),
            benefits=list(model.benefits or []),
            tags=list(model.tags or []),
            salary=salary,
            platform_categories=PlatformCategories(
                diaspora=bool(model.diaspora),
                nga_shtepia=bool(model.nga_shtepia),
                part_time=bool(model.part_time),
                administrata=bool(model.administrata),
                sezonale=bool(model.sezonale),
            ),
            status=JobStatus(model.status),
            is_deleted=bool(model.is_deleted),
            pricing=JobPricing.from_dict(model.pricing) if model.pricing else None,
            payment_required=model.payment_required or 0.0,
            payment_status=PaymentStatus(model.payment_status or "pending"),
            view_count=model.view_count or 0,
            application_count=model.application_count or 0,
            posted_at=model.posted_at,
            expires_at=model.expires_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
