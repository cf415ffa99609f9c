"""
Shared test fixtures
In-memory SQLite database, seeded users/locations/jobs and an HTTP client
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("LOG_JSON_FORMAT", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import datetime, timedelta
from typing import Optional
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from core.database import Base, get_db
from domain.entities import Job, Location, User
from domain.enums import JobCategory, JobTier, JobType, PaymentStatus, Seniority, UserType
from domain.value_objects import JobLocation, JobPricing, JobStatus, PlatformCategories, SalaryRange
from infrastructure.persistence.repositories.job import SQLAlchemyJobRepository
from infrastructure.persistence.repositories.location import SQLAlchemyLocationRepository
from infrastructure.persistence.repositories.user import SQLAlchemyUserRepository
from infrastructure.security.jwt_service import JwtService
import infrastructure.persistence.models  # noqa: F401
from main import app


LOCATIONS = [
    ("Tiranë", "Tiranë"),
    ("Durrës", "Durrës"),
    ("Vlorë", "Vlorë"),
    ("Shkodër", "Shkodër"),
    ("Kamëz", "Tiranë"),
]

JOB_DESCRIPTION = (
    "Kërkojmë një kandidat me përvojë për të punuar në ekipin tonë. "
    "Puna përfshin zhvillim, testim dhe mirëmbajtje të sistemeve."
)


@pytest_asyncio.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with factory() as session:
        repo = SQLAlchemyLocationRepository(session)
        for order, (city, region) in enumerate(LOCATIONS):
            await repo.create(Location(id=uuid4(), city=city, region=region, display_order=order))
        await session.commit()

    yield factory

    await engine.dispose()


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def create_user(
    session_factory,
    user_type: UserType = UserType.EMPLOYER,
    verified: bool = True,
    free_posting: bool = False,
    email: Optional[str] = None,
    company_size: Optional[str] = None,
) -> User:
    user = User(
        id=uuid4(),
        email=email or f"user-{uuid4().hex[:8]}@example.com",
        user_type=user_type,
        full_name="Test User",
        company_name="Kompania Test" if user_type == UserType.EMPLOYER else None,
        company_size=company_size,
        verified=verified,
        free_posting_enabled=free_posting,
        free_posting_reason="Partner" if free_posting else None,
        created_at=datetime.utcnow() - timedelta(days=60),
    )
    async with session_factory() as session:
        user = await SQLAlchemyUserRepository(session).create(user)
        await session.commit()
    return user


def build_job(employer: User, **overrides) -> Job:
    """Active, paid job with sensible defaults"""
    now = datetime.utcnow()
    title = overrides.pop("title", "Zhvillues Python")
    city = overrides.pop("city", "Tiranë")
    region = overrides.pop("region", dict(LOCATIONS).get(city))
    fields = dict(
        id=uuid4(),
        employer_id=employer.id,
        title=title,
        description=JOB_DESCRIPTION,
        category=JobCategory.TEKNOLOGJI,
        job_type=JobType.FULL_TIME,
        location=JobLocation(city=city, region=region),
        slug=f"job-{uuid4().hex[:10]}",
        seniority=Seniority.MID,
        tier=JobTier.BASIC,
        salary=SalaryRange(min_salary=800, max_salary=1200),
        platform_categories=PlatformCategories(),
        status=JobStatus.ACTIVE,
        pricing=JobPricing(base_price=50.0, final_price=50.0),
        payment_required=50.0,
        payment_status=PaymentStatus.PAID,
        posted_at=now,
        expires_at=now + timedelta(days=30),
        created_at=now,
        updated_at=now,
    )
    fields.update(overrides)
    return Job(**fields)


async def create_job(session_factory, employer: User, **overrides) -> Job:
    async with session_factory() as session:
        job = await SQLAlchemyJobRepository(session).create(build_job(employer, **overrides))
        await session.commit()
    return job


async def load_job(session_factory, job_id, include_deleted: bool = True) -> Optional[Job]:
    async with session_factory() as session:
        return await SQLAlchemyJobRepository(session).get_by_id(job_id, include_deleted=include_deleted)


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {JwtService().create_access_token(user.id)}"}


@pytest_asyncio.fixture
async def employer(session_factory):
    return await create_user(session_factory, UserType.EMPLOYER)


@pytest_asyncio.fixture
async def admin(session_factory):
    return await create_user(session_factory, UserType.ADMIN)


@pytest.fixture
def job_payload():
    return {
        "title": "Zhvillues Python",
        "description": JOB_DESCRIPTION,
        "category": "Teknologji",
        "job_type": "full-time",
        "location": {"city": "Tiranë"},
        "salary": {"min": 800, "max": 1200},
        "tags": ["python", "backend"],
    }
