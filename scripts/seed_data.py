"""
Seed Data Script
Populates database with locations, accounts, a pricing rule and a campaign for local development

Run from backend/src:
    python ../../scripts/seed_data.py
"""
import asyncio
import os
import sys
from datetime import datetime, timedelta
from uuid import uuid4

sys.path.append(os.getcwd())

from core.database import get_db_session, init_db
from core.logging_config import logger
from domain.entities import BusinessCampaign, Location, PricingRule, RuleCondition, RuleEffect, User
from domain.enums import (
    AdjustmentKind,
    AdjustmentMode,
    CampaignStatus,
    CampaignType,
    ConditionOperator,
    RuleCategory,
    UserType,
)
from infrastructure.persistence.repositories.campaign import SQLAlchemyCampaignRepository
from infrastructure.persistence.repositories.location import SQLAlchemyLocationRepository
from infrastructure.persistence.repositories.pricing_rule import SQLAlchemyPricingRuleRepository
from infrastructure.persistence.repositories.user import SQLAlchemyUserRepository
from infrastructure.security.jwt_service import JwtService


# (city, region)
LOCATIONS = [
    ("Tiranë", "Tiranë"),
    ("Durrës", "Durrës"),
    ("Vlorë", "Vlorë"),
    ("Shkodër", "Shkodër"),
    ("Elbasan", "Elbasan"),
    ("Korçë", "Korçë"),
    ("Fier", "Fier"),
    ("Berat", "Berat"),
    ("Kamëz", "Tiranë"),
    ("Sarandë", "Vlorë"),
]


async def seed_database():
    """Seed database with development data"""
    await init_db()
    now = datetime.utcnow()

    async with get_db_session() as session:
        location_repo = SQLAlchemyLocationRepository(session)
        added = 0
        for order, (city, region) in enumerate(LOCATIONS):
            if await location_repo.get_active_by_city(city):
                continue
            await location_repo.create(Location(id=uuid4(), city=city, region=region, display_order=order))
            added += 1

        user_repo = SQLAlchemyUserRepository(session)
        admin = await user_repo.get_by_email("admin@example.com")
        if not admin:
            admin = await user_repo.create(User(
                id=uuid4(),
                email="admin@example.com",
                user_type=UserType.ADMIN,
                full_name="Platform Admin",
                verified=True,
                created_at=now,
            ))

        employer = await user_repo.get_by_email("punedhenes@example.com")
        if not employer:
            employer = await user_repo.create(User(
                id=uuid4(),
                email="punedhenes@example.com",
                user_type=UserType.EMPLOYER,
                full_name="Test Employer",
                company_name="Kompania Test",
                company_size="medium",
                verified=True,
                created_at=now,
            ))

        await SQLAlchemyPricingRuleRepository(session).create(PricingRule(
            id=uuid4(),
            name="Zbritje për teknologjinë",
            description="10% off technology postings",
            category=RuleCategory.INDUSTRY,
            conditions=(RuleCondition("category", ConditionOperator.EQUALS, "Teknologji"),),
            effect=RuleEffect(kind=AdjustmentKind.DISCOUNT, mode=AdjustmentMode.PERCENTAGE, value=10),
            priority=60,
            valid_from=now,
            created_by=admin.id,
            created_at=now,
            updated_at=now,
        ))

        await SQLAlchemyCampaignRepository(session).create(BusinessCampaign(
            id=uuid4(),
            name="Oferta e lançimit",
            description="Launch week discount",
            campaign_type=CampaignType.FLASH_SALE,
            start_date=now,
            end_date=now + timedelta(days=7),
            status=CampaignStatus.ACTIVE,
            is_active=True,
            discount=20,
            created_by=admin.id,
            created_at=now,
            updated_at=now,
        ))

    jwt_service = JwtService()
    logger.info("✅ Database seeded successfully!")
    logger.info(f"  - Added {added} locations")
    logger.info("  - Accounts: admin@example.com (admin), punedhenes@example.com (verified employer)")
    logger.info("  - 1 pricing rule and 1 running campaign")
    logger.info(f"Admin token: {jwt_service.create_access_token(admin.id)}")
    logger.info(f"Employer token: {jwt_service.create_access_token(employer.id)}")


if __name__ == "__main__":
    asyncio.run(seed_database())
