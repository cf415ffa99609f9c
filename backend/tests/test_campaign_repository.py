"""
Tests for the campaign repository use counter
"""
from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from domain.entities import BusinessCampaign
from domain.enums import CampaignStatus, CampaignType
from infrastructure.persistence.repositories.campaign import SQLAlchemyCampaignRepository


async def create_campaign(session_factory, **overrides) -> BusinessCampaign:
    now = datetime.utcnow()
    fields = dict(
        id=uuid4(),
        name="Oferta e fundjavës",
        campaign_type=CampaignType.FLASH_SALE,
        start_date=now - timedelta(hours=1),
        end_date=now + timedelta(days=1),
        status=CampaignStatus.ACTIVE,
        is_active=True,
        discount=20,
    )
    fields.update(overrides)
    async with session_factory() as session:
        campaign = await SQLAlchemyCampaignRepository(session).create(BusinessCampaign(**fields))
        await session.commit()
    return campaign


class TestIncrementUses:
    """Use counter never passes max_uses"""

    @pytest.mark.asyncio
    async def test_last_use_claimed_once_across_sessions(self, session_factory):
        campaign = await create_campaign(session_factory, max_uses=1)
        now = datetime.utcnow()

        async with session_factory() as first, session_factory() as second:
            first_repo = SQLAlchemyCampaignRepository(first)
            second_repo = SQLAlchemyCampaignRepository(second)

            # Both requests priced against the same snapshot
            assert [c.id for c in await first_repo.list_running(now)] == [campaign.id]
            assert [c.id for c in await second_repo.list_running(now)] == [campaign.id]

            assert await first_repo.increment_uses(campaign.id) is True
            await first.commit()

            assert await second_repo.increment_uses(campaign.id) is False
            await second.commit()

        async with session_factory() as session:
            repo = SQLAlchemyCampaignRepository(session)
            stored = await repo.get_by_id(campaign.id)
            assert stored.current_uses == 1
            assert await repo.list_running(datetime.utcnow()) == []

    @pytest.mark.asyncio
    async def test_counts_up_to_cap(self, session_factory):
        campaign = await create_campaign(session_factory, max_uses=2)

        async with session_factory() as session:
            repo = SQLAlchemyCampaignRepository(session)
            claims = [await repo.increment_uses(campaign.id) for _ in range(3)]
            await session.commit()

        assert claims == [True, True, False]
        async with session_factory() as session:
            stored = await SQLAlchemyCampaignRepository(session).get_by_id(campaign.id)
        assert stored.current_uses == 2

    @pytest.mark.asyncio
    async def test_unknown_campaign(self, session_factory):
        async with session_factory() as session:
            assert await SQLAlchemyCampaignRepository(session).increment_uses(uuid4()) is False
