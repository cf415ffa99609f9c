"""
Business Campaign Repository Implementation
"""
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select, update, func
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from domain.entities import BusinessCampaign
from domain.enums import CampaignDiscountType, CampaignStatus, CampaignType, TargetAudience
from application.repositories.interfaces import ICampaignRepository
from infrastructure.persistence.models.campaign import BusinessCampaignModel
from core.exceptions import RepositoryException


class SQLAlchemyCampaignRepository(ICampaignRepository):
    """SQLAlchemy implementation of campaign repository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, campaign_id: UUID) -> Optional[BusinessCampaign]:
        try:
            result = await self.session.execute(
                select(BusinessCampaignModel).where(BusinessCampaignModel.id == campaign_id)
            )
            model = result.scalar_one_or_none()
            return self._to_entity(model) if model else None

        except Exception as e:
            logger.error(f"Failed to get campaign {campaign_id}: {str(e)}")
            raise RepositoryException(f"Failed to get campaign: {str(e)}")

    async def list_running(self, now: datetime) -> List[BusinessCampaign]:
        try:
            result = await self.session.execute(
                select(BusinessCampaignModel)
                .where(
                    BusinessCampaignModel.is_active.is_(True),
                    BusinessCampaignModel.status == CampaignStatus.ACTIVE.value,
                    BusinessCampaignModel.start_date <= now,
                    BusinessCampaignModel.end_date >= now,
                    BusinessCampaignModel.current_uses < BusinessCampaignModel.max_uses,
                )
                .order_by(BusinessCampaignModel.discount.desc())
            )
            return [self._to_entity(m) for m in result.scalars().all()]

        except Exception as e:
            logger.error(f"Failed to list running campaigns: {str(e)}")
            raise RepositoryException(f"Failed to list campaigns: {str(e)}")

    async def list_campaigns(
        self,
        status: Optional[CampaignStatus] = None,
        page: int = 1,
        limit: int = 20
    ) -> Tuple[List[BusinessCampaign], int]:
        try:
            conditions = []
            if status is not None:
                conditions.append(BusinessCampaignModel.status == status.value)

            total = await self.session.scalar(
                select(func.count()).select_from(BusinessCampaignModel).where(*conditions)
            )
            result = await self.session.execute(
                select(BusinessCampaignModel)
                .where(*conditions)
                .order_by(BusinessCampaignModel.created_at.desc())
                .limit(limit)
                .offset((page - 1) * limit)
            )
            return [self._to_entity(m) for m in result.scalars().all()], total or 0

        except Exception as e:
            logger.error(f"Failed to list campaigns: {str(e)}")
            raise RepositoryException(f"Failed to list campaigns: {str(e)}")

    async def create(self, campaign: BusinessCampaign) -> BusinessCampaign:
        try:
            model = BusinessCampaignModel(id=campaign.id, created_by=campaign.created_by)
            self._copy_to_model(campaign, model)
            self.session.add(model)
            await self.session.flush()
            await self.session.refresh(model)
            return self._to_entity(model)

        except Exception as e:
            logger.error(f"Failed to create campaign '{campaign.name}': {str(e)}")
            raise RepositoryException(f"Failed to create campaign: {str(e)}")

    async def update(self, campaign: BusinessCampaign) -> BusinessCampaign:
        try:
            result = await self.session.execute(
                select(BusinessCampaignModel).where(BusinessCampaignModel.id == campaign.id)
            )
            model = result.scalar_one_or_none()
            if not model:
                raise RepositoryException(f"Campaign not found: {campaign.id}")

            self._copy_to_model(campaign, model)
            model.updated_at = datetime.utcnow()
            await self.session.flush()
            await self.session.refresh(model)
            return self._to_entity(model)

        except RepositoryException:
            raise
        except Exception as e:
            logger.error(f"Failed to update campaign {campaign.id}: {str(e)}")
            raise RepositoryException(f"Failed to update campaign: {str(e)}")

    async def increment_uses(self, campaign_id: UUID) -> bool:
        """Consume one use unless the cap is already reached"""
        try:
            result = await self.session.execute(
                update(BusinessCampaignModel)
                .where(
                    BusinessCampaignModel.id == campaign_id,
                    BusinessCampaignModel.current_uses < BusinessCampaignModel.max_uses,
                )
                .values(current_uses=BusinessCampaignModel.current_uses + 1)
            )
            return result.rowcount == 1

        except Exception as e:
            logger.error(f"Failed to increment uses of campaign {campaign_id}: {str(e)}")
            raise RepositoryException(f"Failed to update campaign usage: {str(e)}")

    def _copy_to_model(self, campaign: BusinessCampaign, model: BusinessCampaignModel) -> None:
        model.name = campaign.name
        model.description = campaign.description
        model.campaign_type = campaign.campaign_type.value
        model.status = campaign.status.value
        model.is_active = campaign.is_active
        model.discount = campaign.discount
        model.discount_type = campaign.discount_type.value
        model.target_audience = campaign.target_audience.value
        model.industry_filter = list(campaign.industry_filter)
        model.location_filter = list(campaign.location_filter)
        model.max_uses = campaign.max_uses
        model.current_uses = campaign.current_uses
        model.min_job_price = campaign.min_job_price
        model.start_date = campaign.start_date
        model.end_date = campaign.end_date

    def _to_entity(self, model: BusinessCampaignModel) -> BusinessCampaign:
        return BusinessCampaign(
            id=model.id,
            name=model.name,
            description=model.description,
            campaign_type=CampaignType(model.campaign_type),
            status=CampaignStatus(model.status),
            is_active=bool(model.is_active),
            discount=model.discount,
            discount_type=CampaignDiscountType(model.discount_type),
            target_audience=TargetAudience(model.target_audience),
            industry_filter=list(model.industry_filter or []),
            location_filter=list(model.location_filter or []),
            max_uses=model.max_uses,
            current_uses=model.current_uses or 0,
            min_job_price=model.min_job_price or 0.0,
            start_date=model.start_date,
            end_date=model.end_date,
            created_by=model.created_by,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
