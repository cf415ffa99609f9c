"""
Location Repository Implementation
"""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from domain.entities import Location
from application.repositories.interfaces import ILocationRepository
from infrastructure.persistence.models.location import LocationModel
from core.exceptions import RepositoryException


class SQLAlchemyLocationRepository(ILocationRepository):
    """SQLAlchemy implementation of location repository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_active_by_city(self, city: str) -> Optional[Location]:
        try:
            result = await self.session.execute(
                select(LocationModel).where(
                    LocationModel.city == city,
                    LocationModel.is_active.is_(True),
                )
            )
            model = result.scalar_one_or_none()
            return self._to_entity(model) if model else None

        except Exception as e:
            logger.error(f"Failed to get location {city}: {str(e)}")
            raise RepositoryException(f"Failed to get location: {str(e)}")

    async def list_active(self) -> List[Location]:
        try:
            result = await self.session.execute(
                select(LocationModel)
                .where(LocationModel.is_active.is_(True))
                .order_by(LocationModel.display_order.asc(), LocationModel.city.asc())
            )
            return [self._to_entity(m) for m in result.scalars().all()]

        except Exception as e:
            logger.error(f"Failed to list locations: {str(e)}")
            raise RepositoryException(f"Failed to list locations: {str(e)}")

    async def create(self, location: Location) -> Location:
        try:
            model = LocationModel(
                id=location.id,
                city=location.city,
                region=location.region,
                country=location.country,
                is_active=location.is_active,
                display_order=location.display_order,
            )
            self.session.add(model)
            await self.session.flush()
            return self._to_entity(model)

        except Exception as e:
            logger.error(f"Failed to create location {location.city}: {str(e)}")
            raise RepositoryException(f"Failed to create location: {str(e)}")

    def _to_entity(self, model: LocationModel) -> Location:
        return Location(
            id=model.id,
            city=model.city,
            region=model.region,
            country=model.country,
            is_active=bool(model.is_active),
            display_order=model.display_order,
        )
