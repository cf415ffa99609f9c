"""
User Repository Implementation
SQLAlchemy-based user repository
"""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from domain.entities import User
from domain.enums import UserType
from application.repositories.interfaces import IUserRepository
from infrastructure.persistence.models.user import UserModel
from core.exceptions import RepositoryException


class SQLAlchemyUserRepository(IUserRepository):
    """SQLAlchemy implementation of user repository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        try:
            result = await self.session.execute(
                select(UserModel).where(UserModel.id == user_id)
            )
            model = result.scalar_one_or_none()

            if model:
                return self._to_entity(model)
            return None

        except Exception as e:
            logger.error(f"Failed to get user by ID {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to get user: {str(e)}")

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email"""
        try:
            result = await self.session.execute(
                select(UserModel).where(UserModel.email == email)
            )
            model = result.scalar_one_or_none()

            if model:
                return self._to_entity(model)
            return None

        except Exception as e:
            logger.error(f"Failed to get user by email {email}: {str(e)}")
            raise RepositoryException(f"Failed to get user: {str(e)}")

    async def create(self, user: User) -> User:
        """Create new user"""
        try:
            model = self._to_model(user)
            self.session.add(model)
            await self.session.flush()
            await self.session.refresh(model)

            return self._to_entity(model)

        except Exception as e:
            logger.error(f"Failed to create user {user.email}: {str(e)}")
            raise RepositoryException(f"Failed to create user: {str(e)}")

    async def update(self, user: User) -> User:
        """Update existing user"""
        try:
            result = await self.session.execute(
                select(UserModel).where(UserModel.id == user.id)
            )
            model = result.scalar_one_or_none()

            if not model:
                raise RepositoryException(f"User not found: {user.id}")

            model.email = user.email
            model.full_name = user.full_name
            model.user_type = user.user_type.value
            model.company_name = user.company_name
            model.company_size = user.company_size
            model.verified = user.verified
            model.total_spent = user.total_spent
            model.free_posting_enabled = user.free_posting_enabled
            model.free_posting_reason = user.free_posting_reason
            model.free_posting_granted_by = user.free_posting_granted_by
            model.free_posting_granted_at = user.free_posting_granted_at

            await self.session.flush()
            await self.session.refresh(model)

            return self._to_entity(model)

        except RepositoryException:
            raise
        except Exception as e:
            logger.error(f"Failed to update user {user.id}: {str(e)}")
            raise RepositoryException(f"Failed to update user: {str(e)}")

    async def list_free_posting(self) -> List[User]:
        """Employers currently on the free posting whitelist"""
        try:
            result = await self.session.execute(
                select(UserModel)
                .where(
                    UserModel.user_type == UserType.EMPLOYER.value,
                    UserModel.free_posting_enabled.is_(True),
                )
                .order_by(UserModel.free_posting_granted_at.desc())
            )
            return [self._to_entity(m) for m in result.scalars().all()]

        except Exception as e:
            logger.error(f"Failed to list free posting employers: {str(e)}")
            raise RepositoryException(f"Failed to list whitelist: {str(e)}")

    def _to_entity(self, model: UserModel) -> User:
        """Convert ORM model to domain entity"""
        return User(
            id=model.id,
            email=model.email,
            user_type=UserType(model.user_type),
            full_name=model.full_name or "",
            company_name=model.company_name,
            company_size=model.company_size,
            verified=bool(model.verified),
            total_spent=model.total_spent or 0.0,
            free_posting_enabled=bool(model.free_posting_enabled),
            free_posting_reason=model.free_posting_reason,
            free_posting_granted_by=model.free_posting_granted_by,
            free_posting_granted_at=model.free_posting_granted_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: User) -> UserModel:
        """Convert domain entity to ORM model"""
        return UserModel(
            id=entity.id,
            email=entity.email,
            user_type=entity.user_type.value,
            full_name=entity.full_name,
            company_name=entity.company_name,
            company_size=entity.company_size,
            verified=entity.verified,
            total_spent=entity.total_spent,
            free_posting_enabled=entity.free_posting_enabled,
            free_posting_reason=entity.free_posting_reason,
            free_posting_granted_by=entity.free_posting_granted_by,
            free_posting_granted_at=entity.free_posting_granted_at,
            created_at=entity.created_at or datetime.utcnow(),
            updated_at=entity.updated_at or datetime.utcnow(),
        )
