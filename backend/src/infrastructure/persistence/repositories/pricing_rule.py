"""
Pricing Rule Repository Implementation
"""
from datetime import datetime
from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import select, update, func
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from domain.entities import PricingRule, RuleCondition, RuleEffect
from domain.enums import AdjustmentKind, AdjustmentMode, RuleCategory
from application.repositories.interfaces import IPricingRuleRepository
from infrastructure.persistence.models.pricing_rule import PricingRuleModel
from core.exceptions import RepositoryException


class SQLAlchemyPricingRuleRepository(IPricingRuleRepository):
    """SQLAlchemy implementation of pricing rule repository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, rule_id: UUID) -> Optional[PricingRule]:
        try:
            result = await self.session.execute(
                select(PricingRuleModel).where(PricingRuleModel.id == rule_id)
            )
            model = result.scalar_one_or_none()
            return self._to_entity(model) if model else None

        except Exception as e:
            logger.error(f"Failed to get pricing rule {rule_id}: {str(e)}")
            raise RepositoryException(f"Failed to get pricing rule: {str(e)}")

    async def list_active(self) -> List[PricingRule]:
        """Active rules; validity windows are checked by the pricing engine"""
        try:
            result = await self.session.execute(
                select(PricingRuleModel)
                .where(PricingRuleModel.is_active.is_(True))
                .order_by(PricingRuleModel.priority.desc(), PricingRuleModel.created_at.asc())
            )
            return [self._to_entity(m) for m in result.scalars().all()]

        except Exception as e:
            logger.error(f"Failed to list active pricing rules: {str(e)}")
            raise RepositoryException(f"Failed to list pricing rules: {str(e)}")

    async def list_rules(
        self,
        category: Optional[RuleCategory] = None,
        is_active: Optional[bool] = None,
        page: int = 1,
        limit: int = 20
    ) -> Tuple[List[PricingRule], int]:
        try:
            conditions = []
            if category is not None:
                conditions.append(PricingRuleModel.category == category.value)
            if is_active is not None:
                conditions.append(PricingRuleModel.is_active.is_(is_active))

            total = await self.session.scalar(
                select(func.count()).select_from(PricingRuleModel).where(*conditions)
            )
            result = await self.session.execute(
                select(PricingRuleModel)
                .where(*conditions)
                .order_by(PricingRuleModel.priority.desc(), PricingRuleModel.created_at.desc())
                .limit(limit)
                .offset((page - 1) * limit)
            )
            return [self._to_entity(m) for m in result.scalars().all()], total or 0

        except Exception as e:
            logger.error(f"Failed to list pricing rules: {str(e)}")
            raise RepositoryException(f"Failed to list pricing rules: {str(e)}")

    async def create(self, rule: PricingRule) -> PricingRule:
        try:
            model = PricingRuleModel(id=rule.id, created_by=rule.created_by)
            self._copy_to_model(rule, model)
            self.session.add(model)
            await self.session.flush()
            await self.session.refresh(model)
            return self._to_entity(model)

        except Exception as e:
            logger.error(f"Failed to create pricing rule '{rule.name}': {str(e)}")
            raise RepositoryException(f"Failed to create pricing rule: {str(e)}")

    async def update(self, rule: PricingRule) -> PricingRule:
        try:
            result = await self.session.execute(
                select(PricingRuleModel).where(PricingRuleModel.id == rule.id)
            )
            model = result.scalar_one_or_none()
            if not model:
                raise RepositoryException(f"Pricing rule not found: {rule.id}")

            self._copy_to_model(rule, model)
            model.updated_at = datetime.utcnow()
            await self.session.flush()
            await self.session.refresh(model)
            return self._to_entity(model)

        except RepositoryException:
            raise
        except Exception as e:
            logger.error(f"Failed to update pricing rule {rule.id}: {str(e)}")
            raise RepositoryException(f"Failed to update pricing rule: {str(e)}")

    async def record_applications(self, rule_ids: Sequence[UUID], applied_at: datetime) -> None:
        if not rule_ids:
            return
        try:
            await self.session.execute(
                update(PricingRuleModel)
                .where(PricingRuleModel.id.in_(list(rule_ids)))
                .values(
                    times_applied=PricingRuleModel.times_applied + 1,
                    last_applied_at=applied_at,
                )
            )

        except Exception as e:
            logger.error(f"Failed to record pricing rule usage: {str(e)}")
            raise RepositoryException(f"Failed to record rule usage: {str(e)}")

    def _copy_to_model(self, rule: PricingRule, model: PricingRuleModel) -> None:
        model.name = rule.name
        model.description = rule.description
        model.category = rule.category.value
        model.conditions = [c.to_dict() for c in rule.conditions]
        model.effect_kind = rule.effect.kind.value
        model.effect_mode = rule.effect.mode.value
        model.effect_value = rule.effect.value
        model.priority = rule.priority
        model.is_active = rule.is_active
        model.valid_from = rule.valid_from
        model.valid_to = rule.valid_to
        model.times_applied = rule.times_applied
        model.last_applied_at = rule.last_applied_at

    def _to_entity(self, model: PricingRuleModel) -> PricingRule:
        return PricingRule(
            id=model.id,
            name=model.name,
            description=model.description,
            category=RuleCategory(model.category),
            conditions=tuple(RuleCondition.from_dict(c) for c in model.conditions or []),
            effect=RuleEffect(
                kind=AdjustmentKind(model.effect_kind),
                mode=AdjustmentMode(model.effect_mode),
                value=model.effect_value,
            ),
            priority=model.priority,
            is_active=bool(model.is_active),
            valid_from=model.valid_from,
            valid_to=model.valid_to,
            times_applied=model.times_applied or 0,
            last_applied_at=model.last_applied_at,
            created_by=model.created_by,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
