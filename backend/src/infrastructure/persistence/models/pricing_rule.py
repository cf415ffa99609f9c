"""
Pricing Rule ORM Model
Data-driven discounts and price increases
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime, JSON, Boolean, Float, Text, Uuid

from core.database import Base


class PricingRuleModel(Base):
    """Pricing rule table ORM model"""

    __tablename__ = "pricing_rules"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(30), nullable=False, index=True)

    # [{"field": ..., "operator": ..., "value": ...}]
    conditions = Column(JSON, nullable=False, default=list)

    # Effect
    effect_kind = Column(String(20), nullable=False)  # discount, increase
    effect_mode = Column(String(20), nullable=False)  # fixed, percentage
    effect_value = Column(Float, nullable=False)

    priority = Column(Integer, nullable=False, default=50, index=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    valid_from = Column(DateTime, nullable=True)
    valid_to = Column(DateTime, nullable=True)

    # Usage
    times_applied = Column(Integer, nullable=False, default=0)
    last_applied_at = Column(DateTime, nullable=True)

    created_by = Column(Uuid, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<PricingRuleModel {self.name} ({self.priority})>"
