"""
Business Campaign ORM Model
Promotional discounts on job postings
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime, JSON, Boolean, Float, Text, Uuid

from core.database import Base


class BusinessCampaignModel(Base):
    """Business campaign table ORM model"""

    __tablename__ = "business_campaigns"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    campaign_type = Column(String(30), nullable=False)
    status = Column(String(20), nullable=False, default="draft", index=True)
    is_active = Column(Boolean, nullable=False, default=False, index=True)

    # Parameters
    discount = Column(Float, nullable=False, default=0.0)
    discount_type = Column(String(20), nullable=False, default="percentage")
    target_audience = Column(String(30), nullable=False, default="all")
    industry_filter = Column(JSON, nullable=False, default=list)  # List[str]
    location_filter = Column(JSON, nullable=False, default=list)  # List[str]
    max_uses = Column(Integer, nullable=False, default=1000)
    current_uses = Column(Integer, nullable=False, default=0)
    min_job_price = Column(Float, nullable=False, default=0.0)

    # Schedule
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)

    created_by = Column(Uuid, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<BusinessCampaignModel {self.name}>"
