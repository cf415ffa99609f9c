"""
Job ORM Model
SQLAlchemy model for job postings
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime, JSON, Boolean, Float, Text, Uuid, ForeignKey, Index

from core.database import Base


class JobModel(Base):
    """Job posting table ORM model"""

    __tablename__ = "jobs"

    # Primary Key
    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    employer_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)

    # Basic Info
    title = Column(String(100), nullable=False, index=True)
    slug = Column(String(150), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=False)
    requirements = Column(JSON, nullable=False, default=list)  # List[str]
    benefits = Column(JSON, nullable=False, default=list)  # List[str]
    tags = Column(JSON, nullable=False, default=list)  # List[str]

    # Classification
    category = Column(String(50), nullable=False, index=True)
    job_type = Column(String(20), nullable=False, default="full-time", index=True)
    seniority = Column(String(20), nullable=False, default="mid")
    tier = Column(String(20), nullable=False, default="basic")

    # Location
    city = Column(String(100), nullable=False, index=True)
    region = Column(String(100), nullable=True)
    remote = Column(Boolean, nullable=False, default=False)
    remote_type = Column(String(20), nullable=False, default="none")

    # Salary (monthly)
    salary_min = Column(Float, nullable=True)
    salary_max = Column(Float, nullable=True)
    salary_currency = Column(String(3), nullable=False, default="EUR")
    salary_negotiable = Column(Boolean, nullable=False, default=True)
    salary_show_public = Column(Boolean, nullable=False, default=True)

    # Platform categories
    diaspora = Column(Boolean, nullable=False, default=False)
    nga_shtepia = Column(Boolean, nullable=False, default=False)
    part_time = Column(Boolean, nullable=False, default=False)
    administrata = Column(Boolean, nullable=False, default=False)
    sezonale = Column(Boolean, nullable=False, default=False)

    # Status
    status = Column(String(20), nullable=False, default="draft", index=True)
    is_deleted = Column(Boolean, nullable=False, default=False, index=True)

    # Pricing & payment
    pricing = Column(JSON, nullable=True)  # JobPricing.to_dict()
    payment_required = Column(Float, nullable=False, default=0.0)
    payment_status = Column(String(20), nullable=False, default="pending")

    # Stats
    view_count = Column(Integer, nullable=False, default=0)
    application_count = Column(Integer, nullable=False, default=0)

    # Timestamps
    posted_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    expires_at = Column(DateTime, nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index("ix_jobs_board", "is_deleted", "status", "expires_at"),
    )

    def __repr__(self):
        return f"<JobModel {self.title} in {self.city}>"
