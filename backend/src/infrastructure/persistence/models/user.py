"""
User ORM Model
SQLAlchemy model for persistence
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Boolean, Float, Uuid

from core.database import Base


class UserModel(Base):
    """User table ORM model"""

    __tablename__ = "users"

    # Primary Key
    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)

    # Account
    email = Column(String(255), unique=True, nullable=False, index=True)
    user_type = Column(String(20), nullable=False, default="jobseeker", index=True)
    full_name = Column(String(255), nullable=False, default="")

    # Employer profile
    company_name = Column(String(255), nullable=True)
    company_size = Column(String(20), nullable=True)  # small, medium, large
    verified = Column(Boolean, nullable=False, default=False)
    total_spent = Column(Float, nullable=False, default=0.0)

    # Free posting whitelist
    free_posting_enabled = Column(Boolean, nullable=False, default=False, index=True)
    free_posting_reason = Column(String(200), nullable=True)
    free_posting_granted_by = Column(Uuid, nullable=True)
    free_posting_granted_at = Column(DateTime, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<UserModel {self.email}>"
