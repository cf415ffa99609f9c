"""
Location ORM Model
Supported cities and their regions
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime, Boolean, Uuid

from core.database import Base


class LocationModel(Base):
    """Location catalog table ORM model"""

    __tablename__ = "locations"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    city = Column(String(100), nullable=False, unique=True, index=True)
    region = Column(String(100), nullable=False)
    country = Column(String(100), nullable=False, default="Albania")
    is_active = Column(Boolean, nullable=False, default=True)
    display_order = Column(Integer, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<LocationModel {self.city}>"
