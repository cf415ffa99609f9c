"""
Location Domain Entity
City catalog entry that job postings must reference
"""
from dataclasses import dataclass
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class Location:
    """Supported city and the region it belongs to"""

    id: UUID
    city: str
    region: str
    country: str = "Albania"
    is_active: bool = True
    display_order: Optional[int] = None

    def __str__(self) -> str:
        return f"{self.city} ({self.region})"
