"""
Job Location Value Object
"""
from dataclasses import dataclass
from typing import Optional

from ..enums import RemoteType


@dataclass(frozen=True)
class JobLocation:
    """Where a job is performed"""

    city: str
    region: Optional[str] = None
    remote: bool = False
    remote_type: RemoteType = RemoteType.NONE

    def __post_init__(self):
        if not self.city or not self.city.strip():
            raise ValueError("City cannot be empty")

    def same_city(self, other: "JobLocation") -> bool:
        return self.city == other.city

    def same_region(self, other: "JobLocation") -> bool:
        return bool(self.region) and self.region == other.region

    def __str__(self) -> str:
        return f"{self.city}, {self.region}" if self.region else self.city
