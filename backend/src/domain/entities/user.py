"""
User Domain Entity
Immutable account business object
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from ..enums import UserType


@dataclass(frozen=True)
class User:
    """User domain entity - immutable"""

    id: UUID
    email: str
    user_type: UserType
    full_name: str = ""

    # Employer profile
    company_name: Optional[str] = None
    company_size: Optional[str] = None  # small, medium, large
    verified: bool = False
    total_spent: float = 0.0

    # Free posting whitelist
    free_posting_enabled: bool = False
    free_posting_reason: Optional[str] = None
    free_posting_granted_by: Optional[UUID] = None
    free_posting_granted_at: Optional[datetime] = None

    # Timestamps
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.email or "@" not in self.email:
            raise ValueError(f"Invalid email: {self.email}")

    def is_employer(self) -> bool:
        return self.user_type == UserType.EMPLOYER

    def is_admin(self) -> bool:
        return self.user_type == UserType.ADMIN

    def account_age_days(self, now: Optional[datetime] = None) -> int:
        """Whole days since the account was created"""
        if self.created_at is None:
            return 0
        return max(0, ((now or datetime.utcnow()) - self.created_at).days)

    def __str__(self) -> str:
        return f"User({self.email}, {self.user_type.value})"
