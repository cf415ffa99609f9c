"""
Authentication Service Interfaces
Abstract base classes for authentication services
"""
from abc import ABC, abstractmethod
from uuid import UUID


class IJwtService(ABC):
    """JWT token service interface"""

    @abstractmethod
    def create_access_token(self, user_id: UUID) -> str:
        """Create access token"""
        pass

    @abstractmethod
    def verify_token(self, token: str) -> dict:
        """Verify and decode token; raises AuthenticationException"""
        pass

    @abstractmethod
    def get_user_id(self, token: str) -> UUID:
        """Subject of a valid access token"""
        pass
