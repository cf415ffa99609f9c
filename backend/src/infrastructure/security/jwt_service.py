"""
JWT Service Implementation
Bearer access tokens signed with the configured algorithm
"""
from datetime import datetime, timedelta
from typing import Dict, Optional
from uuid import UUID

from jose import jwt, JWTError
from loguru import logger

from core.config import settings
from core.exceptions import AuthenticationException
from application.services.auth.interfaces import IJwtService


class JwtService(IJwtService):
    """JWT service (HS256 by default)"""

    def __init__(self, secret_key: Optional[str] = None, algorithm: Optional[str] = None):
        self.secret_key = secret_key or settings.JWT_SECRET_KEY
        self.algorithm = algorithm or settings.JWT_ALGORITHM

    def create_access_token(self, user_id: UUID, expires_delta: Optional[timedelta] = None) -> str:
        """Create access token"""
        expires_delta = expires_delta or timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
        now = datetime.utcnow()

        payload = {
            "sub": str(user_id),
            "exp": now + expires_delta,
            "iat": now,
            "type": "access"
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Dict:
        """Verify and decode token"""
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])

        except JWTError as e:
            logger.warning(f"JWT verification failed: {str(e)}")
            raise AuthenticationException("Invalid or expired token")

    def get_user_id(self, token: str) -> UUID:
        payload = self.verify_token(token)
        if payload.get("type") != "access":
            raise AuthenticationException("Invalid token type")
        try:
            return UUID(payload["sub"])
        except (KeyError, ValueError):
            raise AuthenticationException("Invalid token subject")
