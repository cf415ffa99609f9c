"""
FastAPI Dependencies
Current user and role checks
"""
from typing import Optional

from fastapi import Depends, HTTPException, status, Header

from domain.entities import User
from application.repositories.interfaces import IUserRepository
from application.services.auth.interfaces import IJwtService
from core.exceptions import AuthenticationException
from .container import get_jwt_service, get_user_repository


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _bearer_token(authorization: str) -> str:
    # Extract token from "Bearer <token>"
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise _unauthorized("Invalid authorization header format")
    return parts[1]


async def get_current_user(
    authorization: Optional[str] = Header(None),
    jwt_service: IJwtService = Depends(get_jwt_service),
    user_repo: IUserRepository = Depends(get_user_repository)
) -> User:
    """
    Get current authenticated user from JWT token

    Usage:
        @router.get("/protected")
        async def protected_route(user: User = Depends(get_current_user)):
            ...
    """
    if not authorization:
        raise _unauthorized("Missing authorization header")

    token = _bearer_token(authorization)

    try:
        user_id = jwt_service.get_user_id(token)
    except AuthenticationException:
        raise _unauthorized("Invalid or expired token")

    user = await user_repo.get_by_id(user_id)
    if not user:
        raise _unauthorized("Invalid or expired token")

    return user


async def get_optional_user(
    authorization: Optional[str] = Header(None),
    jwt_service: IJwtService = Depends(get_jwt_service),
    user_repo: IUserRepository = Depends(get_user_repository)
) -> Optional[User]:
    """Authenticated user when a valid token is sent, otherwise None"""
    if not authorization:
        return None

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None

    try:
        user_id = jwt_service.get_user_id(parts[1])
    except AuthenticationException:
        return None

    return await user_repo.get_by_id(user_id)


async def require_employer(
    current_user: User = Depends(get_current_user)
) -> User:
    """Only employers may manage job postings"""
    if not current_user.is_employer():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Employer account required"
        )
    return current_user


async def require_verified_employer(
    current_user: User = Depends(require_employer)
) -> User:
    """Posting requires a verified employer account"""
    if not current_user.verified:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Employer account must be verified before posting jobs"
        )
    return current_user


async def require_admin(
    current_user: User = Depends(get_current_user)
) -> User:
    """Admin-only endpoints"""
    if not current_user.is_admin():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return current_user
