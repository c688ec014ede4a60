"""API dependencies"""
from typing import Optional
from uuid import UUID
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from powerfolio.database import get_db
from powerfolio.core.exceptions import UnauthorizedException
from powerfolio.core.logging_config import get_logger
from powerfolio.core.policy import ensure_account_active, require_admin
from powerfolio.core.security import InvalidTokenError, TokenService
from powerfolio.models.user import User
from powerfolio.services.user_service import UserService

logger = get_logger(__name__)
# auto_error=False so a missing header gets our own 401 body
security = HTTPBearer(auto_error=False)

# One message for every authentication failure
NOT_AUTHORIZED = "Not authorized"


def get_token_service(request: Request) -> TokenService:
    """Token issuer/verifier built at application startup"""
    return request.app.state.token_service


async def resolve_user_from_token(
    token: Optional[str],
    tokens: TokenService,
    db: AsyncSession
) -> User:
    """Verify a bearer token and load the live user it names"""
    if not token:
        logger.debug("Authentication failed: no token")
        raise UnauthorizedException(NOT_AUTHORIZED)

    try:
        subject = tokens.verify(token)
    except InvalidTokenError as e:
        logger.info(f"Authentication failed: {e}")
        raise UnauthorizedException(NOT_AUTHORIZED)

    try:
        user_id = UUID(subject)
    except (TypeError, ValueError):
        logger.info("Authentication failed: token subject is not a user id")
        raise UnauthorizedException(NOT_AUTHORIZED)

    user = await UserService(db).get_by_id(user_id)
    if user is None:
        logger.info(f"Authentication failed: user {user_id} no longer exists")
        raise UnauthorizedException(NOT_AUTHORIZED)

    return user


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    tokens: TokenService = Depends(get_token_service),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Get current authenticated user, active or not"""
    token = credentials.credentials if credentials else None
    return await resolve_user_from_token(token, tokens, db)


async def get_active_user(
    current_user: User = Depends(get_current_user)
) -> User:
    """Get current user and reject deactivated accounts"""
    ensure_account_active(current_user)
    return current_user


async def get_current_admin_user(
    current_user: User = Depends(get_active_user)
) -> User:
    """Get current active user and verify admin role"""
    require_admin(current_user)
    return current_user


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    tokens: TokenService = Depends(get_token_service),
    db: AsyncSession = Depends(get_db)
) -> Optional[User]:
    """Best-effort identity for public endpoints.

    A missing or unusable token, or a deactivated account, yields an
    anonymous caller instead of an error.
    """
    if credentials is None:
        return None
    try:
        user = await resolve_user_from_token(credentials.credentials, tokens, db)
    except UnauthorizedException:
        return None
    return user if user.is_active else None
