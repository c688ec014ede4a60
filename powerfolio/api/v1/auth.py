"""Authentication endpoints"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from powerfolio.database import get_db
from powerfolio.api.deps import get_active_user, get_token_service
from powerfolio.core.exceptions import UnauthorizedException
from powerfolio.core.logging_config import get_logger
from powerfolio.core.policy import ensure_account_active
from powerfolio.core.security import TokenService
from powerfolio.models.user import User
from powerfolio.schemas.auth import UserRegister, UserLogin, AuthResponse
from powerfolio.schemas.user import UserEnvelope, UserPublic
from powerfolio.services.user_service import UserService

logger = get_logger(__name__)
router = APIRouter(prefix="/auth", tags=["authentication"])

# Same response for unknown email and wrong password
INVALID_CREDENTIALS = "Invalid credentials"


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserRegister,
    tokens: TokenService = Depends(get_token_service),
    db: AsyncSession = Depends(get_db)
):
    """Register a new user"""
    logger.debug(f"Registration attempt for email: {user_data.email}")

    user = await UserService(db).create_user(
        name=user_data.name,
        email=user_data.email,
        password=user_data.password
    )

    return AuthResponse(
        token=tokens.issue(user.id),
        user=UserPublic.model_validate(user)
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    tokens: TokenService = Depends(get_token_service),
    db: AsyncSession = Depends(get_db)
):
    """Authenticate user and return access token"""
    logger.debug(f"Login attempt for email: {credentials.email}")

    users = UserService(db)
    user = await users.find_by_email_with_secret(credentials.email)

    if not user or not users.verify_password(user, credentials.password):
        logger.warning(f"Login failed: Invalid credentials for email: {credentials.email}")
        raise UnauthorizedException(INVALID_CREDENTIALS)

    # Checked only after the password matched, so it reveals nothing to guessers
    ensure_account_active(user)

    logger.info(f"Login successful: {user.email}")
    return AuthResponse(
        token=tokens.issue(user.id),
        user=UserPublic.model_validate(user)
    )


@router.get("/me", response_model=UserEnvelope)
async def me(current_user: User = Depends(get_active_user)):
    """Return the session's user after re-checking account status"""
    return UserEnvelope(user=UserPublic.model_validate(current_user))
