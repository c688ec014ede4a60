"""User service - credential store and account administration"""
from typing import List, Optional, Tuple, Union
from uuid import UUID
from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import undefer
from powerfolio.core.exceptions import EmailAlreadyRegisteredException, UserNotFoundException
from powerfolio.core.logging_config import get_logger
from powerfolio.core.security import get_password_hash, verify_password
from powerfolio.models.user import User, UserRole
from powerfolio.schemas.user import ProfileUpdate

logger = get_logger(__name__)


class UserService:
    """Service for user accounts.

    Ordinary reads leave ``hashed_password`` deferred; only
    ``find_by_email_with_secret`` loads it, for the login path.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def find_by_email_with_secret(self, email: str) -> Optional[User]:
        """Load a user including the password hash. Login only."""
        result = await self.db.execute(
            select(User)
            .options(undefer(User.hashed_password))
            .where(User.email == email)
        )
        return result.scalar_one_or_none()

    @staticmethod
    def verify_password(user: User, candidate: str) -> bool:
        return verify_password(candidate, user.__dict__.get("hashed_password"))

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_or_404(self, user_id: Union[str, UUID]) -> User:
        try:
            parsed = UUID(str(user_id))
        except ValueError:
            logger.warning(f"User id {user_id!r} is not a UUID")
            raise UserNotFoundException(user_id)
        user = await self.get_by_id(parsed)
        if user is None:
            logger.warning(f"User {user_id} not found")
            raise UserNotFoundException(user_id)
        return user

    async def create_user(
        self,
        name: str,
        email: str,
        password: str,
        role: UserRole = UserRole.USER,
    ) -> User:
        """Create an account; the email must not already be registered"""
        if await self.find_by_email(email) is not None:
            logger.warning(f"Registration refused: email already registered - {email}")
            raise EmailAlreadyRegisteredException()

        user = User(
            name=name,
            email=email,
            hashed_password=get_password_hash(password),
            role=role,
            is_active=True,
            project_count=0,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            # Lost a race against a concurrent registration for the same email
            await self.db.rollback()
            logger.warning(f"Registration refused on commit: duplicate email - {email}")
            raise EmailAlreadyRegisteredException()
        await self.db.refresh(user)
        logger.info(f"User created: {user.email} (role={user.role.value})")
        return user

    async def update_profile(self, user: User, payload: ProfileUpdate) -> User:
        changes = payload.model_dump(exclude_unset=True)
        if "name" in changes and changes["name"] is None:
            del changes["name"]
        for field, value in changes.items():
            setattr(user, field, value)
        await self.db.commit()
        await self.db.refresh(user)
        logger.info(f"Profile updated for user {user.id}: {sorted(changes)}")
        return user

    async def set_active(self, user: User, active: bool) -> User:
        """Administrative (de)activation"""
        user.is_active = active
        await self.db.commit()
        await self.db.refresh(user)
        logger.info(f"User {user.id} {'activated' if active else 'deactivated'}")
        return user

    async def increment_project_count(self, user_id: UUID) -> None:
        await self.db.execute(
            update(User)
            .where(User.id == user_id)
            .values(project_count=User.project_count + 1)
        )

    async def list_users(self, skip: int = 0, limit: int = 100) -> Tuple[List[User], int]:
        result = await self.db.execute(
            select(User).order_by(User.created_at.desc()).offset(skip).limit(limit)
        )
        users = list(result.scalars().all())
        total = (await self.db.execute(select(func.count()).select_from(User))).scalar_one()
        return users, total
