"""Password hashing and session tokens"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext
from powerfolio.core.config import Settings
from powerfolio.core.logging_config import get_logger

logger = get_logger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def get_password_hash(password: str) -> str:
    """Hash a plaintext password with a per-hash random salt"""
    if not password:
        raise ValueError("password must not be blank")
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Compare a candidate password against a stored hash"""
    if not plain_password or not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # Unrecognised hash format
        return False


class InvalidTokenError(Exception):
    """Raised when a bearer token is malformed, tampered with or expired"""


@dataclass(frozen=True)
class TokenConfig:
    """Signing configuration, built once at startup"""
    secret: str
    algorithm: str = "HS256"
    lifetime: timedelta = timedelta(days=30)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenConfig":
        return cls(
            secret=settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
            lifetime=timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES),
        )


class TokenService:
    """Issues and verifies signed session tokens bound to a user id.

    Rotating ``TokenConfig.secret`` invalidates every outstanding token.
    """

    def __init__(self, config: TokenConfig):
        if not config.secret:
            raise ValueError("token signing secret must not be blank")
        self.config = config

    def issue(self, user_id, now: Optional[datetime] = None) -> str:
        """Create a token for ``user_id`` that expires after the configured lifetime"""
        issued_at = now or datetime.now(timezone.utc)
        expires_at = issued_at + self.config.lifetime
        payload = {
            # python-jose enforces `sub` to be a string
            "sub": str(user_id),
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        return jwt.encode(payload, self.config.secret, algorithm=self.config.algorithm)

    def verify(self, token: str) -> str:
        """Return the user id encoded in ``token`` or raise InvalidTokenError"""
        if not token:
            raise InvalidTokenError("token is blank")
        try:
            payload = jwt.decode(token, self.config.secret, algorithms=[self.config.algorithm])
        except ExpiredSignatureError as e:
            logger.debug("Rejected expired token")
            raise InvalidTokenError("token expired") from e
        except JWTError as e:
            logger.debug(f"Rejected invalid token: {e}")
            raise InvalidTokenError("token invalid") from e

        subject = payload.get("sub")
        if not subject:
            raise InvalidTokenError("token has no subject")
        return subject
