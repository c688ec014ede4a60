"""Authorization policy.

Pure decisions over an already-authenticated user and, for ownership, the
target resource as currently stored. Callers load the resource first and
raise NotFound before consulting ``require_owner_or_admin``, so a 403 is
only ever returned for a resource whose existence the caller already saw.
"""
from powerfolio.core.exceptions import AccountDeactivatedException, ForbiddenException
from powerfolio.core.logging_config import get_logger
from powerfolio.models.user import UserRole

logger = get_logger(__name__)


def is_admin(user) -> bool:
    role = getattr(user.role, "value", user.role)
    return role == UserRole.ADMIN.value


def is_owner_or_admin(user, resource) -> bool:
    return resource.author_id == user.id or is_admin(user)


def require_admin(user) -> None:
    if not is_admin(user):
        logger.warning(f"Admin access denied for user {user.id}")
        raise ForbiddenException("Admin access required")


def require_owner_or_admin(user, resource) -> None:
    if not is_owner_or_admin(user, resource):
        logger.warning(f"User {user.id} is neither author nor admin of {resource.id}")
        raise ForbiddenException("Not authorized to modify this project")


def ensure_account_active(user) -> None:
    """Reject accounts that an administrator has deactivated.

    Evaluated against the live user row on every request, so a deactivation
    takes effect before outstanding tokens expire.
    """
    if not user.is_active:
        logger.warning(f"Rejected request from deactivated account {user.id}")
        raise AccountDeactivatedException()
