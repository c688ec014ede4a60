"""Project moderation state machine.

    pending  --approve--> approved
    rejected --approve--> approved
    pending  --reject-->  rejected
    approved --reject-->  rejected

``status``, ``approved_at``, ``approved_by`` and ``rejection_reason`` are
written here and nowhere else.
"""
from datetime import datetime, timezone
from typing import Dict, FrozenSet, Optional
from powerfolio.core.exceptions import InvalidTransitionException
from powerfolio.core.logging_config import get_logger
from powerfolio.models.project import Project, ProjectStatus

logger = get_logger(__name__)

MODERATION_FIELDS: FrozenSet[str] = frozenset(
    {"status", "approved_at", "approved_by", "rejection_reason"}
)

ALLOWED_SOURCES: Dict[ProjectStatus, FrozenSet[ProjectStatus]] = {
    ProjectStatus.APPROVED: frozenset({ProjectStatus.PENDING, ProjectStatus.REJECTED}),
    ProjectStatus.REJECTED: frozenset({ProjectStatus.PENDING, ProjectStatus.APPROVED}),
}


def can_transition(current: ProjectStatus, target: ProjectStatus) -> bool:
    return ProjectStatus(current) in ALLOWED_SOURCES.get(target, frozenset())


def _check(project: Project, target: ProjectStatus) -> None:
    current = ProjectStatus(project.status)
    if not can_transition(current, target):
        logger.warning(f"Refused {current.value} -> {target.value} for project {project.id}")
        raise InvalidTransitionException(current.value, target.value)


def approve(project: Project, admin_id, now: Optional[datetime] = None) -> Project:
    """Move ``project`` to approved, recording who approved it and when"""
    _check(project, ProjectStatus.APPROVED)
    project.status = ProjectStatus.APPROVED
    project.approved_at = now or datetime.now(timezone.utc)
    project.approved_by = admin_id
    project.rejection_reason = None
    return project


def reject(project: Project, reason: Optional[str] = None) -> Project:
    """Move ``project`` to rejected; any earlier approval is cleared"""
    _check(project, ProjectStatus.REJECTED)
    project.status = ProjectStatus.REJECTED
    project.rejection_reason = reason or ""
    project.approved_at = None
    project.approved_by = None
    return project
