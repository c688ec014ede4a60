"""Project service - submission, listing and generic updates"""
from typing import List, Optional, Tuple, Union
from uuid import UUID
from sqlalchemy import String, cast, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from powerfolio.core.exceptions import ProjectNotFoundException, ValidationException
from powerfolio.core.logging_config import get_logger
from powerfolio.models.project import Project, ProjectStatus
from powerfolio.models.user import User
from powerfolio.schemas.project import ProjectCreate, ProjectUpdate
from powerfolio.services import moderation
from powerfolio.services.user_service import UserService

logger = get_logger(__name__)

# Never writable through ProjectService.update
PROTECTED_FIELDS = moderation.MODERATION_FIELDS | {"id", "author_id", "views", "created_at", "updated_at"}


def escape_like(term: str) -> str:
    """Make LIKE wildcards in user input match literally"""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class ProjectService:
    """Service for project operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, project_id: UUID) -> Optional[Project]:
        result = await self.db.execute(select(Project).where(Project.id == project_id))
        return result.scalar_one_or_none()

    async def get_or_404(self, project_id: Union[str, UUID]) -> Project:
        """Load a project; a malformed id is reported the same as an unknown one"""
        try:
            parsed = UUID(str(project_id))
        except ValueError:
            logger.warning(f"Project id {project_id!r} is not a UUID")
            raise ProjectNotFoundException(project_id)
        project = await self.get(parsed)
        if project is None:
            logger.warning(f"Project {project_id} not found")
            raise ProjectNotFoundException(project_id)
        return project

    async def create(self, author: User, data: ProjectCreate) -> Project:
        """Submit a project. New projects always start out pending."""
        project = Project(
            title=data.title,
            description=data.description,
            tech_stack=list(data.tech_stack),
            github=data.github,
            live_link=data.live_link,
            thumbnail=data.thumbnail,
            tags=list(data.tags),
            category=data.category,
            author_id=author.id,
            status=ProjectStatus.PENDING,
            views=0,
        )
        self.db.add(project)
        await UserService(self.db).increment_project_count(author.id)
        await self.db.commit()
        await self.db.refresh(project)
        logger.info(f"Project created: {project.title} (ID: {project.id}, author: {author.id})")
        return project

    async def update(self, project: Project, payload: ProjectUpdate) -> Project:
        """Apply a generic update.

        Refuses the whole request if it names a protected field, leaving the
        stored project untouched.
        """
        extra = set(payload.model_extra or {})
        protected = sorted(extra & PROTECTED_FIELDS)
        if protected:
            logger.warning(f"Update of project {project.id} tried to set protected fields {protected}")
            raise ValidationException(
                f"Field(s) {', '.join(protected)} cannot be modified through a project update",
                errors=[{"field": f, "message": "read-only"} for f in protected],
            )
        unknown = sorted(extra - PROTECTED_FIELDS)
        if unknown:
            raise ValidationException(
                f"Unknown field(s): {', '.join(unknown)}",
                errors=[{"field": f, "message": "unknown field"} for f in unknown],
            )

        changes = payload.model_dump(exclude_unset=True, exclude=extra)
        for field, value in changes.items():
            if value is None and field != "live_link":
                continue
            setattr(project, field, value)
        await self.db.commit()
        await self.db.refresh(project)
        logger.info(f"Project {project.id} updated: {sorted(changes)}")
        return project

    async def delete(self, project: Project) -> None:
        await self.db.delete(project)
        await self.db.commit()
        logger.info(f"Project {project.id} deleted")

    async def approve(self, project: Project, admin: User) -> Project:
        moderation.approve(project, admin.id)
        await self.db.commit()
        await self.db.refresh(project)
        logger.info(f"Project {project.id} approved by {admin.id}")
        return project

    async def reject(self, project: Project, admin: User, reason: Optional[str]) -> Project:
        moderation.reject(project, reason)
        await self.db.commit()
        await self.db.refresh(project)
        logger.info(f"Project {project.id} rejected by {admin.id}")
        return project

    async def record_view(self, project: Project) -> Project:
        await self.db.execute(
            update(Project)
            .where(Project.id == project.id)
            .values(views=Project.views + 1)
            .execution_options(synchronize_session=False)
        )
        await self.db.commit()
        await self.db.refresh(project)
        return project

    async def list_public(
        self,
        search: Optional[str] = None,
        skip: int = 0,
        limit: int = 20,
    ) -> Tuple[List[Project], int]:
        """Approved projects only, newest first"""
        conditions = [Project.status == ProjectStatus.APPROVED]
        if search:
            pattern = f"%{escape_like(search.lower())}%"
            conditions.append(
                or_(
                    func.lower(Project.title).like(pattern, escape="\\"),
                    func.lower(Project.description).like(pattern, escape="\\"),
                    func.lower(cast(Project.tech_stack, String)).like(pattern, escape="\\"),
                )
            )
        return await self._list(conditions, skip, limit)

    async def list_all(
        self,
        status: Optional[ProjectStatus] = None,
        skip: int = 0,
        limit: int = 20,
    ) -> Tuple[List[Project], int]:
        """Admin listing across every status"""
        conditions = [Project.status == status] if status else []
        return await self._list(conditions, skip, limit)

    async def list_by_author(self, author_id: UUID, approved_only: bool = False) -> List[Project]:
        stmt = select(Project).where(Project.author_id == author_id)
        if approved_only:
            stmt = stmt.where(Project.status == ProjectStatus.APPROVED)
        result = await self.db.execute(stmt.order_by(Project.created_at.desc()))
        return list(result.scalars().all())

    async def _list(self, conditions, skip: int, limit: int) -> Tuple[List[Project], int]:
        result = await self.db.execute(
            select(Project)
            .options(selectinload(Project.author))
            .where(*conditions)
            .order_by(Project.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        projects = list(result.scalars().all())
        total = (
            await self.db.execute(select(func.count()).select_from(Project).where(*conditions))
        ).scalar_one()
        return projects, total
