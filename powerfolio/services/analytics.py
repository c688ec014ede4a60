"""Admin dashboard analytics"""
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from powerfolio.core.logging_config import get_logger
from powerfolio.models.project import Project, ProjectStatus
from powerfolio.models.user import User

logger = get_logger(__name__)

TREND_MONTHS = 6
TOP_TECH_LIMIT = 10
TOP_PROJECTS_LIMIT = 5


def _months_ago(now: datetime, months: int) -> datetime:
    year, month = now.year, now.month - months
    while month <= 0:
        month += 12
        year -= 1
    return now.replace(year=year, month=month, day=1, hour=0, minute=0, second=0, microsecond=0)


async def collect_analytics(db: AsyncSession, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Totals, status breakdown, top technologies, submission trend and most viewed work"""
    now = now or datetime.now(timezone.utc)

    total_users = (await db.execute(select(func.count()).select_from(User))).scalar_one()
    total_projects = (await db.execute(select(func.count()).select_from(Project))).scalar_one()

    status_counts = {s.value: 0 for s in ProjectStatus}
    rows = await db.execute(select(Project.status, func.count()).group_by(Project.status))
    for status_value, count in rows.all():
        status_counts[ProjectStatus(status_value).value] = count

    stacks = (
        await db.execute(select(Project.tech_stack).where(Project.status == ProjectStatus.APPROVED))
    ).scalars().all()
    tech_counter: Counter = Counter()
    for stack in stacks:
        tech_counter.update(t for t in (stack or []) if t)
    top_tech = [{"name": name, "count": count} for name, count in tech_counter.most_common(TOP_TECH_LIMIT)]

    since = _months_ago(now, TREND_MONTHS)
    created = (
        await db.execute(select(Project.created_at).where(Project.created_at >= since))
    ).scalars().all()
    month_counter: Counter = Counter((c.year, c.month) for c in created)
    trends: List[Dict[str, int]] = [
        {"year": year, "month": month, "count": month_counter[(year, month)]}
        for year, month in sorted(month_counter)
    ]

    top_rows = await db.execute(
        select(Project.id, Project.title, Project.views, User.id, User.name)
        .join(User, Project.author_id == User.id)
        .where(Project.status == ProjectStatus.APPROVED)
        .order_by(Project.views.desc())
        .limit(TOP_PROJECTS_LIMIT)
    )
    top_projects = [
        {
            "id": str(project_id),
            "title": title,
            "views": views,
            "author": {"id": str(author_id), "name": author_name},
        }
        for project_id, title, views, author_id, author_name in top_rows.all()
    ]

    logger.debug(f"Analytics collected: {total_users} users, {total_projects} projects")
    return {
        "total_users": total_users,
        "total_projects": total_projects,
        "approved": status_counts[ProjectStatus.APPROVED.value],
        "pending": status_counts[ProjectStatus.PENDING.value],
        "rejected": status_counts[ProjectStatus.REJECTED.value],
        "top_tech": top_tech,
        "trends": trends,
        "top_projects": top_projects,
    }
