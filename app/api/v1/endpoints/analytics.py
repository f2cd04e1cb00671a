# app/api/v1/endpoints/analytics.py
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.database import get_db
from app.db.crud import task as task_crud
from app.db.models import Profile
from app.api.v1.schemas.analytics import TaskAnalytics
from app.auth.dependencies import get_current_profile
from app.core import policy, tracing
from app.core.analytics import summarize_tasks
from app.core.config import settings

router = APIRouter()


@router.get("", response_model=TaskAnalytics)
async def get_task_analytics(
    db: AsyncSession = Depends(get_db),
    profile: Profile = Depends(get_current_profile)
):
    """Supervisor-only workload summary across all tasks"""
    policy.require_analytics(profile)

    now = datetime.now(timezone.utc)
    tasks = await task_crud.list_all_tasks(db)
    summary = summarize_tasks(tasks, now=now, window_days=settings.RECENT_TASK_WINDOW_DAYS)

    tracing.info("Analytics computed", total_tasks=summary["total_tasks"], by=profile.name)
    return TaskAnalytics(**summary, generated_at=now)
