from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from app.core.database import get_db
from app.core.dependencies import get_current_admin

from app.controllers.activity_controller import load_all_activities
from app.models.student import Student
from app.services.activity_reports import (
    compute_activity_metrics,
    monthly_activity,
    status_distribution,
)

router = APIRouter(prefix="/admin/dashboard", tags=["Admin - Dashboard"])


# ─────────────────────────────────────────────────────────────
# 1) STATS
# ─────────────────────────────────────────────────────────────
@router.get("/stats")
async def dashboard_stats(
    db: AsyncSession = Depends(get_db),
    admin=Depends(get_current_admin),
):
    total_students = (await db.execute(select(func.count(Student.id)))).scalar() or 0
    active_students = (
        await db.execute(select(func.count(Student.id)).where(Student.is_active.is_(True)))
    ).scalar() or 0

    metrics = compute_activity_metrics(await load_all_activities(db))

    return {
        "totalStudents": int(total_students),
        "activeStudents": int(active_students),
        "totalActivities": metrics["total"],
        "approvedActivities": metrics["approved"],
        "pendingActivities": metrics["pending"],
        "rejectedActivities": metrics["rejected"],
    }


# ─────────────────────────────────────────────────────────────
# 2) STATUS SPLIT (pie chart, percentages)
# ─────────────────────────────────────────────────────────────
@router.get("/status-distribution")
async def dashboard_status_distribution(
    db: AsyncSession = Depends(get_db),
    admin=Depends(get_current_admin),
):
    return status_distribution(await load_all_activities(db))


# ─────────────────────────────────────────────────────────────
# 3) LAST SIX MONTHS (submissions vs approvals)
# ─────────────────────────────────────────────────────────────
@router.get("/monthly")
async def dashboard_monthly(
    db: AsyncSession = Depends(get_db),
    admin=Depends(get_current_admin),
):
    return monthly_activity(await load_all_activities(db))
