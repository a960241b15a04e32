# app/routes/activity.py

from __future__ import annotations

from datetime import date
from typing import List, Optional

from fastapi import (
    APIRouter,
    Depends,
    UploadFile,
    File,
    Query,
    Form,
    status,
)
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.dependencies import get_current_student, get_current_admin

from app.schemas.activity import ActivityOut, BulkStatusIn, BulkStatusOut, StatusUpdateIn

from app.controllers.activity_controller import (
    submit_activity,
    list_student_activities,
    load_all_activities,
    list_filtered_activities,
    update_activity_status,
    bulk_update_status,
    to_activity_out,
)
from app.models.activity import ActivityStatus
from app.services.activity_reports import activities_to_csv, distinct_types


router = APIRouter(prefix="/student/activities", tags=["Student - Activity"])
admin_router = APIRouter(prefix="/admin/activities", tags=["Admin - Activity"])


StatusFilter = Optional[str]


def _status_query(
    status_filter: StatusFilter = Query(
        None,
        alias="status",
        pattern="^(all|pending|approved|rejected)$",
        description="all / pending / approved / rejected",
    ),
) -> StatusFilter:
    return status_filter


# ─────────────────────────────────────────────────────────────
# STUDENT
# ─────────────────────────────────────────────────────────────
@router.post("", response_model=ActivityOut, status_code=status.HTTP_201_CREATED)
async def create_activity(
    title: str = Form(..., max_length=200),
    type: str = Form(..., max_length=60),
    date: date = Form(...),
    description: Optional[str] = Form(None, max_length=2000),
    file: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db),
    student=Depends(get_current_student),
):
    return await submit_activity(
        db,
        student,
        title=title,
        activity_type=type,
        activity_date=date,
        description=description,
        file=file,
    )


@router.get("", response_model=List[ActivityOut])
async def my_activities(
    db: AsyncSession = Depends(get_db),
    student=Depends(get_current_student),
):
    return await list_student_activities(db, student.id)


# ─────────────────────────────────────────────────────────────
# ADMIN
# ─────────────────────────────────────────────────────────────
@admin_router.get("", response_model=List[ActivityOut])
async def admin_list_activities(
    status_filter: StatusFilter = Depends(_status_query),
    type: Optional[str] = Query(None, description="activity type key, or 'all'"),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None, description="inclusive, whole day"),
    db: AsyncSession = Depends(get_db),
    admin=Depends(get_current_admin),
):
    rows = await list_filtered_activities(
        db,
        status=status_filter,
        activity_type=type,
        date_from=date_from,
        date_to=date_to,
    )
    return [to_activity_out(a) for a in rows]


@admin_router.get("/review-queue", response_model=List[ActivityOut])
async def admin_review_queue(
    db: AsyncSession = Depends(get_db),
    admin=Depends(get_current_admin),
):
    rows = await list_filtered_activities(db, status=ActivityStatus.PENDING.value)
    return [to_activity_out(a) for a in rows]


@admin_router.get("/types", response_model=List[str])
async def admin_activity_types(
    db: AsyncSession = Depends(get_db),
    admin=Depends(get_current_admin),
):
    return distinct_types(await load_all_activities(db))


@admin_router.get("/export")
async def admin_export_activities(
    status_filter: StatusFilter = Depends(_status_query),
    type: Optional[str] = Query(None),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    db: AsyncSession = Depends(get_db),
    admin=Depends(get_current_admin),
):
    rows = await list_filtered_activities(
        db,
        status=status_filter,
        activity_type=type,
        date_from=date_from,
        date_to=date_to,
    )
    return StreamingResponse(
        iter([activities_to_csv(rows)]),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=submissions.csv"},
    )


@admin_router.post("/bulk-status", response_model=BulkStatusOut)
async def admin_bulk_status(
    payload: BulkStatusIn,
    db: AsyncSession = Depends(get_db),
    admin=Depends(get_current_admin),
):
    return await bulk_update_status(db, payload.ids, payload.status, admin)


@admin_router.post("/{activity_id}/status", response_model=ActivityOut)
async def admin_set_status(
    activity_id: int,
    payload: StatusUpdateIn,
    db: AsyncSession = Depends(get_db),
    admin=Depends(get_current_admin),
):
    activity = await update_activity_status(db, activity_id, payload.status, admin)
    return to_activity_out(activity)
