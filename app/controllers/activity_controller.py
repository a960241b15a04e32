import logging
from datetime import date, datetime, timezone
from typing import List, Optional

from fastapi import HTTPException, UploadFile
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.activity_storage import attachment_url, upload_activity_attachment
from app.core.config import settings
from app.core.points_system import get_points_for_activity_type, normalize_activity_type
from app.models.activity import Activity, ActivityStatus
from app.models.admin import Admin
from app.models.student import Student
from app.schemas.activity import ActivityOut, ActivityStatusIn, BulkStatusOut
from app.services.activity_reports import filter_activities

logger = logging.getLogger(__name__)


def to_activity_out(activity: Activity) -> ActivityOut:
    out = ActivityOut.model_validate(activity)
    out.points = get_points_for_activity_type(activity.type)
    if activity.file_key:
        out.file_url = attachment_url(activity.file_key)
    return out


# ─────────────────────────────────────────────────────────────
# STUDENT
# ─────────────────────────────────────────────────────────────
async def submit_activity(
    db: AsyncSession,
    student: Student,
    title: str,
    activity_type: str,
    activity_date: date,
    description: Optional[str] = None,
    file: Optional[UploadFile] = None,
) -> ActivityOut:
    title = (title or "").strip()
    activity_type = normalize_activity_type(activity_type)
    if not title or not activity_type:
        raise HTTPException(status_code=422, detail="title and type are required")

    file_key = None
    file_name = None

    if file is not None and file.filename:
        file_bytes = await file.read()
        if len(file_bytes) > settings.MAX_UPLOAD_MB * 1024 * 1024:
            raise HTTPException(
                status_code=413,
                detail=f"Attachment exceeds {settings.MAX_UPLOAD_MB} MB",
            )
        if file_bytes:
            try:
                file_key = await upload_activity_attachment(
                    file_bytes=file_bytes,
                    content_type=file.content_type or "application/octet-stream",
                    filename=file.filename,
                    student_id=student.id,
                )
            except Exception:
                logger.exception("Attachment upload failed for student %s", student.id)
                raise HTTPException(status_code=502, detail="Could not store attachment")
            file_name = file.filename

    activity = Activity(
        student_id=student.id,
        student_name=student.name,
        roll_number=student.roll_number,
        title=title,
        type=activity_type,
        date=activity_date,
        description=(description or "").strip() or None,
        file_key=file_key,
        file_name=file_name,
        status=ActivityStatus.PENDING,
        submitted_at=datetime.now(timezone.utc),
    )
    db.add(activity)
    await db.flush()
    await db.refresh(activity)

    logger.info(
        "Activity %s submitted by student %s (type=%s)",
        activity.id, student.id, activity.type,
    )
    return to_activity_out(activity)


async def load_student_activities(db: AsyncSession, student_id: int) -> List[Activity]:
    res = await db.execute(
        select(Activity)
        .where(Activity.student_id == student_id)
        .order_by(Activity.submitted_at.desc(), Activity.id.desc())
    )
    return list(res.scalars().all())


async def list_student_activities(db: AsyncSession, student_id: int) -> List[ActivityOut]:
    return [to_activity_out(a) for a in await load_student_activities(db, student_id)]


# ─────────────────────────────────────────────────────────────
# ADMIN
# ─────────────────────────────────────────────────────────────
async def load_all_activities(db: AsyncSession) -> List[Activity]:
    res = await db.execute(
        select(Activity).order_by(Activity.submitted_at.desc(), Activity.id.desc())
    )
    return list(res.scalars().all())


async def list_filtered_activities(
    db: AsyncSession,
    status: Optional[str] = None,
    activity_type: Optional[str] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> List[Activity]:
    activities = await load_all_activities(db)
    return filter_activities(
        activities,
        status=status,
        activity_type=activity_type,
        date_from=date_from,
        date_to=date_to,
    )


async def update_activity_status(
    db: AsyncSession,
    activity_id: int,
    new_status: ActivityStatusIn,
    admin: Admin,
) -> Activity:
    activity = await db.get(Activity, activity_id)
    if activity is None:
        raise HTTPException(status_code=404, detail="Activity not found")

    previous = activity.status
    activity.status = ActivityStatus(new_status.value)
    activity.reviewed_at = datetime.now(timezone.utc)
    activity.reviewed_by = admin.name or "Admin"
    await db.flush()

    logger.info(
        "Activity %s: %s -> %s by admin %s",
        activity.id, previous.value, activity.status.value, admin.id,
    )
    return activity


async def bulk_update_status(
    db: AsyncSession,
    ids: List[int],
    new_status: ActivityStatusIn,
    admin: Admin,
) -> BulkStatusOut:
    """
    Applies one status to many activities, one at a time.

    Each update runs in its own SAVEPOINT so a failing id is rolled back
    alone; it is logged and reported in failed_ids.
    """
    unique_ids = list(dict.fromkeys(ids))
    updated = 0
    failed: List[int] = []

    for activity_id in unique_ids:
        try:
            async with db.begin_nested():
                await update_activity_status(db, activity_id, new_status, admin)
            updated += 1
        except Exception as e:
            logger.warning("Bulk update to %s failed for activity %s: %s", new_status.value, activity_id, e)
            failed.append(activity_id)

    return BulkStatusOut(
        status=new_status,
        requested=len(unique_ids),
        updated=updated,
        failed_ids=failed,
    )
