# app/routes/students.py

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.dependencies import get_current_admin

from app.schemas.points import StudentPointsOut
from app.schemas.student import StudentListItemOut
from app.controllers.points_controller import get_student_points
from app.controllers.student_controller import get_student_or_404, list_students_with_points


admin_router = APIRouter(prefix="/admin/students", tags=["Admin - Students"])


@admin_router.get("", response_model=list[StudentListItemOut])
async def list_students(
    q: str | None = Query(None, description="Optional search. Matches name/roll number/email/department."),
    department: str | None = Query(None, description="Optional filter by department (exact match)."),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
    admin=Depends(get_current_admin),
):
    return await list_students_with_points(db, q=q, department=department, limit=limit, offset=offset)


@admin_router.get("/{student_id}/points", response_model=StudentPointsOut)
async def student_points(
    student_id: int,
    db: AsyncSession = Depends(get_db),
    admin=Depends(get_current_admin),
):
    student = await get_student_or_404(db, student_id)
    return await get_student_points(db, student)
