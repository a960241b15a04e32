from collections import defaultdict
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.points_system import compute_points_breakdown
from app.models.activity import Activity
from app.models.student import Student
from app.schemas.student import StudentListItemOut, StudentOut, StudentProfileUpdate


async def update_student_profile(
    db: AsyncSession,
    student: Student,
    payload: StudentProfileUpdate,
) -> StudentOut:
    data = payload.model_dump(exclude_unset=True)

    if "name" in data and data["name"] is None:
        raise HTTPException(status_code=422, detail="name cannot be empty")

    for field, value in data.items():
        setattr(student, field, value)

    await db.flush()
    await db.refresh(student)
    return StudentOut.model_validate(student)


async def get_student_or_404(db: AsyncSession, student_id: int) -> Student:
    student = await db.get(Student, student_id)
    if student is None:
        raise HTTPException(status_code=404, detail="Student not found")
    return student


async def list_students_with_points(
    db: AsyncSession,
    q: Optional[str] = None,
    department: Optional[str] = None,
    limit: int = 100,
    offset: int = 0,
) -> List[StudentListItemOut]:
    """
    Registered students, newest first, each with activity counts and the
    points total computed from their activities.
    """
    stmt = select(Student)

    if q:
        like = f"%{q.strip()}%"
        stmt = stmt.where(
            or_(
                Student.name.ilike(like),
                Student.roll_number.ilike(like),
                Student.email.ilike(like),
                Student.department.ilike(like),
            )
        )
    if department:
        stmt = stmt.where(Student.department == department)

    stmt = stmt.order_by(Student.created_at.desc(), Student.id.desc()).limit(limit).offset(offset)
    students = list((await db.execute(stmt)).scalars().all())

    by_student: dict[int, list] = defaultdict(list)
    if students:
        rows = (
            await db.execute(
                select(Activity.student_id, Activity.type, Activity.status)
                .where(Activity.student_id.in_([s.id for s in students]))
            )
        ).all()
        for r in rows:
            by_student[r.student_id].append({"type": r.type, "status": r.status})

    out = []
    for s in students:
        acts = by_student.get(s.id, [])
        breakdown = compute_points_breakdown(acts)
        out.append(
            StudentListItemOut(
                id=s.id,
                name=s.name,
                email=s.email,
                roll_number=s.roll_number,
                department=s.department,
                is_active=s.is_active,
                created_at=s.created_at,
                activities_count=len(acts),
                approved_count=breakdown.approved_count,
                total_points=breakdown.total_points,
            )
        )
    return out
