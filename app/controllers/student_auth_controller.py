import logging

from fastapi import HTTPException, status
from sqlalchemy import select, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.security import ROLE_STUDENT, create_access_token, hash_password, verify_password
from app.models.student import Student
from app.schemas.student import StudentLogin, StudentLoginResponse, StudentOut, StudentRegister

logger = logging.getLogger(__name__)

DUPLICATE_DETAIL = "A student with this {} is already registered"


async def _find_conflict(db: AsyncSession, email: str, roll_number: str) -> str | None:
    """Returns which identifying field is already taken, if any."""
    existing = (
        await db.execute(
            select(Student.email, Student.roll_number).where(
                or_(Student.email == email, Student.roll_number == roll_number)
            )
        )
    ).first()
    if existing is None:
        return None
    return "email" if existing.email == email else "roll number"


async def register_student(payload: StudentRegister, db: AsyncSession) -> StudentOut:
    email = str(payload.email).lower()
    roll_number = payload.roll_number.upper()

    field = await _find_conflict(db, email, roll_number)
    if field:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=DUPLICATE_DETAIL.format(field),
        )

    student = Student(
        name=payload.name,
        email=email,
        roll_number=roll_number,
        department=payload.department,
        phone=payload.phone,
        password_hash=hash_password(payload.password),
    )
    db.add(student)
    try:
        await db.flush()
    except IntegrityError:
        # a concurrent registration took the email or roll number after the check
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=DUPLICATE_DETAIL.format("email or roll number"),
        )
    await db.refresh(student)

    logger.info("Registered student id=%s roll_number=%s", student.id, student.roll_number)
    return StudentOut.model_validate(student)


async def login_student(payload: StudentLogin, db: AsyncSession) -> StudentLoginResponse:
    """Same rules as admin login: one generic error, is_active checked last."""
    result = await db.execute(
        select(Student).where(Student.email == str(payload.email).lower())
    )
    student = result.scalar_one_or_none()

    password_ok = verify_password(
        payload.password,
        student.password_hash if student else None,
    )

    if not student or not password_ok:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    if not student.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is deactivated. Contact your administrator.",
        )

    token = create_access_token(student.id, student.email, ROLE_STUDENT)

    return StudentLoginResponse(
        access_token=token,
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        student=StudentOut.model_validate(student),
    )
