from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.dependencies import get_current_student
from app.models.student import Student
from app.schemas.student import (
    StudentLogin,
    StudentLoginResponse,
    StudentOut,
    StudentProfileUpdate,
    StudentRegister,
)
from app.controllers.student_auth_controller import login_student, register_student
from app.controllers.student_controller import update_student_profile


router = APIRouter(prefix="/auth/student", tags=["Auth - Student"])
profile_router = APIRouter(prefix="/student", tags=["Student - Profile"])


@router.post("/register", response_model=StudentOut, status_code=status.HTTP_201_CREATED)
async def register(payload: StudentRegister, db: AsyncSession = Depends(get_db)):
    return await register_student(payload, db)


@router.post("/login", response_model=StudentLoginResponse)
async def student_login(payload: StudentLogin, db: AsyncSession = Depends(get_db)):
    return await login_student(payload, db)


@profile_router.get("/me", response_model=StudentOut)
async def my_profile(student: Student = Depends(get_current_student)):
    return StudentOut.model_validate(student)


@profile_router.patch("/me", response_model=StudentOut)
async def update_my_profile(
    payload: StudentProfileUpdate,
    db: AsyncSession = Depends(get_db),
    student: Student = Depends(get_current_student),
):
    return await update_student_profile(db, student, payload)
