from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.dependencies import get_current_student

from app.schemas.points import ActivityTypePointsOut, PointsConfigOut, StudentPointsOut
from app.controllers.points_controller import (
    get_activity_type_points,
    get_points_config,
    get_student_points,
)

router = APIRouter(prefix="/student/points", tags=["Student - Points"])
public_router = APIRouter(prefix="/points", tags=["Points"])


@router.get("", response_model=StudentPointsOut)
async def my_points(
    db: AsyncSession = Depends(get_db),
    student=Depends(get_current_student),
):
    return await get_student_points(db, student)


@public_router.get("/config", response_model=PointsConfigOut)
async def points_config():
    return get_points_config()


@public_router.get("/activity-types/{activity_type}", response_model=ActivityTypePointsOut)
async def activity_type_points(activity_type: str):
    return get_activity_type_points(activity_type)
