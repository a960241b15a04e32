from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.activity_controller import load_student_activities
from app.core.points_system import (
    DEFAULT_POINTS_CONFIG,
    DEFAULT_TYPE_KEY,
    PointsConfig,
    compute_points_breakdown,
    get_points_for_activity_type,
    normalize_activity_type,
)
from app.models.student import Student
from app.schemas.points import ActivityTypePointsOut, PointsConfigOut, StudentPointsOut


async def get_student_points(db: AsyncSession, student: Student) -> StudentPointsOut:
    # recomputed from the current rows on every request; nothing is cached
    activities = await load_student_activities(db, student.id)
    return StudentPointsOut(
        student_id=student.id,
        student_name=student.name,
        breakdown=compute_points_breakdown(activities),
    )


def get_points_config(config: PointsConfig = DEFAULT_POINTS_CONFIG) -> PointsConfigOut:
    return PointsConfigOut(
        activities=dict(config.activities),
        status_multipliers=dict(config.status_multipliers),
        milestones=list(config.milestones),
    )


def get_activity_type_points(
    activity_type: str,
    config: PointsConfig = DEFAULT_POINTS_CONFIG,
) -> ActivityTypePointsOut:
    key = normalize_activity_type(activity_type)
    return ActivityTypePointsOut(
        type=key,
        points=get_points_for_activity_type(key, config),
        is_default=key not in config.activities or key == DEFAULT_TYPE_KEY,
    )
