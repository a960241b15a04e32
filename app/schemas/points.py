from pydantic import BaseModel
from typing import Dict, List

from app.core.points_system import Milestone, PointsBreakdown


class PointsConfigOut(BaseModel):
    activities: Dict[str, int]
    status_multipliers: Dict[str, float]
    milestones: List[Milestone]


class ActivityTypePointsOut(BaseModel):
    type: str
    points: int
    is_default: bool


class StudentPointsOut(BaseModel):
    student_id: int
    student_name: str
    breakdown: PointsBreakdown
