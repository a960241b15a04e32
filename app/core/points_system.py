"""
Points & milestones
───────────────────
Pure computation of a student's points from their activity records.

Points are earned only for approved activities. Every activity type maps to
a base value in the point table (unknown types use the ``default`` entry),
which is scaled by the status multiplier. Milestones are badge tiers
unlocked once the total crosses their threshold.

Nothing here touches the database: callers pass in whatever records they
already loaded (ORM rows, pydantic models or plain dicts exposing ``type``
and ``status``) and get a fresh ``PointsBreakdown`` back.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_serializer,
    field_validator,
    model_validator,
)


DEFAULT_TYPE_KEY = "default"


# ── Configuration ─────────────────────────────────────────────────────
class Milestone(BaseModel):
    threshold: int = Field(..., gt=0)
    title: str
    badge: str
    color: str

    model_config = ConfigDict(frozen=True)


class PointsConfig(BaseModel):
    """
    Immutable point table + milestone table.

    The service uses DEFAULT_POINTS_CONFIG; tests and callers may build
    their own and pass it into compute_points_breakdown().
    """
    # both tables become read-only views once validated
    activities: Mapping[str, int]
    status_multipliers: Mapping[str, float]
    milestones: tuple[Milestone, ...]

    model_config = ConfigDict(frozen=True)

    @field_validator("activities")
    @classmethod
    def _check_activities(cls, v: Mapping[str, int]) -> Mapping[str, int]:
        if DEFAULT_TYPE_KEY not in v:
            raise ValueError("point table needs a 'default' entry")
        negative = sorted(k for k, pts in v.items() if pts < 0)
        if negative:
            raise ValueError(f"negative point values for: {', '.join(negative)}")
        return MappingProxyType(dict(v))

    @field_validator("status_multipliers")
    @classmethod
    def _check_multipliers(cls, v: Mapping[str, float]) -> Mapping[str, float]:
        negative = sorted(k for k, m in v.items() if m < 0)
        if negative:
            raise ValueError(f"negative multipliers for: {', '.join(negative)}")
        return MappingProxyType(dict(v))

    @model_validator(mode="after")
    def _check_milestone_order(self) -> "PointsConfig":
        thresholds = [m.threshold for m in self.milestones]
        for prev, cur in zip(thresholds, thresholds[1:]):
            if cur <= prev:
                raise ValueError("milestone thresholds must be strictly increasing")
        return self

    @field_serializer("activities", "status_multipliers")
    def _dump_table(self, v: Mapping[str, Any]) -> dict[str, Any]:
        return dict(v)


DEFAULT_POINTS_CONFIG = PointsConfig(
    activities={
        "project": 50,
        "assignment": 30,
        "quiz": 20,
        "presentation": 40,
        "lab_work": 25,
        "research": 60,
        "hackathon": 100,
        "competition": 80,
        "workshop": 30,
        "certification": 70,
        "community_service": 40,
        "leadership": 50,
        DEFAULT_TYPE_KEY: 25,
    },
    status_multipliers={
        "approved": 1.0,
        "pending": 0.0,   # nothing until an admin approves it
        "rejected": 0.0,
    },
    milestones=(
        Milestone(threshold=100, title="Getting Started", badge="Beginner", color="#8b5cf6"),
        Milestone(threshold=250, title="Making Progress", badge="Learner", color="#3b82f6"),
        Milestone(threshold=500, title="Active Student", badge="Achiever", color="#10b981"),
        Milestone(threshold=750, title="High Performer", badge="Star", color="#f59e0b"),
        Milestone(threshold=1000, title="Excellence", badge="Expert", color="#ef4444"),
        Milestone(threshold=1500, title="Outstanding", badge="Champion", color="#8b5cf6"),
        Milestone(threshold=2000, title="Exceptional", badge="Master", color="#6366f1"),
    ),
)


# ── Result ────────────────────────────────────────────────────────────
class PointsBreakdown(BaseModel):
    total_points: int = 0
    approved_count: int = 0
    pending_count: int = 0
    rejected_count: int = 0
    points_by_type: dict[str, int] = Field(default_factory=dict)

    current_milestone: Optional[Milestone] = None
    next_milestone: Optional[Milestone] = None
    progress_to_next: float = 0.0

    @computed_field
    @property
    def is_max_tier(self) -> bool:
        return self.current_milestone is not None and self.next_milestone == self.current_milestone

    @computed_field
    @property
    def points_to_next(self) -> int:
        if self.next_milestone is None or self.is_max_tier:
            return 0
        return max(0, self.next_milestone.threshold - self.total_points)


# ── Helpers ───────────────────────────────────────────────────────────
def read_field(record: Any, key: str) -> Any:
    if isinstance(record, Mapping):
        value = record.get(key)
    else:
        value = getattr(record, key, None)
    # str enums hash by member name, so unwrap to the raw value
    return getattr(value, "value", value)


def normalize_activity_type(activity_type: str) -> str:
    """Maps free-form input ("Lab Work", "lab-work") onto point table keys (lab_work)."""
    return "_".join((activity_type or "").strip().lower().replace("-", " ").split())


def get_points_for_activity_type(
    activity_type: Optional[str],
    config: PointsConfig = DEFAULT_POINTS_CONFIG,
) -> int:
    activity_type = getattr(activity_type, "value", activity_type)
    if isinstance(activity_type, str) and activity_type in config.activities:
        return config.activities[activity_type]
    return config.activities[DEFAULT_TYPE_KEY]


def locate_milestones(
    total_points: int,
    milestones: Iterable[Milestone],
) -> tuple[Optional[Milestone], Optional[Milestone]]:
    """
    Returns (current, next) for a points total.

    current — highest tier with threshold <= total (None if below the first)
    next    — lowest tier with threshold > total; the first tier when none is
              reached yet; equal to current once the top tier is reached
    """
    milestones = list(milestones)
    current: Optional[Milestone] = None
    nxt: Optional[Milestone] = None

    for m in milestones:
        if total_points >= m.threshold:
            current = m
        else:
            nxt = m
            break

    if nxt is None and current is not None:
        nxt = current
    if current is None and milestones:
        nxt = milestones[0]

    return current, nxt


# ── Engine ────────────────────────────────────────────────────────────
def compute_points_breakdown(
    activities: Iterable[Any],
    config: PointsConfig = DEFAULT_POINTS_CONFIG,
) -> PointsBreakdown:
    total_points = 0
    approved = pending = rejected = 0
    points_by_type: dict[str, int] = {}

    for activity in activities or ():
        activity_type = read_field(activity, "type")
        status = read_field(activity, "status")

        base = get_points_for_activity_type(activity_type, config)
        if not isinstance(status, str):
            status = None
        multiplier = config.status_multipliers.get(status, 0.0)
        earned = round(base * multiplier)

        if status == "approved":
            total_points += earned
            approved += 1
            key = activity_type if isinstance(activity_type, str) else DEFAULT_TYPE_KEY
            points_by_type[key] = points_by_type.get(key, 0) + earned
        elif status == "pending":
            pending += 1
        elif status == "rejected":
            rejected += 1

    current, nxt = locate_milestones(total_points, config.milestones)

    if nxt is None:
        progress = 100.0
    else:
        progress = min(100.0, total_points / nxt.threshold * 100)

    return PointsBreakdown(
        total_points=total_points,
        approved_count=approved,
        pending_count=pending,
        rejected_count=rejected,
        points_by_type=points_by_type,
        current_milestone=current,
        next_milestone=nxt,
        progress_to_next=progress,
    )
