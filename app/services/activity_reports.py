"""
Aggregations behind the admin dashboard: metrics, chart series, list
filtering and CSV export. All functions work on already-loaded activity
records (ORM rows or dicts) so the routes stay thin and the logic stays
testable without a database.
"""
from __future__ import annotations

import csv
import io
from datetime import date, datetime, time
from typing import Any, Iterable, List, Optional

from app.core.points_system import normalize_activity_type, read_field

STATUS_COLORS = {
    "approved": "#8b5cf6",
    "pending": "#a78bfa",
    "rejected": "#c4b5fd",
}

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

CSV_HEADERS = [
    "ID",
    "Student Name",
    "Roll Number",
    "Title",
    "Type",
    "Status",
    "Submitted At",
    "Reviewed By",
    "Reviewed At",
]


def _as_datetime(v: Any) -> Optional[datetime]:
    if v is None:
        return None
    if isinstance(v, datetime):
        return v
    if isinstance(v, date):
        return datetime.combine(v, time.min)
    return datetime.fromisoformat(str(v).replace("Z", "+00:00"))


def _naive(dt: datetime) -> datetime:
    # compare wall-clock values; mixing aware/naive raises TypeError
    return dt.replace(tzinfo=None)


def _iso(v: Any) -> str:
    dt = _as_datetime(v)
    return dt.isoformat() if dt else ""


def compute_activity_metrics(activities: Iterable[Any]) -> dict:
    activities = list(activities)
    statuses = [read_field(a, "status") for a in activities]
    return {
        "total": len(activities),
        "approved": statuses.count("approved"),
        "pending": statuses.count("pending"),
        "rejected": statuses.count("rejected"),
    }


def status_distribution(activities: Iterable[Any]) -> List[dict]:
    m = compute_activity_metrics(activities)
    total = m["total"]
    if total == 0:
        return []

    return [
        {
            "name": status.capitalize(),
            "value": round(m[status] / total * 100),
            "color": STATUS_COLORS[status],
        }
        for status in ("approved", "pending", "rejected")
    ]


def monthly_activity(activities: Iterable[Any], today: Optional[date] = None) -> List[dict]:
    """
    Submissions and approvals for the last six months (oldest first).

    Activities are bucketed by month name only, so the same month of a
    previous year lands in the same bucket.
    """
    groups: dict[str, dict[str, int]] = {}

    for a in activities:
        submitted = _as_datetime(read_field(a, "submitted_at"))
        if submitted is None:
            continue
        key = MONTHS[submitted.month - 1]
        g = groups.setdefault(key, {"submissions": 0, "approvals": 0})
        g["submissions"] += 1
        if read_field(a, "status") == "approved":
            g["approvals"] += 1

    today = today or date.today()
    current = today.month - 1

    out = []
    for i in range(5, -1, -1):
        name = MONTHS[(current - i) % 12]
        g = groups.get(name, {})
        out.append(
            {
                "month": name,
                "submissions": g.get("submissions", 0),
                "approvals": g.get("approvals", 0),
            }
        )
    return out


def distinct_types(activities: Iterable[Any]) -> List[str]:
    seen: dict[str, None] = {}
    for a in activities:
        t = read_field(a, "type")
        if t:
            seen.setdefault(t, None)
    return list(seen)


def filter_activities(
    activities: Iterable[Any],
    status: Optional[str] = None,
    activity_type: Optional[str] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> List[Any]:
    """
    Narrow a list the way the admin "All submissions" table does.

    "all" (or None) disables the status / type filter. The type is matched
    in its stored form, so "Lab Work" finds lab_work. date_to covers the
    whole day, so a submission at 23:59 on date_to is still included.
    """
    out = list(activities)

    if status and status != "all":
        out = [a for a in out if read_field(a, "status") == status]
    if activity_type and activity_type != "all":
        key = normalize_activity_type(activity_type)
        out = [a for a in out if read_field(a, "type") == key]

    if date_from is not None:
        lo = _naive(_as_datetime(date_from))
        out = [
            a for a in out
            if read_field(a, "submitted_at") is not None
            and _naive(_as_datetime(read_field(a, "submitted_at"))) >= lo
        ]
    if date_to is not None:
        hi = _as_datetime(date_to)
        if not isinstance(date_to, datetime):
            hi = datetime.combine(hi.date(), time.max)
        hi = _naive(hi)
        out = [
            a for a in out
            if read_field(a, "submitted_at") is not None
            and _naive(_as_datetime(read_field(a, "submitted_at"))) <= hi
        ]

    return out


def activities_to_csv(activities: Iterable[Any]) -> str:
    buf = io.StringIO()
    w = csv.writer(buf)
    w.writerow(CSV_HEADERS)

    for a in activities:
        w.writerow(
            [
                read_field(a, "id") or "",
                read_field(a, "student_name") or "",
                read_field(a, "roll_number") or "",
                read_field(a, "title") or "",
                read_field(a, "type") or "",
                read_field(a, "status") or "",
                _iso(read_field(a, "submitted_at")),
                read_field(a, "reviewed_by") or "",
                _iso(read_field(a, "reviewed_at")),
            ]
        )

    return buf.getvalue()
