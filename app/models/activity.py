# app/models/activity.py

from __future__ import annotations

import enum
import datetime as dt
from typing import Optional, TYPE_CHECKING

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base

if TYPE_CHECKING:
    from app.models.student import Student


class ActivityStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Activity(Base):
    """
    One submitted achievement (conference, certification, project, ...).

    student_name / roll_number are copied at submission time so exports and
    the review queue read from a single table.
    """
    __tablename__ = "activities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    student_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    student_name: Mapped[str] = mapped_column(String(120), nullable=False)
    roll_number: Mapped[str] = mapped_column(String(30), nullable=False)

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    # free-form key into the point table, unknown keys earn the default value
    type: Mapped[str] = mapped_column(String(60), nullable=False, index=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # MinIO object name; the link is built when the row is served
    file_key: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    file_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    status: Mapped[ActivityStatus] = mapped_column(
        SAEnum(
            ActivityStatus,
            name="activity_status_enum",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=ActivityStatus.PENDING,
        server_default=ActivityStatus.PENDING.value,
    )

    submitted_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    reviewed_at: Mapped[Optional[dt.datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    reviewed_by: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    student: Mapped["Student"] = relationship("Student", back_populates="activities")

    __table_args__ = (
        Index("ix_activities_status_submitted", "status", "submitted_at"),
    )

    def __repr__(self) -> str:
        return f"<Activity id={self.id} type={self.type!r} status={self.status}>"
