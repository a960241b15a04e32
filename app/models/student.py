from __future__ import annotations

from typing import List, Optional, TYPE_CHECKING
from datetime import datetime

from sqlalchemy import (
    String,
    Integer,
    Float,
    Text,
    DateTime,
    func,
    UniqueConstraint,
    Boolean,
    Index,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base

if TYPE_CHECKING:
    from app.models.activity import Activity


class Student(Base):
    __tablename__ = "students"

    __table_args__ = (
        UniqueConstraint("roll_number", name="uq_students_roll_number"),
        UniqueConstraint("email", name="uq_students_email"),
        Index("ix_students_department", "department"),
    )

    # --------------------------------------------------
    # PRIMARY KEY
    # --------------------------------------------------

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    # --------------------------------------------------
    # BASIC DETAILS
    # --------------------------------------------------

    name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    roll_number: Mapped[str] = mapped_column(String(30), nullable=False, index=True)
    department: Mapped[Optional[str]] = mapped_column(String(80), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    # --------------------------------------------------
    # ACADEMICS (self-reported on the profile page)
    # --------------------------------------------------

    cgpa: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    graduation_year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    attendance: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    # --------------------------------------------------
    # AUTH
    # --------------------------------------------------

    password_hash: Mapped[str] = mapped_column(Text, nullable=False)

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default="true",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    # --------------------------------------------------
    # RELATIONSHIPS
    # --------------------------------------------------

    activities: Mapped[List["Activity"]] = relationship(
        "Activity",
        back_populates="student",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Student id={self.id} roll_number={self.roll_number!r}>"
