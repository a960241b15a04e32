from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base


class Admin(Base):
    """
    Reviewer account for the admin dashboard.

    Admins log in with a bearer token carrying role "admin" and decide the
    status of submitted activities. Only approved activities earn points, so
    every points total shown to a student follows from these reviews.

    Nothing references this table by foreign key: a review stores the
    admin's display name in activities.reviewed_by, so the CSV export and
    the review history stay readable after an account is removed.
    """
    __tablename__ = "admins"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)

    # deactivated reviewers keep their row but fail get_current_admin with 403
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, server_default="true")

    last_login_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Admin id={self.id} email={self.email!r} active={self.is_active}>"
