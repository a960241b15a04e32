"""admins, students and activities

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision  = "001"
down_revision = None
branch_labels = None
depends_on    = None

activity_status = postgresql.ENUM(
    "pending", "approved", "rejected",
    name="activity_status_enum",
    create_type=False,
)


def upgrade() -> None:
    op.create_table(
        "admins",
        sa.Column("id",            sa.Integer(),               primary_key=True, autoincrement=True),
        sa.Column("name",          sa.String(255),             nullable=False),
        sa.Column("email",         sa.String(255),             nullable=False),
        sa.Column("password_hash", sa.Text(),                  nullable=False),
        sa.Column("is_active",     sa.Boolean(),               nullable=False, server_default="true"),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at",    sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_admins_email", "admins", ["email"], unique=True)
    op.create_index("ix_admins_id",    "admins", ["id"],    unique=False)

    op.create_table(
        "students",
        sa.Column("id",              sa.Integer(),               primary_key=True),
        sa.Column("name",            sa.String(120),             nullable=False),
        sa.Column("email",           sa.String(255),             nullable=False),
        sa.Column("roll_number",     sa.String(30),              nullable=False),
        sa.Column("department",      sa.String(80),              nullable=True),
        sa.Column("phone",           sa.String(20),              nullable=True),
        sa.Column("cgpa",            sa.Float(),                 nullable=True),
        sa.Column("graduation_year", sa.Integer(),               nullable=True),
        sa.Column("attendance",      sa.Float(),                 nullable=True),
        sa.Column("password_hash",   sa.Text(),                  nullable=False),
        sa.Column("is_active",       sa.Boolean(),               nullable=False, server_default="true"),
        sa.Column("created_at",      sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("roll_number", name="uq_students_roll_number"),
        sa.UniqueConstraint("email",       name="uq_students_email"),
    )
    op.create_index("ix_students_email",       "students", ["email"])
    op.create_index("ix_students_roll_number", "students", ["roll_number"])
    op.create_index("ix_students_department",  "students", ["department"])

    activity_status.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "activities",
        sa.Column("id",           sa.Integer(),               primary_key=True),
        sa.Column("student_id",   sa.Integer(),               sa.ForeignKey("students.id", ondelete="CASCADE"), nullable=False),
        sa.Column("student_name", sa.String(120),             nullable=False),
        sa.Column("roll_number",  sa.String(30),              nullable=False),
        sa.Column("title",        sa.String(200),             nullable=False),
        sa.Column("type",         sa.String(60),              nullable=False),
        sa.Column("date",         sa.Date(),                  nullable=False),
        sa.Column("description",  sa.Text(),                  nullable=True),
        sa.Column("file_key",     sa.Text(),                  nullable=True),
        sa.Column("file_name",    sa.String(255),             nullable=True),
        sa.Column("status",       activity_status,            nullable=False, server_default="pending"),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("reviewed_at",  sa.DateTime(timezone=True), nullable=True),
        sa.Column("reviewed_by",  sa.String(255),             nullable=True),
    )
    op.create_index("ix_activities_id",               "activities", ["id"])
    op.create_index("ix_activities_student_id",       "activities", ["student_id"])
    op.create_index("ix_activities_type",             "activities", ["type"])
    op.create_index("ix_activities_status_submitted", "activities", ["status", "submitted_at"])


def downgrade() -> None:
    op.drop_table("activities")
    activity_status.drop(op.get_bind(), checkfirst=True)
    op.drop_table("students")
    op.drop_index("ix_admins_email", table_name="admins")
    op.drop_index("ix_admins_id",    table_name="admins")
    op.drop_table("admins")
