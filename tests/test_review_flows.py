"""
Test: controller flows that write to the database: submission, single and
bulk review, and student registration.
"""
import io
from datetime import date

import pytest
from fastapi import HTTPException, UploadFile

from app.controllers import activity_controller, student_auth_controller
from app.controllers.activity_controller import (
    bulk_update_status,
    submit_activity,
    to_activity_out,
    update_activity_status,
)
from app.controllers.student_auth_controller import register_student
from app.core import activity_storage
from app.core.config import settings
from app.models.activity import Activity, ActivityStatus
from app.schemas.activity import ActivityStatusIn
from app.schemas.student import StudentRegister


async def _submit(db, student, title="Built a campus app", activity_type="project"):
    return await submit_activity(db, student, title, activity_type, date(2026, 3, 1))


class TestSubmitActivity:
    async def test_type_is_normalized_and_pending(self, db_session, student):
        out = await _submit(db_session, student, activity_type="Lab Work")
        assert out.type == "lab_work"
        assert out.status == ActivityStatus.PENDING
        assert out.points == 25
        assert out.student_name == "Asha Rao"
        assert out.file_url is None

    async def test_blank_title_is_rejected(self, db_session, student):
        with pytest.raises(HTTPException) as exc:
            await _submit(db_session, student, title="   ")
        assert exc.value.status_code == 422

    async def test_blank_type_is_rejected(self, db_session, student):
        with pytest.raises(HTTPException) as exc:
            await _submit(db_session, student, activity_type="  ")
        assert exc.value.status_code == 422

    async def test_oversized_attachment(self, db_session, student, monkeypatch):
        monkeypatch.setattr(settings, "MAX_UPLOAD_MB", 0)
        upload = UploadFile(file=io.BytesIO(b"%PDF-1.4 proof"), filename="proof.pdf")
        with pytest.raises(HTTPException) as exc:
            await submit_activity(db_session, student, "Hackathon", "hackathon", date(2026, 3, 1), file=upload)
        assert exc.value.status_code == 413

    async def test_attachment_stores_object_name(self, db_session, student, monkeypatch):
        async def fake_upload(**kwargs):
            return "activities/1/abc.pdf"

        monkeypatch.setattr(activity_controller, "upload_activity_attachment", fake_upload)
        monkeypatch.setattr(settings, "MINIO_PUBLIC_BASE", "https://files.karmapatra.edu/")

        upload = UploadFile(file=io.BytesIO(b"%PDF-1.4 proof"), filename="certificate.pdf")
        out = await submit_activity(db_session, student, "AWS cert", "certification", date(2026, 3, 1), file=upload)

        row = await db_session.get(Activity, out.id)
        assert row.file_key == "activities/1/abc.pdf"
        assert row.file_name == "certificate.pdf"
        assert out.file_url == f"https://files.karmapatra.edu/{settings.MINIO_BUCKET}/activities/1/abc.pdf"


class TestAttachmentUrl:
    def test_presigned_when_no_public_base(self, monkeypatch):
        calls = []

        def fake_presign(bucket, object_name, expiry_seconds=900):
            calls.append((bucket, object_name, expiry_seconds))
            return f"https://minio.local/{object_name}?sig=1"

        monkeypatch.setattr(settings, "MINIO_PUBLIC_BASE", None)
        monkeypatch.setattr(activity_storage, "get_presigned_url", fake_presign)

        url = activity_storage.attachment_url("activities/4/x.png")
        assert url == "https://minio.local/activities/4/x.png?sig=1"
        assert calls == [(settings.MINIO_BUCKET, "activities/4/x.png", settings.ATTACHMENT_URL_EXPIRE_MINUTES * 60)]

    def test_object_name_keeps_extension(self):
        name = activity_storage.build_object_name(9, "Report.PDF")
        assert name.startswith("activities/9/")
        assert name.endswith(".pdf")


class TestUpdateActivityStatus:
    async def test_sets_review_fields(self, db_session, student, reviewer):
        submitted = await _submit(db_session, student)

        activity = await update_activity_status(db_session, submitted.id, ActivityStatusIn.APPROVED, reviewer)

        assert activity.status == ActivityStatus.APPROVED
        assert activity.reviewed_by == "Dr. Rajesh Gupta"
        assert activity.reviewed_at is not None
        assert to_activity_out(activity).points == 50

    async def test_unknown_id(self, db_session, reviewer):
        with pytest.raises(HTTPException) as exc:
            await update_activity_status(db_session, 999, ActivityStatusIn.REJECTED, reviewer)
        assert exc.value.status_code == 404


class TestBulkUpdateStatus:
    async def test_counts_and_deduplicates(self, db_session, student, reviewer):
        a = await _submit(db_session, student, title="First")
        b = await _submit(db_session, student, title="Second")

        result = await bulk_update_status(db_session, [a.id, 999, b.id, a.id], ActivityStatusIn.APPROVED, reviewer)

        assert result.requested == 3
        assert result.updated == 2
        assert result.failed_ids == [999]
        for activity_id in (a.id, b.id):
            row = await db_session.get(Activity, activity_id)
            await db_session.refresh(row)
            assert row.status == ActivityStatus.APPROVED

    async def test_failure_is_rolled_back_alone(self, db_session, student, reviewer, monkeypatch):
        a = await _submit(db_session, student, title="First")
        b = await _submit(db_session, student, title="Second")
        c = await _submit(db_session, student, title="Third")

        real_update = activity_controller.update_activity_status

        async def failing_on_b(db, activity_id, new_status, admin):
            activity = await real_update(db, activity_id, new_status, admin)
            if activity_id == b.id:
                raise RuntimeError("constraint violated")
            return activity

        monkeypatch.setattr(activity_controller, "update_activity_status", failing_on_b)

        result = await bulk_update_status(db_session, [a.id, b.id, c.id], ActivityStatusIn.REJECTED, reviewer)
        assert result.updated == 2
        assert result.failed_ids == [b.id]

        statuses = {}
        for activity_id in (a.id, b.id, c.id):
            row = await db_session.get(Activity, activity_id)
            await db_session.refresh(row)
            statuses[activity_id] = (row.status, row.reviewed_by)

        assert statuses[a.id] == (ActivityStatus.REJECTED, "Dr. Rajesh Gupta")
        assert statuses[b.id] == (ActivityStatus.PENDING, None)
        assert statuses[c.id] == (ActivityStatus.REJECTED, "Dr. Rajesh Gupta")


class TestRegisterStudent:
    def _payload(self, **overrides):
        data = {
            "name": "Vikram Singh",
            "email": "Vikram@College.edu",
            "roll_number": "me21b007",
            "department": "Mechanical",
            "password": "StrongPass123",
        }
        data.update(overrides)
        return StudentRegister(**data)

    async def test_registers_with_normalized_identity(self, db_session):
        out = await register_student(self._payload(), db_session)
        assert out.email == "vikram@college.edu"
        assert out.roll_number == "ME21B007"
        assert out.is_active is True

    async def test_duplicate_email(self, db_session, student):
        with pytest.raises(HTTPException) as exc:
            await register_student(self._payload(email="asha@college.edu"), db_session)
        assert exc.value.status_code == 409
        assert "email" in exc.value.detail

    async def test_duplicate_roll_number(self, db_session, student):
        with pytest.raises(HTTPException) as exc:
            await register_student(self._payload(roll_number="cs21b042"), db_session)
        assert exc.value.status_code == 409
        assert "roll number" in exc.value.detail

    async def test_unique_violation_after_check_is_a_conflict(self, db_session, student, monkeypatch):
        # another request inserts the same email between the check and the insert
        async def no_conflict(db, email, roll_number):
            return None

        monkeypatch.setattr(student_auth_controller, "_find_conflict", no_conflict)

        with pytest.raises(HTTPException) as exc:
            await register_student(self._payload(email="asha@college.edu"), db_session)
        assert exc.value.status_code == 409
