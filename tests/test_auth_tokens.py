"""
Test: JWT issuing and the role guard shared by the admin / student dependencies.
"""
import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from jose import jwt

from app.core.config import settings
from app.core.dependencies import _decode_subject
from app.core.security import ROLE_ADMIN, ROLE_STUDENT, create_access_token, decode_access_token


def _bearer(token):
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestAccessToken:
    def test_payload(self):
        payload = decode_access_token(create_access_token(7, "asha@college.edu", ROLE_STUDENT))
        assert payload["sub"] == "7"
        assert payload["email"] == "asha@college.edu"
        assert payload["role"] == ROLE_STUDENT
        assert payload["type"] == "access"
        assert payload["exp"] > payload["iat"]

    def test_admin_is_default_role(self):
        payload = decode_access_token(create_access_token(1, "admin@karmapatra.edu"))
        assert payload["role"] == ROLE_ADMIN


class TestDecodeSubject:
    def test_student_token_for_student_guard(self):
        token = create_access_token(12, "s@college.edu", ROLE_STUDENT)
        assert _decode_subject(_bearer(token), ROLE_STUDENT) == 12

    def test_student_token_rejected_by_admin_guard(self):
        token = create_access_token(12, "s@college.edu", ROLE_STUDENT)
        with pytest.raises(HTTPException) as exc:
            _decode_subject(_bearer(token), ROLE_ADMIN)
        assert exc.value.status_code == 403

    def test_missing_credentials(self):
        with pytest.raises(HTTPException) as exc:
            _decode_subject(None, ROLE_ADMIN)
        assert exc.value.status_code == 401

    def test_garbage_token(self):
        with pytest.raises(HTTPException) as exc:
            _decode_subject(_bearer("not-a-jwt"), ROLE_ADMIN)
        assert exc.value.status_code == 401

    def test_wrong_token_type(self):
        token = jwt.encode(
            {"sub": "3", "type": "refresh", "role": ROLE_ADMIN},
            settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
        )
        with pytest.raises(HTTPException) as exc:
            _decode_subject(_bearer(token), ROLE_ADMIN)
        assert exc.value.status_code == 401

    def test_wrong_signature(self):
        token = jwt.encode(
            {"sub": "3", "type": "access", "role": ROLE_ADMIN},
            "some-other-secret",
            algorithm=settings.ALGORITHM,
        )
        with pytest.raises(HTTPException) as exc:
            _decode_subject(_bearer(token), ROLE_ADMIN)
        assert exc.value.status_code == 401

    def test_token_without_role_is_rejected(self):
        token = jwt.encode(
            {"sub": "3", "type": "access", "email": "admin@karmapatra.edu"},
            settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
        )
        with pytest.raises(HTTPException) as exc:
            _decode_subject(_bearer(token), ROLE_ADMIN)
        assert exc.value.status_code == 401
