from datetime import datetime, timezone

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.security import ROLE_ADMIN, create_access_token, verify_password
from app.models.admin import Admin
from app.schemas.auth import AdminInfo, LoginRequest, LoginResponse, MeResponse


async def login(payload: LoginRequest, db: AsyncSession) -> LoginResponse:
    """
    Admin login — all business logic lives here, not in the route.

    1. verify_password always runs, even for unknown emails, so response
       time does not reveal which emails exist
    2. wrong email and wrong password share one error message
    3. is_active is checked only after the password matched
    4. last_login_at is updated on success
    """
    result = await db.execute(
        select(Admin).where(Admin.email == payload.email)
    )
    admin = result.scalar_one_or_none()

    password_ok = verify_password(
        payload.password,
        admin.password_hash if admin else None,
    )

    if not admin or not password_ok:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    if not admin.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is deactivated. Contact support.",
        )

    admin.last_login_at = datetime.now(timezone.utc)
    db.add(admin)
    await db.flush()

    token = create_access_token(admin.id, admin.email, ROLE_ADMIN)

    return LoginResponse(
        access_token=token,
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        admin=AdminInfo(
            id=admin.id,
            name=admin.name,
            email=admin.email,
        ),
    )


async def get_me(admin: Admin) -> MeResponse:
    """Returns current admin profile. No DB call needed — admin already loaded by dependency."""
    return MeResponse(
        id=admin.id,
        name=admin.name,
        email=admin.email,
        is_active=admin.is_active,
        last_login_at=admin.last_login_at,
        created_at=admin.created_at,
    )
