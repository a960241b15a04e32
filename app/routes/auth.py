from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.auth_controller import get_me, login
from app.core.database import get_db
from app.core.dependencies import get_current_admin
from app.models.admin import Admin
from app.schemas.auth import LoginRequest, LoginResponse, MeResponse

# Reviewer login. Students authenticate under /auth/student (routes/student_auth.py).
router = APIRouter(prefix="/auth", tags=["Admin Auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Reviewer Login",
    description="""
Sign in to the review dashboard with email + password.

The returned token carries role `admin` and is required by every
`/admin/...` endpoint (review queue, status changes, CSV export, stats).
Student tokens are refused there with 403.

Send it as: `Authorization: Bearer <token>`
    """,
)
async def admin_login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> LoginResponse:
    return await login(payload, db)


@router.get(
    "/me",
    response_model=MeResponse,
    summary="Current Reviewer",
    description="Profile of the signed-in reviewer; its name is what reviews record as `reviewed_by`.",
)
async def me(
    current_admin: Admin = Depends(get_current_admin),
) -> MeResponse:
    return await get_me(current_admin)


@router.post(
    "/logout",
    summary="Logout",
    description="Tokens are stateless; the dashboard signs out by discarding its token.",
)
async def logout() -> dict:
    return {"detail": "Logged out. Delete your token on the client side."}
