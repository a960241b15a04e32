from dotenv import load_dotenv
import logging
import os

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
load_dotenv(os.path.join(BASE_DIR, ".env"))

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.status import HTTP_422_UNPROCESSABLE_ENTITY

from app.core.config import settings

# ───────────────── LOGGING ─────────────────
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

# ───────────────── ROUTER IMPORTS ─────────────────
from app.routes.auth import router as auth_router
from app.routes.student_auth import router as student_auth_router
from app.routes.student_auth import profile_router as student_profile_router
from app.routes.points import router as student_points_router
from app.routes.points import public_router as points_router
from app.routes.admin_dashboard import router as admin_dashboard_router
from app.routes.students import admin_router as admin_students_router

# activity routers (student + admin)
from app.routes.activity import router as student_activity_router
from app.routes.activity import admin_router as admin_activity_router

app = FastAPI(
    title="KarmaPatra Hub API",
    description="Backend API for student activity submissions, reviews and points",
    version="1.0.0",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

# ───────── SAFE VALIDATION HANDLER (multipart bodies carry raw bytes) ─────────

def _sanitize(obj):
    if isinstance(obj, (bytes, bytearray)):
        return f"<bytes:{len(obj)}>"
    if isinstance(obj, dict):
        return {k: _sanitize(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_sanitize(v) for v in obj]
    if isinstance(obj, Exception):
        return str(obj)
    return obj


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    safe_errors = _sanitize(exc.errors())
    return JSONResponse(
        status_code=HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": safe_errors},
    )

# ───────────────── CORS ─────────────────

origins = settings.origins_list or ["http://localhost:3000"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ───────────────── ROUTES ─────────────────

# Admin auth
app.include_router(auth_router, prefix="/api")

# Student auth + profile
app.include_router(student_auth_router, prefix="/api")
app.include_router(student_profile_router, prefix="/api")

# Activities
app.include_router(student_activity_router, prefix="/api")
app.include_router(admin_activity_router, prefix="/api")

# Points
app.include_router(student_points_router, prefix="/api")
app.include_router(points_router, prefix="/api")

# Admin console
app.include_router(admin_dashboard_router, prefix="/api")
app.include_router(admin_students_router, prefix="/api")

# ───────────────── HEALTH ─────────────────

@app.get("/", tags=["Health"])
async def root():
    return {
        "status": "ok",
        "app": "KarmaPatra Hub API",
        "env": settings.APP_ENV,
    }


@app.get("/health", tags=["Health"])
async def health():
    return {"status": "healthy"}
