"""
seed_admin.py
─────────────
Creates the first admin account with a bcrypt-hashed password, and
optionally a batch of demo students with random activity submissions.
Run after the migration:

    alembic upgrade head
    python seed_admin.py

Reads from .env — SEED_ADMIN_* for the admin account,
SEED_DEMO_STUDENTS / SEED_DEMO_ACTIVITIES (default 0) for demo data.
"""
import asyncio
import os
import random
from datetime import datetime, timedelta, timezone
from dotenv import load_dotenv

load_dotenv()

# ── Change these in .env or edit here ────────────────────────────────
ADMIN_NAME     = os.getenv("SEED_ADMIN_NAME",     "Dr. Rajesh Gupta")
ADMIN_EMAIL    = os.getenv("SEED_ADMIN_EMAIL",    "admin@karmapatra.edu")
ADMIN_PASSWORD = os.getenv("SEED_ADMIN_PASSWORD", "ChangeMe@2026")

DEMO_STUDENTS   = int(os.getenv("SEED_DEMO_STUDENTS", "0"))
DEMO_ACTIVITIES = int(os.getenv("SEED_DEMO_ACTIVITIES", "0"))
DEMO_PASSWORD   = os.getenv("SEED_DEMO_PASSWORD", "student123")
# ─────────────────────────────────────────────────────────────────────

FIRST_NAMES = ["Aarav", "Vivaan", "Aditya", "Ishaan", "Rohan", "Ananya", "Diya", "Saanvi", "Myra", "Riya"]
LAST_NAMES = ["Sharma", "Verma", "Patel", "Gupta", "Khan", "Singh", "Reddy", "Iyer", "Das"]
DEPARTMENTS = ["Computer Science", "Electronics", "Mechanical", "Civil", "Electrical", "IT"]
DEMO_ACTIVITY_TITLES = [
    ("Attended Kubernetes Workshop", "workshop"),
    ("Cloud Computing Specialization", "certification"),
    ("Volunteered at Blood Donation Camp", "community_service"),
    ("Presented Poster at National Symposium", "presentation"),
    ("Open Source PR Merged", "open_source"),
    ("Won Debugging Contest", "competition"),
    ("Organized Hack Night", "leadership"),
    ("Final Year Project Demo", "project"),
]


def _roll_number(department: str, index: int) -> str:
    return f"{department[:2].upper()}21B{index:03d}"


async def seed():
    from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
    from sqlalchemy import select
    from app.core.security import hash_password
    from app.models.admin import Admin
    from app.models.student import Student
    from app.models.activity import Activity, ActivityStatus

    engine  = create_async_engine(os.environ["DATABASE_URL"], echo=False)
    Session = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    async with Session() as db:
        # Idempotent: an existing admin is left untouched
        existing = (await db.execute(
            select(Admin).where(Admin.email == ADMIN_EMAIL)
        )).scalar_one_or_none()

        if existing:
            print(f"⚠️  Admin already exists: {ADMIN_EMAIL} (unchanged)")
        else:
            admin = Admin(
                name=ADMIN_NAME,
                email=ADMIN_EMAIL,
                password_hash=hash_password(ADMIN_PASSWORD),
            )
            db.add(admin)
            await db.flush()
            print(f"✅  Admin created: id={admin.id} email={admin.email}")
            print("🔑  Login endpoint : POST /api/auth/login")

        students = []
        demo_hash = hash_password(DEMO_PASSWORD) if DEMO_STUDENTS else None
        for i in range(1, DEMO_STUDENTS + 1):
            first, last = random.choice(FIRST_NAMES), random.choice(LAST_NAMES)
            department = random.choice(DEPARTMENTS)
            email = f"{first.lower()}.{last.lower()}{100 + i}@student.edu"

            found = (await db.execute(select(Student).where(Student.email == email))).scalar_one_or_none()
            if found:
                students.append(found)
                continue

            s = Student(
                name=f"{first} {last}",
                email=email,
                roll_number=_roll_number(department, 100 + i),
                department=department,
                password_hash=demo_hash,
            )
            db.add(s)
            students.append(s)
        await db.flush()

        now = datetime.now(timezone.utc)
        for _ in range(DEMO_ACTIVITIES if students else 0):
            s = random.choice(students)
            title, activity_type = random.choice(DEMO_ACTIVITY_TITLES)
            submitted = now - timedelta(days=random.randint(0, 170))
            status = random.choice(list(ActivityStatus))
            db.add(
                Activity(
                    student_id=s.id,
                    student_name=s.name,
                    roll_number=s.roll_number,
                    title=title,
                    type=activity_type,
                    date=submitted.date(),
                    status=status,
                    submitted_at=submitted,
                    reviewed_at=None if status == ActivityStatus.PENDING else submitted + timedelta(days=1),
                    reviewed_by=None if status == ActivityStatus.PENDING else ADMIN_NAME,
                )
            )

        await db.commit()

    await engine.dispose()

    if DEMO_STUDENTS:
        print(f"👩‍🎓  Demo students: {len(students)} (password: {DEMO_PASSWORD})")
        print(f"📝  Demo activities: {DEMO_ACTIVITIES}")


if __name__ == "__main__":
    asyncio.run(seed())
