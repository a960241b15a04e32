"""
Async database wiring shared by every route.

Students, admins and activities live in PostgreSQL (asyncpg). Points are
never stored: they are recomputed from the activity rows each request, so
the only writes are registrations, submissions and review decisions.
"""
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from app.core.config import settings


engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,   # SQL statements in the log while debugging
    pool_pre_ping=True,
)

# expire_on_commit=False: controllers return ORM rows that are serialized
# after get_db has committed
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    pass


async def get_db():
    """
    One session and one transaction per request.

    Controllers only flush; the commit happens here once the handler
    returns, and any exception rolls the whole request back. Bulk review
    nests a SAVEPOINT per activity inside this transaction.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
