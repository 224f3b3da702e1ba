from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, MappedAsDataclass

from ..config.settings import settings


def _engine_options() -> Dict[str, Any]:
    """Connection pool options for the configured backend.

    SQLite drivers manage their own single-connection pools and reject
    ``pool_size``/``max_overflow``.
    """
    if settings.IS_SQLITE:
        return {}
    return {
        "pool_size": settings.POSTGRES_POOL_SIZE,
        "max_overflow": settings.POSTGRES_MAX_OVERFLOW,
    }


engine = create_async_engine(
    settings.DATABASE_URL,
    echo=False,
    future=True,
    **_engine_options(),
)

local_session = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase, MappedAsDataclass):
    """Declarative base for every table in the catalog.

    Combines ``DeclarativeBase`` with ``MappedAsDataclass`` so models get a
    generated ``__init__``/``__repr__``/``__eq__`` from their mapped columns.
    Columns assigned by the store (primary keys, timestamps) are declared with
    ``init=False``.

    Example:
        ```python
        class Book(Base):
            __tablename__ = "books"

            id: Mapped[int] = mapped_column(Integer, primary_key=True, init=False)
            title: Mapped[str] = mapped_column(String(255))

        book = Book(title="Dune")
        ```
    """

    pass


async def async_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency yielding one database session per request.

    Used as ``Depends(async_session)``; the session is closed when the
    request finishes. Tests replace it through ``app.dependency_overrides``.

    Yields:
        AsyncSession: A configured async database session.
    """
    async_get_db = local_session
    async with async_get_db() as db:
        yield db


async def create_tables() -> None:
    """Create all tables in the database if they don't exist.

    Idempotent: existing tables are left unchanged. For schema changes on a
    live database use a migration tool instead.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

