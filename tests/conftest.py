"""Test configuration and fixtures for the library catalog."""

import os

# Settings are read at import time, so the test environment must be in place first.
os.environ["ENVIRONMENT"] = "local"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ["JWT_SECRET_KEY"] = "test_secret_key_for_tests_with_enough_length"
os.environ["JWT_ISSUER"] = "library-api-tests"
os.environ["JWT_AUDIENCE"] = "library-api-test-clients"
os.environ["BCRYPT_ROUNDS"] = "4"

from datetime import datetime  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from library_api.infrastructure.database.session import Base, async_session  # noqa: E402
from library_api.infrastructure.logging import configure_testing_logging, mark_logging_configured  # noqa: E402
from library_api.infrastructure.security import create_access_token, get_password_hash  # noqa: E402
from library_api.interfaces.main import app  # noqa: E402
from library_api.modules.account.models import Account  # noqa: E402
from library_api.modules.book.models import Book  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite://"

configure_testing_logging()
mark_logging_configured()


@pytest_asyncio.fixture(scope="function")
async def test_db_engine():
    """Create a fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_db_engine):
    """Create a test database session."""
    session_factory = async_sessionmaker(test_db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(test_db_engine):
    """Create a test client whose requests each get their own session on the test engine."""
    app.dependency_overrides = {}

    test_session_factory = async_sessionmaker(test_db_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[async_session] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides = {}


@pytest_asyncio.fixture
async def test_account(db_session: AsyncSession):
    """Create an account directly in the store."""
    account = Account(username="kamil", password_hash=get_password_hash("password123"))
    db_session.add(account)
    await db_session.commit()
    return {"id": account.id, "username": account.username, "password": "password123"}


@pytest_asyncio.fixture
async def test_book(db_session: AsyncSession):
    """Create a test book."""
    book = Book(title="The Art of Computer Programming", author="Donald Knuth", isbn="978-0201896831")
    db_session.add(book)
    await db_session.commit()
    return {
        "id": book.id,
        "title": book.title,
        "author": book.author,
        "isbn": book.isbn,
        "published_date": book.published_date,
    }


@pytest_asyncio.fixture
async def test_book_2(db_session: AsyncSession):
    """Create a second test book."""
    book = Book(title="Dune", author="Frank Herbert", published_date=datetime(1965, 8, 1))
    db_session.add(book)
    await db_session.commit()
    return {
        "id": book.id,
        "title": book.title,
        "author": book.author,
        "isbn": book.isbn,
        "published_date": book.published_date,
    }


@pytest.fixture
def auth_headers():
    """Authorization header carrying a freshly issued token."""
    return {"Authorization": f"Bearer {create_access_token(subject='kamil')}"}


@pytest_asyncio.fixture
async def registered_client(client: AsyncClient):
    """Client with a registered account and a token obtained through the API."""
    credentials = {"username": "kamil", "password": "password123"}
    await client.post("/auth/register", json=credentials)
    response = await client.post("/auth/login", json=credentials)
    client.headers["Authorization"] = f"Bearer {response.json()['token']}"
    return client
