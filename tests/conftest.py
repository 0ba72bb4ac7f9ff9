"""
Pytest configuration and fixtures.
"""
import os
from contextlib import asynccontextmanager

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from photo_service.core.config import settings
from photo_service.core.database import Base, get_db
from photo_service.core.security import create_access_token
from photo_service.main import app
from photo_service.models import User, Category, Photo, Opinion, OpinionValue, Comment


# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def test_db():
    """Create test database."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def storage_root(tmp_path, monkeypatch):
    """Point the photo storage root at a temporary directory."""
    root = tmp_path / "file_vault"
    monkeypatch.setattr(settings, "WRITE_DIR", str(root))
    return root


@asynccontextmanager
async def _test_client(test_db, raise_app_exceptions=True):
    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app, raise_app_exceptions=raise_app_exceptions)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def client(test_db, storage_root):
    """Create test client with test database."""
    async with _test_client(test_db) as ac:
        yield ac


@pytest.fixture(scope="function")
async def error_client(test_db, storage_root):
    """Test client that receives 500 responses instead of the re-raised server error."""
    async with _test_client(test_db, raise_app_exceptions=False) as ac:
        yield ac


async def _add(db, obj):
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return obj


@pytest.fixture
async def user(test_db):
    return await _add(test_db, User(email="owner@example.com", full_name="Photo Owner"))


@pytest.fixture
async def other_user(test_db):
    return await _add(test_db, User(email="visitor@example.com", full_name="Visitor"))


@pytest.fixture
async def category(test_db):
    return await _add(test_db, Category(name="Landscapes", description="Outdoor shots"))


def token_headers(user_id: int) -> dict:
    token = create_access_token(data={"sub": str(user_id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(user):
    return token_headers(user.id)


@pytest.fixture
def other_headers(other_user):
    return token_headers(other_user.id)


@pytest.fixture
def make_photo(test_db, storage_root):
    """Insert a photo row, optionally with its file on disk."""
    async def _make_photo(category_id, user_id, title="Photo", content=b"\xff\xd8\xff\xe0data", write_file=True,
                          mime_type="image/jpeg"):
        photo = await _add(test_db, Photo(
            title=title,
            description=f"{title} description",
            category_id=category_id,
            user_id=user_id,
            mime_type=mime_type,
        ))
        photo.file_path = os.path.join(str(storage_root), f"{photo.id}.jpg")
        await test_db.commit()
        if write_file:
            storage_root.mkdir(parents=True, exist_ok=True)
            with open(photo.file_path, "wb") as f:
                f.write(content)
        return photo
    return _make_photo


@pytest.fixture
def add_opinions(test_db):
    async def _add_opinions(photo_id, user_id, likes=0, dislikes=0):
        for _ in range(likes):
            test_db.add(Opinion(photo_id=photo_id, user_id=user_id, opinion=OpinionValue.LIKE))
        for _ in range(dislikes):
            test_db.add(Opinion(photo_id=photo_id, user_id=user_id, opinion=OpinionValue.DISLIKE))
        await test_db.commit()
    return _add_opinions


@pytest.fixture
def add_comments(test_db):
    async def _add_comments(photo_id, user_id, count=1):
        for i in range(count):
            test_db.add(Comment(photo_id=photo_id, user_id=user_id, content=f"Comment {i}"))
        await test_db.commit()
    return _add_comments
