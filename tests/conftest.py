"""Test configuration and fixtures for the portfolio gallery.

Each test gets its own SQLite database and a stubbed Cloudinary uploader;
nothing leaves the process.
"""
import asyncio
import os
import tempfile
from pathlib import Path
from typing import Dict, List

import bcrypt
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

TEST_PASSWORD = "correct horse battery staple"

# Set test environment BEFORE importing app modules
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{Path(tempfile.mkdtemp()) / 'startup.db'}"
os.environ["CLOUDINARY_CLOUD_NAME"] = "demo"
os.environ["CLOUDINARY_API_KEY"] = "test-key"
os.environ["CLOUDINARY_API_SECRET"] = "test-secret"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret"
os.environ["ADMIN_PASSWORD_HASH"] = bcrypt.hashpw(
    TEST_PASSWORD.encode("utf-8"), bcrypt.gensalt(rounds=4)
).decode("utf-8")

import cloudinary.uploader  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from portfolio.database import Base, get_db  # noqa: E402
from portfolio import models  # noqa: E402,F401
from portfolio.main import app  # noqa: E402
from portfolio.utils.rate_limit import limiter  # noqa: E402


def _make_engine(tmp_path: Path):
    return create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'gallery.db'}", poolclass=NullPool)


async def _create_tables(engine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


class FakeUploader:
    """Stands in for cloudinary.uploader.upload and records every call."""

    def __init__(self):
        self.calls: List[Dict] = []
        self.error = None
        self.counter = 0

    def __call__(self, file, **options):
        self.calls.append({"file": file, **options})
        if self.error is not None:
            raise self.error
        self.counter += 1
        public_id = f"{options.get('folder', 'gallery')}/asset{self.counter}"
        return {
            "public_id": public_id,
            "secure_url": f"https://res.cloudinary.com/demo/image/upload/v1700000000/{public_id}.jpg",
            "format": "jpg",
            "width": 2500,
            "height": 1667,
            "bytes": 345678,
        }


@pytest.fixture
def fake_cloudinary(monkeypatch) -> FakeUploader:
    uploader = FakeUploader()
    monkeypatch.setattr(cloudinary.uploader, "upload", uploader)
    return uploader


@pytest.fixture
def client(tmp_path: Path, fake_cloudinary):
    """TestClient bound to a fresh database."""
    engine = _make_engine(tmp_path)
    asyncio.run(_create_tables(engine))
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    limiter.enabled = False

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    limiter.enabled = True


@pytest.fixture
def admin_client(client: TestClient) -> TestClient:
    """Client carrying a signed-in admin session cookie."""
    response = client.post("/sign-in", data={"password": TEST_PASSWORD}, follow_redirects=False)
    assert response.status_code == 303
    return client


@pytest.fixture
def jpeg_bytes() -> bytes:
    """A 2MB payload with a JPEG signature."""
    return b"\xff\xd8\xff\xe0" + b"\x00" * (2 * 1024 * 1024 - 4)


@pytest_asyncio.fixture
async def db_session(tmp_path: Path):
    engine = _make_engine(tmp_path)
    await _create_tables(engine)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session
    await engine.dispose()
