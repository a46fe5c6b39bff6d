"""
Pytest configuration for backoffice tests.

Environment is set before any backoffice import so the module-level settings
pick it up. Every test gets its own SQLite file and upload directory.
"""

import os

os.environ.setdefault("JWT_SECRET", "test-secret-key-not-for-production")
os.environ["ENVIRONMENT"] = "development"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ADMIN_EMAIL"] = "admin@hassan-elec.com"
os.environ["ADMIN_PASSWORD"] = "admin123"
os.environ["CLOUDINARY_CLOUD_NAME"] = ""
os.environ["BLOB_READ_WRITE_TOKEN"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

import httpx  # noqa: E402
import pytest  # noqa: E402

from backoffice.core.config import settings  # noqa: E402
from backoffice.main import create_app  # noqa: E402


@pytest.fixture
def test_settings(tmp_path):
    return settings.model_copy(
        update={
            "DATABASE_URL": f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
            "UPLOAD_DIR": str(tmp_path / "uploads"),
            "AUTO_CREATE_TABLES": True,
        }
    )


@pytest.fixture
async def app(test_settings):
    """Application with its lifespan running (tables created, admin seeded)."""
    application = create_app(test_settings)
    async with application.router.lifespan_context(application):
        yield application


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test", timeout=30.0) as c:
        yield c


@pytest.fixture
async def db(app):
    """A session on the same database the app uses, for direct setup and checks."""
    async with app.state.database.session_factory() as session:
        yield session
