"""
Foodies Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets a throwaway SQLite file under tmp_path with the meals
       table created, so store and service tests run against the real
       schema (unique slug constraint included) without mocks.

Fixture Hierarchy (all function-scoped):
    db_engine ─▶ session_factory ─▶ db_session ─▶ store ─┐
    image_service (tmp images dir) ──────────────────────┼─▶ meal_service
    listing_cache ───────────────────────────────────────┘
    test_client: HTTPX AsyncClient against create_app() with the
                 session / image / cache dependencies overridden
"""

import os
import tempfile

# Must happen BEFORE any foodies import: settings and engine are built at import time
_TEST_ROOT = tempfile.mkdtemp(prefix="foodies_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_ROOT}/app.db"
os.environ["IMAGES_DIR"] = os.path.join(_TEST_ROOT, "images")
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_REQUESTS"] = "10000"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from foodies.config import settings
from foodies.database import build_engine, get_db_session, init_models
from foodies.dependencies import get_image_service, get_listing_cache
from foodies.services.file_service import ImageService
from foodies.services.listing_cache import ListingCache
from foodies.services.meal_service import MealService
from foodies.store import MealStore


# ══════════════════════════════════════════════════════════════════════════
# Database
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """Fresh SQLite file with the meals table created."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'meals.db'}")
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def store(db_session):
    return MealStore(db_session)


# ══════════════════════════════════════════════════════════════════════════
# Services
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def images_dir(tmp_path):
    return tmp_path / "images"


@pytest.fixture
def image_service(images_dir):
    return ImageService(images_dir=str(images_dir), url_prefix="/images")


@pytest.fixture
def listing_cache():
    return ListingCache(ttl=0)


@pytest.fixture
def meal_service(store, image_service, listing_cache):
    return MealService(store=store, images=image_service, cache=listing_cache)


# ══════════════════════════════════════════════════════════════════════════
# Sample Data
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def sample_image_bytes():
    """Minimal JPEG: SOI + JFIF header + EOI."""
    return (
        b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        b'\xff\xd9'
    )


@pytest.fixture
def meal_fields():
    """The "Big Burger" share-form fields, keyed by form name."""
    return {
        "title": "Big Burger",
        "summary": "Tasty",
        "instructions": "Grill it",
        "creator": "Ann",
        "creatorEmail": "a@x.com",
    }


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    AsyncClient talking to a fresh app instance.

    Images go to settings.images_dir so the /images static mount serves them.
    """
    from foodies.main import create_app

    app = create_app()
    images = ImageService(images_dir=settings.images_dir)
    cache = ListingCache(ttl=0)

    async def override_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session
    app.dependency_overrides[get_image_service] = lambda: images
    app.dependency_overrides[get_listing_cache] = lambda: cache

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
