"""
Test configuration and fixtures for the rental listing API.
Provides database fixtures, a fake media host, test data factories and an
authenticated HTTP client.
"""

import os
import tempfile

_TEST_ROOT = tempfile.mkdtemp(prefix="rental-listing-tests-")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "testing"
os.environ["MEDIA_BACKEND"] = "local"
os.environ["MEDIA_ROOT"] = os.path.join(_TEST_ROOT, "media")
os.environ["UPLOAD_TMP_DIR"] = os.path.join(_TEST_ROOT, "uploads")

import io
import uuid
from pathlib import Path
from typing import AsyncGenerator, Dict, List, Optional

import pytest
from httpx import ASGITransport, AsyncClient
from PIL import Image
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.main import app
from app.database import Base, get_db
from app.models.property import Property
from app.models.user import User
from app.repositories.property import PropertyRepository
from app.repositories.review import ReviewRepository
from app.repositories.user import UserRepository
from app.services.media import MediaUploader, UploadedMedia
from app.utils.auth import create_access_token
from app.utils.dependencies import get_uploader
from app.utils.slugs import unique_suffix_slug

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_PASSWORD = "testpassword123"


class FakeMediaUploader(MediaUploader):
    """
    In-memory media host.

    ``fail_on`` holds the zero-based indexes of upload calls that fail.
    """

    def __init__(self, fail_on=()):
        self.fail_on = set(fail_on)
        self.calls = 0
        self.hosted: Dict[str, UploadedMedia] = {}
        self.deleted: List[str] = []

    async def upload(self, path: Path) -> Optional[UploadedMedia]:
        index = self.calls
        self.calls += 1
        if index in self.fail_on:
            return None

        public_id = f"{index}-{Path(path).name}"
        media = UploadedMedia(url=f"https://media.test/{public_id}", public_id=public_id)
        self.hosted[public_id] = media
        return media

    async def delete(self, media: UploadedMedia) -> None:
        self.deleted.append(media.public_id)
        self.hosted.pop(media.public_id, None)


class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(email: str = None, full_name: str = "Test Owner") -> dict:
        return {
            "email": email or f"owner{uuid.uuid4().hex[:8]}@example.com",
            "password": TEST_PASSWORD,
            "full_name": full_name,
        }

    @staticmethod
    async def create_user(user_repo: UserRepository, **kwargs) -> User:
        return await user_repo.create_user(UserFactory.create_user_data(**kwargs))


class PropertyFactory:
    """Factory for creating stored properties without going through uploads."""

    @staticmethod
    def create_property_data(user_id: Optional[uuid.UUID], **overrides) -> dict:
        data = {
            "user_id": user_id,
            "slug": unique_suffix_slug("2 bhk flat koramangala bangalore"),
            "owner_name": "Test Owner",
            "city": "Bangalore",
            "locality": "Koramangala",
            "property_type": "Flat",
            "type": "Apartment",
            "bhk": 2,
            "preference": "Family",
            "gender_preference": "Any",
            "rent": 25000.0,
            "security": 50000.0,
            "square_feet_area": 1100.0,
            "pets_allowed": False,
            "car_parking": True,
            "images": ["https://media.test/a.png"],
            "review_ids": [],
        }
        data.update(overrides)
        return data

    @staticmethod
    async def create_property(
        property_repo: PropertyRepository,
        user_id: Optional[uuid.UUID],
        **overrides
    ) -> Property:
        return await property_repo.create_property(
            PropertyFactory.create_property_data(user_id, **overrides)
        )


@pytest.fixture
async def engine():
    """Fresh in-memory database per test."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def fake_uploader() -> FakeMediaUploader:
    return FakeMediaUploader()


@pytest.fixture
async def async_client(session_factory, fake_uploader) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app with the database and media host overridden."""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    async def override_get_uploader():
        return fake_uploader

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_uploader] = override_get_uploader

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    return PropertyRepository(db_session)


@pytest.fixture
def review_repository(db_session: AsyncSession) -> ReviewRepository:
    return ReviewRepository(db_session)


# Factories exposed as fixtures
@pytest.fixture
def user_factory():
    return UserFactory


@pytest.fixture
def property_factory():
    return PropertyFactory


# Common test data
@pytest.fixture
async def test_owner(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(user_repository, email="owner@test.com")


@pytest.fixture
async def other_user(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(user_repository, email="other@test.com", full_name="Other User")


@pytest.fixture
async def test_property(property_repository: PropertyRepository, test_owner: User) -> Property:
    return await PropertyFactory.create_property(property_repository, test_owner.id)


@pytest.fixture
def owner_headers(test_owner: User) -> Dict[str, str]:
    token = create_access_token(user_id=test_owner.id, email=test_owner.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_headers(other_user: User) -> Dict[str, str]:
    token = create_access_token(user_id=other_user.id, email=other_user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def image_bytes() -> bytes:
    """A small valid PNG."""
    buffer = io.BytesIO()
    Image.new("RGB", (8, 8), color=(200, 40, 40)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def property_form() -> Dict[str, str]:
    """Multipart form fields of a valid listing."""
    return {
        "ownerName": "Test Owner",
        "city": "Pune",
        "locality": "Baner",
        "propertyType": "Flat",
        "type": "Apartment",
        "bhk": "3",
        "preference": "Bachelors",
        "genderPreference": "Male",
        "rent": "18000",
        "security": "36000.5",
        "squareFeetArea": "1250",
        "petsAllowed": "TRUE",
        "carParking": "yes",
    }
