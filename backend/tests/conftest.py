"""
Pytest configuration and fixtures for backend tests.
"""

import os

# Configure the app before it is imported: in-memory database for the
# app engine and no login throttling between tests.
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ENVIRONMENT"] = "test"
os.environ["STORAGE_BACKEND"] = "local"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from havens_api.main import app
from havens_api.models import Base, MenuCategory, MenuItem, Staff, Table
from havens_api.services.storage import ImageStorage, get_image_storage
from havens_shared.infrastructure.db import get_db
from havens_shared.security.auth import sign_jwt
from havens_shared.security.password import hash_password


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# bcrypt is slow on purpose; hash the shared test password once
TEST_PASSWORD = "secret123"
TEST_PASSWORD_HASH = hash_password(TEST_PASSWORD)


class InMemoryImageStorage(ImageStorage):
    """Storage backend that keeps uploads in a dict."""

    def __init__(self):
        super().__init__("https://images.test")
        self.objects: dict[str, tuple[bytes, str]] = {}

    def save(self, key: str, data: bytes, content_type: str) -> str:
        self.objects[key] = (data, content_type)
        return self.public_url(key)


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def image_storage():
    return InMemoryImageStorage()


@pytest.fixture(scope="function")
def client(db_session, image_storage):
    """
    Create a test client with database session and storage overrides.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_image_storage] = lambda: image_storage

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# Staff fixtures
# =============================================================================


def make_staff(db_session, role: str, employee_id: str, **overrides) -> Staff:
    """Insert an active staff member with the shared test password."""
    data = {
        "employee_id": employee_id,
        "first_name": role.capitalize(),
        "last_name": "Tester",
        "email": f"{employee_id.lower()}@havens-test.com",
        "role": role,
        "password": TEST_PASSWORD_HASH,
        "is_active": True,
    }
    data.update(overrides)
    staff = Staff(**data)
    db_session.add(staff)
    db_session.commit()
    db_session.refresh(staff)
    return staff


def headers_for(staff: Staff) -> dict[str, str]:
    """Bearer headers for a staff member without going through /api/login."""
    token = sign_jwt({"sub": str(staff.id), "role": staff.role, "email": staff.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def staff_factory(db_session):
    """Create extra staff members inside a test."""
    def factory(role: str, employee_id: str, **overrides) -> Staff:
        return make_staff(db_session, role, employee_id, **overrides)
    return factory


@pytest.fixture
def token_headers():
    """Build bearer headers for any staff member."""
    return headers_for


@pytest.fixture
def seed_admin(db_session):
    return make_staff(db_session, "admin", "ADM001", first_name="Alice", last_name="Admin")


@pytest.fixture
def seed_waiter(db_session):
    return make_staff(db_session, "waiter", "WTR001", first_name="Walter", last_name="Waiter", pin="1234")


@pytest.fixture
def seed_chef(db_session):
    return make_staff(db_session, "chef", "CHF001", first_name="Carla", last_name="Chef")


@pytest.fixture
def seed_receptionist(db_session):
    return make_staff(db_session, "receptionist", "RCP001", first_name="Rita", last_name="Reception")


@pytest.fixture
def auth_headers(seed_admin):
    """Admin bearer headers."""
    return headers_for(seed_admin)


@pytest.fixture
def waiter_headers(seed_waiter):
    return headers_for(seed_waiter)


@pytest.fixture
def chef_headers(seed_chef):
    return headers_for(seed_chef)


@pytest.fixture
def receptionist_headers(seed_receptionist):
    return headers_for(seed_receptionist)


# =============================================================================
# Catalog and table fixtures
# =============================================================================


@pytest.fixture
def seed_category(db_session):
    """Create a test category - shared fixture for all tests."""
    category = MenuCategory(name="Mains", description="Main dishes", display_order=2)
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture
def seed_item(db_session, seed_category):
    item = MenuItem(
        category_id=seed_category.id,
        name="Butter Chicken",
        price=1250,
        preparation_time=20,
    )
    db_session.add(item)
    db_session.commit()
    db_session.refresh(item)
    return item


@pytest.fixture
def seed_table(db_session):
    table = Table(table_number="5", room_name="Main Hall", capacity=4)
    db_session.add(table)
    db_session.commit()
    db_session.refresh(table)
    return table
