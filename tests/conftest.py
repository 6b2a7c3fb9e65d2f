"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from src.api.dependencies import get_image_storage
from src.database import Base, get_db
from src.main import app
from src.models.category import DEFAULT_CATEGORIES, Category
from src.services.image_storage import ImageStorage

PASSWORD = "testpass123"


class AuthHeaders(dict):
    """Dict subclass that also stores the logged-in user's id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL when DATABASE_URL is set, SQLite locally
if os.getenv("DATABASE_URL"):
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/petitions", "/petitions_test")
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Fresh session with seeded categories for each test, emptied afterwards."""
    session = TestingSessionLocal()
    session.add_all([Category(name=name) for name in DEFAULT_CATEGORIES])
    session.commit()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def storage(tmp_path):
    """Image storage rooted in a temporary directory."""
    return ImageStorage(tmp_path / "images")


@pytest.fixture(scope="function")
def client(db, storage):
    """Create a test client with database and storage overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_image_storage] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _register_and_login(client, email: str, first_name: str = "Test", last_name: str = "User"):
    """Register a user, log them in and return their auth headers."""
    response = client.post(
        "/api/v1/users/register",
        json={
            "email": email,
            "firstName": first_name,
            "lastName": last_name,
            "password": PASSWORD,
        },
    )
    assert response.status_code == 201

    response = client.post("/api/v1/users/login", json={"email": email, "password": PASSWORD})
    assert response.status_code == 200
    data = response.json()
    return AuthHeaders({"X-Authorization": data["token"]}, user_id=data["userId"], email=email)


@pytest.fixture
def auth_headers(client):
    """Logged-in petition owner."""
    return _register_and_login(client, "owner@example.com", "Olive", "Owner")


@pytest.fixture
def other_headers(client):
    """A second logged-in user."""
    return _register_and_login(client, "supporter@example.com", "Sam", "Supporter")


@pytest.fixture
def category_id(db):
    """Id of a seeded category."""
    return db.query(Category).order_by(Category.id).first().id


@pytest.fixture
def create_petition(client, auth_headers, category_id):
    """Factory creating a petition through the API and returning its id."""

    def _create(title="Save the bees", tiers=None, headers=None, category=None, description=None):
        payload = {
            "title": title,
            "description": description or f"Description of {title}",
            "categoryId": category or category_id,
            "supportTiers": tiers
            or [{"title": "Basic", "description": "Show support", "cost": 0}],
        }
        response = client.post("/api/v1/petitions", headers=headers or auth_headers, json=payload)
        assert response.status_code == 201, response.text
        return response.json()["petitionId"]

    return _create


@pytest.fixture
def login_as(client):
    """Factory registering and logging in an extra user."""

    def _login(email: str, first_name: str = "Test", last_name: str = "User"):
        return _register_and_login(client, email, first_name, last_name)

    return _login


@pytest.fixture
def get_tier_ids(client):
    """Support tier ids of a petition, in creation order."""

    def _tier_ids(petition_id: int) -> list[int]:
        response = client.get(f"/api/v1/petitions/{petition_id}")
        return [tier["supportTierId"] for tier in response.json()["supportTiers"]]

    return _tier_ids
