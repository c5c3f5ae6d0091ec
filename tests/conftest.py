import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from recipebox.main import app
from recipebox.db import Base, get_db
from recipebox.models import Recipe, Tag, Equipment  # noqa: F401  (register tables)

# --- Test Database Setup ---

SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

# similarity() and foreign keys are set up by the engine "connect" hook in recipebox.db
engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,  # one in-memory database shared by all sessions
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True, scope="session")
def _disable_rate_limit():
    app.state.limiter.enabled = False
    yield


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    """Test client with DB override."""
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    """Direct database session for setup and assertions."""
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def make_recipe(client):
    """POST a recipe and return its id."""
    def _make(title="Tomato Soup", instructions="Simmer and blend.", **fields):
        payload = {"title": title, "instructions": instructions, **fields}
        response = client.post("/api/recipes", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["id"]
    return _make
