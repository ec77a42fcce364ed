import os
import sys
import tempfile
from pathlib import Path

# Must be set before any backend module reads the environment
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "medkit123"
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="medkit-logs-"))

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'backend'))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db, init_db
from crud import medicine as crud_medicine
from schemas.medicine import MedicineCreate
from utils.session_store import InMemorySessionStore, get_session_store


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def make_medicine(db):
    """Create a medicine with sensible defaults; keyword arguments override them."""
    def _make(**overrides):
        fields = {
            "name": "Paracetamol",
            "category_id": "1",
            "category_name": "Pain Relief",
            "dosage": "500mg",
            "quantity": 10,
            "default_quantity": 10,
            "symptoms": ["Fever", "Headache"],
        }
        fields.update(overrides)
        return crud_medicine.create_medicine(db, MedicineCreate(**fields))
    return _make


@pytest.fixture
def session_store():
    return InMemorySessionStore()


@pytest.fixture
def client(session_factory, session_store):
    from main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_store] = lambda: session_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_client(client):
    response = client.post("/api/auth/login", json={"username": "admin", "password": "medkit123"})
    assert response.status_code == 200
    return client
