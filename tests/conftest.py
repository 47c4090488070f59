"""Pytest configuration and fixtures."""

import os
import tempfile

# Settings are read at import time, so they must be in place before any app module loads
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="uploads-")
os.environ.pop("AZURE_STORAGE_ACCOUNT", None)
os.environ.pop("BREVO_API_KEY", None)

from datetime import date  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from database import get_session  # noqa: E402
from main import app  # noqa: E402
from models import Base, BoardingHouse, Landlord, Room  # noqa: E402
from security import create_access_token  # noqa: E402
from services import room_service  # noqa: E402
from services.contract_service import ContractCreated, ContractService  # noqa: E402
from storage import LocalBlobStore, get_blob_store  # noqa: E402


@pytest.fixture
def engine():
    """In-memory SQLite database shared by every connection of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(engine) -> Session:
    """Session configured like the application's SessionLocal."""
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)
    session = factory()
    yield session
    session.close()


@pytest.fixture
def blob_store(tmp_path) -> LocalBlobStore:
    return LocalBlobStore(str(tmp_path / "uploads"))


@pytest.fixture
def client(db, blob_store) -> TestClient:
    """API client bound to the test session and a temporary upload folder."""
    app.dependency_overrides[get_session] = lambda: db
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def landlord(db) -> Landlord:
    landlord = Landlord(
        full_name="Tran Thi B",
        phone="0912345678",
        email="owner@example.com",
        password_hash="not-used",
    )
    db.add(landlord)
    db.commit()
    return landlord


@pytest.fixture
def landlord_headers(landlord) -> dict:
    token = create_access_token(landlord.landlord_id, "landlord")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def house(db, landlord) -> BoardingHouse:
    return room_service.create_house(db, house_name="Sunrise House", address="12 Nguyen Trai", landlord_id=landlord.landlord_id)


@pytest.fixture
def room(db, house) -> Room:
    return room_service.create_room(db, house_id=house.house_id, room_number="101", floor=1, base_rent=Decimal("2500000"))


@pytest.fixture
def other_room(db, house) -> Room:
    return room_service.create_room(db, house_id=house.house_id, room_number="102", floor=1, base_rent=Decimal("2600000"))


@pytest.fixture
def make_contract(db):
    """Factory creating a contract through the service with sensible defaults."""

    def _make(room: Room, phone: str = "0901234567", full_name: str = "Nguyen Van A", **overrides) -> ContractCreated:
        params = {
            "room_id": room.room_id,
            "full_name": full_name,
            "phone": phone,
            "start_date": date(2026, 1, 1),
            "end_date": date(2026, 12, 31),
            "deposit_amount": Decimal("3000000"),
            "rent_amount": Decimal("2500000"),
        }
        params.update(overrides)
        return ContractService.create_contract(db, **params)

    return _make


@pytest.fixture
def tenant_headers():
    """Build Authorization headers for a tenant id."""

    def _headers(tenant_id: int) -> dict:
        return {"Authorization": f"Bearer {create_access_token(tenant_id, 'tenant')}"}

    return _headers
