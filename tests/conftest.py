"""Pytest configuration and fixtures."""

from unittest.mock import MagicMock

import mongomock
import pytest
from fastapi.testclient import TestClient
from pymongo.errors import PyMongoError

from app.api.deps import get_status_service, get_vehicle_ledger
from app.main import app
from app.services.status_service import StatusService
from app.services.vehicle_ledger import VehicleLedger


@pytest.fixture
def mongo_db():
    """In-memory MongoDB database."""
    return mongomock.MongoClient()["myevdata_test"]


@pytest.fixture
def status_collection(mongo_db):
    return mongo_db["status"]


@pytest.fixture
def vehicle_collection(mongo_db):
    return mongo_db["myevdata"]


@pytest.fixture
def status_service(status_collection):
    return StatusService(status_collection)


@pytest.fixture
def ledger(vehicle_collection):
    return VehicleLedger(vehicle_collection)


@pytest.fixture
def broken_collection():
    """Collection whose every operation fails like an unreachable server."""
    collection = MagicMock()
    for method in ("find_one", "find_one_and_update", "update_one"):
        getattr(collection, method).side_effect = PyMongoError("connection refused")
    return collection


@pytest.fixture
def client(status_service, ledger):
    """API client wired to the in-memory collections."""
    app.dependency_overrides[get_status_service] = lambda: status_service
    app.dependency_overrides[get_vehicle_ledger] = lambda: ledger
    yield TestClient(app)
    app.dependency_overrides.clear()
