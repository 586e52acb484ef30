"""
Pytest fixtures for the ledger tests.

Settings are read at import time, so the environment is filled in before
anything from bakery_pos is imported. Mongo is replaced by mongomock-motor.
"""
import os

os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017")
os.environ.setdefault("DB_NAME", "bakery_pos_test")
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("ALGORITHM", "HS256")
os.environ.setdefault("TIMEZONE", "Asia/Kolkata")

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from bakery_pos.core.security import create_access_token
from bakery_pos.db import get_db
from bakery_pos.models.catalog import ItemDB
from bakery_pos.models.sale import CartLine, Sale, SaleStatus
from bakery_pos.services.catalog import CatalogAccess
from bakery_pos.services.sync_status import SyncStatusRegistry
from bakery_pos.store import RecordStore
from main import app

OWNER = "owner-a"
OTHER_OWNER = "owner-b"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def db():
    return AsyncMongoMockClient()["bakery_pos_test"]


@pytest.fixture
def store(db):
    return RecordStore(db, OWNER)


@pytest.fixture
def catalog(store):
    return CatalogAccess(store)


@pytest.fixture
def client(db):
    """Test client whose requests are made as OWNER."""
    app.dependency_overrides[get_db] = lambda: db
    app.state.sync = SyncStatusRegistry()
    with TestClient(app) as test_client:
        test_client.headers["Authorization"] = f"Bearer {create_access_token(OWNER)}"
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def other_headers():
    return {"Authorization": f"Bearer {create_access_token(OTHER_OWNER)}"}


@pytest.fixture
def menu():
    return [
        ItemDB(id="bun", name="Bun", unit_price=Decimal("10")),
        ItemDB(id="loaf", name="Loaf", unit_price=Decimal("50")),
        ItemDB(id="rusk", name="Rusk", unit_price=Decimal("12.50")),
    ]


def make_sale(sale_id, created_at, lines, status=SaleStatus.saved, bakery_name="Sunrise Bakery"):
    """Build a Sale from (name, qty, unit_price) tuples."""
    items = [
        CartLine(
            item_id=name.lower(),
            name=name,
            qty=qty,
            unit_price=Decimal(price),
            amount=Decimal(price) * qty,
        )
        for name, qty, price in lines
    ]
    return Sale(
        id=sale_id,
        bakery_id="b1",
        bakery_name=bakery_name,
        bakery_phone="9000000001",
        items=items,
        total_amount=sum((line.amount for line in items), Decimal("0")),
        created_at=created_at,
        status=status,
    )


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)
