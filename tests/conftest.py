"""
Pytest configuration and fixtures for stockbook tests.
"""
import os
from datetime import datetime, timezone

import pytest

# Keep the AI adapter offline unless a test provides a client.
os.environ.pop("OPENAI_API_KEY", None)
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from stockbook.repositories.blob_repository import InMemoryBlobRepository
from stockbook.schemas import ProductCreate
from stockbook.services.inventory_service import InventoryService
from stockbook.services.persistence import PersistenceGateway


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def widget_draft() -> ProductCreate:
    return ProductCreate(
        name="Widget",
        sku="WID-001",
        category="Papelaria",
        price=100,
        quantity=10,
        min_stock=2,
    )


@pytest.fixture
def blob_store() -> InMemoryBlobRepository:
    return InMemoryBlobRepository()


@pytest.fixture
def gateway(blob_store) -> PersistenceGateway:
    return PersistenceGateway(blob_store, seed_catalog=False)


@pytest.fixture
def service(gateway) -> InventoryService:
    return InventoryService(gateway)
