"""Shared test fixtures and configuration."""
import os
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

# Set test environment variables before importing app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DASHBOARD_PASSWORD", "testpass123")
os.environ.setdefault("RESTAURANT_NAME", "Test Pizzeria")
os.environ.setdefault("CART_STORAGE_DIR", tempfile.mkdtemp(prefix="cart-storage-"))

from pizzeria.main import app
from pizzeria.api import auth
from pizzeria.core.config import Settings
from pizzeria.core.dependencies import get_cart_registry, get_catalog_repository
from pizzeria.db.database import get_db
from pizzeria.db.models import Base
from pizzeria.services.cart.ledger import Cart
from pizzeria.services.cart.registry import CartRegistry
from pizzeria.services.cart.storage import InMemoryCartStorage
from pizzeria.services.catalog.repository import CatalogRepository
from pizzeria.services.catalog.yaml_catalog import YamlCatalogProvider
from pizzeria.services.ordering.pricing import PriceCalculator
from pizzeria.services.ordering.validator import ConfigurationValidator


@pytest.fixture
def test_settings():
    """Override settings for testing."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        restaurant_name="Test Pizzeria",
        dashboard_password="testpass123",
        whatsapp_number="+4915100000000",
    )


@pytest.fixture
def test_menu_path():
    """Return path to test catalog YAML file."""
    return Path(__file__).parent / "fixtures" / "test_menu.yaml"


@pytest.fixture
def catalog_repository(test_menu_path):
    """Create catalog repository with test data."""
    return CatalogRepository(YamlCatalogProvider(catalog_file=str(test_menu_path)))


@pytest.fixture
def catalog(catalog_repository):
    return catalog_repository.get_catalog()


@pytest.fixture
def menu_item(catalog_repository):
    """Look up a test catalog item by id."""
    def _menu_item(item_id):
        item = catalog_repository.get_item(item_id)
        assert item is not None, f"test catalog has no item {item_id}"
        return item
    return _menu_item


@pytest.fixture
def validator(catalog):
    return ConfigurationValidator(catalog)


@pytest.fixture
def calculator(catalog):
    return PriceCalculator(catalog)


@pytest.fixture
def cart_storage():
    return InMemoryCartStorage()


@pytest.fixture
def cart(calculator, cart_storage):
    """Empty cart backed by in-memory storage."""
    return Cart(calculator, storage=cart_storage)


@pytest.fixture
async def test_db_engine(tmp_path):
    """Create test database engine on a file database."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        poolclass=NullPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def test_db(test_db_engine):
    """Create test database session."""
    async_session = async_sessionmaker(
        test_db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session


@pytest.fixture
def override_get_db(tmp_path):
    """Override get_db with sessions on a per-test file database.

    The TestClient runs requests on its own event loop, so every request
    opens a fresh connection (NullPool) instead of sharing one.
    """
    db_file = tmp_path / "api.db"
    sync_engine = create_engine(f"sqlite:///{db_file}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()

    engine = create_async_engine(f"sqlite+aiosqlite:///{db_file}", poolclass=NullPool)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def _override_get_db():
        async with session_factory() as session:
            yield session

    return _override_get_db


@pytest.fixture
def cart_registry(calculator):
    """Cart registry with in-memory storage."""
    return CartRegistry(calculator, storage=InMemoryCartStorage())


@pytest.fixture
def test_client(override_get_db, catalog_repository, cart_registry, test_settings, monkeypatch):
    """Create FastAPI test client with overrides."""
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_catalog_repository] = lambda: catalog_repository
    app.dependency_overrides[get_cart_registry] = lambda: cart_registry

    monkeypatch.setattr("pizzeria.api.auth.settings", test_settings)
    monkeypatch.setattr("pizzeria.api.checkout.settings", test_settings)

    client = TestClient(app)

    yield client

    app.dependency_overrides.clear()


@pytest.fixture
def authenticated_client(test_client, test_settings):
    """Create test client with a valid admin session cookie."""
    response = test_client.post(
        "/api/auth/login",
        json={"password": test_settings.dashboard_password}
    )
    assert response.status_code == 200

    return test_client


@pytest.fixture(autouse=True)
def clean_auth_sessions():
    """Clean up admin sessions before and after tests."""
    auth._sessions.clear()
    yield
    auth._sessions.clear()
