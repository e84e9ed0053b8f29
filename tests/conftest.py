"""Shared fixtures: an in-memory SQLite catalog and an API client bound to it."""

from collections.abc import Callable, Iterator
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine, create_engine, text
from sqlalchemy.pool import StaticPool

from catalog_api.catalog.repository import CatalogRepository
from catalog_api.infrastructure.database import (
    ConnectionProvider,
    get_connection_provider,
    register_unicode_upper,
)
from catalog_api.main import app

SCHEMA = (
    "CREATE TABLE categories (id INTEGER PRIMARY KEY, name TEXT NOT NULL)",
    "CREATE TABLE brands (id INTEGER PRIMARY KEY, name TEXT NOT NULL)",
    "CREATE TABLE products ("
    " id INTEGER PRIMARY KEY,"
    " name TEXT NOT NULL,"
    " description TEXT,"
    " category_id INTEGER REFERENCES categories(id),"
    " brand_id INTEGER REFERENCES brands(id))",
)

CATEGORIES = [
    {"id": 1, "name": "Phones"},
    {"id": 2, "name": "Accessories"},
    {"id": 3, "name": "Laptops"},
]

BRANDS = [
    {"id": 1, "name": "Acme"},
    {"id": 2, "name": "Globex"},
]

PRODUCTS = [
    {"id": 1, "name": "Red Phone", "description": "A red smartphone", "category_id": 1, "brand_id": 1},
    {"id": 2, "name": "Blue Case", "description": None, "category_id": 2, "brand_id": 2},
    {"id": 3, "name": "Green Phone", "description": "Budget phone", "category_id": 1, "brand_id": 2},
    {"id": 4, "name": "Orphan Widget", "description": None, "category_id": None, "brand_id": None},
    {"id": 5, "name": "100% Cotton Sleeve", "description": "Laptop sleeve", "category_id": 3, "brand_id": None},
]


def _create_schema(engine: Engine) -> None:
    with engine.begin() as conn:
        for statement in SCHEMA:
            conn.execute(text(statement))


def _insert_rows(engine: Engine, table: str, rows: list[dict[str, Any]]) -> None:
    if not rows:
        return
    columns = ", ".join(rows[0])
    values = ", ".join(f":{column}" for column in rows[0])
    with engine.begin() as conn:
        conn.execute(text(f"INSERT INTO {table} ({columns}) VALUES ({values})"), rows)


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
def engine_factory() -> Iterator[Callable[..., Engine]]:
    """Build SQLite engines with the catalog schema and Unicode UPPER.

    Keyword arguments go to ``create_engine``. Every engine built is
    disposed after the test.
    """
    engines: list[Engine] = []

    def _make(url: str = "sqlite://", **options: Any) -> Engine:
        engine = create_engine(url, **options)
        register_unicode_upper(engine)
        engines.append(engine)
        _create_schema(engine)
        return engine

    yield _make
    for engine in engines:
        engine.dispose()


@pytest.fixture
def insert_rows() -> Callable[[Engine, str, list[dict[str, Any]]], None]:
    """Insert rows into a catalog table of a given engine."""
    return _insert_rows


@pytest.fixture
def engine(engine_factory: Callable[..., Engine]) -> Engine:
    """Create an empty in-memory catalog shared across threads."""
    return engine_factory(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


@pytest.fixture
def seeded_engine(engine: Engine) -> Engine:
    """Catalog with the sample categories, brands, and products."""
    _insert_rows(engine, "categories", CATEGORIES)
    _insert_rows(engine, "brands", BRANDS)
    _insert_rows(engine, "products", PRODUCTS)
    return engine


@pytest.fixture
def make_products(engine: Engine) -> Callable[[list[dict[str, Any]]], None]:
    """Insert arbitrary products into the empty catalog."""

    def _make(rows: list[dict[str, Any]]) -> None:
        _insert_rows(
            engine,
            "products",
            [{"description": None, "category_id": None, "brand_id": None, **row} for row in rows],
        )

    return _make


@pytest.fixture
def provider(engine: Engine) -> ConnectionProvider:
    """Connection provider over the test engine."""
    return ConnectionProvider(engine)


@pytest.fixture
def repository(seeded_engine: Engine) -> CatalogRepository:
    """Repository over the seeded catalog."""
    return CatalogRepository(ConnectionProvider(seeded_engine))


# ============================================================================
# Client Fixtures
# ============================================================================


@pytest.fixture
def client(provider: ConnectionProvider) -> Iterator[TestClient]:
    """Create test client bound to the test database.

    Rows are inserted by whichever database fixture the test requests.
    """
    app.dependency_overrides[get_connection_provider] = lambda: provider
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def seeded_client(seeded_engine: Engine, client: TestClient) -> TestClient:
    """Test client over the seeded catalog."""
    return client
