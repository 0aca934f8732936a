"""Pytest configuration and fixtures for unit tests."""

import pytest

from src.core import db_client
from src.core.config import settings
from tests.unit.mocks import InMemoryDBClient


@pytest.fixture
def in_memory_db():
    """Provides a fresh InMemoryDBClient for each test."""
    return InMemoryDBClient()


@pytest.fixture
def patched_db(monkeypatch, in_memory_db):
    """Patches src.core.db_client read functions to use InMemoryDBClient."""
    monkeypatch.setattr("src.core.db_client.create_record", in_memory_db.create_record)
    monkeypatch.setattr("src.core.db_client.get_record", in_memory_db.get_record)
    monkeypatch.setattr("src.core.db_client.list_records", in_memory_db.list_records)
    monkeypatch.setattr("src.core.db_client.fetch_pet", in_memory_db.fetch_pet)
    monkeypatch.setattr("src.core.db_client.fetch_all", in_memory_db.fetch_all)

    return in_memory_db


@pytest.fixture
async def sqlite_db(monkeypatch, tmp_path):
    """Points the real SQLite client at a fresh database file and creates the schema."""
    monkeypatch.setattr(settings, "sqlite_db_path", str(tmp_path / "pawledger_test.db"))
    await db_client.init_db()
    yield db_client
    await db_client.close_connection()
