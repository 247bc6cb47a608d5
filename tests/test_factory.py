"""Startup backend selection and fallback."""

import mongomock
import pytest

from app.core.config import Settings
from app.core.errors import BackendUnavailableError
from app.core.mongo_client import connect_mongo
from app.database import build_engine
from app.storage import factory
from app.storage.base import StorageBackend
from app.storage.factory import init_storage
from app.storage.memory import MemoryStorage
from app.storage.mongo import MongoStorage
from app.storage.sql import SqlStorage


def make_settings(**overrides) -> Settings:
    values = {"DATABASE_URL": None, "MONGODB_URL": None}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_defaults_to_memory():
    storage = init_storage(make_settings())

    assert isinstance(storage, MemoryStorage)
    assert storage.backend is StorageBackend.MEMORY


def test_database_url_selects_relational():
    storage = init_storage(make_settings(DATABASE_URL="sqlite://"))

    assert isinstance(storage, SqlStorage)
    storage.close()


def test_unreachable_database_falls_back_to_memory():
    settings = make_settings(DATABASE_URL="sqlite:////nonexistent-dir/shop/store.db")

    storage = init_storage(settings)

    assert isinstance(storage, MemoryStorage)


def test_mongodb_url_selects_document_store(monkeypatch):
    monkeypatch.setattr(factory, "connect_mongo", lambda url, timeout: mongomock.MongoClient())

    storage = init_storage(make_settings(MONGODB_URL="mongodb://db:27017"))

    assert isinstance(storage, MongoStorage)
    assert storage.backend is StorageBackend.MONGO


def test_unreachable_mongodb_falls_back_to_memory(monkeypatch):
    def refuse(url, timeout):
        raise BackendUnavailableError("connection refused")

    monkeypatch.setattr(factory, "connect_mongo", refuse)

    storage = init_storage(make_settings(MONGODB_URL="mongodb://db:27017"))

    assert isinstance(storage, MemoryStorage)


def test_mongodb_takes_precedence(monkeypatch):
    monkeypatch.setattr(factory, "connect_mongo", lambda url, timeout: mongomock.MongoClient())

    storage = init_storage(
        make_settings(MONGODB_URL="mongodb://db:27017", DATABASE_URL="sqlite://")
    )

    assert isinstance(storage, MongoStorage)


def test_unparseable_database_url_falls_back_to_memory():
    storage = init_storage(make_settings(DATABASE_URL="not-a-url"))

    assert isinstance(storage, MemoryStorage)


def test_missing_database_driver_falls_back_to_memory():
    storage = init_storage(make_settings(DATABASE_URL="postgresql+nosuchdriver://db/shop"))

    assert isinstance(storage, MemoryStorage)


def test_malformed_mongodb_url_falls_back_to_memory():
    storage = init_storage(make_settings(MONGODB_URL="redis://db:6379"))

    assert isinstance(storage, MemoryStorage)


def test_connect_mongo_reports_bad_uri_as_unavailable():
    with pytest.raises(BackendUnavailableError):
        connect_mongo("mongodb://", timeout_ms=100)


def test_build_engine_reports_bad_url_as_unavailable():
    with pytest.raises(BackendUnavailableError):
        build_engine("not-a-url")
