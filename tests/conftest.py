import pytest
from fastapi.testclient import TestClient

from app.core import Settings
from app.stores import JsonFileStore, SqlStore
from main import create_app


@pytest.fixture()
def file_store(tmp_path):
    return JsonFileStore(str(tmp_path / "data"))


@pytest.fixture()
def sql_store():
    store = SqlStore("sqlite+pysqlite:///:memory:")
    try:
        yield store
    finally:
        store.close()


@pytest.fixture(params=["file", "sql"])
def store(request, tmp_path):
    """Every service and API test runs against both backends"""
    if request.param == "file":
        yield JsonFileStore(str(tmp_path / "data"))
        return

    store = SqlStore("sqlite+pysqlite:///:memory:")
    try:
        yield store
    finally:
        store.close()


@pytest.fixture()
def app_settings():
    return Settings(DATABASE_URL="sqlite+pysqlite:///:memory:")


@pytest.fixture()
def client(store, app_settings):
    return TestClient(create_app(store=store, settings=app_settings))
