import pytest
from fastapi.testclient import TestClient

from aurora_library_api.app.core.config import Settings
from aurora_library_api.app.core.storage import InMemoryBookStorage
from aurora_library_api.app.main import create_app


@pytest.fixture
def test_settings():
    return Settings(environment="production", log_level="WARNING", init_data_file=False)


@pytest.fixture
def storage():
    return InMemoryBookStorage()


@pytest.fixture
def app(test_settings, storage):
    return create_app(settings=test_settings, storage=storage)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
