import pytest
from fastapi.testclient import TestClient

from tasktracker.config import Settings
from tasktracker.main import create_app
from tasktracker.store import MemoryTaskStore, SqlTaskStore

ORIGIN = "http://localhost:3000"


@pytest.fixture(params=["memory", "sql"])
def store(request):
    """Each store test runs against both backends."""
    if request.param == "memory":
        task_store = MemoryTaskStore()
    else:
        task_store = SqlTaskStore("sqlite://")
    yield task_store
    task_store.close()


@pytest.fixture()
def settings():
    return Settings(allowed_origin=ORIGIN, task_store_backend="memory", log_level="DEBUG")


@pytest.fixture()
def client(settings):
    app = create_app(store=MemoryTaskStore(), settings=settings)
    with TestClient(app) as test_client:
        yield test_client
