import pytest
from fastapi.testclient import TestClient

from sales_agent.app.dependencies.store import get_store
from sales_agent.app.main import app
from sales_agent.app.storage.memory import MemoryStore

client = TestClient(app)


@pytest.fixture(autouse=True)
def memory_store():
    store = MemoryStore()
    store.initialize()
    app.dependency_overrides[get_store] = lambda: store
    yield store
    app.dependency_overrides.clear()


def test_read_root():
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"app": "Sales Agent backend", "status": "ok"}


def test_health_check():
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["database"] == "memory"
    assert data["timestamp"].endswith("Z")


def test_cors_allows_local_dashboard_origin():
    response = client.get("/", headers={"Origin": "http://localhost:3000"})
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
