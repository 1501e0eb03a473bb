import pytest

from sales_agent.app.core.errors import ConfigurationError
from sales_agent.app.core.settings import Settings, get_settings, reset_settings
from sales_agent.app.storage.factory import build_store
from sales_agent.app.storage.json_file import JsonFileStore
from sales_agent.app.storage.memory import MemoryStore
from sales_agent.app.storage.sql import SqlStore

ENV_VARS = [
    "APP_ENV",
    "NODE_ENV",
    "STORAGE_BACKEND",
    "DATA_DIR",
    "DATABASE_URL",
    "JSON_DB_PATH",
    "HOST",
    "PORT",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


def test_settings_defaults():
    settings = Settings()
    assert settings.app_name == "Sales Agent"
    assert settings.environment == "development"
    assert settings.storage_backend == "sqlite"
    assert settings.database_url.startswith("sqlite:///")
    assert settings.database_url.endswith("sales-agent.db")
    assert settings.json_path.endswith("sales-agent.json")
    assert settings.host == "0.0.0.0"
    assert settings.port == 3001
    assert settings.cors_origins == ["http://localhost:3000", "http://127.0.0.1:3000"]


def test_settings_read_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("NODE_ENV", "production")
    monkeypatch.setenv("STORAGE_BACKEND", "JSON")
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    monkeypatch.setenv("PORT", "8080")

    settings = Settings()
    assert settings.is_production
    assert settings.cors_origins == ["*"]
    assert settings.storage_backend == "json"
    assert settings.json_path.startswith(str(tmp_path))
    assert settings.port == 8080


def test_app_env_takes_precedence_over_node_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "staging")
    monkeypatch.setenv("NODE_ENV", "production")
    assert Settings().environment == "staging"


def test_unknown_backend_rejected(monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "redis")
    with pytest.raises(ConfigurationError):
        Settings()


def test_get_settings_is_cached_until_reset(monkeypatch):
    first = get_settings()
    assert get_settings() is first
    monkeypatch.setenv("PORT", "9000")
    reset_settings()
    assert get_settings().port == 9000


def test_build_store_picks_backend(monkeypatch, tmp_path):
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    assert isinstance(build_store(Settings()), MemoryStore)

    monkeypatch.setenv("STORAGE_BACKEND", "json")
    monkeypatch.setenv("JSON_DB_PATH", str(tmp_path / "db.json"))
    assert isinstance(build_store(Settings()), JsonFileStore)

    monkeypatch.setenv("STORAGE_BACKEND", "sqlite")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'db.sqlite'}")
    store = build_store(Settings())
    assert isinstance(store, SqlStore)
    assert store.backend_name == "sqlite"
    store.close()


def test_postgres_backend_requires_server_url(monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "postgres")
    with pytest.raises(ConfigurationError):
        build_store(Settings())
