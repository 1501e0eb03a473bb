"""Environment-driven settings for the Sales Agent backend."""

import os

from sales_agent.app.core.errors import ConfigurationError

STORAGE_BACKENDS = ("memory", "sqlite", "postgres", "json")

DEV_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]


class Settings:
    def __init__(self):
        self.app_name = "Sales Agent"
        self.api_version = "1.0.0"
        self.environment = os.getenv("APP_ENV") or os.getenv("NODE_ENV") or "development"
        self.storage_backend = (os.getenv("STORAGE_BACKEND") or "sqlite").lower()
        self.data_dir = os.getenv("DATA_DIR") or os.path.join(".", "data")
        self.database_url = os.getenv("DATABASE_URL") or (
            "sqlite:///" + os.path.join(self.data_dir, "sales-agent.db")
        )
        self.json_path = os.getenv("JSON_DB_PATH") or os.path.join(self.data_dir, "sales-agent.json")
        self.host = os.getenv("HOST") or "0.0.0.0"
        self.port = int(os.getenv("PORT") or 3001)
        self.log_level = (os.getenv("LOG_LEVEL") or "INFO").upper()

        if self.storage_backend not in STORAGE_BACKENDS:
            raise ConfigurationError(
                f"Unknown STORAGE_BACKEND '{self.storage_backend}', expected one of {', '.join(STORAGE_BACKENDS)}"
            )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def cors_origins(self) -> list[str]:
        if self.is_production:
            return ["*"]
        return list(DEV_ORIGINS)


_settings_instance = None


def get_settings():
    """Return a singleton Settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings_instance
    _settings_instance = None
