"""Application Configuration: defaults and URL normalization."""

from results_service.config import Settings


def test_postgres_url_gets_async_driver():
    settings = Settings(database_url="postgresql://u:p@host:5432/db")
    assert settings.database_url == "postgresql+asyncpg://u:p@host:5432/db"


def test_other_urls_untouched():
    settings = Settings(database_url="sqlite+aiosqlite:///:memory:")
    assert settings.database_url == "sqlite+aiosqlite:///:memory:"


def test_timeout_configurable(monkeypatch):
    monkeypatch.setenv("DATABASE_OPERATION_TIMEOUT_SECONDS", "2.5")
    assert Settings().database_operation_timeout_seconds == 2.5
