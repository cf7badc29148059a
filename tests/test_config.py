"""Tests for settings parsing."""

from solace.config import DatabaseSettings


def test_plain_postgres_url_gets_async_driver():
    assert DatabaseSettings(url="postgres://u:p@db:5432/solace").url == "postgresql+asyncpg://u:p@db:5432/solace"
    assert DatabaseSettings(url="postgresql://u:p@db/solace").url == "postgresql+asyncpg://u:p@db/solace"


def test_explicit_driver_is_kept():
    url = "sqlite+aiosqlite:///./advocates.db"
    assert DatabaseSettings(url=url).url == url


def test_empty_url_disables_store():
    assert DatabaseSettings(url="").url is None
    assert DatabaseSettings(url="   ").url is None


def test_database_url_env_alias(monkeypatch):
    monkeypatch.delenv("DB_URL", raising=False)
    monkeypatch.setenv("DATABASE_URL", "postgresql://env-host/solace")

    assert DatabaseSettings().url == "postgresql+asyncpg://env-host/solace"
