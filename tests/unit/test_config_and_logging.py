"""Unit tests for settings and structured logging helpers."""

import structlog

from eliterank.config import LifecycleSettings, get_settings
from eliterank.logging_config import (
    bind_transition_context,
    clear_transition_context,
    configure_logging,
    get_logger,
)


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("ELITERANK_RECONCILE_INTERVAL_SECONDS", raising=False)
        settings = LifecycleSettings()
        assert settings.reconcile_interval_seconds == 300
        assert settings.reconcile_enabled is True
        assert settings.log_format == "json"

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("ELITERANK_RECONCILE_INTERVAL_SECONDS", "60")
        monkeypatch.setenv("ELITERANK_RECONCILE_ENABLED", "false")
        settings = LifecycleSettings()
        assert settings.reconcile_interval_seconds == 60
        assert settings.reconcile_enabled is False

    def test_cors_origin_list(self):
        settings = LifecycleSettings(cors_origins="https://a.example, https://b.example,")
        assert settings.cors_origin_list == ["https://a.example", "https://b.example"]

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestDatabaseUrl:
    def test_postgres_scheme_uses_asyncpg(self, monkeypatch):
        from eliterank import database

        monkeypatch.setenv("ELITERANK_DATABASE_URL", "postgres://u:p@db:5432/eliterank")
        get_settings.cache_clear()
        try:
            assert database.get_database_url() == "postgresql+asyncpg://u:p@db:5432/eliterank"
        finally:
            get_settings.cache_clear()


class TestTransitionContext:
    def test_bind_and_clear(self):
        configure_logging(level="DEBUG", json_format=False)
        bind_transition_context("c-1", requested_status="voting", actor="admin")

        context = structlog.contextvars.get_contextvars()
        assert context["competition_id"] == "c-1"
        assert context["requested_status"] == "voting"
        assert context["service"] == "eliterank-lifecycle"

        clear_transition_context()
        context = structlog.contextvars.get_contextvars()
        assert "competition_id" not in context
        assert "requested_status" not in context
        structlog.contextvars.clear_contextvars()

    def test_get_logger(self):
        assert get_logger(__name__) is not None
