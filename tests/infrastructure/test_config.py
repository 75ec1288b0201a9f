"""Tests for environment-driven settings and container wiring."""

from datetime import timedelta
from pathlib import Path

import pytest

from shophub.infrastructure.bootstrap import build_container, build_notifier
from shophub.infrastructure.config import Settings
from shophub.infrastructure.notifications.background_notifier import BackgroundNotifier
from shophub.infrastructure.notifications.smtp_notifier import LogOnlyNotifier, SmtpOrderNotifier
from shophub.infrastructure.persistence.json_storage import JsonStorage


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in (
            "SHOPHUB_CURRENCY",
            "SHOPHUB_HOLD_TTL_SECONDS",
            "SHOPHUB_SMTP_HOST",
            "SHOPHUB_SWEEP_INTERVAL_SECONDS",
        ):
            monkeypatch.delenv(name, raising=False)
        settings = Settings.from_env(dotenv=False)
        assert settings.currency == "INR"
        assert settings.hold_ttl == timedelta(minutes=15)
        assert settings.email_enabled is False
        assert settings.sweep_interval_seconds == 60
        assert settings.sweep_enabled is True

    def test_reads_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SHOPHUB_DATA_FILE", str(tmp_path / "d.json"))
        monkeypatch.setenv("SHOPHUB_CURRENCY", "usd")
        monkeypatch.setenv("SHOPHUB_HOLD_TTL_SECONDS", "60")
        monkeypatch.setenv("SHOPHUB_SMTP_HOST", "smtp.example.com")
        monkeypatch.setenv("SHOPHUB_SMTP_USE_TLS", "no")
        monkeypatch.setenv("SHOPHUB_LOG_JSON", "true")
        monkeypatch.setenv("SHOPHUB_SWEEP_INTERVAL_SECONDS", "0")

        settings = Settings.from_env(dotenv=False)

        assert settings.data_file == Path(tmp_path / "d.json")
        assert settings.currency == "USD"
        assert settings.hold_ttl == timedelta(seconds=60)
        assert settings.email_enabled is True
        assert settings.smtp_use_tls is False
        assert settings.log_json is True
        assert settings.sweep_enabled is False

    def test_bad_flag(self, monkeypatch):
        monkeypatch.setenv("SHOPHUB_SMTP_USE_TLS", "sometimes")
        with pytest.raises(ValueError, match="SHOPHUB_SMTP_USE_TLS must be a yes/no flag"):
            Settings.from_env(dotenv=False)

    def test_flag_is_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("SHOPHUB_LOG_JSON", " ON ")
        assert Settings.from_env(dotenv=False).log_json is True

    def test_bad_integer(self, monkeypatch):
        monkeypatch.setenv("SHOPHUB_SMTP_PORT", "twenty-five")
        with pytest.raises(ValueError, match="SHOPHUB_SMTP_PORT must be an integer"):
            Settings.from_env(dotenv=False)


class TestBootstrap:

    def test_notifier_without_smtp_only_logs(self):
        notifier = build_notifier(Settings())
        assert isinstance(notifier, BackgroundNotifier)
        assert isinstance(notifier._inner, LogOnlyNotifier)
        notifier.shutdown()

    def test_notifier_with_smtp(self):
        notifier = build_notifier(Settings(smtp_host="smtp.example.com"))
        assert isinstance(notifier._inner, SmtpOrderNotifier)
        notifier.shutdown()

    def test_container_shares_one_storage(self, tmp_path):
        container = build_container(Settings(data_file=tmp_path / "shop.json"))
        try:
            assert isinstance(container.storage, JsonStorage)
            assert container.place_order()._storage is container.storage
            assert container.reconcile()._ttl == timedelta(minutes=15)
        finally:
            container.close()
