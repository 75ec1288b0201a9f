"""Runtime configuration, read from ``SHOPHUB_*`` environment variables.

A ``.env`` file in the working directory is honoured (python-dotenv) but
real environment variables win.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv

# Resolve the default data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_FILE = Path(__file__).resolve().parents[3] / "data" / "shophub.json"


_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


def _flag_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a yes/no flag, got {raw!r}")


def _int_env(name: str, default: int) -> int:
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    try:
        return int(val)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {val!r}") from exc


@dataclass(frozen=True)
class Settings:
    data_file: Path = _DEFAULT_DATA_FILE
    currency: str = "INR"
    hold_ttl_seconds: int = 900
    sweep_interval_seconds: int = 60

    smtp_host: str = ""
    smtp_port: int = 587
    smtp_username: str = ""
    smtp_password: str = ""
    smtp_from: str = "no-reply@shophub.local"
    smtp_use_tls: bool = True
    notifier_workers: int = 2

    log_level: str = "INFO"
    log_json: bool = False

    @property
    def hold_ttl(self) -> timedelta:
        return timedelta(seconds=self.hold_ttl_seconds)

    @property
    def sweep_enabled(self) -> bool:
        return self.sweep_interval_seconds > 0

    @property
    def email_enabled(self) -> bool:
        return bool(self.smtp_host)

    @staticmethod
    def from_env(dotenv: bool = True) -> Settings:
        if dotenv:
            load_dotenv(override=False)
        return Settings(
            data_file=Path(os.getenv("SHOPHUB_DATA_FILE") or _DEFAULT_DATA_FILE),
            currency=os.getenv("SHOPHUB_CURRENCY", "INR").strip().upper(),
            hold_ttl_seconds=_int_env("SHOPHUB_HOLD_TTL_SECONDS", 900),
            sweep_interval_seconds=_int_env("SHOPHUB_SWEEP_INTERVAL_SECONDS", 60),
            smtp_host=os.getenv("SHOPHUB_SMTP_HOST", "").strip(),
            smtp_port=_int_env("SHOPHUB_SMTP_PORT", 587),
            smtp_username=os.getenv("SHOPHUB_SMTP_USERNAME", ""),
            smtp_password=os.getenv("SHOPHUB_SMTP_PASSWORD", ""),
            smtp_from=os.getenv("SHOPHUB_SMTP_FROM", "no-reply@shophub.local"),
            smtp_use_tls=_flag_env("SHOPHUB_SMTP_USE_TLS", True),
            notifier_workers=_int_env("SHOPHUB_NOTIFIER_WORKERS", 2),
            log_level=os.getenv("SHOPHUB_LOG_LEVEL", "INFO").strip().upper(),
            log_json=_flag_env("SHOPHUB_LOG_JSON", False),
        )
