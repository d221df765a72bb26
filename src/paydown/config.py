"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    """Read a positive integer from the environment, falling back to ``default``."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        parsed = int(value.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}.") from exc
    if parsed <= 0:
        raise ValueError(f"{name} must be greater than zero.")
    return parsed


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "paydown"
    LOG_FILENAME = "paydown.log"
    DEFAULT_MAX_MONTHS = 600
    DEFAULT_RUNWAY_HORIZON = 120

    def __init__(self) -> None:
        self.DEV_MODE = _env_bool("PAYDOWN_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()
        self.MAX_MONTHS = _env_int("PAYDOWN_MAX_MONTHS", self.DEFAULT_MAX_MONTHS)
        self.RUNWAY_HORIZON = _env_int("PAYDOWN_RUNWAY_HORIZON", self.DEFAULT_RUNWAY_HORIZON)

    def _resolve_data_dir(self) -> Path:
        """Return the directory where logs and exports live."""

        data_root = os.getenv("PAYDOWN_DATA_DIR", "instance")
        base_path = Path(data_root).expanduser()
        try:
            path = base_path.resolve()
            path.mkdir(parents=True, exist_ok=True)
            return path
        except PermissionError:
            # Protected install locations fall back to user-local storage.
            fallback_path = Path.home() / f".{self.APP_NAME}"
            fallback_path.mkdir(parents=True, exist_ok=True)
            return fallback_path.resolve()

    @property
    def export_dir(self) -> Path:
        return Path(self.DATA_DIR) / "exports"


class DevConfig(BaseConfig):
    """Development configuration."""

    DEBUG = True
    TESTING = False
