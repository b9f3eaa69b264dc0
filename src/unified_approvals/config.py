"""Configuration management for the unified approvals engine."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

_config_logger = logging.getLogger(__name__)


class LoggingSettings(BaseModel):
    level: str = Field(default="INFO", description="Python logging level name")
    file: str | None = Field(default=None, description="Optional log file path")


class PolicySettings(BaseModel):
    path: str = Field(default="./policy.yaml")


class DisplaySettings(BaseModel):
    currency: str = Field(default="USD", min_length=3, max_length=3)
    date_format: Literal["locale", "iso"] = Field(
        default="locale",
        description="Form used for approval stamps: locale (M/D/YYYY) or iso (YYYY-MM-DD).",
    )

    @field_validator("currency")
    @classmethod
    def _upper_currency(cls, value: str) -> str:
        return value.upper()


class AccessSettings(BaseModel):
    allow_multi_user: bool = Field(
        default=False,
        description=(
            "If False, only the first acting user bound in this process may act. "
            "Set True to allow switching acting users."
        ),
    )


class Settings(BaseModel):
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    policy: PolicySettings = Field(default_factory=PolicySettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    access: AccessSettings = Field(default_factory=AccessSettings)


ENV_KEYS = {
    "log_level": "LOG_LEVEL",
    "log_file": "LOG_FILE",
    "policy_path": "APPROVALS_POLICY_PATH",
    "currency": "APPROVALS_CURRENCY",
    "date_format": "APPROVALS_DATE_FORMAT",
    "allow_multi_user": "APPROVALS_ALLOW_MULTI_USER",
}

_TRUE_VALUES = frozenset({"1", "true", "yes"})
_FALSE_VALUES = frozenset({"0", "false", "no"})


def _project_root() -> Path:
    return Path(__file__).resolve().parents[2]


def _resolve_path(path: str) -> str:
    candidate = Path(path)
    if candidate.is_absolute():
        return str(candidate.resolve())
    return str((_project_root() / candidate).resolve())


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    _config_logger.warning(
        "Invalid boolean value for %s: %r, using default %s", key, value, default
    )
    return default


def load_settings() -> Settings:
    """Load configuration and cache the result."""

    return _load_settings_cached()


@lru_cache(maxsize=1)
def _load_settings_cached() -> Settings:
    load_dotenv(dotenv_path=_project_root() / ".env")
    log_file_env = os.getenv(ENV_KEYS["log_file"])

    settings_data: dict[str, object] = {
        "logging": {
            "level": os.getenv(ENV_KEYS["log_level"], LoggingSettings().level),
            "file": _resolve_path(log_file_env) if log_file_env else None,
        },
        "policy": {
            "path": _resolve_path(os.getenv(ENV_KEYS["policy_path"], PolicySettings().path)),
        },
        "display": {
            "currency": os.getenv(ENV_KEYS["currency"], DisplaySettings().currency),
            "date_format": os.getenv(ENV_KEYS["date_format"], DisplaySettings().date_format),
        },
        "access": {
            "allow_multi_user": _env_bool(
                ENV_KEYS["allow_multi_user"], AccessSettings().allow_multi_user
            ),
        },
    }

    try:
        settings = Settings.model_validate(settings_data)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid configuration: {exc}") from exc

    return settings
