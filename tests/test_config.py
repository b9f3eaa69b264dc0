from __future__ import annotations

import pytest

from unified_approvals import config


@pytest.fixture
def clean_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(config, "load_dotenv", lambda **_: None)
    for key in config.ENV_KEYS.values():
        monkeypatch.delenv(key, raising=False)
    config._load_settings_cached.cache_clear()
    yield
    config._load_settings_cached.cache_clear()


def test_resolve_path_absolute_is_kept(tmp_path) -> None:
    target = tmp_path / "policy.yaml"
    assert config._resolve_path(str(target)) == str(target.resolve())


def test_resolve_path_relative_to_project_root() -> None:
    resolved = config._resolve_path("./policy.yaml")
    assert resolved == str((config._project_root() / "policy.yaml").resolve())


@pytest.mark.parametrize(("raw", "expected"), [("true", True), ("YES", True), ("0", False)])
def test_env_bool_parses_values(monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool) -> None:
    monkeypatch.setenv("TEST_BOOL_VALUE", raw)
    assert config._env_bool("TEST_BOOL_VALUE", not expected) is expected


def test_env_bool_uses_default_for_blank(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TEST_BOOL_VALUE", "  ")
    assert config._env_bool("TEST_BOOL_VALUE", True) is True


def test_env_bool_invalid_value_returns_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TEST_BOOL_INVALID", "maybe")
    assert config._env_bool("TEST_BOOL_INVALID", False) is False


def test_defaults(clean_settings) -> None:
    settings = config.load_settings()

    assert settings.logging.level == "INFO"
    assert settings.logging.file is None
    assert settings.policy.path == str((config._project_root() / "policy.yaml").resolve())
    assert settings.display.currency == "USD"
    assert settings.display.date_format == "locale"
    assert settings.access.allow_multi_user is False


def test_environment_overrides(clean_settings, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APPROVALS_CURRENCY", "eur")
    monkeypatch.setenv("APPROVALS_DATE_FORMAT", "iso")
    monkeypatch.setenv("APPROVALS_ALLOW_MULTI_USER", "true")

    settings = config.load_settings()

    assert settings.display.currency == "EUR"
    assert settings.display.date_format == "iso"
    assert settings.access.allow_multi_user is True


def test_settings_are_cached(clean_settings) -> None:
    assert config.load_settings() is config.load_settings()


def test_load_settings_raises_runtime_error_on_validation(
    clean_settings, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("APPROVALS_DATE_FORMAT", "julian")

    with pytest.raises(RuntimeError, match="Invalid configuration"):
        config.load_settings()
