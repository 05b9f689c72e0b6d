"""
Tests for settings parsing and production checks
"""
import pytest
from pydantic import ValidationError

from app.core.config import DEFAULT_ADMIN_PASSWORD, Settings

PROD_SECRET = "s" * 32


def _settings(**overrides) -> Settings:
    values = {"DATABASE_URL": "postgresql://hrms@db/hrms", "JWT_SECRET_KEY": "dev-secret"}
    values.update(overrides)
    return Settings(**values)


def _prod(**overrides) -> Settings:
    values = {
        "APP_ENV": "prod",
        "JWT_SECRET_KEY": PROD_SECRET,
        "ALLOWED_ORIGINS": "https://hr.example.com",
        "INITIAL_ADMIN_PASSWORD": "rotated-admin-secret",
        "SEED_ON_STARTUP": True,
    }
    values.update(overrides)
    return _settings(**values)


def test_prod_settings_pass_when_hardened():
    _prod().validate_production()


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"ALLOWED_ORIGINS": "*"}, "ALLOWED_ORIGINS"),
        ({"JWT_SECRET_KEY": "short"}, "JWT_SECRET_KEY"),
        ({"INITIAL_ADMIN_PASSWORD": DEFAULT_ADMIN_PASSWORD}, "INITIAL_ADMIN_PASSWORD"),
    ],
)
def test_prod_settings_rejected(overrides, field):
    with pytest.raises(ValueError, match=field):
        _prod(**overrides).validate_production()


def test_stock_admin_password_allowed_when_seeding_disabled():
    _prod(INITIAL_ADMIN_PASSWORD=DEFAULT_ADMIN_PASSWORD, SEED_ON_STARTUP=False).validate_production()


def test_local_env_skips_production_checks():
    settings = _settings(APP_ENV="local", ALLOWED_ORIGINS="*", JWT_SECRET_KEY="k")
    settings.validate_production()
    assert settings.get_allowed_origins_list() == ["*"]


def test_origins_split_on_commas():
    settings = _settings(ALLOWED_ORIGINS=" https://a.example.com ,https://b.example.com,")
    assert settings.get_allowed_origins_list() == ["https://a.example.com", "https://b.example.com"]


@pytest.mark.parametrize(
    "overrides",
    [{"APP_ENV": "production"}, {"LOG_LEVEL": "verbose"}, {"API_PREFIX": "api"}],
)
def test_invalid_values_rejected(overrides):
    with pytest.raises(ValidationError):
        _settings(**overrides)


def test_normalized_values():
    settings = _settings(LOG_LEVEL="debug", API_PREFIX="/api/v2/")
    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.API_PREFIX == "/api/v2"
    assert not settings.is_sqlite
    assert _settings(DATABASE_URL="sqlite:///./hrms.db").is_sqlite


def test_defaults():
    settings = _settings()
    assert settings.API_PREFIX == "/api"
    assert (settings.DEFAULT_PER_PAGE, settings.MAX_PER_PAGE) == (15, 100)
    assert settings.STORAGE_DEFAULT_REGION == "us-east-1"
