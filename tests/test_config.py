# tests/test_config.py
import logging

import pytest

from captchagate import create_app
from captchagate.config import ALLOWED_ORIGINS, GateConfig, configure_logging
from captchagate.errors import ConfigurationError

ENV_VARS = [
    "RECAPTCHA_SECRET_KEY",
    "SHOPIFY_ADMIN_ACCESS_TOKEN",
    "SHOPIFY_SHOP_DOMAIN",
    "BOOKING_DATA_ENABLED",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_from_env_reads_settings(monkeypatch):
    monkeypatch.setenv("RECAPTCHA_SECRET_KEY", "s3cret")
    monkeypatch.setenv("SHOPIFY_ADMIN_ACCESS_TOKEN", "shpat")
    monkeypatch.setenv("SHOPIFY_SHOP_DOMAIN", "shop.myshopify.com")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    config = GateConfig.from_env(dotenv=False)
    assert config.recaptcha_secret_key == "s3cret"
    assert config.shopify_access_token == "shpat"
    assert config.shopify_shop_domain == "shop.myshopify.com"
    assert config.booking_data_enabled is True
    assert config.allowed_origins == ALLOWED_ORIGINS
    assert config.min_score == 0.5
    assert config.log_level == "DEBUG"
    config.validate()


def test_empty_secret_counts_as_missing(monkeypatch):
    monkeypatch.setenv("RECAPTCHA_SECRET_KEY", "")
    config = GateConfig.from_env(dotenv=False)
    assert config.recaptcha_secret_key is None
    with pytest.raises(ConfigurationError) as excinfo:
        config.validate()
    assert "RECAPTCHA_SECRET_KEY" in str(excinfo.value)
    assert excinfo.value.message == "Server configuration error"


def test_missing_shopify_settings_fail_when_enabled(monkeypatch):
    monkeypatch.setenv("RECAPTCHA_SECRET_KEY", "s3cret")
    monkeypatch.setenv("SHOPIFY_SHOP_DOMAIN", "shop.myshopify.com")
    with pytest.raises(ConfigurationError):
        GateConfig.from_env(dotenv=False).validate()


def test_shopify_settings_optional_when_disabled(monkeypatch):
    monkeypatch.setenv("RECAPTCHA_SECRET_KEY", "s3cret")
    monkeypatch.setenv("BOOKING_DATA_ENABLED", "false")
    config = GateConfig.from_env(dotenv=False)
    assert config.booking_data_enabled is False
    config.validate()


def test_unknown_log_level_falls_back_to_info(fake_http):
    app = create_app(
        GateConfig(recaptcha_secret_key="s", booking_data_enabled=False, log_level="VERBOSE")
    )
    assert logging.getLogger("captchagate").level == logging.INFO
    r = app.test_client().options("/api/verify-captcha")
    assert r.status_code == 200


def test_known_log_level_is_applied():
    configure_logging("debug")
    assert logging.getLogger("captchagate").level == logging.DEBUG
    configure_logging("INFO")
