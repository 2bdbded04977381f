import logging

import pytest
from fastapi.testclient import TestClient

import app.main as main_module
from app.core.config import settings
from app.core.product_tokens import DEVELOPMENT_SECRET, validate_product_token_config
from app.main import app, validate_startup_config

STRONG_SECRET = "k3y-for-tests-only-but-long-enough-0123456789"


@pytest.fixture()
def secure_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "product_token_secret", STRONG_SECRET)
    monkeypatch.setattr(settings, "admin_session_secret", STRONG_SECRET[::-1])
    monkeypatch.setattr(settings, "admin_password_hash", "$argon2id$v=19$placeholder")


@pytest.mark.parametrize("secret", [None, "", DEVELOPMENT_SECRET, "changeme", "short-secret"])
def test_production_refuses_weak_token_secret(
    monkeypatch: pytest.MonkeyPatch, secure_config: None, secret: str | None
) -> None:
    monkeypatch.setattr(settings, "app_env", "production")
    monkeypatch.setattr(settings, "product_token_secret", secret)

    with pytest.raises(RuntimeError, match="PRODUCT_TOKEN_SECRET"):
        validate_startup_config()


def test_staging_refuses_missing_admin_secret(
    monkeypatch: pytest.MonkeyPatch, secure_config: None
) -> None:
    monkeypatch.setattr(settings, "app_env", "staging")
    monkeypatch.setattr(settings, "admin_session_secret", None)

    with pytest.raises(RuntimeError, match="ADMIN_SESSION_SECRET"):
        validate_startup_config()


def test_production_accepts_strong_config(
    monkeypatch: pytest.MonkeyPatch, secure_config: None
) -> None:
    monkeypatch.setattr(settings, "app_env", "production")

    validate_startup_config()


def test_development_only_warns_about_weak_secret(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.WARNING)
    monkeypatch.setattr(settings, "app_env", "development")
    monkeypatch.setattr(settings, "product_token_secret", None)

    validate_product_token_config()

    assert any(
        getattr(record, "event_name", None) == "product_token_secret_insecure"
        for record in caplog.records
    )


def test_app_startup_fails_fast_in_production(
    monkeypatch: pytest.MonkeyPatch, secure_config: None
) -> None:
    monkeypatch.setattr(main_module, "configure_logging", lambda: None)
    monkeypatch.setattr(settings, "app_env", "production")
    monkeypatch.setattr(settings, "product_token_secret", DEVELOPMENT_SECRET)

    with pytest.raises(RuntimeError):
        with TestClient(app):
            pass
