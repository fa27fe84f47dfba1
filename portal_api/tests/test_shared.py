from __future__ import annotations

from http import HTTPStatus

from flask import Flask

from portal_api.shared.config import SecurityConfig
from portal_api.shared.errors.base import AppError, InfrastructureError, ValidationError
from portal_api.shared.logging import sanitize_message
from portal_api.shared.middleware.rate_limit import InMemoryRateLimiter, client_key


def test_sanitize_message_masks_tokens_and_emails() -> None:
    jwt_like = "eyJhbGciOiJIUzI1NiJ9.eyJpZCI6MX0.c2lnbmF0dXJl"

    sanitized = sanitize_message(f"issued {jwt_like} for alice@example.com password=hunter22")

    assert jwt_like not in sanitized
    assert "alice@" not in sanitized
    assert "hunter22" not in sanitized


def test_rate_limiter_window() -> None:
    now = [0.0]
    limiter = InMemoryRateLimiter(limit=2, window_seconds=10, clock=lambda: now[0])

    assert limiter.allow("k") is True
    assert limiter.allow("k") is True
    assert limiter.allow("k") is False
    assert limiter.allow("other") is True

    now[0] = 11.0
    assert limiter.allow("k") is True


def test_rate_limiter_drops_idle_buckets() -> None:
    now = [0.0]
    limiter = InMemoryRateLimiter(limit=1, window_seconds=10, clock=lambda: now[0], sweep_every=4)

    for key in ("a", "b", "c"):
        limiter.allow(key)
    assert len(limiter) == 3

    now[0] = 30.0
    limiter.allow("d")
    assert len(limiter) == 1


def test_client_key_ignores_forwarded_header_unless_trusted() -> None:
    app = Flask(__name__)
    headers = {"X-Forwarded-For": "203.0.113.9, 10.0.0.1"}
    environ = {"REMOTE_ADDR": "192.0.2.1"}

    with app.test_request_context(headers=headers, environ_base=environ) as ctx:
        assert client_key(ctx.request) == "192.0.2.1"
        assert client_key(ctx.request, trust_proxy_headers=True) == "203.0.113.9"


def test_app_error_payloads() -> None:
    error = AppError(code="teapot", status=HTTPStatus.IM_A_TEAPOT)
    assert error.to_dict() == {"error": "teapot"}

    validation = ValidationError(context={"email": "taken"})
    assert validation.status == HTTPStatus.BAD_REQUEST
    assert validation.to_dict() == {
        "error": "validation_error",
        "message": "Validation failed",
        "details": {"email": "taken"},
    }

    assert InfrastructureError().to_dict() == {
        "error": "internal_error",
        "message": "Internal server error",
    }


def test_security_config_parses_origin_list() -> None:
    config = SecurityConfig(ALLOWED_ORIGINS="http://a.test, http://b.test")  # type: ignore[call-arg]

    assert config.allowed_origins == ["http://a.test", "http://b.test"]
