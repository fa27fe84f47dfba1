# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any, cast

from flask import Request, g, request

from portal_api.domain.users.exceptions import AccessTokenInvalidError, AccessTokenMissingError
from portal_api.domain.users.repositories import TokenVerifier
from portal_api.shared.logging import logger


class AuthedRequest(Request):
    user_id: int
    claims: dict[str, Any]


def authed_request() -> AuthedRequest:
    """Return the current request cast to include authentication attributes."""
    return cast(AuthedRequest, request)


def bearer_token() -> str:
    auth = request.headers.get("Authorization", "")
    if auth.startswith("Bearer "):
        return auth[7:].strip()
    return ""


def access_token_required(verifier: TokenVerifier) -> Callable:
    def decorator(f: Callable) -> Callable:
        @wraps(f)
        def inner(*a, **kw):
            token = bearer_token()
            if not token:
                logger.warning(
                    f"No Authorization header on {request.method} {request.path} "
                    f"from {request.headers.get('X-Forwarded-For', request.remote_addr)}"
                )
                raise AccessTokenMissingError()

            verification = verifier.verify_access_token(token)
            claims = verification.claims or {}
            if not verification.ok or "id" not in claims:
                logger.warning(
                    f"Auth failed ({verification.reason or 'no_subject'}) "
                    f"on {request.method} {request.path}"
                )
                raise AccessTokenInvalidError()

            request.user_id = claims["id"]  # type: ignore[attr-defined]
            request.claims = claims  # type: ignore[attr-defined]
            g.user_id = claims["id"]
            logger.debug(f"Auth OK: user={claims['id']} {request.method} {request.path}")
            return f(*a, **kw)

        return inner

    return decorator
