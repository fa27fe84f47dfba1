# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Signed access and refresh tokens.

Both token kinds are HS256 JWTs carrying the user's identity claims
(``id``, ``email``, ``username``) plus ``iat``/``exp``. They differ only in
the secret used to sign them and their lifetime.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt.exceptions import DecodeError, ExpiredSignatureError, InvalidSignatureError, PyJWTError

from portal_api.domain.users.entities import TokenVerification
from portal_api.domain.users.repositories import TokenService
from portal_api.shared.config import AuthConfig
from portal_api.shared.logging import logger

_REGISTERED_CLAIMS = frozenset({"iat", "exp"})


class MissingTokenSecretError(RuntimeError):
    """Raised at construction when a signing secret is not configured."""


class JwtTokenService(TokenService):
    def __init__(
        self,
        settings: AuthConfig,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        missing = [
            name
            for name, value in (
                ("ACCESS_TOKEN_SECRET", settings.access_token_secret),
                ("REFRESH_TOKEN_SECRET", settings.refresh_token_secret),
            )
            if not value
        ]
        if missing:
            raise MissingTokenSecretError(f"{', '.join(missing)} not configured")

        self._access_secret: str = settings.access_token_secret  # type: ignore[assignment]
        self._refresh_secret: str = settings.refresh_token_secret  # type: ignore[assignment]
        self._algorithm = settings.algorithm
        self._access_ttl = timedelta(seconds=settings.access_token_ttl)
        self._refresh_ttl = timedelta(seconds=settings.refresh_token_ttl)
        self._clock = clock or (lambda: datetime.now(UTC))

    def issue_access_token(self, claims: Mapping[str, Any]) -> str:
        return self._encode(claims, self._access_secret, self._access_ttl)

    def issue_refresh_token(self, claims: Mapping[str, Any]) -> str:
        return self._encode(claims, self._refresh_secret, self._refresh_ttl)

    def verify_access_token(self, token: str) -> TokenVerification:
        return self.verify(token, self._access_secret)

    def verify_refresh_token(self, token: str) -> TokenVerification:
        return self.verify(token, self._refresh_secret)

    def verify(self, token: str, secret: str) -> TokenVerification:
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "iat"]},
            )
        except ExpiredSignatureError:
            return TokenVerification.failure("expired")
        except InvalidSignatureError:
            return TokenVerification.failure("invalid_signature")
        except DecodeError:
            return TokenVerification.failure("malformed")
        except PyJWTError as exc:
            logger.debug(f"tokens.verify: rejected ({type(exc).__name__})")
            return TokenVerification.failure("invalid")

        return TokenVerification.success(
            {k: v for k, v in payload.items() if k not in _REGISTERED_CLAIMS}
        )

    def _encode(self, claims: Mapping[str, Any], secret: str, ttl: timedelta) -> str:
        now = self._clock()
        payload = {**claims, "iat": now, "exp": now + ttl}
        return jwt.encode(payload, secret, algorithm=self._algorithm)


__all__ = ["JwtTokenService", "MissingTokenSecretError"]
