# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from portal_api.domain.users.entities import RefreshedAccess
from portal_api.domain.users.exceptions import (
    RefreshTokenInvalidError,
    RefreshTokenMissingError,
    RefreshTokenNotFoundError,
)
from portal_api.domain.users.repositories import TokenService, UserRepository
from portal_api.shared.logging import logger


class RefreshAccessTokenUseCase:
    """Mint a new access token from a stored, still-valid refresh token.

    The refresh token itself is left untouched: it stays valid until it
    expires or the user logs out.
    """

    def __init__(self, *, users: UserRepository, tokens: TokenService) -> None:
        self._users = users
        self._tokens = tokens

    def execute(self, refresh_token: str | None) -> RefreshedAccess:
        if not refresh_token:
            raise RefreshTokenMissingError()

        user = self._users.find_by_refresh_token(refresh_token)
        if user is None:
            raise RefreshTokenNotFoundError()

        verification = self._tokens.verify_refresh_token(refresh_token)
        if not verification.ok:
            logger.info(
                f"auth.refresh: token rejected user_id={user.id} reason={verification.reason}"
            )
            raise RefreshTokenInvalidError()

        access_token = self._tokens.issue_access_token(verification.claims or {})
        return RefreshedAccess(user=user.profile, access_token=access_token)
