# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from portal_api.domain.users.entities import SessionTokens, User
from portal_api.domain.users.repositories import TokenIssuer, UserRepository


def start_session(user: User, *, users: UserRepository, tokens: TokenIssuer) -> SessionTokens:
    """Mint an access/refresh pair and make the refresh token the user's only live one."""

    claims = user.profile.as_claims()
    session = SessionTokens(
        access_token=tokens.issue_access_token(claims),
        refresh_token=tokens.issue_refresh_token(claims),
    )
    users.save_refresh_token(user.id, session.refresh_token)
    return session
