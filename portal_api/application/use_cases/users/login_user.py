# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from portal_api.domain.users.entities import AuthenticatedSession
from portal_api.domain.users.exceptions import InvalidCredentialsError, UserNotFoundError
from portal_api.domain.users.repositories import PasswordHasher, TokenIssuer, UserRepository
from portal_api.shared.logging import logger

from .session_tokens import start_session


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: TokenIssuer,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher

    def execute(self, email_or_username: str, password: str) -> AuthenticatedSession:
        user = self._users.find_by_email_or_username(email_or_username)
        if user is None:
            raise UserNotFoundError()

        if not self._password_hasher.verify(password, user.password_hash):
            logger.info(f"auth.login: password mismatch user_id={user.id}")
            raise InvalidCredentialsError()

        session = start_session(user, users=self._users, tokens=self._tokens)
        return AuthenticatedSession(user=user.profile, tokens=session)
