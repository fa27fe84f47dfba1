# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from portal_api.domain.users.entities import AuthenticatedSession, User
from portal_api.domain.users.repositories import PasswordHasher, TokenIssuer, UserRepository
from portal_api.shared.errors.base import ValidationError

from .session_tokens import start_session


class RegisterUserUseCase:
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

    def execute(
        self, email: str, password: str, username: str | None = None
    ) -> AuthenticatedSession:
        email = email.strip().lower()
        username = (username or email).strip()

        details: dict[str, str] = {}
        if self._users.find_by_email_or_username(email):
            details["email"] = "Email is already registered"
        if self._users.find_by_email_or_username(username):
            details["username"] = "Username is already taken"
        if details:
            raise ValidationError(context=details)

        hashed = self._password_hasher.hash(password)
        user = User(
            id=0,
            email=email,
            username=username,
            password_hash=hashed,
            created_at=datetime.now(UTC),
        )
        persisted = self._users.add(user)
        session = start_session(persisted, users=self._users, tokens=self._tokens)
        return AuthenticatedSession(user=persisted.profile, tokens=session)
