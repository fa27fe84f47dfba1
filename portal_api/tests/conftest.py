from __future__ import annotations

import os
import tempfile
from pathlib import Path

# Must run before portal_api modules read their configuration.
_TMP = Path(tempfile.mkdtemp(prefix="portal-api-tests-"))
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_TMP / 'portal.db'}")
os.environ.setdefault("LOG_FILE", str(_TMP / "portal.log"))
os.environ.setdefault("ACCESS_TOKEN_SECRET", "test-access-secret-0123456789abcdef")
os.environ.setdefault("REFRESH_TOKEN_SECRET", "test-refresh-secret-0123456789abcdef")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENABLE_RATE_LIMIT", "false")

import pytest  # noqa: E402

from portal_api.domain.users.entities import User  # noqa: E402
from portal_api.domain.users.repositories import (  # noqa: E402
    PasswordHasher,
    UserRepository,
)
from portal_api.shared.config import AuthConfig  # noqa: E402


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._seq = 1
        self.saves: list[tuple[int, str]] = []

    def find_by_email_or_username(self, identifier: str) -> User | None:
        for user in self._users.values():
            if user.email == identifier.strip().lower():
                return user
        for user in self._users.values():
            if user.username == identifier.strip():
                return user
        return None

    def find_by_refresh_token(self, token: str) -> User | None:
        if not token:
            return None
        for user in self._users.values():
            if user.refresh_token == token:
                return user
        return None

    def find_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def add(self, user: User) -> User:
        new_user = User(
            id=self._seq,
            email=user.email,
            username=user.username,
            password_hash=user.password_hash,
            refresh_token=user.refresh_token,
            created_at=user.created_at,
        )
        self._seq += 1
        self._users[new_user.id] = new_user
        return new_user

    def save_refresh_token(self, user_id: int, token: str) -> None:
        user = self._users[user_id]
        self.saves.append((user_id, token))
        self._users[user_id] = User(
            id=user.id,
            email=user.email,
            username=user.username,
            password_hash=user.password_hash,
            refresh_token=token,
            created_at=user.created_at,
        )


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def auth_config() -> AuthConfig:
    return AuthConfig(  # type: ignore[call-arg]
        ACCESS_TOKEN_SECRET="unit-access-secret-0123456789abcdef",
        REFRESH_TOKEN_SECRET="unit-refresh-secret-0123456789abcdef",
    )
