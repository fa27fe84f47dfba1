# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from .entities import TokenVerification, User


class UserRepository(Protocol):
    def find_by_email_or_username(self, identifier: str) -> User | None: ...
    def find_by_refresh_token(self, token: str) -> User | None: ...
    def find_by_id(self, user_id: int) -> User | None: ...
    def add(self, user: User) -> User: ...
    def save_refresh_token(self, user_id: int, token: str) -> None: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class TokenIssuer(Protocol):
    def issue_access_token(self, claims: Mapping[str, Any]) -> str: ...
    def issue_refresh_token(self, claims: Mapping[str, Any]) -> str: ...


class TokenVerifier(Protocol):
    def verify_access_token(self, token: str) -> TokenVerification: ...
    def verify_refresh_token(self, token: str) -> TokenVerification: ...


class TokenService(TokenIssuer, TokenVerifier, Protocol):
    pass
