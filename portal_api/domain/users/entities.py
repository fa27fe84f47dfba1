# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(slots=True, frozen=True)
class UserProfile:
    """Public projection of a user, also used as the token claim bundle."""

    id: int
    email: str
    username: str

    def as_claims(self) -> dict[str, Any]:
        return {"id": self.id, "email": self.email, "username": self.username}


@dataclass(slots=True, frozen=True)
class User:

    id: int
    email: str
    username: str
    password_hash: str
    refresh_token: str = ""
    created_at: datetime | None = None

    @property
    def profile(self) -> UserProfile:
        return UserProfile(id=self.id, email=self.email, username=self.username)


@dataclass(slots=True, frozen=True)
class TokenVerification:
    """Outcome of checking a signed token.

    ``claims`` is set only when the signature and expiry check out; otherwise
    ``reason`` names the failure (``expired``, ``invalid_signature``,
    ``malformed`` or ``invalid``).
    """

    claims: dict[str, Any] | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.claims is not None

    @classmethod
    def success(cls, claims: dict[str, Any]) -> TokenVerification:
        return cls(claims=dict(claims))

    @classmethod
    def failure(cls, reason: str) -> TokenVerification:
        return cls(reason=reason)


@dataclass(slots=True, frozen=True)
class SessionTokens:
    access_token: str
    refresh_token: str


@dataclass(slots=True, frozen=True)
class AuthenticatedSession:
    """Result of a login or registration."""

    user: UserProfile
    tokens: SessionTokens = field(repr=False)

    @property
    def access_token(self) -> str:
        return self.tokens.access_token

    @property
    def refresh_token(self) -> str:
        return self.tokens.refresh_token


@dataclass(slots=True, frozen=True)
class RefreshedAccess:
    user: UserProfile
    access_token: str = field(repr=False)
