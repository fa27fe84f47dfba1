# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import (
    AuthenticatedSession,
    RefreshedAccess,
    SessionTokens,
    TokenVerification,
    User,
    UserProfile,
)

__all__ = [
    "AuthenticatedSession",
    "RefreshedAccess",
    "SessionTokens",
    "TokenVerification",
    "User",
    "UserProfile",
]
