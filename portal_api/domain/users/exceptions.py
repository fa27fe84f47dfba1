# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from portal_api.shared.errors.base import DomainError


class UserNotFoundError(DomainError):
    code = "user_not_found"
    status = HTTPStatus.UNAUTHORIZED
    message = "User not found"


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED
    message = "Invalid credentials"


class RefreshTokenMissingError(DomainError):
    code = "unauthorized"
    status = HTTPStatus.UNAUTHORIZED
    message = "Refresh token missing"


class RefreshTokenNotFoundError(DomainError):
    code = "refresh_token_not_found"
    status = HTTPStatus.NOT_FOUND
    message = "Refresh token not recognised"


class RefreshTokenInvalidError(DomainError):
    code = "forbidden"
    status = HTTPStatus.FORBIDDEN
    message = "Refresh token invalid or expired"


class AccessTokenMissingError(DomainError):
    code = "unauthorized"
    status = HTTPStatus.UNAUTHORIZED
    message = "Access token missing"


class AccessTokenInvalidError(DomainError):
    code = "unauthorized"
    status = HTTPStatus.UNAUTHORIZED
    message = "Access token invalid or expired"


class ProfileNotFoundError(DomainError):
    code = "user_not_found"
    status = HTTPStatus.NOT_FOUND
    message = "User not found"
