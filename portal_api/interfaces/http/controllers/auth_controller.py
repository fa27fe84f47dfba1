# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, make_response, request
from pydantic import ValidationError

from portal_api.application.use_cases.users.login_user import LoginUserUseCase
from portal_api.application.use_cases.users.logout_user import LogoutUserUseCase
from portal_api.application.use_cases.users.refresh_access_token import \
    RefreshAccessTokenUseCase
from portal_api.application.use_cases.users.register_user import \
    RegisterUserUseCase
from portal_api.infrastructure.audit import AuditAction, audit_log
from portal_api.interfaces.http.dto.auth import (LoginRequestDTO,
                                                 LoginResponseDTO,
                                                 RefreshResponseDTO,
                                                 RegisterRequestDTO,
                                                 RegisterResponseDTO, UserDTO)
from portal_api.shared.config import AuthConfig, SecurityConfig
from portal_api.shared.errors.base import AppError
from portal_api.shared.errors.validation import raise_validation_error
from portal_api.shared.logging import logger
from portal_api.shared.middleware.rate_limit import rate_limit


def _get_client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        refresh_use_case: RefreshAccessTokenUseCase,
        auth_config: AuthConfig,
        security_config: SecurityConfig,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._refresh_use_case = refresh_use_case
        self._auth = auth_config
        self._security = security_config

    def _set_refresh_cookie(self, response: Response, token: str) -> None:
        response.set_cookie(
            self._auth.refresh_cookie_name,
            token,
            httponly=True,
            samesite=self._security.cookie_samesite,
            secure=self._security.cookie_secure,
            max_age=self._auth.refresh_token_ttl,
        )

    def _clear_refresh_cookie(self, response: Response) -> None:
        response.delete_cookie(
            self._auth.refresh_cookie_name,
            httponly=True,
            samesite=self._security.cookie_samesite,
            secure=self._security.cookie_secure,
        )

    def _refresh_cookie(self) -> str:
        return request.cookies.get(self._auth.refresh_cookie_name, "")

    @rate_limit(limit=5, window_seconds=60.0)
    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        try:
            session = self._register_use_case.execute(dto.email, dto.password, dto.username)
        except AppError as exc:
            audit_log(
                AuditAction.REGISTER_FAILED,
                ip_address=_get_client_ip(),
                details={"error": exc.code},
                success=False,
            )
            raise

        audit_log(
            AuditAction.REGISTER,
            user_id=session.user.id,
            ip_address=_get_client_ip(),
            details={"username": session.user.username},
            success=True,
        )

        payload = RegisterResponseDTO(access_token=session.access_token)
        response = jsonify(payload.model_dump(by_alias=True))
        self._set_refresh_cookie(response, session.refresh_token)
        logger.info(f"auth.register: ok user_id={session.user.id}")
        return response, 200

    @rate_limit(limit=10, window_seconds=60.0)
    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        ip_address = _get_client_ip()

        try:
            session = self._login_use_case.execute(dto.email_or_username, dto.password)
        except AppError as exc:
            audit_log(
                AuditAction.LOGIN_FAILED,
                ip_address=ip_address,
                details={"identifier": dto.email_or_username, "error": exc.code},
                success=False,
            )
            raise

        audit_log(
            AuditAction.LOGIN_SUCCESS,
            user_id=session.user.id,
            ip_address=ip_address,
            success=True,
        )

        payload = LoginResponseDTO(
            access_token=session.access_token,
            user=UserDTO.from_profile(session.user),
        )
        response = jsonify(payload.model_dump(by_alias=True))
        self._set_refresh_cookie(response, session.refresh_token)
        logger.info(f"auth.login: ok user_id={session.user.id}")
        return response, 200

    def logout(self) -> Response:
        token = self._refresh_cookie()
        response = make_response("", 204)
        self._clear_refresh_cookie(response)
        if not token:
            logger.debug("auth.logout: no refresh cookie")
            return response

        user_id = self._logout_use_case.execute(token)
        audit_log(
            AuditAction.LOGOUT,
            user_id=user_id,
            ip_address=_get_client_ip(),
            success=True,
        )
        logger.info(f"auth.logout: ok user_id={user_id}")
        return response

    def refresh(self) -> tuple[Response, int]:
        try:
            refreshed = self._refresh_use_case.execute(self._refresh_cookie())
        except AppError as exc:
            audit_log(
                AuditAction.TOKEN_REFRESH_FAILED,
                ip_address=_get_client_ip(),
                details={"error": exc.code},
                success=False,
            )
            raise

        audit_log(
            AuditAction.TOKEN_REFRESHED,
            user_id=refreshed.user.id,
            ip_address=_get_client_ip(),
            success=True,
        )

        payload = RefreshResponseDTO(
            access_token=refreshed.access_token,
            user=UserDTO.from_profile(refreshed.user),
        )
        return jsonify(payload.model_dump(by_alias=True)), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__)
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        bp.add_url_rule("/refresh", view_func=self.refresh, methods=["POST"])
        return bp
