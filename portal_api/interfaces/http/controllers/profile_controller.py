# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from portal_api.application.use_cases.users.get_profile import GetProfileUseCase
from portal_api.domain.users.repositories import TokenVerifier
from portal_api.interfaces.http.auth import access_token_required, authed_request
from portal_api.interfaces.http.dto.auth import ProfileResponseDTO, UserDTO


class ProfileController:
    def __init__(
        self,
        *,
        get_profile_use_case: GetProfileUseCase,
        tokens: TokenVerifier,
    ) -> None:
        self._get_profile_use_case = get_profile_use_case
        self._tokens = tokens

    def me(self) -> tuple[Response, int]:
        profile = self._get_profile_use_case.execute(authed_request().user_id)
        payload = ProfileResponseDTO(user=UserDTO.from_profile(profile))
        return jsonify(payload.model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("profile", __name__)
        bp.add_url_rule(
            "/me",
            endpoint="me",
            view_func=access_token_required(self._tokens)(self.me),
            methods=["GET"],
        )
        return bp
