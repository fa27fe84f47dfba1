# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from portal_api.application.services.password_hashing import BcryptPasswordHasher
from portal_api.application.services.tokens import JwtTokenService
from portal_api.application.use_cases.users.get_profile import GetProfileUseCase
from portal_api.application.use_cases.users.login_user import LoginUserUseCase
from portal_api.application.use_cases.users.logout_user import LogoutUserUseCase
from portal_api.application.use_cases.users.refresh_access_token import \
    RefreshAccessTokenUseCase
from portal_api.application.use_cases.users.register_user import \
    RegisterUserUseCase
from portal_api.infrastructure.repositories.users.sqlalchemy_user_repository import \
    SqlAlchemyUserRepository
from portal_api.interfaces.http.controllers.auth_controller import AuthController
from portal_api.interfaces.http.controllers.profile_controller import \
    ProfileController
from portal_api.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or load_config()

    @cached_property
    def password_hasher(self) -> BcryptPasswordHasher:
        return BcryptPasswordHasher(rounds=self.config.auth.bcrypt_rounds)

    @cached_property
    def token_service(self) -> JwtTokenService:
        return JwtTokenService(self.config.auth)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository()

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(users=self.user_repository)

    @cached_property
    def refresh_access_token_use_case(self) -> RefreshAccessTokenUseCase:
        return RefreshAccessTokenUseCase(users=self.user_repository, tokens=self.token_service)

    @cached_property
    def get_profile_use_case(self) -> GetProfileUseCase:
        return GetProfileUseCase(users=self.user_repository)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            refresh_use_case=self.refresh_access_token_use_case,
            auth_config=self.config.auth,
            security_config=self.config.security,
        )

    @cached_property
    def profile_controller(self) -> ProfileController:
        return ProfileController(
            get_profile_use_case=self.get_profile_use_case,
            tokens=self.token_service,
        )
