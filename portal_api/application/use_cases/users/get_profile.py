# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from portal_api.domain.users.entities import UserProfile
from portal_api.domain.users.exceptions import ProfileNotFoundError
from portal_api.domain.users.repositories import UserRepository


class GetProfileUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, user_id: int) -> UserProfile:
        user = self._users.find_by_id(user_id)
        if user is None:
            raise ProfileNotFoundError()
        return user.profile
