"""Use-case for revoking the stored refresh token."""

from __future__ import annotations

from portal_api.domain.users.repositories import UserRepository
from portal_api.shared.logging import logger


class LogoutUserUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, refresh_token: str | None) -> int | None:
        """Clear the session owning ``refresh_token``; return the user id if one matched."""

        if not refresh_token:
            return None
        user = self._users.find_by_refresh_token(refresh_token)
        if user is None:
            logger.debug("auth.logout: refresh token not stored, nothing to revoke")
            return None
        self._users.save_refresh_token(user.id, "")
        return user.id
