from __future__ import annotations

import pytest

from portal_api.application.services.tokens import JwtTokenService
from portal_api.application.use_cases.users.get_profile import GetProfileUseCase
from portal_api.application.use_cases.users.login_user import LoginUserUseCase
from portal_api.application.use_cases.users.logout_user import LogoutUserUseCase
from portal_api.application.use_cases.users.refresh_access_token import \
    RefreshAccessTokenUseCase
from portal_api.application.use_cases.users.register_user import RegisterUserUseCase
from portal_api.domain.users.exceptions import (
    InvalidCredentialsError,
    ProfileNotFoundError,
    RefreshTokenInvalidError,
    RefreshTokenMissingError,
    RefreshTokenNotFoundError,
    UserNotFoundError,
)
from portal_api.shared.config import AuthConfig
from portal_api.shared.errors.base import ValidationError


@pytest.fixture()
def tokens(auth_config: AuthConfig) -> JwtTokenService:
    return JwtTokenService(auth_config)


@pytest.fixture()
def register(users, hasher, tokens) -> RegisterUserUseCase:
    return RegisterUserUseCase(users=users, tokens=tokens, password_hasher=hasher)


@pytest.fixture()
def login(users, hasher, tokens) -> LoginUserUseCase:
    return LoginUserUseCase(users=users, tokens=tokens, password_hasher=hasher)


def test_register_user_persists_refresh_token(users, register) -> None:
    session = register.execute("Alice@Example.com", "correct-pw", "alice")

    stored = users.find_by_id(session.user.id)
    assert stored is not None
    assert stored.email == "alice@example.com"
    assert stored.password_hash == "hashed:correct-pw"
    assert stored.refresh_token == session.refresh_token
    assert session.access_token


def test_register_defaults_username_to_email(register) -> None:
    session = register.execute("bob@example.com", "correct-pw")

    assert session.user.username == "bob@example.com"


def test_register_duplicate_email_raises_validation_error(register) -> None:
    register.execute("alice@example.com", "correct-pw", "alice")

    with pytest.raises(ValidationError) as excinfo:
        register.execute("alice@example.com", "other-pw", "alice2")

    assert excinfo.value.status == 400
    assert "email" in excinfo.value.context


def test_register_duplicate_username_raises_validation_error(register) -> None:
    register.execute("alice@example.com", "correct-pw", "alice")

    with pytest.raises(ValidationError) as excinfo:
        register.execute("other@example.com", "other-pw", "alice")

    assert set(excinfo.value.context) == {"username"}


@pytest.mark.parametrize("identifier", ["alice@example.com", "ALICE@example.com", "alice"])
def test_login_accepts_email_or_username(users, register, login, tokens, identifier) -> None:
    register.execute("alice@example.com", "correct-pw", "alice")

    session = login.execute(identifier, "correct-pw")

    assert session.user.email == "alice@example.com"
    assert users.find_by_id(session.user.id).refresh_token == session.refresh_token
    assert tokens.verify_access_token(session.access_token).claims == {
        "id": session.user.id,
        "email": "alice@example.com",
        "username": "alice",
    }


def test_login_unknown_identifier_raises_not_found(login) -> None:
    with pytest.raises(UserNotFoundError) as excinfo:
        login.execute("nobody", "correct-pw")

    assert excinfo.value.status == 401
    assert excinfo.value.to_dict() == {"error": "user_not_found", "message": "User not found"}


def test_login_wrong_password_does_not_touch_user(users, register, login) -> None:
    registered = register.execute("alice@example.com", "correct-pw", "alice")
    saves_before = list(users.saves)

    with pytest.raises(InvalidCredentialsError):
        login.execute("alice", "wrong-pw")

    assert users.saves == saves_before
    assert users.find_by_id(registered.user.id).refresh_token == registered.refresh_token


def test_logout_clears_stored_token_and_is_idempotent(users, register) -> None:
    session = register.execute("alice@example.com", "correct-pw", "alice")
    logout = LogoutUserUseCase(users=users)

    assert logout.execute(session.refresh_token) == session.user.id
    assert users.find_by_id(session.user.id).refresh_token == ""
    assert logout.execute(session.refresh_token) is None
    assert logout.execute(None) is None
    assert logout.execute("") is None


def test_refresh_issues_access_token_from_decoded_claims(users, register, tokens) -> None:
    session = register.execute("alice@example.com", "correct-pw", "alice")
    refresh = RefreshAccessTokenUseCase(users=users, tokens=tokens)

    refreshed = refresh.execute(session.refresh_token)

    assert refreshed.user == session.user
    assert (
        tokens.verify_access_token(refreshed.access_token).claims
        == tokens.verify_refresh_token(session.refresh_token).claims
    )
    # no rotation
    assert users.find_by_id(session.user.id).refresh_token == session.refresh_token


def test_refresh_without_token_raises_unauthorized(users, tokens) -> None:
    refresh = RefreshAccessTokenUseCase(users=users, tokens=tokens)

    with pytest.raises(RefreshTokenMissingError) as excinfo:
        refresh.execute("")

    assert excinfo.value.status == 401


def test_refresh_with_unknown_token_raises_not_found(users, register, tokens) -> None:
    register.execute("alice@example.com", "correct-pw", "alice")
    refresh = RefreshAccessTokenUseCase(users=users, tokens=tokens)

    with pytest.raises(RefreshTokenNotFoundError) as excinfo:
        refresh.execute(tokens.issue_refresh_token({"id": 99}))

    assert excinfo.value.status == 404


def test_refresh_with_stored_but_invalid_token_raises_forbidden(users, register, tokens) -> None:
    session = register.execute("alice@example.com", "correct-pw", "alice")
    users.save_refresh_token(session.user.id, "stored-but-not-a-jwt")
    refresh = RefreshAccessTokenUseCase(users=users, tokens=tokens)

    with pytest.raises(RefreshTokenInvalidError) as excinfo:
        refresh.execute("stored-but-not-a-jwt")

    assert excinfo.value.status == 403


def test_refresh_after_logout_is_not_found(users, register, tokens) -> None:
    session = register.execute("alice@example.com", "correct-pw", "alice")
    LogoutUserUseCase(users=users).execute(session.refresh_token)

    with pytest.raises(RefreshTokenNotFoundError):
        RefreshAccessTokenUseCase(users=users, tokens=tokens).execute(session.refresh_token)


def test_get_profile(users, register) -> None:
    session = register.execute("alice@example.com", "correct-pw", "alice")
    use_case = GetProfileUseCase(users=users)

    assert use_case.execute(session.user.id) == session.user
    with pytest.raises(ProfileNotFoundError):
        use_case.execute(12345)
