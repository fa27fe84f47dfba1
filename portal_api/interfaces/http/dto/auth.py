from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

from portal_api.domain.users.entities import UserProfile

EMAIL_PATTERN = re.compile(r"^\w+(?:[.+-]\w+)*@\w+(?:[.-]\w+)*\.\w{2,}$")
USERNAME_PATTERN = re.compile(r"^\w[\w.-]*$")
# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72


def _check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


class RegisterRequestDTO(BaseModel):
    email: str = Field(min_length=3, max_length=254)
    password: str = Field(min_length=6, max_length=MAX_PASSWORD_BYTES)
    username: str | None = Field(default=None, min_length=3, max_length=32)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        value = value.strip().lower()
        if not EMAIL_PATTERN.match(value):
            raise ValueError("Email address is not valid")
        return value

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str | None) -> str | None:
        if value is None:
            return value
        value = value.strip()
        if not USERNAME_PATTERN.match(value):
            raise ValueError("Username may contain only letters, digits, '_', '.' and '-'")
        return value

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return _check_password_bytes(value)


class LoginRequestDTO(BaseModel):
    email_or_username: str = Field(alias="emailOrUsername", min_length=1, max_length=254)
    password: str = Field(min_length=1)

    model_config = ConfigDict(validate_by_name=True)


class UserDTO(BaseModel):
    id: int
    email: str
    username: str

    @classmethod
    def from_profile(cls, profile: UserProfile) -> UserDTO:
        return cls(id=profile.id, email=profile.email, username=profile.username)


class LoginResponseDTO(BaseModel):
    message: str = "Login successful"
    access_token: str = Field(serialization_alias="accessToken")
    user: UserDTO


class RegisterResponseDTO(BaseModel):
    message: str = "Registration successful"
    access_token: str = Field(serialization_alias="accessToken")


class RefreshResponseDTO(BaseModel):
    access_token: str = Field(serialization_alias="accessToken")
    user: UserDTO


class ProfileResponseDTO(BaseModel):
    user: UserDTO
