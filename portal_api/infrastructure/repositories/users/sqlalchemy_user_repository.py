# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from portal_api.domain.users.entities import User as DomainUser
from portal_api.domain.users.repositories import UserRepository
from portal_api.infrastructure.db.models import User
from portal_api.infrastructure.db.session import session_scope
from portal_api.shared.errors.base import InfrastructureError, ValidationError
from portal_api.shared.logging import logger


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        email=row.email,
        username=row.username,
        password_hash=row.password_hash,
        refresh_token=row.refresh_token or "",
        created_at=row.created_at,
    )


@contextmanager
def _store() -> Iterator[Session]:
    try:
        with session_scope() as session:
            yield session
    except IntegrityError as exc:
        logger.warning(f"users.store: constraint violated ({exc.orig})")
        raise ValidationError(context=_integrity_details(exc)) from exc
    except SQLAlchemyError as exc:
        logger.error(f"users.store: {type(exc).__name__}")
        raise InfrastructureError() from exc


def _integrity_details(exc: IntegrityError) -> dict[str, str]:
    text = str(exc.orig).lower()
    details: dict[str, str] = {}
    if "email" in text:
        details["email"] = "Email is already registered"
    if "username" in text:
        details["username"] = "Username is already taken"
    return details or {"user": "User violates a uniqueness constraint"}


class SqlAlchemyUserRepository(UserRepository):
    def find_by_email_or_username(self, identifier: str) -> DomainUser | None:
        """Try an email match first, then fall back to the username."""

        identifier = identifier.strip()
        if not identifier:
            return None
        with _store() as session:
            row = session.scalars(
                select(User).where(User.email == identifier.lower())
            ).first()
            if row is None:
                row = session.scalars(
                    select(User).where(User.username == identifier)
                ).first()
            return _to_domain(row) if row else None

    def find_by_refresh_token(self, token: str) -> DomainUser | None:
        # logged-out users store "", which must never match
        if not token:
            return None
        with _store() as session:
            row = session.scalars(select(User).where(User.refresh_token == token)).first()
            return _to_domain(row) if row else None

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with _store() as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def add(self, user: DomainUser) -> DomainUser:
        with _store() as session:
            row = User(
                email=user.email,
                username=user.username,
                password_hash=user.password_hash,
                refresh_token=user.refresh_token,
            )
            if user.created_at is not None:
                row.created_at = user.created_at
            session.add(row)
            session.flush()
            session.refresh(row)
            logger.info(f"users.add: created user_id={row.id}")
            return _to_domain(row)

    def save_refresh_token(self, user_id: int, token: str) -> None:
        with _store() as session:
            session.execute(update(User).where(User.id == user_id).values(refresh_token=token))
