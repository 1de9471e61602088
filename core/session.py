"""
core/session.py — Apostas em Grupo
===================================
Login check against the user list loaded from the store, plus role gating.

The check is a plaintext match (username case-insensitive, password exact).
It gates which buttons the UI shows; it is not a security boundary.
"""

import logging

from core.models import ACTIVE, ROLE_ADMIN, User, UserSession

logger = logging.getLogger(__name__)


class AuthError(Exception):
    """Base class for login failures. str(exc) is the operator message."""


class InvalidCredentialsError(AuthError):
    def __init__(self) -> None:
        super().__init__("Usuário ou senha incorretos.")


class InactiveUserError(AuthError):
    def __init__(self) -> None:
        super().__init__("Usuário inativo. Contate o administrador.")


def authenticate(users: list[User], username: str, password: str) -> UserSession:
    """
    Match credentials against `users`.

    Raises:
        InvalidCredentialsError: no user with that username/password.
        InactiveUserError:       credentials match but status != Ativo.
    """
    wanted = (username or "").strip().lower()
    for user in users:
        if user.username.lower() == wanted and user.password == password:
            if user.status != ACTIVE:
                logger.info("Login refused for inactive user %s", user.username)
                raise InactiveUserError()
            logger.info("Login: %s (%s)", user.username, user.role)
            return UserSession(
                username=user.username,
                role=user.role,
                name=user.name,
                avatar=user.avatar,
            )
    raise InvalidCredentialsError()


def can_edit(session) -> bool:
    """Only admins see create/edit/delete actions."""
    return session is not None and session.role == ROLE_ADMIN
