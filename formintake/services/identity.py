"""Resolve the signed-in user of a request from the cookie session."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Protocol

from starlette.requests import HTTPConnection

from ..schemas.auth import SessionUser

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user"


@dataclass(frozen=True)
class IdentitySession:
    user: Mapping[str, Any] | None = None


class IdentityProvider(Protocol):
    def get_session(self, request: HTTPConnection) -> IdentitySession | None: ...


class CookieSessionProvider:
    """Reads the principal stored by ``/api/v1/auth/login`` in ``request.session``.

    ``request.session`` raises when ``SessionMiddleware`` is not installed.
    """

    def get_session(self, request: HTTPConnection) -> IdentitySession | None:
        session = request.session
        if not session:
            return None
        user = session.get(SESSION_USER_KEY)
        return IdentitySession(user=user if isinstance(user, Mapping) else None)


default_provider = CookieSessionProvider()


def store_session_user(request: HTTPConnection, user: SessionUser) -> None:
    request.session[SESSION_USER_KEY] = user.model_dump()


def clear_session(request: HTTPConnection) -> None:
    request.session.clear()


def resolve_session_user(
    request: HTTPConnection,
    provider: IdentityProvider | None = None,
) -> SessionUser | None:
    """Return the session's user as ``SessionUser`` or ``None``.

    Never raises: any provider failure means "not signed in".
    """

    provider = provider or default_provider
    try:
        session = provider.get_session(request)
    except Exception:
        logger.debug("session.lookup_failed", exc_info=True)
        return None
    if session is None or not session.user:
        return None
    user_id = session.user.get("id")
    if not user_id:
        return None
    return SessionUser(
        id=str(user_id),
        email=session.user.get("email"),
        name=session.user.get("name"),
    )


def get_session_user(request: HTTPConnection) -> SessionUser | None:
    """FastAPI dependency form of :func:`resolve_session_user`."""

    return resolve_session_user(request)
