from __future__ import annotations

from fastapi import Depends, Header, HTTPException, Request, status
from fastapi.security.utils import get_authorization_scheme_param

from ..core.security import decode_token
from ..middlewares import principal_ctx_var
from ..schemas.auth import SessionUser
from ..services.identity import get_session_user


class AuthContext:
    def __init__(self, *, user: SessionUser, scheme: str) -> None:
        self.user = user
        self.scheme = scheme

    @property
    def user_id(self) -> str:
        return self.user.id

    @property
    def principal(self) -> str:
        """Log tag for the caller, e.g. ``jwt:<id>`` or ``session:<id>``."""

        return f"{self.scheme}:{self.user.id}"


def _unauthorized(detail: str = "Unauthorized") -> None:
    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


def _authenticated(request: Request, context: AuthContext) -> AuthContext:
    principal_ctx_var.set(context.principal)
    request.state.principal = context.principal
    return context


def _extract_token(authorization: str | None, x_auth_token: str | None) -> str:
    if authorization:
        scheme, credentials = get_authorization_scheme_param(authorization)
        if scheme.lower() == "bearer":
            return credentials.strip()
        return authorization.strip()
    return (x_auth_token or "").strip()


async def require_user(
    request: Request,
    authorization: str | None = Header(default=None, alias="Authorization"),
    x_auth_token: str | None = Header(default=None, alias="X-Auth-Token"),
    session_user: SessionUser | None = Depends(get_session_user),
) -> AuthContext:
    """Authenticate with a bearer JWT, falling back to the cookie session."""

    token = _extract_token(authorization, x_auth_token)
    if token:
        try:
            payload = decode_token(token)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
        user = SessionUser(id=payload.sub, email=payload.email)
        return _authenticated(request, AuthContext(user=user, scheme="jwt"))

    if session_user is not None:
        return _authenticated(request, AuthContext(user=session_user, scheme="session"))

    _unauthorized("Unauthorized")
