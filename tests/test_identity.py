"""Tests for resolving the signed-in user from a request's session."""

from starlette.requests import Request

from formintake.schemas.auth import SessionUser
from formintake.services.identity import (
    CookieSessionProvider,
    IdentitySession,
    resolve_session_user,
)


def _request(session=None) -> Request:
    scope = {"type": "http", "method": "GET", "path": "/", "headers": []}
    if session is not None:
        scope["session"] = session
    return Request(scope)


class _StaticProvider:
    def __init__(self, session):
        self.session = session

    def get_session(self, request):
        return self.session


class _ExplodingProvider:
    def get_session(self, request):
        raise RuntimeError("identity provider down")


def test_provider_fault_resolves_to_none():
    assert resolve_session_user(_request({}), provider=_ExplodingProvider()) is None


def test_missing_session_middleware_resolves_to_none():
    # Without SessionMiddleware ``request.session`` raises; the resolver absorbs it.
    assert resolve_session_user(_request()) is None


def test_principal_is_projected_to_id_email_name():
    session = IdentitySession(user={"id": "u1", "email": "a@x.com", "name": "A", "role": "admin"})

    user = resolve_session_user(_request(), provider=_StaticProvider(session))

    assert user == SessionUser(id="u1", email="a@x.com", name="A")
    assert user.model_dump() == {"id": "u1", "email": "a@x.com", "name": "A"}


def test_optional_fields_pass_through_as_none():
    session = IdentitySession(user={"id": "u2"})

    user = resolve_session_user(_request(), provider=_StaticProvider(session))

    assert user.model_dump() == {"id": "u2", "email": None, "name": None}


def test_session_without_principal_resolves_to_none():
    assert resolve_session_user(_request(), provider=_StaticProvider(IdentitySession())) is None
    assert resolve_session_user(_request(), provider=_StaticProvider(None)) is None


def test_cookie_provider_reads_request_session():
    provider = CookieSessionProvider()

    assert provider.get_session(_request({})) is None
    assert provider.get_session(_request({"other": 1})) == IdentitySession(user=None)

    request = _request({"user": {"id": "u3", "email": "c@x.com", "name": "C"}})
    assert resolve_session_user(request) == SessionUser(id="u3", email="c@x.com", name="C")


def test_principal_without_id_resolves_to_none():
    session = IdentitySession(user={"email": "a@x.com", "name": "A"})

    assert resolve_session_user(_request(), provider=_StaticProvider(session)) is None
