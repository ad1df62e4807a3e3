"""Application factory and top-level wiring for the form intake service.

Configuration, database bootstrap, middleware, routers and error handlers are
all assembled here so the whole request path can be read in one place.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from .core.config import settings
from .core.errors import (
    IntakeError,
    http_exception_handler,
    intake_exception_handler,
    validation_exception_handler,
)
from .db.migrate import run_migrations
from .db.session import Base, engine
from .middlewares import RequestIdMiddleware

# Importing the models registers their tables with ``Base.metadata``.
from . import models as _models  # noqa: F401
from .routers import auth as auth_router
from .routers import forms as forms_router
from .routers import submissions as submissions_router
from .routers import user as user_router


def init_db() -> None:
    # New databases get the full schema; existing SQLite files get additive upgrades.
    Base.metadata.create_all(bind=engine)
    run_migrations(engine)


def create_app() -> FastAPI:
    application = FastAPI(title=settings.APP_NAME)

    # Sessions carry the signed-in user between requests in a signed cookie.
    application.add_middleware(
        SessionMiddleware,
        secret_key=settings.APP_SECRET,
        session_cookie=settings.SESSION_COOKIE_NAME,
        max_age=settings.SESSION_MAX_AGE,
        same_site="lax",
        https_only=False,  # set True once the app is always accessed via HTTPS at the edge
    )
    if settings.ALLOWED_ORIGINS:
        application.add_middleware(
            CORSMiddleware,
            allow_origins=settings.ALLOWED_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    # Added last so it wraps everything else and sees the final status code.
    application.add_middleware(RequestIdMiddleware)

    # Public intake plus owner-only management APIs.
    application.include_router(submissions_router.router)
    application.include_router(forms_router.router)
    application.include_router(auth_router.router)
    application.include_router(user_router.router)

    application.add_exception_handler(IntakeError, intake_exception_handler)
    application.add_exception_handler(StarletteHTTPException, http_exception_handler)
    application.add_exception_handler(RequestValidationError, validation_exception_handler)
    return application


init_db()
app = create_app()

__all__ = ["app", "create_app", "init_db"]
