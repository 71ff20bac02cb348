"""FastAPI app factory.

Endpoints are intentionally thin wrappers over the workflows. Each request
gets a fresh screen instance, so request state never leaks between calls.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import TypeVar

from fastapi import FastAPI, HTTPException

from foodlink_accounts import __version__
from foodlink_accounts.config import AccountsSettings
from foodlink_accounts.errors import ErrorKind
from foodlink_accounts.models import Role
from foodlink_accounts.providers.factory import Backends, ProviderFactory
from foodlink_accounts.server.models import (
    ApiOutcome,
    LoginRequest,
    PasswordResetRequest,
    RegisterRequest,
    RemoveInviteRequest,
    StaffInviteRequest,
    StaffRegisterRequest,
    StaffSessionRequest,
)
from foodlink_accounts.workflow import (
    ForgotPasswordWorkflow,
    RegistrationWorkflow,
    SignInWorkflow,
    StaffInvitesWorkflow,
    StaffRegistrationWorkflow,
    StaffSignInWorkflow,
    WorkflowOutcome,
)
from foodlink_accounts.workflow.base import ScreenWorkflow

logger = logging.getLogger(__name__)

W = TypeVar("W", bound=ScreenWorkflow)


def _to_api(outcome: WorkflowOutcome) -> ApiOutcome:
    if outcome.error_kind is ErrorKind.BUSY:
        raise HTTPException(status_code=409, detail=outcome.message)
    return ApiOutcome.model_validate(outcome.to_json())


def _with_screen(screen: W, run: Callable[[W], WorkflowOutcome]) -> ApiOutcome:
    try:
        return _to_api(run(screen))
    finally:
        screen.dispose()


def create_app(
    settings: AccountsSettings | None = None, backends: Backends | None = None
) -> FastAPI:
    settings = settings or AccountsSettings()
    owns_backends = backends is None
    backends = backends or ProviderFactory.create(settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        yield
        if owns_backends:
            backends.close()

    app = FastAPI(
        title="FoodLink Accounts",
        version=__version__,
        description="Registration and sign-in workflows for FoodLink volunteers, stores and staff.",
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.backends = backends

    def _sign_in_screen(role: Role) -> SignInWorkflow:
        if role is Role.STAFF:
            return StaffSignInWorkflow(identity=backends.identity, profiles=backends.profiles)
        return SignInWorkflow(role, identity=backends.identity, profiles=backends.profiles)

    def _invites_screen(req: StaffSessionRequest) -> StaffInvitesWorkflow | ApiOutcome:
        sign_in = StaffSignInWorkflow(identity=backends.identity, profiles=backends.profiles)
        session = _with_screen(sign_in, lambda s: s.sign_in(req.to_staff_credentials()))
        if not session.ok:
            return session
        return StaffInvitesWorkflow(
            identity=backends.identity,
            profiles=backends.profiles,
            staff_uid=session.uid or "",
            staff_email=req.staff_email.strip(),
        )

    @app.get("/api/health")
    def health() -> dict[str, object]:
        return {"status": "ok", "version": __version__, "backend": settings.backend}

    @app.post("/api/staff/register", response_model=ApiOutcome)
    def staff_register(req: StaffRegisterRequest) -> ApiOutcome:
        screen = StaffRegistrationWorkflow(
            identity=backends.identity,
            profiles=backends.profiles,
            main_staff_email=settings.main_staff_email,
        )
        return _with_screen(screen, lambda s: s.register(req.to_form()))

    @app.post("/api/staff/invites", response_model=ApiOutcome)
    def add_invite(req: StaffInviteRequest) -> ApiOutcome:
        screen = _invites_screen(req)
        if isinstance(screen, ApiOutcome):
            return screen
        return _with_screen(screen, lambda s: s.add_invite(req.to_form()))

    @app.post("/api/staff/invites/remove", response_model=ApiOutcome)
    def remove_invite(req: RemoveInviteRequest) -> ApiOutcome:
        screen = _invites_screen(req)
        if isinstance(screen, ApiOutcome):
            return screen
        return _with_screen(screen, lambda s: s.remove_invite(req.email))

    @app.post("/api/volunteer/forgot-password", response_model=ApiOutcome)
    def forgot_password(req: PasswordResetRequest) -> ApiOutcome:
        screen = ForgotPasswordWorkflow(identity=backends.identity, profiles=backends.profiles)
        return _with_screen(screen, lambda s: s.request_reset(req.email))

    @app.post("/api/{role}/register", response_model=ApiOutcome)
    def register(role: Role, req: RegisterRequest) -> ApiOutcome:
        if role is Role.STAFF:
            raise HTTPException(status_code=404, detail="Use /api/staff/register")
        screen = RegistrationWorkflow(role, identity=backends.identity, profiles=backends.profiles)
        return _with_screen(screen, lambda s: s.register(req.to_form()))

    @app.post("/api/{role}/login", response_model=ApiOutcome)
    def login(role: Role, req: LoginRequest) -> ApiOutcome:
        return _with_screen(_sign_in_screen(role), lambda s: s.sign_in(req.to_credentials()))

    @app.post("/api/{role}/password-reset", response_model=ApiOutcome)
    def password_reset(role: Role, req: PasswordResetRequest) -> ApiOutcome:
        return _with_screen(_sign_in_screen(role), lambda s: s.request_password_reset(req.email))

    logger.info("Accounts API ready", extra={"backend": settings.backend})
    return app
