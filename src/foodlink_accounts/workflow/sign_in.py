"""Sign-in and password reset for every role."""

from __future__ import annotations

import logging

from foodlink_accounts import messages
from foodlink_accounts.errors import AuthorizationError, IdentityError, ValidationError
from foodlink_accounts.models import Credentials, Role
from foodlink_accounts.navigation import Destination, Route, dashboard_for, registration_for
from foodlink_accounts.providers.identity import IdentityProvider
from foodlink_accounts.providers.profile_store import ProfileStore
from foodlink_accounts.workflow.base import ScreenWorkflow, StepResult
from foodlink_accounts.workflow.outcome import WorkflowOutcome
from foodlink_accounts.workflow.request_state import RequestStateController

logger = logging.getLogger(__name__)


class SignInWorkflow(ScreenWorkflow):
    """Login screen for one role, including its "Forgot password?" link."""

    def __init__(
        self,
        role: Role,
        *,
        identity: IdentityProvider,
        profiles: ProfileStore,
        controller: RequestStateController | None = None,
    ) -> None:
        super().__init__(identity=identity, profiles=profiles, controller=controller)
        self.role = role
        self.messages = messages.MESSAGES[role]

    def sign_in(self, credentials: Credentials) -> WorkflowOutcome:
        creds = credentials.normalized()

        def validate() -> None:
            try:
                creds.validate()
            except ValidationError as e:
                raise ValidationError(field=e.field, message=messages.ENTER_BOTH) from e

        return self._run(
            f"{self.role.value}.sign_in",
            validate,
            lambda: self._authenticate(creds),
            self._describe_sign_in,
        )

    def request_password_reset(self, email: str) -> WorkflowOutcome:
        address = email.strip()

        def validate() -> None:
            if not address:
                raise ValidationError(field="email", message=self.messages.reset_prompt)

        def submit() -> StepResult:
            self.identity.send_password_reset(address)
            return StepResult(notice=self.messages.reset_notice(address))

        return self._run(
            f"{self.role.value}.password_reset",
            validate,
            submit,
            self._describe_reset,
        )

    def open_registration(self) -> Destination | None:
        """Follow the login screen's "Register" link; history is kept so back returns here."""

        route = registration_for(self.role)
        if route is None:
            return None
        return Destination(route=route, clear_history=False)

    def _authenticate(self, creds: Credentials) -> StepResult:
        uid = self.identity.authenticate(creds.email, creds.password)
        return StepResult(destination=Destination(route=dashboard_for(self.role)), uid=uid)

    def _describe_sign_in(self, exc: Exception) -> str:
        if isinstance(exc, IdentityError):
            return self.messages.sign_in_error(exc)
        if isinstance(exc, AuthorizationError):
            return exc.message
        return messages.SOMETHING_WENT_WRONG

    def _describe_reset(self, exc: Exception) -> str:
        if isinstance(exc, IdentityError):
            return self.messages.reset_error(exc)
        return self.messages.reset_failed


STAFF_COLLECTION = Role.STAFF.collection


class StaffSignInWorkflow(SignInWorkflow):
    """Staff login: a valid identity must also own a document in `staff`."""

    def __init__(
        self,
        *,
        identity: IdentityProvider,
        profiles: ProfileStore,
        controller: RequestStateController | None = None,
    ) -> None:
        super().__init__(Role.STAFF, identity=identity, profiles=profiles, controller=controller)

    def _authenticate(self, creds: Credentials) -> StepResult:
        result = super()._authenticate(creds)
        uid = result.uid or ""
        try:
            is_staff = self.profiles.get_document(STAFF_COLLECTION, uid) is not None
        except Exception:
            self.identity.sign_out()
            raise
        if not is_staff:
            logger.warning("Non-staff identity attempted staff login", extra={"uid": uid})
            self.identity.sign_out()
            raise AuthorizationError(messages.NOT_STAFF)
        return result


class ForgotPasswordWorkflow(ScreenWorkflow):
    """Standalone volunteer reset screen; pops back to the login on success."""

    def request_reset(self, email: str) -> WorkflowOutcome:
        address = email.strip()

        def validate() -> None:
            if not address or "@" not in address:
                raise ValidationError(field="email", message=messages.FORGOT_INVALID_EMAIL)

        def submit() -> StepResult:
            self.identity.send_password_reset(address)
            return StepResult(
                destination=Destination(route=Route.VOLUNTEER_LOGIN, clear_history=False),
                notice=messages.FORGOT_SENT,
            )

        return self._run("volunteer.forgot_password", validate, submit, self._describe)

    @staticmethod
    def _describe(exc: Exception) -> str:
        if isinstance(exc, IdentityError):
            return messages.MESSAGES[Role.VOLUNTEER].reset_error(exc)
        return messages.FORGOT_FAILED
