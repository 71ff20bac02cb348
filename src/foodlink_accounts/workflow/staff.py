"""Invite-gated staff registration."""

from __future__ import annotations

import logging

from foodlink_accounts import messages
from foodlink_accounts.errors import AuthorizationError, IdentityError, PersistenceError
from foodlink_accounts.models import Role, StaffRegistrationForm, invite_key
from foodlink_accounts.navigation import Destination, login_for
from foodlink_accounts.providers.identity import IdentityProvider
from foodlink_accounts.providers.profile_store import SERVER_TIMESTAMP, ProfileStore
from foodlink_accounts.workflow.base import ScreenWorkflow, StepResult
from foodlink_accounts.workflow.invites import INVITES_COLLECTION
from foodlink_accounts.workflow.outcome import WorkflowOutcome
from foodlink_accounts.workflow.request_state import RequestStateController

logger = logging.getLogger(__name__)


def _describe(exc: Exception) -> str:
    if isinstance(exc, IdentityError):
        return messages.staff_registration_error(exc)
    if isinstance(exc, AuthorizationError):
        return exc.message
    return messages.STAFF_UNKNOWN


class StaffRegistrationWorkflow(ScreenWorkflow):
    """Register a staff account.

    Any email other than `main_staff_email` needs a `staffInvites` document
    keyed by the lower-cased address. On success the screen returns to the
    staff login instead of opening the dashboard.
    """

    def __init__(
        self,
        *,
        identity: IdentityProvider,
        profiles: ProfileStore,
        main_staff_email: str,
        controller: RequestStateController | None = None,
    ) -> None:
        super().__init__(identity=identity, profiles=profiles, controller=controller)
        self.main_staff_email = main_staff_email.strip().lower()

    def register(self, form: StaffRegistrationForm) -> WorkflowOutcome:
        return self._run("staff.register", form.validate, lambda: self._provision(form), _describe)

    def _provision(self, form: StaffRegistrationForm) -> StepResult:
        credentials = form.credentials
        email_key = invite_key(credentials.email)
        is_main_staff = email_key == self.main_staff_email

        if not is_main_staff:
            invite = self.profiles.get_document(INVITES_COLLECTION, email_key)
            if invite is None:
                logger.warning("Staff registration without invite", extra={"email": email_key})
                raise AuthorizationError(messages.STAFF_NOT_INVITED)

        uid = self.identity.create_identity(credentials.email, credentials.password)
        try:
            self.profiles.put_document(
                Role.STAFF.collection,
                uid,
                {
                    "name": form.name.strip(),
                    "email": credentials.email,
                    "role": "staff",
                    "createdAt": SERVER_TIMESTAMP,
                    "isMainStaff": is_main_staff,
                },
            )
        except PersistenceError:
            logger.error(
                "Identity exists without a profile document",
                extra={"role": Role.STAFF.value, "uid": uid, "collection": Role.STAFF.collection},
            )
            raise
        logger.info("Staff account created", extra={"uid": uid, "is_main_staff": is_main_staff})
        return StepResult(
            destination=Destination(route=login_for(Role.STAFF), clear_history=False),
            uid=uid,
            notice=messages.STAFF_CREATED,
        )
