"""Staff invite management.

An invite is a `staffInvites` document keyed by the lower-cased email. Its
presence is what lets a non-main staff member register. Only a signed-in
staff member can add or remove invites.
"""

from __future__ import annotations

import logging

from foodlink_accounts import messages
from foodlink_accounts.errors import AuthorizationError, PersistenceError, ValidationError
from foodlink_accounts.models import (
    INVITE_EMAIL_REQUIRED,
    Role,
    StaffInviteForm,
    invite_key,
)
from foodlink_accounts.providers.identity import IdentityProvider
from foodlink_accounts.providers.profile_store import SERVER_TIMESTAMP, ProfileStore
from foodlink_accounts.workflow.base import ScreenWorkflow, StepResult
from foodlink_accounts.workflow.outcome import WorkflowOutcome
from foodlink_accounts.workflow.request_state import RequestStateController

logger = logging.getLogger(__name__)

INVITES_COLLECTION = "staffInvites"


def _describe_add(exc: Exception) -> str:
    if isinstance(exc, AuthorizationError):
        return exc.message
    if isinstance(exc, PersistenceError) and exc.reason:
        return f"{messages.INVITE_ADD_FAILED}: {exc.reason}"
    return messages.INVITE_ADD_FAILED


def _describe_remove(exc: Exception) -> str:
    if isinstance(exc, AuthorizationError):
        return exc.message
    return messages.INVITE_REMOVE_FAILED


class StaffInvitesWorkflow(ScreenWorkflow):
    """Invite list screen opened by the staff member `staff_uid`.

    Neither operation navigates; the screen stays open and shows a notice.
    """

    def __init__(
        self,
        *,
        identity: IdentityProvider,
        profiles: ProfileStore,
        staff_uid: str,
        staff_email: str | None = None,
        controller: RequestStateController | None = None,
    ) -> None:
        super().__init__(identity=identity, profiles=profiles, controller=controller)
        self.staff_uid = staff_uid
        self.staff_email = staff_email

    def add_invite(self, form: StaffInviteForm) -> WorkflowOutcome:
        return self._run(
            "staff.add_invite", form.validate, lambda: self._add(form), _describe_add
        )

    def remove_invite(self, email: str) -> WorkflowOutcome:
        key = invite_key(email)

        def validate() -> None:
            if not key:
                raise ValidationError(field="email", message=INVITE_EMAIL_REQUIRED)

        return self._run(
            "staff.remove_invite", validate, lambda: self._remove(key), _describe_remove
        )

    def _require_staff(self) -> None:
        staff = None
        if self.staff_uid:
            staff = self.profiles.get_document(Role.STAFF.collection, self.staff_uid)
        if staff is None:
            logger.warning("Invite change by non-staff identity", extra={"uid": self.staff_uid})
            raise AuthorizationError(messages.INVITES_STAFF_ONLY)

    def _add(self, form: StaffInviteForm) -> StepResult:
        self._require_staff()
        key = form.email_key
        self.profiles.put_document(
            INVITES_COLLECTION,
            key,
            {
                "name": form.name.strip(),
                "email": form.email.strip(),
                "createdAt": SERVER_TIMESTAMP,
                "createdByUid": self.staff_uid,
                "createdByEmail": self.staff_email,
            },
        )
        logger.info("Staff invite added", extra={"invite": key, "uid": self.staff_uid})
        return StepResult(notice=messages.INVITE_ADDED)

    def _remove(self, key: str) -> StepResult:
        self._require_staff()
        self.profiles.delete_document(INVITES_COLLECTION, key)
        logger.info("Staff invite removed", extra={"invite": key, "uid": self.staff_uid})
        return StepResult(notice=messages.INVITE_REMOVED)
