"""Store and volunteer registration.

Provisioning order is fixed: the identity is created first and its uid keys
the profile document. If the document write fails after the identity exists,
the identity is left in place (no rollback) and the orphan is logged so it
can be reconciled out of band.
"""

from __future__ import annotations

import logging

from foodlink_accounts import messages
from foodlink_accounts.errors import IdentityError, PersistenceError
from foodlink_accounts.models import RegistrationForm, Role
from foodlink_accounts.navigation import Destination, dashboard_for
from foodlink_accounts.providers.identity import IdentityProvider
from foodlink_accounts.providers.profile_store import SERVER_TIMESTAMP, ProfileStore
from foodlink_accounts.workflow.base import ScreenWorkflow, StepResult
from foodlink_accounts.workflow.outcome import WorkflowOutcome
from foodlink_accounts.workflow.request_state import RequestStateController

logger = logging.getLogger(__name__)


def _describe(exc: Exception) -> str:
    if isinstance(exc, IdentityError):
        return messages.registration_error(exc)
    return messages.REGISTRATION_UNKNOWN


class RegistrationWorkflow(ScreenWorkflow):
    def __init__(
        self,
        role: Role,
        *,
        identity: IdentityProvider,
        profiles: ProfileStore,
        controller: RequestStateController | None = None,
    ) -> None:
        if role is Role.STAFF:
            raise ValueError("Staff accounts are registered with StaffRegistrationWorkflow")
        super().__init__(identity=identity, profiles=profiles, controller=controller)
        self.role = role

    def register(self, form: RegistrationForm) -> WorkflowOutcome:
        return self._run(
            f"{self.role.value}.register",
            form.validate,
            lambda: self._provision(form),
            _describe,
        )

    def _provision(self, form: RegistrationForm) -> StepResult:
        credentials = form.credentials
        uid = self.identity.create_identity(credentials.email, credentials.password)
        logger.info("Identity created", extra={"role": self.role.value, "uid": uid})

        fields: dict[str, object] = {
            **form.profile.to_fields(self.role),
            "createdAt": SERVER_TIMESTAMP,
            "active": True,
        }
        try:
            self.profiles.put_document(self.role.collection, uid, fields)
        except PersistenceError:
            logger.error(
                "Identity exists without a profile document",
                extra={"role": self.role.value, "uid": uid, "collection": self.role.collection},
            )
            raise

        return StepResult(destination=Destination(route=dashboard_for(self.role)), uid=uid)
