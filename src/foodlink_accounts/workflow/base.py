"""Run loop shared by every account screen.

Each public workflow method is one pass through the state machine:

    Idle -> Validating -> ValidationFailed -> Idle
                       -> Submitting -> RemoteFailed -> Idle
                                     -> Succeeded -> Navigated (or Idle when
                                        the screen stays put)

Every exception raised while submitting is converted into a
:class:`WorkflowOutcome`; none reach the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from foodlink_accounts.errors import (
    AuthorizationError,
    ErrorKind,
    IdentityError,
    PersistenceError,
    ValidationError,
)
from foodlink_accounts.navigation import HOME, Destination
from foodlink_accounts.providers.identity import IdentityProvider
from foodlink_accounts.providers.profile_store import ProfileStore
from foodlink_accounts.workflow.outcome import WorkflowOutcome
from foodlink_accounts.workflow.request_state import RequestStateController
from foodlink_accounts.workflow.state_machine import (
    WorkflowSnapshot,
    WorkflowState,
    initial,
    transition,
)

logger = logging.getLogger(__name__)

BUSY_MESSAGE = "A request is already in progress."


@dataclass(frozen=True, slots=True)
class StepResult:
    destination: Destination | None = None
    uid: str | None = None
    notice: str | None = None


def _error_kind(exc: Exception) -> ErrorKind:
    if isinstance(exc, IdentityError):
        return ErrorKind.IDENTITY
    if isinstance(exc, PersistenceError):
        return ErrorKind.PERSISTENCE
    if isinstance(exc, AuthorizationError):
        return ErrorKind.AUTHORIZATION
    return ErrorKind.UNKNOWN


class ScreenWorkflow:
    """Base class for one screen instance's workflows.

    Providers are injected so tests can run against fakes. A screen that is
    torn down should call :meth:`dispose`; results that arrive afterwards are
    reported as cancelled and leave the request state untouched.
    """

    def __init__(
        self,
        *,
        identity: IdentityProvider,
        profiles: ProfileStore,
        controller: RequestStateController | None = None,
    ) -> None:
        self.identity = identity
        self.profiles = profiles
        self.controller = controller or RequestStateController()
        self.last_snapshot: WorkflowSnapshot = initial()

    def dispose(self) -> None:
        self.controller.dispose()

    def go_home(self) -> Destination:
        """Back-button interception: return to the home screen, history cleared."""

        return HOME

    def _outcome(
        self,
        snap: WorkflowSnapshot,
        *,
        ok: bool,
        message: str | None = None,
        error_kind: ErrorKind | None = None,
        field: str | None = None,
        destination: Destination | None = None,
        uid: str | None = None,
        cancelled: bool = False,
    ) -> WorkflowOutcome:
        self.last_snapshot = snap
        return WorkflowOutcome(
            ok=ok,
            state=snap.state,
            history=snap.history,
            message=message,
            error_kind=error_kind,
            field=field,
            destination=destination,
            uid=uid,
            cancelled=cancelled,
        )

    def _run(
        self,
        action: str,
        validate: Callable[[], None],
        submit: Callable[[], StepResult],
        describe: Callable[[Exception], str],
    ) -> WorkflowOutcome:
        snap = initial()
        if not self.controller.active:
            return self._outcome(snap, ok=False, cancelled=True)
        if self.controller.in_flight:
            logger.info("Submission rejected while busy", extra={"action": action})
            return self._outcome(snap, ok=False, error_kind=ErrorKind.BUSY, message=BUSY_MESSAGE)

        snap = transition(current=snap, to=WorkflowState.VALIDATING)
        try:
            validate()
        except ValidationError as e:
            snap = transition(current=snap, to=WorkflowState.VALIDATION_FAILED)
            self.controller.fail(e.message)
            logger.info("Validation failed", extra={"action": action, "field": e.field})
            snap = transition(current=snap, to=WorkflowState.IDLE)
            return self._outcome(
                snap,
                ok=False,
                error_kind=ErrorKind.VALIDATION,
                field=e.field,
                message=e.message,
            )

        if not self.controller.begin():
            return self._outcome(
                initial(), ok=False, error_kind=ErrorKind.BUSY, message=BUSY_MESSAGE
            )
        snap = transition(current=snap, to=WorkflowState.SUBMITTING)

        result: StepResult | None = None
        failure: Exception | None = None
        with self.controller.submission():
            try:
                result = submit()
            except (IdentityError, PersistenceError, AuthorizationError) as e:
                logger.warning(
                    "Workflow step failed",
                    extra={"action": action, "error_kind": _error_kind(e).value, "error": str(e)},
                )
                failure = e
            except Exception as e:
                logger.exception("Unexpected workflow failure", extra={"action": action})
                failure = e

        if not self.controller.active:
            logger.info("Screen disposed before completion", extra={"action": action})
            snap = transition(current=snap, to=WorkflowState.IDLE)
            return self._outcome(snap, ok=False, cancelled=True)

        if failure is not None:
            message = describe(failure)
            snap = transition(current=snap, to=WorkflowState.REMOTE_FAILED)
            self.controller.fail(message)
            snap = transition(current=snap, to=WorkflowState.IDLE)
            return self._outcome(snap, ok=False, error_kind=_error_kind(failure), message=message)

        assert result is not None

        snap = transition(current=snap, to=WorkflowState.SUCCEEDED)
        if result.notice:
            self.controller.notify(result.notice)
        if result.destination is not None:
            snap = transition(current=snap, to=WorkflowState.NAVIGATED)
        else:
            snap = transition(current=snap, to=WorkflowState.IDLE)
        logger.info("Workflow succeeded", extra={"action": action, "uid": result.uid})
        return self._outcome(
            snap,
            ok=True,
            message=result.notice,
            destination=result.destination,
            uid=result.uid,
        )
