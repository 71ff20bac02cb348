from __future__ import annotations

from dataclasses import dataclass

from foodlink_accounts.errors import ErrorKind
from foodlink_accounts.navigation import Destination
from foodlink_accounts.workflow.state_machine import WorkflowState


@dataclass(frozen=True, slots=True)
class WorkflowOutcome:
    """Result of one workflow invocation.

    `message` is the text the screen shows: an error when `ok` is False, an
    optional transient notice otherwise. `destination` is None when the
    screen stays where it is.
    """

    ok: bool
    state: WorkflowState
    history: tuple[WorkflowState, ...] = ()
    message: str | None = None
    error_kind: ErrorKind | None = None
    field: str | None = None
    destination: Destination | None = None
    uid: str | None = None
    cancelled: bool = False

    def to_json(self) -> dict[str, object]:
        return {
            "ok": self.ok,
            "state": self.state.value,
            "history": [s.value for s in self.history],
            "message": self.message,
            "error_kind": self.error_kind.value if self.error_kind is not None else None,
            "field": self.field,
            "destination": self.destination.to_json() if self.destination else None,
            "uid": self.uid,
            "cancelled": self.cancelled,
        }
