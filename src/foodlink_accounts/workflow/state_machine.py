from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class WorkflowState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    VALIDATION_FAILED = "validation_failed"
    SUBMITTING = "submitting"
    REMOTE_FAILED = "remote_failed"
    SUCCEEDED = "succeeded"
    NAVIGATED = "navigated"


ALLOWED_TRANSITIONS: dict[WorkflowState, set[WorkflowState]] = {
    WorkflowState.IDLE: {WorkflowState.VALIDATING},
    WorkflowState.VALIDATING: {WorkflowState.VALIDATION_FAILED, WorkflowState.SUBMITTING},
    WorkflowState.VALIDATION_FAILED: {WorkflowState.IDLE},
    WorkflowState.SUBMITTING: {
        WorkflowState.REMOTE_FAILED,
        WorkflowState.SUCCEEDED,
        # Screen disposed while a provider call was pending.
        WorkflowState.IDLE,
    },
    WorkflowState.REMOTE_FAILED: {WorkflowState.IDLE},
    WorkflowState.SUCCEEDED: {WorkflowState.NAVIGATED, WorkflowState.IDLE},
    WorkflowState.NAVIGATED: set(),
}

# Only SUBMITTING holds the request in flight.
IN_FLIGHT_STATES: frozenset[WorkflowState] = frozenset({WorkflowState.SUBMITTING})


class IllegalTransitionError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class WorkflowSnapshot:
    state: WorkflowState
    history: tuple[WorkflowState, ...] = ()

    @property
    def in_flight(self) -> bool:
        return self.state in IN_FLIGHT_STATES

    def to_json(self) -> dict[str, object]:
        return {"state": self.state.value, "history": [s.value for s in self.history]}


def initial() -> WorkflowSnapshot:
    return WorkflowSnapshot(state=WorkflowState.IDLE, history=(WorkflowState.IDLE,))


def transition(*, current: WorkflowSnapshot, to: WorkflowState) -> WorkflowSnapshot:
    allowed = ALLOWED_TRANSITIONS.get(current.state, set())
    if to not in allowed:
        raise IllegalTransitionError(f"Illegal transition: {current.state.value} -> {to.value}")
    return WorkflowSnapshot(state=to, history=current.history + (to,))
