"""Account workflows.

Each workflow class stands for one screen instance: it owns a request state
controller, talks to injected providers, and returns a `WorkflowOutcome`
whose destination the caller navigates to.
"""

from foodlink_accounts.workflow.invites import StaffInvitesWorkflow
from foodlink_accounts.workflow.outcome import WorkflowOutcome
from foodlink_accounts.workflow.registration import RegistrationWorkflow
from foodlink_accounts.workflow.request_state import RequestState, RequestStateController
from foodlink_accounts.workflow.sign_in import (
    ForgotPasswordWorkflow,
    SignInWorkflow,
    StaffSignInWorkflow,
)
from foodlink_accounts.workflow.staff import StaffRegistrationWorkflow
from foodlink_accounts.workflow.state_machine import WorkflowState

__all__ = [
    "ForgotPasswordWorkflow",
    "RegistrationWorkflow",
    "RequestState",
    "RequestStateController",
    "SignInWorkflow",
    "StaffInvitesWorkflow",
    "StaffRegistrationWorkflow",
    "StaffSignInWorkflow",
    "WorkflowOutcome",
    "WorkflowState",
]
