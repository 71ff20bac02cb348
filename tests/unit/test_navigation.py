"""Unit tests for destination dispatch."""

from __future__ import annotations

from unittest.mock import Mock

from foodlink_accounts.models import Role
from foodlink_accounts.navigation import Destination, Route, dashboard_for, dispatch, login_for
from foodlink_accounts.workflow import WorkflowOutcome, WorkflowState


def test_role_routes() -> None:
    assert dashboard_for(Role.STORE) is Route.STORE_DASHBOARD
    assert dashboard_for(Role.VOLUNTEER) is Route.VOLUNTEER_DASHBOARD
    assert dashboard_for(Role.STAFF) is Route.ADMIN_DASHBOARD
    assert login_for(Role.STAFF) is Route.ADMIN_LOGIN


def test_dispatch_clears_history() -> None:
    navigator = Mock()
    outcome = WorkflowOutcome(
        ok=True,
        state=WorkflowState.NAVIGATED,
        destination=Destination(route=Route.STORE_DASHBOARD),
    )

    assert dispatch(outcome, navigator) is True
    navigator.navigate_and_clear_history.assert_called_once_with("storeDashboard")
    navigator.navigate.assert_not_called()


def test_dispatch_push_and_no_destination() -> None:
    navigator = Mock()
    pop_back = WorkflowOutcome(
        ok=True,
        state=WorkflowState.NAVIGATED,
        destination=Destination(route=Route.ADMIN_LOGIN, clear_history=False),
    )
    stay = WorkflowOutcome(ok=False, state=WorkflowState.IDLE, message="Incorrect password.")

    assert dispatch(pop_back, navigator) is True
    assert dispatch(stay, navigator) is False
    navigator.navigate.assert_called_once_with("adminLogin")
