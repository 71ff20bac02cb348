"""Named routes and the navigation seam.

Workflows never navigate themselves. They return a :class:`Destination` and
the caller hands it to whatever navigator its UI framework provides.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Protocol

from foodlink_accounts.models import Role

if TYPE_CHECKING:
    from foodlink_accounts.workflow.outcome import WorkflowOutcome


class Route(str, Enum):
    HOME = "home"
    VOLUNTEER_LOGIN = "volunteerLogin"
    STORE_LOGIN = "storeLogin"
    ADMIN_LOGIN = "adminLogin"
    STORE_REGISTER = "storeRegister"
    VOLUNTEER_DASHBOARD = "volunteerDashboard"
    STORE_DASHBOARD = "storeDashboard"
    ADMIN_DASHBOARD = "adminDashboard"


_DASHBOARDS: dict[Role, Route] = {
    Role.VOLUNTEER: Route.VOLUNTEER_DASHBOARD,
    Role.STORE: Route.STORE_DASHBOARD,
    Role.STAFF: Route.ADMIN_DASHBOARD,
}

_LOGINS: dict[Role, Route] = {
    Role.VOLUNTEER: Route.VOLUNTEER_LOGIN,
    Role.STORE: Route.STORE_LOGIN,
    Role.STAFF: Route.ADMIN_LOGIN,
}


def dashboard_for(role: Role) -> Route:
    return _DASHBOARDS[role]


def login_for(role: Role) -> Route:
    return _LOGINS[role]


def registration_for(role: Role) -> Route | None:
    """Named registration route linked from the role's login screen, if it has one."""

    return Route.STORE_REGISTER if role is Role.STORE else None


@dataclass(frozen=True, slots=True)
class Destination:
    route: Route
    clear_history: bool = True

    def to_json(self) -> dict[str, object]:
        return {"route": self.route.value, "clear_history": self.clear_history}


HOME = Destination(route=Route.HOME, clear_history=True)


class Navigator(Protocol):
    """Navigation stack owned by the presentation layer."""

    def navigate_and_clear_history(self, route: str) -> None: ...

    def navigate(self, route: str) -> None: ...


def dispatch(outcome: WorkflowOutcome, navigator: Navigator) -> bool:
    """Perform the navigation an outcome asks for.

    Returns True if the navigator was called.
    """

    destination = outcome.destination
    if destination is None:
        return False
    if destination.clear_history:
        navigator.navigate_and_clear_history(destination.route.value)
    else:
        navigator.navigate(destination.route.value)
    return True
