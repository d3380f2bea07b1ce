"""
Status Policy
=============
Which status changes the admin is allowed to make.

Lifecycle:
    Open → In Progress → Resolved → Closed → In Progress (reopen)

Rules:
    - Closed is only reachable from Resolved ("Mark Fixed" needs a Resolved bug)
    - A Closed bug can only be reopened to In Progress
    - Open / In Progress / Resolved can move freely between each other
    - Setting the current status again is a no-op and always allowed

The dashboard aggregator never checks these rules; it counts whatever
status a record carries.
"""
from strikelog.core.constants import Status
from strikelog.services.errors import StatusTransitionError

_ALLOWED: dict[str, frozenset[str]] = {
    Status.OPEN: frozenset({Status.IN_PROGRESS, Status.RESOLVED}),
    Status.IN_PROGRESS: frozenset({Status.OPEN, Status.RESOLVED}),
    Status.RESOLVED: frozenset({Status.OPEN, Status.IN_PROGRESS, Status.CLOSED}),
    Status.CLOSED: frozenset({Status.IN_PROGRESS}),
}


def can_transition(current: str, new: str) -> bool:
    if current == new:
        return True
    return new in _ALLOWED.get(current, frozenset())


def check_transition(current: str, new: str) -> None:
    """Raise StatusTransitionError if current → new is not allowed."""
    if not can_transition(current, new):
        raise StatusTransitionError(current, new)
