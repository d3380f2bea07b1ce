"""
Service Errors
==============
Exceptions raised by the bug store and status policy.

Routers translate them to HTTP responses:
    BugNotFoundError       → 404
    StatusTransitionError  → 409
"""
from strikelog.core.constants import ARROW


class BugNotFoundError(LookupError):
    def __init__(self, bug_id: str) -> None:
        super().__init__(f"Bug not found: {bug_id}")
        self.bug_id = bug_id


class StatusTransitionError(ValueError):
    def __init__(self, current: str, new: str) -> None:
        super().__init__(f"Status change not allowed: {current} {ARROW} {new}")
        self.current = current
        self.new = new
