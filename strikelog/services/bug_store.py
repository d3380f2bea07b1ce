"""
Bug Store
=========
In-memory storage for bug records.

Scope:
    - Process-local, no persistence across restarts
    - No pagination or server-side filtering: list_bugs() returns everything
    - Ordering: most recent first by created_at

Mutation:
    - create() assigns id and created_at
    - update_status() is the only way a stored record changes; it enforces
      the status policy and keeps closed_at in step with the Closed state
    - delete() removes a record permanently

Dashboard consumers take a snapshot with list_bugs() and hand it to the
aggregator; the store itself never computes derived state.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, List, Optional

from strikelog.core.constants import Status
from strikelog.models.bug_report import BugCreate, BugRecord
from strikelog.services.errors import BugNotFoundError
from strikelog.services.status_policy import check_transition

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BugStore:
    """
    In-memory bug repository.

    Usage:
        store = BugStore()
        bug = store.create(BugCreate(title="Crash on save", severity="High"))
        store.update_status(bug.id, "Resolved")
        snapshot = store.list_bugs()
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None) -> None:
        # bug id → record
        self._bugs: dict[str, BugRecord] = {}
        self._clock = clock or _utc_now

    def list_bugs(self) -> List[BugRecord]:
        """All records, newest first.  Returns a new list on every call."""
        return sorted(self._bugs.values(), key=lambda bug: bug.created_at, reverse=True)

    def create(self, payload: BugCreate) -> BugRecord:
        """
        Store a new bug.

        Parameters
        ----------
        payload : BugCreate
            Validated submission.  A payload that is already Closed gets
            closed_at stamped at creation time.

        Returns
        -------
        BugRecord
            The stored record with its generated id.
        """
        now = self._clock()
        record = BugRecord(
            id=uuid.uuid4().hex[:24],
            created_at=now,
            closed_at=now if payload.status == Status.CLOSED else None,
            **payload.model_dump(),
        )
        self._bugs[record.id] = record
        logger.info(
            "Bug %s created: %r (severity=%s, reporter=%s)",
            record.id, record.title, record.severity, record.reporter or "unknown",
        )
        return record

    def get(self, bug_id: str) -> BugRecord:
        try:
            return self._bugs[bug_id]
        except KeyError:
            raise BugNotFoundError(bug_id) from None

    def update_status(self, bug_id: str, new_status: str) -> BugRecord:
        """
        Change a bug's status and return the refreshed record.

        Raises BugNotFoundError for an unknown id and StatusTransitionError
        when the policy forbids the change.
        """
        current = self.get(bug_id)
        check_transition(current.status, new_status)

        closed_at = current.closed_at
        if new_status == Status.CLOSED and current.status != Status.CLOSED:
            closed_at = self._clock()
        elif new_status != Status.CLOSED:
            closed_at = None

        updated = current.model_copy(update={"status": new_status, "closed_at": closed_at})
        self._bugs[bug_id] = updated
        logger.info("Bug %s status: %s -> %s", bug_id, current.status, new_status)
        return updated

    def delete(self, bug_id: str) -> None:
        if self._bugs.pop(bug_id, None) is None:
            raise BugNotFoundError(bug_id)
        logger.info("Bug %s deleted", bug_id)

    def clear(self) -> None:
        """Remove every record."""
        self._bugs.clear()
        logger.debug("Bug store cleared")

    def __len__(self) -> int:
        return len(self._bugs)


_default_store = BugStore()


def get_bug_store() -> BugStore:
    """FastAPI dependency returning the process-wide store."""
    return _default_store
