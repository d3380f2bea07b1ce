"""
Dashboard Aggregator
====================
Derived state for the admin dashboard, computed from a snapshot of bug records.

Operations:
    bucket_by_status        — Open / In Progress / Closed / critical / total counts
    split_active_completed  — partition into not-Closed vs Closed
    sort_by_severity        — stable sort on the severity weight table
    apply_sort              — apply a SortState to a snapshot
    weekly_series           — 7 daily buckets of submitted / resolved counts
    severity_histogram      — 5 fixed-order severity counts
    build_dashboard         — all of the above, composed as the admin view uses them

CONTRACT:
  - Every function takes the snapshot as an argument and keeps no state
    between calls.  Caching is up to the caller.
  - Records may be BugRecord instances or plain mappings (snake_case or
    camelCase keys).
  - Unknown severity / status values are never rejected.  They weigh 0
    when sorting and fall into no category when counting.  An unknown
    status is "active" since it is not Closed.
  - Only invalid call arguments (direction, resolved_by) raise ValueError.
"""
import logging
from collections.abc import Mapping
from datetime import date, datetime, timedelta
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from pydantic.alias_generators import to_camel

from strikelog.core.constants import (
    CRITICAL_SEVERITIES,
    RESOLVED_BY_CLOSED,
    RESOLVED_BY_CREATED,
    RESOLVED_BY_MODES,
    SEVERITY_ORDER,
    SEVERITY_WEIGHTS,
    SORT_DESC,
    SORT_DIRECTIONS,
    SORT_KEY_SEVERITY,
    Status,
    WEEKLY_WINDOW_DAYS,
)
from strikelog.models.dashboard import (
    DashboardSummary,
    SeverityCount,
    SortState,
    StatusBuckets,
    WeeklyBucket,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Record access helpers
# ---------------------------------------------------------------------------
def _field(record: Any, name: str, default: Any = None) -> Any:
    """Read a field from a BugRecord or a raw mapping."""
    if isinstance(record, Mapping):
        if name in record:
            return record[name]
        return record.get(to_camel(name), default)
    return getattr(record, name, default)


def _local_date(value: Any) -> Optional[date]:
    """
    Resolve a timestamp to its local calendar date.

    Aware datetimes are converted to local time first; naive datetimes are
    taken as already local.  ISO-8601 strings are parsed.  Anything else
    (missing or unparseable) returns None.
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    if isinstance(value, date):
        return value
    return None


def _severity(record: Any) -> Optional[str]:
    severity = _field(record, "severity")
    return severity if isinstance(severity, str) else None


def _severity_weight(record: Any) -> int:
    return SEVERITY_WEIGHTS.get(_severity(record), 0)


def _day_label(day: date) -> str:
    return f"{day.strftime('%b')} {day.day}"


# ---------------------------------------------------------------------------
# Counts
# ---------------------------------------------------------------------------
def bucket_by_status(records: Iterable[Any]) -> StatusBuckets:
    """
    Count records per dashboard status card.

    Resolved bugs are only part of ``total``; they have no card of their
    own, so open + in_progress + closed can be less than total.
    """
    buckets = StatusBuckets()
    for record in records:
        buckets.total += 1
        status = _field(record, "status")
        if status == Status.OPEN:
            buckets.open += 1
        elif status == Status.IN_PROGRESS:
            buckets.in_progress += 1
        elif status == Status.CLOSED:
            buckets.closed += 1
        if _severity(record) in CRITICAL_SEVERITIES:
            buckets.critical += 1
    return buckets


def severity_histogram(records: Iterable[Any]) -> List[SeverityCount]:
    """Counts for the five severities in priority order, zeros included."""
    counts = {name: 0 for name in SEVERITY_ORDER}
    for record in records:
        severity = _severity(record)
        if severity in counts:
            counts[severity] += 1
    return [SeverityCount(name=name, value=value) for name, value in counts.items()]


# ---------------------------------------------------------------------------
# Ordering and partitioning
# ---------------------------------------------------------------------------
def split_active_completed(records: Iterable[Any]) -> Tuple[List[Any], List[Any]]:
    """
    Partition records into (active, completed).

    Completed holds only Closed records; everything else, Resolved and
    unrecognised statuses included, is active.  Input order is kept.
    """
    active: List[Any] = []
    completed: List[Any] = []
    for record in records:
        if _field(record, "status") == Status.CLOSED:
            completed.append(record)
        else:
            active.append(record)
    return active, completed


def sort_by_severity(records: Iterable[Any], direction: str = SORT_DESC) -> List[Any]:
    """
    Stable sort by severity weight.

    Parameters
    ----------
    records : Iterable
        Snapshot of bug records.  Not modified.
    direction : str
        "desc" puts Blocker first, "asc" puts Low (and unknown) first.

    Returns
    -------
    list
        New list.  Records with equal weight keep their input order in
        both directions.
    """
    if direction not in SORT_DIRECTIONS:
        raise ValueError(f"Unknown sort direction: {direction!r}")
    # sorted() with reverse=True still preserves the order of equal keys
    return sorted(records, key=_severity_weight, reverse=direction == SORT_DESC)


def apply_sort(records: Iterable[Any], sort_state: Optional[SortState] = None) -> List[Any]:
    """Apply the table's sort state.  Only severity is sortable; other keys keep input order."""
    if sort_state is not None and sort_state.key == SORT_KEY_SEVERITY:
        return sort_by_severity(records, sort_state.direction)
    return list(records)


# ---------------------------------------------------------------------------
# Time series
# ---------------------------------------------------------------------------
def weekly_series(
    records: Iterable[Any],
    reference_date: Optional[date] = None,
    resolved_by: str = RESOLVED_BY_CREATED,
) -> List[WeeklyBucket]:
    """
    Submitted / resolved counts for the 7 calendar days ending on reference_date.

    Parameters
    ----------
    records : Iterable
        Snapshot of bug records.
    reference_date : date, optional
        Last day of the window.  Defaults to today's local date.  A
        datetime is reduced to its local calendar date.
    resolved_by : str
        "created" counts a Closed record on the day it was created.
        "closed" counts it on its closed_at day, falling back to
        created_at when closed_at is missing.

    Returns
    -------
    list[WeeklyBucket]
        Always exactly 7 buckets, oldest first.  Records dated outside the
        window are dropped, not clipped to an edge bucket.
    """
    if resolved_by not in RESOLVED_BY_MODES:
        raise ValueError(f"Unknown resolved_by mode: {resolved_by!r}")

    end = _local_date(reference_date) if reference_date is not None else date.today()
    if end is None:
        raise ValueError(f"Invalid reference_date: {reference_date!r}")

    days = [end - timedelta(days=offset) for offset in range(WEEKLY_WINDOW_DAYS - 1, -1, -1)]
    buckets = {day: WeeklyBucket(date=day, label=_day_label(day)) for day in days}

    for record in records:
        created = _local_date(_field(record, "created_at"))
        bucket = buckets.get(created)
        if bucket is not None:
            bucket.submitted += 1

        if _field(record, "status") != Status.CLOSED:
            continue
        resolved_day = created
        if resolved_by == RESOLVED_BY_CLOSED:
            resolved_day = _local_date(_field(record, "closed_at")) or created
        target = buckets.get(resolved_day)
        if target is not None:
            target.resolved += 1

    return list(buckets.values())


# ---------------------------------------------------------------------------
# Composite view
# ---------------------------------------------------------------------------
def build_dashboard(
    records: Sequence[Any],
    reference_date: Optional[date] = None,
    sort_state: Optional[SortState] = None,
    resolved_by: str = RESOLVED_BY_CREATED,
) -> DashboardSummary:
    """Compute every dashboard panel from one snapshot.  The sort is applied before the split."""
    snapshot = list(records)
    sort_state = sort_state or SortState()

    ordered = apply_sort(snapshot, sort_state)
    active, completed = split_active_completed(ordered)

    summary = DashboardSummary(
        stats=bucket_by_status(snapshot),
        active=active,
        completed=completed,
        weekly=weekly_series(snapshot, reference_date, resolved_by),
        severity=severity_histogram(snapshot),
        sort=sort_state,
    )
    logger.debug(
        "Dashboard built: total=%d active=%d completed=%d sort=%s/%s",
        summary.stats.total, len(active), len(completed),
        sort_state.key, sort_state.direction,
    )
    return summary
