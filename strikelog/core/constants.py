"""
Constants
Centralised storage for bug severities, statuses and dashboard rules.
"""
ARROW = "\u2192"


class Severity:
    """Supported severity identifiers, highest priority first."""
    BLOCKER  = "Blocker"
    CRITICAL = "Critical"
    HIGH     = "High"
    MEDIUM   = "Medium"
    LOW      = "Low"


class Status:
    """Bug lifecycle states.  Closed is the only completed state."""
    OPEN        = "Open"
    IN_PROGRESS = "In Progress"
    RESOLVED    = "Resolved"
    CLOSED      = "Closed"


# Priority order (Blocker → Low).  The histogram and chart colours rely on it.
SEVERITY_ORDER: tuple[str, ...] = (
    Severity.BLOCKER,
    Severity.CRITICAL,
    Severity.HIGH,
    Severity.MEDIUM,
    Severity.LOW,
)

# Sort-only ranking, never stored on a record.  Unknown severities weigh 0.
SEVERITY_WEIGHTS: dict[str, int] = {
    Severity.BLOCKER: 5,
    Severity.CRITICAL: 4,
    Severity.HIGH: 3,
    Severity.MEDIUM: 2,
    Severity.LOW: 1,
}

CRITICAL_SEVERITIES = frozenset({Severity.BLOCKER, Severity.CRITICAL})

DEFAULT_SEVERITY = Severity.MEDIUM
DEFAULT_STATUS = Status.OPEN
NO_FILE_SPECIFIED = "No file specified"

# Dashboard
WEEKLY_WINDOW_DAYS = 7
SORT_ASC = "asc"
SORT_DESC = "desc"
SORT_DIRECTIONS = frozenset({SORT_ASC, SORT_DESC})
SORT_KEY_SEVERITY = "severity"
RESOLVED_BY_CREATED = "created"
RESOLVED_BY_CLOSED = "closed"
RESOLVED_BY_MODES = frozenset({RESOLVED_BY_CREATED, RESOLVED_BY_CLOSED})
