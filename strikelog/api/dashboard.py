"""
GET /api/dashboard
==================
Admin dashboard data, derived from a fresh snapshot of the bug store on
every request.  Nothing is cached between requests.

Query parameters:
    sort_key        — current sort column (only "severity" reorders)
    direction       — current sort direction, "asc" or "desc"
    toggle          — column the user just clicked; the returned sort state
                      is the current one toggled on this column
    reference_date  — last day of the weekly series (default: today)
    resolved_by     — "created" or "closed" (default: WEEKLY_RESOLVED_BY)

Sub-routes return a single panel:
    GET /api/dashboard/weekly
    GET /api/dashboard/severity
"""
import logging
from datetime import date
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException

from strikelog.core.config import WEEKLY_RESOLVED_BY
from strikelog.dashboard.aggregator import build_dashboard, severity_histogram, weekly_series
from strikelog.models.dashboard import DashboardSummary, SeverityCount, SortState, WeeklyBucket
from strikelog.services.bug_store import BugStore, get_bug_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])


@router.get("", response_model=DashboardSummary)
async def get_dashboard(
    sort_key: Optional[str] = None,
    direction: Literal["asc", "desc"] = "desc",
    toggle: Optional[str] = None,
    reference_date: Optional[date] = None,
    resolved_by: Optional[str] = None,
    store: BugStore = Depends(get_bug_store),
):
    sort_state = SortState(key=sort_key, direction=direction)
    if toggle:
        sort_state = sort_state.toggle(toggle)

    snapshot = store.list_bugs()
    try:
        return build_dashboard(
            snapshot,
            reference_date=reference_date,
            sort_state=sort_state,
            resolved_by=resolved_by or WEEKLY_RESOLVED_BY,
        )
    except ValueError as exc:
        logger.warning("[API] Invalid dashboard request: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))


@router.get("/weekly", response_model=List[WeeklyBucket])
async def get_weekly_series(
    reference_date: Optional[date] = None,
    resolved_by: Optional[str] = None,
    store: BugStore = Depends(get_bug_store),
):
    try:
        return weekly_series(store.list_bugs(), reference_date, resolved_by or WEEKLY_RESOLVED_BY)
    except ValueError as exc:
        logger.warning("[API] Invalid weekly series request: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))


@router.get("/severity", response_model=List[SeverityCount])
async def get_severity_histogram(store: BugStore = Depends(get_bug_store)):
    return severity_histogram(store.list_bugs())
