"""
Bug Endpoints
=============
CRUD over the bug store for the single-page client.

Routes:
    GET    /api/bugs        — all bugs, newest first
    POST   /api/bugs        — submit a bug report
    GET    /api/bugs/{id}   — one bug
    PATCH  /api/bugs/{id}   — change status (admin)
    DELETE /api/bugs/{id}   — remove a bug (admin)

Errors:
    404 — unknown bug id
    409 — status change forbidden by the status policy
    422 — payload failed validation (unknown severity / status, empty title)
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from strikelog.models.bug_report import BugCreate, BugRecord, StatusUpdate
from strikelog.services.bug_store import BugStore, get_bug_store
from strikelog.services.errors import BugNotFoundError, StatusTransitionError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Bugs"])


def _not_found(exc: BugNotFoundError) -> HTTPException:
    logger.warning("[API] %s", exc)
    return HTTPException(status_code=404, detail=str(exc))


@router.get("/bugs", response_model=List[BugRecord])
async def list_bugs(store: BugStore = Depends(get_bug_store)):
    return store.list_bugs()


@router.post("/bugs", response_model=BugRecord, status_code=201)
async def create_bug(payload: BugCreate, store: BugStore = Depends(get_bug_store)):
    return store.create(payload)


@router.get("/bugs/{bug_id}", response_model=BugRecord)
async def get_bug(bug_id: str, store: BugStore = Depends(get_bug_store)):
    try:
        return store.get(bug_id)
    except BugNotFoundError as exc:
        raise _not_found(exc)


@router.patch("/bugs/{bug_id}", response_model=BugRecord)
async def update_bug_status(
    bug_id: str,
    update: StatusUpdate,
    store: BugStore = Depends(get_bug_store),
):
    """Apply a status change.  Closing requires the bug to be Resolved first."""
    try:
        return store.update_status(bug_id, update.status)
    except BugNotFoundError as exc:
        raise _not_found(exc)
    except StatusTransitionError as exc:
        logger.warning("[API] Rejected status change for %s: %s", bug_id, exc)
        raise HTTPException(status_code=409, detail=str(exc))


@router.delete("/bugs/{bug_id}")
async def delete_bug(bug_id: str, store: BugStore = Depends(get_bug_store)):
    try:
        store.delete(bug_id)
    except BugNotFoundError as exc:
        raise _not_found(exc)
    return {"message": "Deleted"}
