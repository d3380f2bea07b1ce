"""
Bug Report Model
================
Pydantic models for bug records and the payloads that create or change them.
This is the ingestion boundary: severity and status are validated here so
that every stored record carries a value from the closed enumerations.

Fields:
    id              — 24-char hex identifier assigned by the store
    title           — required, non-empty
    description     — free text
    reporter        — user identifier of the submitter (not enforced)
    severity        — Blocker / Critical / High / Medium / Low
    status          — Open / In Progress / Resolved / Closed
    affected_file   — file name or "No file specified"
    file_url        — optional link to an uploaded file
    created_at      — set by the store on submission
    closed_at       — set by the store when the bug is Closed, cleared on reopen

Wire format uses camelCase (affectedFile, createdAt, ...); both spellings
are accepted on input.
"""
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from strikelog.core.constants import DEFAULT_SEVERITY, DEFAULT_STATUS, NO_FILE_SPECIFIED

SeverityName = Literal["Blocker", "Critical", "High", "Medium", "Low"]
StatusName = Literal["Open", "In Progress", "Resolved", "Closed"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BugCreate(CamelModel):
    title: str = Field(min_length=1)
    description: str = ""
    reporter: Optional[str] = None
    severity: SeverityName = DEFAULT_SEVERITY
    status: StatusName = DEFAULT_STATUS
    affected_file: str = NO_FILE_SPECIFIED
    file_url: Optional[str] = None


class StatusUpdate(CamelModel):
    status: StatusName


class BugRecord(CamelModel):
    id: str
    title: str
    description: str = ""
    reporter: Optional[str] = None
    severity: SeverityName = DEFAULT_SEVERITY
    status: StatusName = DEFAULT_STATUS
    affected_file: str = NO_FILE_SPECIFIED
    file_url: Optional[str] = None
    created_at: datetime
    closed_at: Optional[datetime] = None
