"""Pydantic schemas for the metafield definition CSV import."""
from enum import Enum
from typing import Literal

from pydantic import BaseModel


class MetafieldRow(BaseModel):
    """A CSV row after trimming; name, key and type are non-empty."""
    name: str
    key: str
    type: str
    description: str = ""


class OutcomeKind(str, Enum):
    CREATED = "created"
    USER_ERRORS = "user_errors"
    UNKNOWN = "unknown"
    TRANSPORT_FAILURE = "transport_failure"
    SKIPPED = "skipped"


class RowOutcome(BaseModel):
    kind: OutcomeKind
    message: str


class ImportResponse(BaseModel):
    status: Literal["success", "error"]
    log: list[str]
    created: int = 0
    failed: int = 0
    skipped: int = 0
