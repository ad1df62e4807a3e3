"""Pydantic schemas describing submission payloads for the API."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class SubmissionCreate(BaseModel):
    """Intake envelope.

    Both fields are optional at the schema level so that a missing field
    reaches the intake service and is reported as a 400, not a 422.
    """

    form_id: Optional[str] = None
    data: Any = None
    metadata: Optional[dict[str, Any]] = None

    model_config = ConfigDict(
        json_schema_extra={"example": {"form_id": "f1", "data": {"q1": "yes"}}},
    )


class SubmissionAck(BaseModel):
    success: bool = True
    id: str


class SubmissionStatusUpdate(BaseModel):
    status: str


class SubmissionOut(BaseModel):
    id: str
    form_id: str
    data: Any = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    status: str
    source: Optional[str] = None
    submitted_at: str


class SubmissionDetail(SubmissionOut):
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    form_title: Optional[str] = None


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class SubmissionPage(BaseModel):
    success: bool = True
    form: dict[str, str]
    submissions: list[SubmissionOut]
    pagination: Pagination
