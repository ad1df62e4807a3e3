"""Pydantic schemas that describe form payloads for the API."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel


class FormWrite(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    structure: Any = None
    status: Optional[str] = None


class FormStatusUpdate(BaseModel):
    status: Optional[str] = None


class FormOut(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    structure: Any = None
    status: str
    created_at: str
    updated_at: str


class FormListItem(FormOut):
    is_multi_step: bool = False
    submission_count: int = 0


class PublicFormOut(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    structure: Any = None
