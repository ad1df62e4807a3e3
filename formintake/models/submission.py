"""SQLAlchemy model for responses recorded against a form."""

from __future__ import annotations

import json
from typing import Any
from uuid import uuid4

from sqlalchemy import Column, ForeignKey, Text
from sqlalchemy.orm import relationship

from ..db.session import Base

STATUS_PENDING = "PENDING"
STATUS_PROCESSED = "PROCESSED"
STATUS_ARCHIVED = "ARCHIVED"
STATUS_DELETED = "DELETED"

STATUS_CHOICES = (
    STATUS_PENDING,
    STATUS_PROCESSED,
    STATUS_ARCHIVED,
    STATUS_DELETED,
)

SOURCE_DIRECT = "DIRECT"


def _new_id() -> str:
    return uuid4().hex


class Submission(Base):
    __tablename__ = "submissions"
    __allow_unmapped__ = True

    id = Column(Text, primary_key=True, default=_new_id)
    form_id = Column(Text, ForeignKey("forms.id"), nullable=False, index=True)
    # Payload and metadata are opaque JSON documents stored verbatim.
    data_blob = Column("data", Text, nullable=False)
    metadata_blob = Column("metadata", Text, nullable=True)
    status = Column(Text, nullable=False, default=STATUS_PENDING, index=True)
    source = Column(Text, nullable=True)
    ip_address = Column(Text, nullable=True)
    user_agent = Column(Text, nullable=True)
    submitted_at = Column(Text, nullable=False)

    form = relationship("Form", back_populates="submissions")

    @property
    def data(self) -> Any:
        return json.loads(self.data_blob) if self.data_blob is not None else None

    @data.setter
    def data(self, value: Any) -> None:
        self.data_blob = json.dumps(value)

    @property
    def extra_metadata(self) -> dict[str, Any]:
        if not self.metadata_blob:
            return {}
        try:
            decoded = json.loads(self.metadata_blob)
        except (TypeError, json.JSONDecodeError):
            return {}
        return decoded if isinstance(decoded, dict) else {}

    @extra_metadata.setter
    def extra_metadata(self, value: dict[str, Any] | None) -> None:
        self.metadata_blob = json.dumps(value or {})


__all__ = [
    "SOURCE_DIRECT",
    "STATUS_ARCHIVED",
    "STATUS_CHOICES",
    "STATUS_DELETED",
    "STATUS_PENDING",
    "STATUS_PROCESSED",
    "Submission",
]
