"""SQLAlchemy model for authored forms that collect submissions."""

from __future__ import annotations

import json
from typing import Any
from uuid import uuid4

from sqlalchemy import Column, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship

from ..db.session import Base


def _new_id() -> str:
    return uuid4().hex


class Form(Base):
    """A form template owned by one user.

    Only published forms (``is_published == 1``) accept submissions. The
    ``schema`` column holds the builder's structure as a JSON string; the
    service never interprets it beyond the ``isMultiStep`` hint.
    """

    __tablename__ = "forms"
    __allow_unmapped__ = True

    id = Column(Text, primary_key=True, default=_new_id)
    user_id = Column(Text, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    schema_blob = Column("schema", Text, nullable=True)
    is_published = Column(Integer, nullable=False, default=0)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    owner = relationship("User", back_populates="forms")
    submissions = relationship("Submission", back_populates="form", cascade="all, delete-orphan")

    @property
    def structure(self) -> Any:
        if not self.schema_blob:
            return None
        try:
            return json.loads(self.schema_blob)
        except (TypeError, json.JSONDecodeError):
            return None

    @structure.setter
    def structure(self, value: Any) -> None:
        self.schema_blob = None if value is None else json.dumps(value)

    @property
    def status(self) -> str:
        return "published" if self.is_published else "draft"

    @property
    def is_multi_step(self) -> bool:
        structure = self.structure
        if isinstance(structure, dict):
            return bool(structure.get("isMultiStep", False))
        return False


__all__ = ["Form"]
