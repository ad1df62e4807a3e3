"""SQLAlchemy model for accounts that author forms."""

from __future__ import annotations

from uuid import uuid4

from sqlalchemy import Column, Text
from sqlalchemy.orm import relationship

from ..db.session import Base


def _new_id() -> str:
    return uuid4().hex


class User(Base):
    __tablename__ = "users"
    __allow_unmapped__ = True

    id = Column(Text, primary_key=True, default=_new_id)
    email = Column(Text, nullable=False, unique=True, index=True)
    name = Column(Text, nullable=True)
    password_hash = Column(Text, nullable=True)
    created_at = Column(Text, nullable=False)

    forms = relationship("Form", back_populates="owner", cascade="all, delete-orphan")


__all__ = ["User"]
