"""CRUD helpers for submissions."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session, selectinload

from ..models.form import Form
from ..models.submission import SOURCE_DIRECT, STATUS_CHOICES, STATUS_PENDING, Submission


def _utcnow() -> str:
    return datetime.now(tz=timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def create_submission(
    db: Session,
    *,
    form_id: str,
    data: Any,
    status: str = STATUS_PENDING,
    metadata: dict[str, Any] | None = None,
    source: str = SOURCE_DIRECT,
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> Submission:
    """Insert one submission row. Database errors are left to the caller."""

    submission = Submission(
        form_id=form_id,
        status=status,
        source=source,
        ip_address=ip_address,
        user_agent=user_agent,
        submitted_at=_utcnow(),
    )
    submission.data = data
    submission.extra_metadata = metadata
    db.add(submission)
    db.commit()
    db.refresh(submission)
    return submission


def get_owned_submission(db: Session, submission_id: str, user_id: str) -> Submission | None:
    stmt = (
        select(Submission)
        .join(Form, Form.id == Submission.form_id)
        .options(selectinload(Submission.form))
        .where(Submission.id == submission_id, Form.user_id == user_id)
    )
    return db.execute(stmt).scalars().first()


def list_form_submissions(
    db: Session,
    form_id: str,
    *,
    status: str | None = None,
    limit: int = 20,
    offset: int = 0,
) -> tuple[list[Submission], int]:
    """Return one page of submissions (newest first) and the unpaged total."""

    filters = [Submission.form_id == form_id]
    if status:
        filters.append(Submission.status == status.upper())
    total = db.execute(select(func.count(Submission.id)).where(*filters)).scalar_one()
    stmt = (
        select(Submission)
        .where(*filters)
        .order_by(desc(Submission.submitted_at))
        .limit(limit)
        .offset(offset)
    )
    return list(db.execute(stmt).scalars().all()), int(total)


def update_submission_status(db: Session, submission: Submission, status: str) -> Submission:
    value = (status or "").strip().upper()
    if value not in STATUS_CHOICES:
        raise ValueError(f"status must be one of {', '.join(STATUS_CHOICES)}")
    submission.status = value
    db.commit()
    db.refresh(submission)
    return submission
