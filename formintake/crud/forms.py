"""CRUD helpers for forms and their owners."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session

from ..models.form import Form
from ..models.submission import Submission


def _utcnow() -> str:
    return datetime.now(tz=timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def get_form(db: Session, form_id: str) -> Form | None:
    """Primary-key lookup with no ownership or publication filter."""

    return db.get(Form, form_id)


def get_owned_form(db: Session, form_id: str, user_id: str) -> Form | None:
    stmt = select(Form).where(Form.id == form_id, Form.user_id == user_id)
    return db.execute(stmt).scalars().first()


def get_published_form(db: Session, form_id: str) -> Form | None:
    stmt = select(Form).where(Form.id == form_id, Form.is_published == 1)
    return db.execute(stmt).scalars().first()


def list_user_forms(db: Session, user_id: str) -> list[tuple[Form, int]]:
    """Return ``(form, submission_count)`` pairs, most recently updated first."""

    counts = (
        select(Submission.form_id, func.count(Submission.id).label("n"))
        .group_by(Submission.form_id)
        .subquery()
    )
    stmt = (
        select(Form, func.coalesce(counts.c.n, 0))
        .outerjoin(counts, counts.c.form_id == Form.id)
        .where(Form.user_id == user_id)
        .order_by(desc(Form.updated_at), desc(Form.created_at))
    )
    return [(form, int(count)) for form, count in db.execute(stmt).all()]


def create_form(db: Session, user_id: str, payload: dict) -> Form:
    title = (payload.get("title") or "").strip()
    if not title:
        raise ValueError("title is required")
    if payload.get("structure") is None:
        raise ValueError("structure is required")
    now = _utcnow()
    form = Form(
        user_id=user_id,
        title=title,
        description=payload.get("description"),
        is_published=1 if payload.get("status") == "published" else 0,
        created_at=now,
        updated_at=now,
    )
    form.structure = payload["structure"]
    db.add(form)
    db.commit()
    db.refresh(form)
    return form


def update_form(db: Session, form: Form, payload: dict) -> Form:
    """Apply a partial update. ``status`` always decides the publication flag."""

    if payload.get("title") is not None:
        form.title = payload["title"]
    if payload.get("description") is not None:
        form.description = payload["description"]
    if payload.get("structure") is not None:
        form.structure = payload["structure"]
    form.is_published = 1 if payload.get("status") == "published" else 0
    form.updated_at = _utcnow()
    db.commit()
    db.refresh(form)
    return form


def set_form_published(db: Session, form: Form, published: bool) -> Form:
    form.is_published = 1 if published else 0
    form.updated_at = _utcnow()
    db.commit()
    db.refresh(form)
    return form


def delete_form(db: Session, form: Form) -> None:
    db.delete(form)
    db.commit()
