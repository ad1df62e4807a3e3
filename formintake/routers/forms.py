from __future__ import annotations

import math

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..crud.forms import (
    create_form,
    delete_form,
    get_owned_form,
    get_published_form,
    list_user_forms,
    set_form_published,
    update_form,
)
from ..crud.submissions import list_form_submissions
from ..db.session import get_db
from ..deps.auth import AuthContext, require_user
from ..models.form import Form
from ..schemas.form import FormListItem, FormOut, FormStatusUpdate, FormWrite, PublicFormOut
from ..schemas.submission import Pagination, SubmissionPage
from .submissions import submission_to_schema

router = APIRouter(prefix="/api/v1/forms", tags=["forms"])


def _form_to_schema(form: Form) -> FormOut:
    return FormOut(
        id=form.id,
        title=form.title,
        description=form.description,
        structure=form.structure,
        status=form.status,
        created_at=form.created_at,
        updated_at=form.updated_at,
    )


@router.get("/public/{form_id}", response_model=PublicFormOut)
def api_get_public_form(form_id: str, db: Session = Depends(get_db)):
    form = get_published_form(db, form_id)
    if not form:
        raise HTTPException(404, "Not found")
    return PublicFormOut(id=form.id, title=form.title, description=form.description, structure=form.structure)


@router.get("", response_model=list[FormListItem])
def api_list_forms(auth: AuthContext = Depends(require_user), db: Session = Depends(get_db)):
    items = []
    for form, count in list_user_forms(db, auth.user_id):
        base = _form_to_schema(form)
        items.append(
            FormListItem(**base.model_dump(), is_multi_step=form.is_multi_step, submission_count=count)
        )
    return items


@router.post("", response_model=FormOut)
def api_create_form(payload: FormWrite, auth: AuthContext = Depends(require_user), db: Session = Depends(get_db)):
    if not (payload.title or "").strip() or payload.structure is None:
        raise HTTPException(400, "Missing title or structure")
    try:
        form = create_form(db, auth.user_id, payload.model_dump())
    except ValueError as exc:
        raise HTTPException(400, "Missing title or structure") from exc
    return _form_to_schema(form)


@router.put("/{form_id}", response_model=FormOut)
def api_update_form(
    form_id: str,
    payload: FormWrite,
    auth: AuthContext = Depends(require_user),
    db: Session = Depends(get_db),
):
    form = get_owned_form(db, form_id, auth.user_id)
    if not form:
        raise HTTPException(404, "Not found")
    updated = update_form(db, form, payload.model_dump())
    return _form_to_schema(updated)


@router.put("/{form_id}/status")
def api_update_form_status(
    form_id: str,
    payload: FormStatusUpdate,
    auth: AuthContext = Depends(require_user),
    db: Session = Depends(get_db),
):
    form = get_owned_form(db, form_id, auth.user_id)
    if not form:
        raise HTTPException(404, "Not found")
    updated = set_form_published(db, form, payload.status == "published")
    return {"success": True, "status": updated.status}


@router.delete("/{form_id}")
def api_delete_form(form_id: str, auth: AuthContext = Depends(require_user), db: Session = Depends(get_db)):
    form = get_owned_form(db, form_id, auth.user_id)
    if not form:
        raise HTTPException(404, "Not found")
    delete_form(db, form)
    return {"success": True}


@router.get("/{form_id}/submissions", response_model=SubmissionPage)
def api_list_form_submissions(
    form_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status: str | None = None,
    auth: AuthContext = Depends(require_user),
    db: Session = Depends(get_db),
):
    form = get_owned_form(db, form_id, auth.user_id)
    if not form:
        raise HTTPException(404, "Form not found or you do not have access")
    submissions, total = list_form_submissions(
        db,
        form.id,
        status=status,
        limit=limit,
        offset=(page - 1) * limit,
    )
    return SubmissionPage(
        form={"id": form.id, "title": form.title},
        submissions=[submission_to_schema(item) for item in submissions],
        pagination=Pagination(page=page, limit=limit, total=total, pages=math.ceil(total / limit)),
    )
