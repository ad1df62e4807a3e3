from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from ..crud.submissions import get_owned_submission, update_submission_status
from ..db.session import get_db
from ..deps.auth import AuthContext, require_user
from ..models.submission import Submission
from ..schemas.submission import (
    SubmissionAck,
    SubmissionCreate,
    SubmissionDetail,
    SubmissionOut,
    SubmissionStatusUpdate,
)
from ..services.intake import accept_submission

router = APIRouter(prefix="/api/v1/submissions", tags=["submissions"])

NOT_OWNED_MESSAGE = "Submission not found or you do not have access"


def submission_to_schema(submission: Submission) -> SubmissionOut:
    return SubmissionOut(
        id=submission.id,
        form_id=submission.form_id,
        data=submission.data,
        metadata=submission.extra_metadata,
        status=submission.status,
        source=submission.source,
        submitted_at=submission.submitted_at,
    )


@router.post("", response_model=SubmissionAck, summary="Submit a response to a published form")
def api_create_submission(payload: SubmissionCreate, request: Request, db: Session = Depends(get_db)):
    submission = accept_submission(
        db,
        payload.form_id,
        payload.data,
        metadata=payload.metadata,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    return SubmissionAck(success=True, id=submission.id)


@router.get("/{submission_id}", response_model=SubmissionDetail)
def api_get_submission(
    submission_id: str,
    auth: AuthContext = Depends(require_user),
    db: Session = Depends(get_db),
):
    submission = get_owned_submission(db, submission_id, auth.user_id)
    if not submission:
        raise HTTPException(404, NOT_OWNED_MESSAGE)
    base = submission_to_schema(submission)
    return SubmissionDetail(
        **base.model_dump(),
        ip_address=submission.ip_address,
        user_agent=submission.user_agent,
        form_title=submission.form.title if submission.form else None,
    )


@router.patch("/{submission_id}/status", response_model=SubmissionOut)
def api_update_submission_status(
    submission_id: str,
    payload: SubmissionStatusUpdate,
    auth: AuthContext = Depends(require_user),
    db: Session = Depends(get_db),
):
    submission = get_owned_submission(db, submission_id, auth.user_id)
    if not submission:
        raise HTTPException(404, NOT_OWNED_MESSAGE)
    try:
        updated = update_submission_status(db, submission, payload.status)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return submission_to_schema(updated)
