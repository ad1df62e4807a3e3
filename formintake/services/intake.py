"""Accept one external submission addressed to a form.

The flow is validate, check, write:

1. The envelope must carry both ``form_id`` and ``data``. Nothing about the
   payload's inner shape is checked.
2. The form must exist and be published. Both failure cases produce the same
   ``NotFoundError`` so callers cannot probe which forms exist as drafts.
3. One ``PENDING`` submission is written.

The lookup and the insert are separate statements; a form unpublished in
between still receives the submission. Database errors raised by the insert
are not caught here.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from ..core.errors import NotFoundError, ValidationError
from ..core.logging import log_event
from ..crud.forms import get_form
from ..crud.submissions import create_submission
from ..models.submission import STATUS_PENDING, Submission

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Missing form_id or data"
FORM_UNAVAILABLE_MESSAGE = "Form not found or not published"


def accept_submission(
    db: Session,
    form_id: str | None,
    data: Any,
    *,
    metadata: dict[str, Any] | None = None,
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> Submission:
    if not form_id or not data:
        log_event(logger, "submission.rejected", reason="missing_fields")
        raise ValidationError(MISSING_FIELDS_MESSAGE)

    form = get_form(db, form_id)
    if form is None or not form.is_published:
        log_event(logger, "submission.rejected", reason="form_unavailable", form_id=form_id)
        raise NotFoundError(FORM_UNAVAILABLE_MESSAGE)

    submission = create_submission(
        db,
        form_id=form.id,
        data=data,
        status=STATUS_PENDING,
        metadata=metadata,
        ip_address=ip_address,
        user_agent=user_agent,
    )
    log_event(logger, "submission.accepted", form_id=form.id, submission_id=submission.id)
    return submission
