"""Tests for the validate, check, write flow of submission intake."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from formintake.core.errors import NotFoundError, ValidationError
from formintake.models.submission import Submission
from formintake.services import intake
from formintake.services.intake import accept_submission


def _submission_count(db) -> int:
    return db.execute(select(func.count(Submission.id))).scalar_one()


@pytest.mark.parametrize(
    "form_id, data",
    [
        (None, {"q1": "yes"}),
        ("", {"q1": "yes"}),
        ("f1", None),
        ("f1", ""),
        ("f1", {}),
        (None, None),
    ],
)
def test_missing_envelope_fields_are_rejected_before_lookup(db_session, monkeypatch, form_id, data):
    def _fail(*args, **kwargs):
        raise AssertionError("store must not be queried")

    monkeypatch.setattr(intake, "get_form", _fail)

    with pytest.raises(ValidationError) as excinfo:
        accept_submission(db_session, form_id, data)

    assert excinfo.value.message == "Missing form_id or data"
    assert excinfo.value.status_code == 400
    assert _submission_count(db_session) == 0


def test_unknown_and_unpublished_forms_fail_identically(db_session, draft_form):
    with pytest.raises(NotFoundError) as missing:
        accept_submission(db_session, "does-not-exist", {"q1": "yes"})
    with pytest.raises(NotFoundError) as unpublished:
        accept_submission(db_session, draft_form.id, {"q1": "yes"})

    assert missing.value.message == unpublished.value.message == "Form not found or not published"
    assert missing.value.status_code == unpublished.value.status_code == 404
    assert _submission_count(db_session) == 0


def test_accepted_submission_is_pending_and_keeps_payload(db_session, published_form):
    payload = {"q1": "yes", "nested": {"items": [1, 2, 3]}}

    submission = accept_submission(
        db_session,
        published_form.id,
        payload,
        metadata={"referrer": "newsletter"},
        ip_address="10.0.0.1",
        user_agent="pytest",
    )

    assert submission.id
    assert submission.form_id == published_form.id
    assert submission.status == "PENDING"
    assert submission.data == payload
    assert submission.extra_metadata == {"referrer": "newsletter"}
    assert submission.source == "DIRECT"
    assert submission.ip_address == "10.0.0.1"
    assert _submission_count(db_session) == 1


def test_identical_requests_create_distinct_submissions(db_session, published_form):
    first = accept_submission(db_session, published_form.id, {"q1": "yes"})
    second = accept_submission(db_session, published_form.id, {"q1": "yes"})

    assert first.id != second.id
    assert _submission_count(db_session) == 2


def test_store_failure_during_write_propagates(db_session, published_form, monkeypatch):
    def _broken(*args, **kwargs):
        raise SQLAlchemyError("database unavailable")

    monkeypatch.setattr(intake, "create_submission", _broken)

    with pytest.raises(SQLAlchemyError):
        accept_submission(db_session, published_form.id, {"q1": "yes"})
