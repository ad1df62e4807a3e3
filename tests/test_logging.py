import json
import logging

from formintake.core.logging import JsonLogFormatter, log_event
from formintake.middlewares import principal_ctx_var, request_id_ctx_var


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("formintake.test", logging.INFO, __file__, 1, "submission.accepted", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_includes_context_and_extra_data():
    request_token = request_id_ctx_var.set("req-1")
    principal_token = principal_ctx_var.set("jwt:u1")
    try:
        line = JsonLogFormatter().format(_record(extra_data={"form_id": "f1"}))
    finally:
        request_id_ctx_var.reset(request_token)
        principal_ctx_var.reset(principal_token)

    payload = json.loads(line)
    assert payload["event"] == "submission.accepted"
    assert payload["service"] == "formintake"
    assert payload["level"] == "INFO"
    assert payload["request_id"] == "req-1"
    assert payload["principal"] == "jwt:u1"
    assert payload["form_id"] == "f1"
    assert payload["timestamp"].endswith("Z")


def test_formatter_omits_empty_context_and_protects_envelope_keys():
    payload = json.loads(JsonLogFormatter().format(_record(extra_data={"level": "DEBUG", "reason": "x"})))
    assert "request_id" not in payload
    assert "principal" not in payload
    assert payload["level"] == "INFO"
    assert payload["reason"] == "x"


def test_log_event_attaches_fields(caplog):
    logger = logging.getLogger("formintake.test")
    with caplog.at_level(logging.INFO, logger="formintake.test"):
        log_event(logger, "submission.rejected", reason="missing_fields")

    record = caplog.records[-1]
    assert record.getMessage() == "submission.rejected"
    assert record.extra_data == {"reason": "missing_fields"}
