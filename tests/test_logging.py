import json
import logging

from bottin.extensions import JsonFormatter
from bottin.services.logging import log_structured_event


def _record(**extra):
    record = logging.LogRecord(
        name="bottin.audit",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Utente approvato",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_extra_fields():
    line = JsonFormatter().format(_record(action="user_approved", user_id=7))

    data = json.loads(line)
    assert data["level"] == "INFO"
    assert data["logger"] == "bottin.audit"
    assert data["message"] == "Utente approvato"
    assert data["extra"] == {"action": "user_approved", "user_id": 7}
    assert "request" not in data


def test_json_formatter_request_context(app):
    with app.test_request_context("/api/events", method="POST"):
        data = json.loads(JsonFormatter().format(_record()))

    assert data["request"] == {"method": "POST", "path": "/api/events"}


def test_audit_event_default_message_and_reserved_fields(caplog):
    with caplog.at_level(logging.INFO, logger="bottin.audit"):
        log_structured_event("user_approved", actor_id=1, user_id=7, name="Lea")

    record = caplog.records[-1]
    assert record.name == "bottin.audit"
    assert record.getMessage() == "Utente approvato"
    assert record.action == "user_approved"
    assert record.user_id == 7
    assert record.field_name == "Lea"
