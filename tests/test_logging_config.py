import json
import logging

from site_synthesizer.logging_config import (
    CredentialRedactionFilter,
    StructuredFormatter,
    get_trace_id,
    set_trace_id,
)


def _record(msg: str, *args, **extra) -> logging.LogRecord:
    record = logging.LogRecord("site_synthesizer.test", logging.INFO, __file__, 10, msg, args or None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_redaction_filter_masks_key_query_parameter():
    record = _record("POST %s", "https://example.com/v1/models/m:generateContent?key=secret-123&alt=json")

    assert CredentialRedactionFilter().filter(record)
    message = record.getMessage()
    assert "secret-123" not in message
    assert "?key=***&alt=json" in message


def test_redaction_filter_leaves_other_messages_alone():
    record = _record("Generated site from template")

    CredentialRedactionFilter().filter(record)

    assert record.getMessage() == "Generated site from template"


def test_structured_formatter_includes_extra_fields_and_trace():
    set_trace_id("trace-abc")
    record = _record("Accepted external markup", source="externalRelay", html_length=512)

    payload = json.loads(StructuredFormatter().format(record))

    assert payload["message"] == "Accepted external markup"
    assert payload["severity"] == "INFO"
    assert payload["source"] == "externalRelay"
    assert payload["html_length"] == 512
    assert payload["logging.googleapis.com/trace"] == "trace-abc"
    assert payload["timestamp"].endswith("Z")
    assert "msg" not in payload
    assert get_trace_id() == "trace-abc"
