import json
import logging

from customer_service.core.logging_setup import JsonFormatter, configure_logging, mask_sensitive
from customer_service.core.request_context import clear_request_context, set_request_context


def _record(message: str, *args, **extra) -> logging.LogRecord:
    record = logging.LogRecord("customer_service.test", logging.INFO, __file__, 1, message, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_mask_sensitive_hides_tokens_passwords_and_hashes():
    masked = mask_sensitive("token=abcdef password: hunter2 hash=$2b$12$xyz Authorization: Bearer qwe")

    assert "abcdef" not in masked
    assert "hunter2" not in masked
    assert "$2b$12$xyz" not in masked
    assert "qwe" not in masked
    assert masked.count("***") == 4


def test_json_formatter_includes_request_context():
    set_request_context(request_id="req-1", customer_id=42)
    try:
        payload = json.loads(JsonFormatter("%(message)s").format(_record("issued token=%s", "deadbeef")))
    finally:
        clear_request_context()

    assert payload["request_id"] == "req-1"
    assert payload["customer_id"] == "42"
    assert payload["level"] == "INFO"
    assert payload["module"] == "customer_service.test"
    assert payload["message"] == "issued token=***"


def test_json_formatter_prefers_record_extra_over_context():
    payload = json.loads(
        JsonFormatter("%(message)s").format(_record("store failure", customer_id="7", operation="tokens.issue"))
    )

    assert payload["customer_id"] == "7"
    assert payload["operation"] == "tokens.issue"
    assert payload["request_id"] is None


def test_configure_logging_installs_single_json_handler():
    root_logger = logging.getLogger()
    previous_handlers = list(root_logger.handlers)
    previous_level = root_logger.level
    try:
        configure_logging("DEBUG")
        configure_logging("DEBUG")

        assert len(root_logger.handlers) == 1
        assert isinstance(root_logger.handlers[0].formatter, JsonFormatter)
        assert root_logger.level == logging.DEBUG
    finally:
        root_logger.handlers[:] = previous_handlers
        root_logger.setLevel(previous_level)
