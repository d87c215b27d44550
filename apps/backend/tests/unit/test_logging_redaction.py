"""
Name: Structured Logging Tests

Responsibilities:
  - JSON lines carry level, message and request context
  - Secrets (password, hash, session token, OAuth code) are redacted
"""

import json
import logging

import pytest
from facecounter.context import clear_context, set_request_context
from facecounter.crosscutting.logger import REDACTED, JSONFormatter

pytestmark = pytest.mark.unit


def _record(msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="facecounter",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formats_json_with_request_context():
    set_request_context(request_id="req-1", method="POST", path="/api/auth/login")
    try:
        line = JSONFormatter().format(_record("user logged in", user_id="u1"))
    finally:
        clear_context()

    payload = json.loads(line)
    assert payload["level"] == "INFO"
    assert payload["message"] == "user logged in"
    assert payload["request_id"] == "req-1"
    assert payload["user_id"] == "u1"


@pytest.mark.parametrize(
    "key", ["password", "password_hash", "session_token", "code", "access_token"]
)
def test_sensitive_keys_are_redacted(key):
    payload = json.loads(JSONFormatter().format(_record("x", **{key: "s3cr3t"})))

    assert payload[key] == REDACTED
    assert "s3cr3t" not in json.dumps(payload)


def test_nested_secrets_are_redacted():
    record = _record("x", request_body={"email": "a@x.com", "password": "pw1"})

    payload = json.loads(JSONFormatter().format(record))

    assert payload["request_body"] == {"email": "a@x.com", "password": REDACTED}
