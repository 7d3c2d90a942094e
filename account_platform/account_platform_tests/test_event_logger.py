"""
Tests for the auth event logger and logging setup.
"""
import logging
import os
import tempfile
from unittest.mock import MagicMock

import pytest

from account_platform.account_platform.account_service.config import Settings
from account_platform.account_platform.account_service.utils.event_logger import (
    ALLOWED_EVENT_TYPES,
    client_ip,
    configure_logging,
    log_auth_event,
)


def make_request(host="127.0.0.1", headers=None):
    request = MagicMock()
    if host is None:
        request.client = None
    else:
        request.client.host = host
    request.headers = headers or {"user-agent": "pytest-agent"}
    return request


def test_invalid_event_type_raises():
    with pytest.raises(ValueError, match="Invalid event_type"):
        log_auth_event("password_reset", make_request())


def test_login_success_is_logged_with_context(caplog):
    with caplog.at_level(logging.INFO, logger="account_service.auth_events"):
        log_auth_event("login_success", make_request(), account_id="acc-1", email="a@x.com")

    record = caplog.records[-1]
    assert record.levelno == logging.INFO
    message = record.getMessage()
    assert "AUTH login_success" in message
    assert "account_id=acc-1" in message
    assert "ip=127.0.0.1" in message
    assert "user_agent=pytest-agent" in message


def test_login_failure_is_logged_as_warning(caplog):
    with caplog.at_level(logging.INFO, logger="account_service.auth_events"):
        log_auth_event("login_failure", make_request(), email="a@x.com")

    assert caplog.records[-1].levelno == logging.WARNING


def test_client_ip_falls_back_to_forwarded_header():
    request = make_request(host=None, headers={"x-forwarded-for": "203.0.113.9, 10.0.0.1"})
    assert client_ip(request) == "203.0.113.9"


def test_client_ip_unknown():
    assert client_ip(make_request(host=None, headers={})) is None


def test_all_event_types_are_accepted(caplog):
    with caplog.at_level(logging.INFO, logger="account_service.auth_events"):
        for event_type in ALLOWED_EVENT_TYPES:
            log_auth_event(event_type, make_request())
    assert len(caplog.records) == len(ALLOWED_EVENT_TYPES)


def test_configure_logging_adds_file_handler():
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    with tempfile.TemporaryDirectory() as log_dir:
        root.handlers = []
        try:
            configure_logging(Settings(LOG_DIR=log_dir, LOG_LEVEL="DEBUG", _env_file=None))
            assert os.path.exists(os.path.join(log_dir, "auth_events.log"))
            assert any(isinstance(h, logging.FileHandler) for h in root.handlers)
            assert root.level == logging.DEBUG
        finally:
            for handler in root.handlers:
                handler.close()
            root.handlers = saved_handlers
            root.setLevel(saved_level)
