"""Tests for structured logging, correlation IDs and audit events."""

import json
import logging

import pytest
from pythonjsonlogger.json import JsonFormatter
from linkshelf.core.logging_config import (
    LinkshelfJsonFormatter,
    correlation_id_var,
    log_security_event,
    SECURITY_LOGGER_NAME,
)


def audit_events(caplog, event_type):
    return [
        record
        for record in caplog.records
        if record.name == SECURITY_LOGGER_NAME
        and getattr(record, "event_type", None) == event_type
    ]


@pytest.mark.unit
class TestJsonFormatter:
    def test_uses_current_json_module(self):
        assert issubclass(LinkshelfJsonFormatter, JsonFormatter)

    def test_formats_record_as_json(self):
        formatter = LinkshelfJsonFormatter("%(message)s")
        record = logging.LogRecord(
            "linkshelf.test", logging.WARNING, __file__, 10, "hello %s", ("world",), None
        )
        record.correlation_id = "abc-123"
        record.user_id = "7"

        data = json.loads(formatter.format(record))

        assert data["message"] == "hello world"
        assert data["level"] == "WARNING"
        assert data["logger"] == "linkshelf.test"
        assert data["correlation_id"] == "abc-123"
        assert data["user_id"] == "7"
        assert data["timestamp"].endswith("Z")


@pytest.mark.unit
class TestCorrelationId:
    def test_echoes_supplied_id(self, client):
        response = client.get("/health", headers={"X-Correlation-ID": "req-42"})

        assert response.headers["X-Correlation-ID"] == "req-42"

    def test_generates_id(self, client):
        response = client.get("/health")

        assert len(response.headers["X-Correlation-ID"]) == 36

    def test_context_is_reset_after_request(self, client):
        client.get("/health", headers={"X-Correlation-ID": "req-43"})

        assert correlation_id_var.get() is None


@pytest.mark.unit
class TestSecurityEvents:
    def test_log_security_event_fields(self, caplog):
        with caplog.at_level(logging.INFO, logger=SECURITY_LOGGER_NAME):
            log_security_event(
                event_type="test.event",
                message="Something happened",
                user_id=5,
                ip_address="10.0.0.1",
                custom="value",
            )

        (record,) = audit_events(caplog, "test.event")
        assert record.user_id == "5"
        assert record.ip_address == "10.0.0.1"
        assert record.event_category == "security"
        assert record.custom == "value"

    def test_login_failure_is_audited(self, client, test_user, caplog):
        with caplog.at_level(logging.INFO, logger=SECURITY_LOGGER_NAME):
            client.post(
                "/api/auth/login",
                json={"email": "test@example.com", "password": "wrongpassword"},
            )

        assert len(audit_events(caplog, "auth.login.failure")) == 1

    def test_register_is_audited(self, client, caplog):
        with caplog.at_level(logging.INFO, logger=SECURITY_LOGGER_NAME):
            client.post(
                "/api/auth/register",
                json={"email": "audit@example.com", "password": "password123"},
            )

        (record,) = audit_events(caplog, "auth.register.success")
        assert record.username == "audit@example.com"

    def test_forbidden_access_is_audited(
        self, client, auth_headers, other_link, caplog
    ):
        with caplog.at_level(logging.INFO, logger=SECURITY_LOGGER_NAME):
            client.delete(f"/api/links/{other_link.id}", headers=auth_headers)

        (record,) = audit_events(caplog, "authz.forbidden")
        assert record.resource == "link"
        assert record.resource_id == other_link.id

    def test_invalid_token_is_audited(self, client, caplog):
        with caplog.at_level(logging.INFO, logger=SECURITY_LOGGER_NAME):
            client.get("/api/links", headers={"Authorization": "Bearer nope"})

        assert len(audit_events(caplog, "auth.token.invalid")) == 1
