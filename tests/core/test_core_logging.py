"""Tests for PII redaction and JSON log output."""

import json
import logging
import sys

import pytest

from backend.core.logging import JSONFormatter, PIIRedactionFilter, get_logger, init_logging


def _record(msg, *args):
    return logging.LogRecord(
        name="einvoice.test",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=args,
        exc_info=None,
    )


class TestPIIRedaction:
    """Bank accounts and VAT ids never reach the log output."""

    @pytest.fixture
    def redaction(self):
        return PIIRedactionFilter()

    @pytest.fixture
    def formatter(self):
        return JSONFormatter()

    def test_iban_keeps_country_and_last_four(self, redaction):
        masked = redaction.redact("IBAN DE02120300000000202051 hinterlegt")

        assert "DE02120300000000202051" not in masked
        assert "DE" + "*" * 16 + "2051" in masked

    def test_vat_id_keeps_prefix(self, redaction):
        masked = redaction.redact("Seller DE123456789, buyer SE556677889901")

        assert masked == "Seller DE*********, buyer SE************"

    def test_filter_redacts_message_and_args(self, redaction):
        record = _record("Invoice for %s paid to %s (%d)", "DE987654321", "DE02120300000000202051", 3)

        assert redaction.filter(record) is True
        message = record.getMessage()
        assert "DE987654321" not in message
        assert "DE02120300000000202051" not in message
        assert message.endswith("(3)")

    def test_formatter_emits_json(self, formatter):
        data = json.loads(formatter.format(_record("Building CII invoice %s", "RE-2025-0001")))

        assert data["logger"] == "einvoice.test"
        assert data["level"] == "info"
        assert data["msg"] == "Building CII invoice RE-2025-0001"
        assert data["ts_utc"].endswith("Z")

    def test_formatter_redacts_extra_fields(self, formatter):
        record = _record("Payment means")
        record.payment_iban = "DE02120300000000202051"
        record.line_count = 3

        data = json.loads(formatter.format(record))

        assert data["payment_iban"].startswith("DE**")
        assert data["payment_iban"].endswith("2051")
        assert data["line_count"] == 3

    def test_formatter_includes_exception(self, formatter):
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord(
                name="einvoice.test",
                level=logging.ERROR,
                pathname="",
                lineno=0,
                msg="failed",
                args=(),
                exc_info=sys.exc_info(),
            )

        data = json.loads(formatter.format(record))
        assert "ValueError: boom" in data["exc_info"]

    def test_plain_text_is_preserved(self, redaction):
        text = "Line items do not add up to basis amount: 549.995 / 550.00"

        assert redaction.redact(text) == text


def test_get_logger_attaches_filter_once():
    first = get_logger("einvoice.test.once")
    second = get_logger("einvoice.test.once")

    assert first is second
    assert sum(isinstance(f, PIIRedactionFilter) for f in first.filters) == 1


def test_init_logging_installs_single_json_handler():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        init_logging()
        init_logging()

        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)
