"""Centralized logging configuration with PII redaction and JSON output."""

import json
import logging
import re
import sys
from datetime import datetime, timezone

from backend.core.config import settings

# Attributes every LogRecord carries; everything else counts as ``extra``
_RESERVED_ATTRS = frozenset(
    (
        'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
        'module', 'exc_info', 'exc_text', 'stack_info', 'lineno', 'funcName',
        'created', 'msecs', 'relativeCreated', 'thread', 'threadName',
        'processName', 'process', 'message', 'taskName',
    )
)


class PIIRedactionFilter(logging.Filter):
    """Filter to redact bank accounts and tax identifiers from log messages."""

    def __init__(self):
        super().__init__()
        # IBAN: 2 letters + 2 digits + 11..30 alphanumerics
        self.iban_pattern = re.compile(r'\b([A-Z]{2}\d{2}[A-Z0-9]{11,30})\b')
        # VAT id: 2 letters followed by 8..12 digits (DE304755032, SE304755032...)
        self.vat_pattern = re.compile(r'\b([A-Z]{2}\d{8,12})\b')

    def redact(self, text: str) -> str:
        text = self.iban_pattern.sub(self._mask_iban, text)
        return self.vat_pattern.sub(self._mask_vat, text)

    def filter(self, record: logging.LogRecord) -> bool:
        """Redact PII from log record message and arguments."""
        if record.msg:
            record.msg = self.redact(str(record.msg))

        if record.args and isinstance(record.args, tuple):
            record.args = tuple(
                self.redact(arg) if isinstance(arg, str) else arg for arg in record.args
            )

        return True

    def _mask_iban(self, match) -> str:
        """Mask IBAN: keep country code and last 4 chars."""
        iban = match.group(1)
        return iban[:2] + "*" * (len(iban) - 6) + iban[-4:]

    def _mask_vat(self, match) -> str:
        """Mask VAT id: keep country prefix only."""
        vat_id = match.group(1)
        return vat_id[:2] + "*" * (len(vat_id) - 2)


class JSONFormatter(logging.Formatter):
    """One JSON object per record, PII already redacted by the filter."""

    def __init__(self):
        super().__init__()
        self._redaction = PIIRedactionFilter()

    def format(self, record):
        log_entry = {
            'logger': record.name,
            'level': record.levelname.lower(),
            'msg': self._redaction.redact(record.getMessage()),
            'ts_utc': datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat()
            .replace('+00:00', 'Z'),
        }

        if record.exc_info:
            log_entry['exc_info'] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS:
                continue
            if isinstance(value, str):
                value = self._redaction.redact(value)
            log_entry[key] = value

        return json.dumps(log_entry, default=str)


def init_logging() -> None:
    """Initialize JSON logging on stdout at ``settings.log_level``."""
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(PIIRedactionFilter())
    root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with PII redaction applied."""
    logger = logging.getLogger(name)
    if not any(isinstance(f, PIIRedactionFilter) for f in logger.filters):
        logger.addFilter(PIIRedactionFilter())
    return logger
