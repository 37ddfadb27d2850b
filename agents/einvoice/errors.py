"""Exceptions raised by the e-invoice generator."""

from __future__ import annotations

from typing import Iterable, List


class EInvoiceError(Exception):
    """Base class for all e-invoice errors."""


class ConfigurationError(EInvoiceError, ValueError):
    """Unsupported version/mode or missing validation resources."""


class SchemaResourceError(ConfigurationError):
    """An XSD or Schematron file required for a version is not available."""


class ValidationError(EInvoiceError):
    """Arithmetic consistency checks failed; ``errors`` holds the discrepancies."""

    def __init__(self, message: str, errors: Iterable[str] = ()) -> None:
        self.errors: List[str] = list(errors)
        detail = f": {self.errors[0]}" if self.errors else ""
        super().__init__(f"{message}{detail}")
        self.message = message
