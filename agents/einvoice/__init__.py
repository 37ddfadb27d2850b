"""Cross Industry Invoice (ZUGFeRD/XRechnung) generation and consistency checks."""

from .cii import (
    CIIValidationResult,
    Finding,
    build_cii_tree,
    build_cii_xml,
    validate_against_schema,
    validate_against_schematron,
    validate_cii,
    version,
)
from .consistency import ConsistencyResult, validate_invoice, validate_line_item
from .constants import PaymentStatus, PaymentType, TaxCategory, Unit
from .dto import Invoice, LineItem, TradeParty
from .errors import ConfigurationError, EInvoiceError, SchemaResourceError, ValidationError
from .formatting import currency_element, format_decimal
from .profiles import DocumentProfile, Mode, Version, resolve_profile
from .samples import SCENARIOS, SampleScenario, build_sample_invoice, iter_sample_scenarios

__all__ = [
    "CIIValidationResult",
    "Finding",
    "build_cii_tree",
    "build_cii_xml",
    "validate_against_schema",
    "validate_against_schematron",
    "validate_cii",
    "version",
    "ConsistencyResult",
    "validate_invoice",
    "validate_line_item",
    "PaymentStatus",
    "PaymentType",
    "TaxCategory",
    "Unit",
    "Invoice",
    "LineItem",
    "TradeParty",
    "ConfigurationError",
    "EInvoiceError",
    "SchemaResourceError",
    "ValidationError",
    "currency_element",
    "format_decimal",
    "DocumentProfile",
    "Mode",
    "Version",
    "resolve_profile",
    "SCENARIOS",
    "SampleScenario",
    "build_sample_invoice",
    "iter_sample_scenarios",
]
