"""CII (ZUGFeRD/XRechnung) Generator und Validator."""

from .generator import GENERATOR_VERSION, build_cii_tree, build_cii_xml, version
from .line_item import build_line_item
from .trade_party import build_trade_party
from .validator import (
    CIIValidationResult,
    Finding,
    validate_against_schema,
    validate_against_schematron,
    validate_cii,
)

__all__ = [
    "GENERATOR_VERSION",
    "build_cii_tree",
    "build_cii_xml",
    "version",
    "build_line_item",
    "build_trade_party",
    "CIIValidationResult",
    "Finding",
    "validate_against_schema",
    "validate_against_schematron",
    "validate_cii",
]
