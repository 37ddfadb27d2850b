"""XSD/Schematron validation of emitted CII documents via lxml.

The resource files are not shipped; their location is configured through
``EINVOICE_SCHEMA_DIR`` and the per-version file settings. Versions 2 and 3
share one resource set. Findings are returned as lists, never raised.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, List, Optional

from lxml import etree
from lxml.isoschematron import Schematron

from backend.core.config import settings
from backend.core.logging import get_logger
from agents.einvoice.errors import SchemaResourceError
from agents.einvoice.profiles import by_version

SVRL_NS = {"svrl": "http://purl.oclc.org/dsdl/svrl"}

logger = get_logger(__name__)


@dataclass(frozen=True)
class Finding:
    line: Optional[int]
    message: str

    def __str__(self) -> str:
        return f"{self.line}: {self.message}" if self.line else self.message


@dataclass(frozen=True)
class CIIValidationResult:
    schema_ok: bool
    schematron_ok: bool
    messages: List[str]

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


def _resource(filename: str, schema_dir: Optional[Path]) -> Path:
    path = Path(schema_dir or settings.EINVOICE_SCHEMA_DIR) / filename
    if not path.is_file():
        raise SchemaResourceError(f"Validation resource not found: {path}")
    return path


def schema_path(version: int, schema_dir: Optional[Path] = None) -> Path:
    filename = by_version(version, settings.EINVOICE_SCHEMA_V1, settings.EINVOICE_SCHEMA_V2)
    return _resource(filename, schema_dir)


def schematron_path(version: int, schema_dir: Optional[Path] = None) -> Path:
    filename = by_version(version, settings.EINVOICE_SCHEMATRON_V1, settings.EINVOICE_SCHEMATRON_V2)
    return _resource(filename, schema_dir)


def _parse(document: str | bytes) -> etree._Element:
    if isinstance(document, str):
        document = document.encode("utf-8")
    return etree.fromstring(document)


def _source_line(doc: etree._Element, location: Optional[str]) -> Optional[int]:
    if not location:
        return None
    try:
        nodes = doc.getroottree().xpath(location)
    except etree.XPathError:
        return None
    if nodes and isinstance(nodes[0], etree._Element):
        return nodes[0].sourceline
    return None


def validate_against_schema(
    document: str | bytes,
    version: int,
    *,
    schema_dir: Optional[Path] = None,
) -> List[Finding]:
    """Validate ``document`` against the XSD for ``version``."""

    schema = etree.XMLSchema(etree.parse(str(schema_path(version, schema_dir))))
    try:
        doc = _parse(document)
    except etree.XMLSyntaxError as err:
        return [Finding(err.lineno, f"XML parse error – {err.msg}")]

    if schema.validate(doc):
        return []
    findings = [Finding(entry.line, entry.message) for entry in schema.error_log]
    logger.info("Schema validation reported %d finding(s)", len(findings))
    return findings


def validate_against_schematron(
    document: str | bytes,
    version: int,
    *,
    schema_dir: Optional[Path] = None,
) -> List[Finding]:
    """Validate ``document`` against the Schematron rules for ``version``."""

    schematron = Schematron(
        etree.parse(str(schematron_path(version, schema_dir))),
        store_report=True,
    )
    try:
        doc = _parse(document)
    except etree.XMLSyntaxError as err:
        return [Finding(err.lineno, f"XML parse error – {err.msg}")]

    if schematron.validate(doc):
        return []

    findings: List[Finding] = []
    report = schematron.validation_report
    for failed in report.iterfind(".//svrl:failed-assert", namespaces=SVRL_NS):
        text = failed.findtext("svrl:text", namespaces=SVRL_NS) or ""
        findings.append(Finding(_source_line(doc, failed.get("location")), " ".join(text.split())))
    logger.info("Schematron validation reported %d finding(s)", len(findings))
    return findings


def validate_cii(
    document: str | bytes,
    version: int,
    *,
    schema_dir: Optional[Path] = None,
) -> CIIValidationResult:
    """Run XSD and Schematron validation and summarize both outcomes."""

    messages: List[str] = []

    schema_findings = validate_against_schema(document, version, schema_dir=schema_dir)
    if schema_findings:
        messages.extend(f"SCHEMA: {finding}" for finding in schema_findings)
    else:
        messages.append("SCHEMA: OK")

    schematron_findings = validate_against_schematron(document, version, schema_dir=schema_dir)
    if schematron_findings:
        messages.extend(f"SCHEMATRON: {finding}" for finding in schematron_findings)
    else:
        messages.append("SCHEMATRON: OK")

    return CIIValidationResult(not schema_findings, not schematron_findings, messages)
