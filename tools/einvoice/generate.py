"""CII-Generator für Beispielrechnungen (ZUGFeRD/XRechnung, Version 1-3)."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from backend.core.config import settings
from backend.core.logging import get_logger, init_logging
from agents.einvoice import (
    SCENARIOS,
    ConfigurationError,
    ValidationError,
    build_cii_xml,
    build_sample_invoice,
    validate_cii,
)

logger = get_logger("tools.einvoice.generate")


def generate(
    *,
    scenario: str,
    version: int,
    mode: str,
    skip_validation: bool = False,
    validate: bool = False,
    schema_dir: Optional[Path] = None,
) -> dict:
    invoice = build_sample_invoice(scenario)
    xml = build_cii_xml(invoice, version, mode, skip_validation=skip_validation)
    result = {
        "scenario": scenario,
        "invoice_id": invoice.id,
        "version": version,
        "mode": mode,
        "xml": xml,
    }
    if validate:
        result["validation"] = validate_cii(xml, version, schema_dir=schema_dir).to_dict()
    return result


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render a sample CII invoice")
    parser.add_argument(
        "--scenario",
        choices=[scenario.code for scenario in SCENARIOS],
        default=SCENARIOS[0].code,
    )
    parser.add_argument("--version", type=int, default=settings.EINVOICE_DEFAULT_VERSION)
    parser.add_argument("--mode", default=settings.EINVOICE_DEFAULT_MODE)
    parser.add_argument("--skip-validation", action="store_true")
    parser.add_argument("--validate", action="store_true", help="Run XSD/Schematron validation")
    parser.add_argument("--schema-dir", type=Path, default=None)
    parser.add_argument("--out", type=Path, default=None, help="Write XML to this file")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    init_logging()

    try:
        result = generate(
            scenario=args.scenario,
            version=args.version,
            mode=args.mode,
            skip_validation=args.skip_validation,
            validate=args.validate,
            schema_dir=args.schema_dir,
        )
    except ValidationError as err:
        logger.error("Invoice rejected: %s", "; ".join(err.errors))
        return 1
    except ConfigurationError as err:
        logger.error("Configuration error: %s", err)
        return 1

    if args.out:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        args.out.write_text(result["xml"], encoding="utf-8")
        logger.info("Wrote %s", args.out)
    else:
        sys.stdout.write(result["xml"])

    validation = result.get("validation")
    if validation is not None:
        print(json.dumps(validation, indent=2, sort_keys=True))
        if not (validation["schema_ok"] and validation["schematron_ok"]):
            return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
