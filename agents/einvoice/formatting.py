"""Decimal handling and element helpers shared by the CII builders.

Amounts are never routed through binary floating point: inputs are parsed
from ``Decimal``, ``int`` or ``str`` and rounded with ``ROUND_HALF_UP``, which
in :mod:`decimal` rounds half away from zero (``2.345`` -> ``2.35``,
``-2.345`` -> ``-2.35``).
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

from lxml import etree

DecimalLike = Decimal | str | int

NS = {
    "qdt": "urn:un:unece:uncefact:data:standard:QualifiedDataType:100",
    "ram": "urn:un:unece:uncefact:data:standard:ReusableAggregateBusinessInformationEntity:100",
    "udt": "urn:un:unece:uncefact:data:standard:UnqualifiedDataType:100",
    "rsm": "urn:un:unece:uncefact:data:standard:CrossIndustryInvoice:100",
    "xsi": "http://www.w3.org/2001/XMLSchema-instance",
}

CENT = Decimal("0.01")


def to_decimal(value: DecimalLike) -> Decimal:
    """Convert input deterministically to a finite ``Decimal``.

    ``float`` is rejected because it cannot round-trip through the exact
    equality checks of the consistency validator. ``NaN`` and infinities are
    rejected as well.
    """

    if isinstance(value, bool):
        raise TypeError("Boolean is not a decimal amount")
    if isinstance(value, float):
        raise TypeError("Binary floating point amounts are not supported; pass str or Decimal")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation as err:
            raise ValueError(f"Invalid decimal literal: {value!r}") from err
    else:
        raise TypeError(f"Unsupported decimal input: {type(value)!r}")
    if not result.is_finite():
        raise ValueError(f"Decimal amount must be finite: {value!r}")
    return result


def round_money(amount: DecimalLike, digits: int = 2) -> Decimal:
    """Round half away from zero to ``digits`` fractional places."""

    exponent = Decimal(1).scaleb(-digits)
    return to_decimal(amount).quantize(exponent, rounding=ROUND_HALF_UP)


def format_decimal(value: DecimalLike, digits: int = 2) -> str:
    """Render exactly ``digits`` fractional places, e.g. ``29`` -> ``"29.00"``."""

    return format(round_money(value, digits), "f")


def format_date(value: date) -> str:
    """Format a date as ``YYYYMMDD`` (format code 102)."""

    return value.strftime("%Y%m%d")


def el(parent: etree._Element, tag: str, text: Optional[str] = None, **attribs) -> etree._Element:
    """Create a sub-element with optional text and attributes."""

    ns_prefix, local = tag.split(":", 1) if ":" in tag else ("ram", tag)
    elem = etree.SubElement(parent, f"{{{NS[ns_prefix]}}}{local}")
    if text is not None:
        elem.text = str(text)
    for key, value in attribs.items():
        elem.set(key, str(value))
    return elem


def date_element(parent: etree._Element, tag: str, value: date) -> etree._Element:
    """Emit ``tag`` wrapping a ``udt:DateTimeString`` in format 102."""

    wrapper = el(parent, tag)
    el(wrapper, "udt:DateTimeString", format_date(value), format="102")
    return wrapper


def currency_element(
    parent: etree._Element,
    tag: str,
    amount: DecimalLike,
    currency_code: str,
    add_currency: bool,
    digits: int = 2,
) -> etree._Element:
    """Emit one amount element; ``currencyID`` only when ``add_currency`` is set."""

    elem = el(parent, tag, format_decimal(amount, digits))
    if add_currency:
        elem.set("currencyID", currency_code)
    return elem
