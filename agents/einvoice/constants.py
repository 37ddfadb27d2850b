"""Code tables for the Cross Industry Invoice (CII) data model.

Every lookup is total: values without an explicit mapping resolve to the
documented fallback code instead of raising.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class TaxCategory(Enum):
    STANDARDRATE = "standardrate"
    REVERSECHARGE = "reversecharge"
    TAXEXEMPT = "taxexempt"
    ZEROTAXPRODUCTS = "zerotaxproducts"
    UNTAXEDSERVICE = "untaxedservice"
    INTRACOMMUNITY = "intracommunity"


class PaymentType(Enum):
    BANKTRANSFER = "banktransfer"
    SEPACREDITTRANSFER = "sepacredittransfer"
    CREDITCARD = "creditcard"
    DEBITCARD = "debitcard"
    DIRECTDEBIT = "directdebit"
    SEPADIRECTDEBIT = "sepadirectdebit"
    PAYPAL = "paypal"
    CASH = "cash"
    NONE = "none"


class Unit(Enum):
    PIECE = "piece"
    DAY = "day"
    HECTARE = "hectare"
    HOUR = "hour"
    KILOGRAM = "kilogram"
    KILOMETER = "kilometer"
    KILOWATTHOUR = "kilowatthour"
    LUMPSUM = "lumpsum"
    MINUTE = "minute"
    MONTH = "month"
    SQUAREMETER = "squaremeter"
    CUBICMETER = "cubicmeter"
    METER = "meter"
    LITRE = "litre"
    TON = "ton"
    PERCENT = "percent"
    PACKAGE = "package"
    YEAR = "year"


class PaymentStatus(Enum):
    UNPAID = "unpaid"
    PAID = "paid"
    PARTIALLY_PAID = "partially paid"


TYPE_CODE_COMMERCIAL_INVOICE = "380"
TAX_TYPE_CODE = "VAT"
DATE_FORMAT_CODE = "102"
VAT_SCHEME_ID = "VA"
BASIS_QUANTITY = Decimal("1")

DEFAULT_TAX_CATEGORY_CODE = "S"
DEFAULT_PAYMENT_CODE = "1"
DEFAULT_UNIT_CODE = "C62"

# UNTDID 5305 subset used by versions 2 and 3
TAX_CATEGORY_CODES: Mapping[TaxCategory, str] = MappingProxyType(
    {
        TaxCategory.STANDARDRATE: "S",
        TaxCategory.REVERSECHARGE: "AE",
        TaxCategory.TAXEXEMPT: "E",
        TaxCategory.ZEROTAXPRODUCTS: "Z",
        TaxCategory.UNTAXEDSERVICE: "O",
        TaxCategory.INTRACOMMUNITY: "K",
    }
)

# Version 1 predates the EN16931 code list and knows intra-community supply as "IC"
TAX_CATEGORY_CODES_1: Mapping[TaxCategory, str] = MappingProxyType(
    {
        TaxCategory.STANDARDRATE: "S",
        TaxCategory.REVERSECHARGE: "AE",
        TaxCategory.TAXEXEMPT: "E",
        TaxCategory.ZEROTAXPRODUCTS: "Z",
        TaxCategory.UNTAXEDSERVICE: "O",
        TaxCategory.INTRACOMMUNITY: "IC",
    }
)

# UNTDID 4461 payment means
PAYMENT_CODES: Mapping[PaymentType, str] = MappingProxyType(
    {
        PaymentType.BANKTRANSFER: "58",
        PaymentType.SEPACREDITTRANSFER: "58",
        PaymentType.CREDITCARD: "54",
        PaymentType.DEBITCARD: "55",
        PaymentType.DIRECTDEBIT: "49",
        PaymentType.SEPADIRECTDEBIT: "59",
        PaymentType.PAYPAL: "68",
        PaymentType.CASH: "10",
        PaymentType.NONE: "ZZZ",
    }
)

# UN/ECE Recommendation 20 unit codes
UNIT_CODES: Mapping[Unit, str] = MappingProxyType(
    {
        Unit.PIECE: "C62",
        Unit.DAY: "DAY",
        Unit.HECTARE: "HAR",
        Unit.HOUR: "HUR",
        Unit.KILOGRAM: "KGM",
        Unit.KILOMETER: "KTM",
        Unit.KILOWATTHOUR: "KWH",
        Unit.LUMPSUM: "LS",
        Unit.MINUTE: "MIN",
        Unit.MONTH: "MON",
        Unit.SQUAREMETER: "MTK",
        Unit.CUBICMETER: "MTQ",
        Unit.METER: "MTR",
        Unit.LITRE: "LTR",
        Unit.TON: "TNE",
        Unit.PERCENT: "P1",
        Unit.PACKAGE: "XPK",
        Unit.YEAR: "ANN",
    }
)

TAX_EXEMPTION_REASONS: Mapping[TaxCategory, str] = MappingProxyType(
    {
        TaxCategory.REVERSECHARGE: "Reverse Charge",
        TaxCategory.INTRACOMMUNITY: "Intra-community supply",
        TaxCategory.TAXEXEMPT: "Exempt from VAT",
        TaxCategory.UNTAXEDSERVICE: "Not subject to VAT",
    }
)


def tax_category_code(category: object, version: int = 2) -> str:
    table = TAX_CATEGORY_CODES_1 if int(version) == 1 else TAX_CATEGORY_CODES
    return table.get(category, DEFAULT_TAX_CATEGORY_CODE)


def payment_code(payment_type: object) -> str:
    return PAYMENT_CODES.get(payment_type, DEFAULT_PAYMENT_CODE)


def unit_code(unit: object) -> str:
    return UNIT_CODES.get(unit, DEFAULT_UNIT_CODE)


def tax_exemption_reason(category: object) -> Optional[str]:
    """Default exemption text for a tax category, ``None`` when it needs none."""

    return TAX_EXEMPTION_REASONS.get(category)
