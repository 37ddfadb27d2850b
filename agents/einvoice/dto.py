"""Value objects for CII invoices.

The structures are immutable and pre-computed by the caller: the package only
verifies that their amounts are consistent (see :mod:`agents.einvoice.consistency`)
and maps them to XML. Decimal fields accept ``Decimal``, ``int`` or ``str``
and are normalised to ``Decimal`` on construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional, Tuple

from .constants import (
    PaymentStatus,
    PaymentType,
    TaxCategory,
    Unit,
    payment_code,
    tax_category_code,
    tax_exemption_reason,
    unit_code,
)
from .formatting import to_decimal


def _coerce(instance: object, *names: str) -> None:
    for name in names:
        value = getattr(instance, name)
        if value is not None:
            object.__setattr__(instance, name, to_decimal(value))


@dataclass(frozen=True, slots=True)
class TradeParty:
    name: str
    street1: str
    city: str
    postal_code: str
    country_id: str
    street2: Optional[str] = None
    vat_id: Optional[str] = None


@dataclass(frozen=True, slots=True)
class LineItem:
    name: str
    quantity: Decimal
    gross_amount: Decimal
    net_amount: Decimal
    charge_amount: Decimal
    tax_percent: Decimal
    tax_amount: Decimal
    unit: Unit = Unit.PIECE
    tax_category: TaxCategory = TaxCategory.STANDARDRATE
    discount_amount: Optional[Decimal] = None
    discount_reason: Optional[str] = None
    origin_country_code: Optional[str] = None
    currency_code: str = "EUR"

    def __post_init__(self) -> None:
        _coerce(
            self,
            "quantity",
            "gross_amount",
            "net_amount",
            "charge_amount",
            "tax_percent",
            "tax_amount",
            "discount_amount",
        )

    @property
    def has_discount(self) -> bool:
        return self.discount_amount is not None

    @property
    def unit_code(self) -> str:
        return unit_code(self.unit)

    def tax_category_code(self, version: int = 2) -> str:
        return tax_category_code(self.tax_category, version)


@dataclass(frozen=True, slots=True)
class Invoice:
    id: str
    issue_date: date
    seller: TradeParty
    buyer: TradeParty
    line_items: Tuple[LineItem, ...]
    tax_percent: Decimal
    tax_amount: Decimal
    basis_amount: Decimal
    grand_total_amount: Decimal
    due_amount: Decimal
    paid_amount: Decimal
    currency_code: str = "EUR"
    payment_type: PaymentType = PaymentType.BANKTRANSFER
    payment_text: str = ""
    payment_iban: Optional[str] = None
    tax_category: TaxCategory = TaxCategory.STANDARDRATE
    tax_reason: Optional[str] = None
    buyer_reference: Optional[str] = None
    payment_description: Optional[str] = None
    payment_status: Optional[PaymentStatus | str] = None
    payment_due_date: Optional[date] = field(default=None)

    def __post_init__(self) -> None:
        object.__setattr__(self, "line_items", tuple(self.line_items))
        _coerce(
            self,
            "tax_percent",
            "tax_amount",
            "basis_amount",
            "grand_total_amount",
            "due_amount",
            "paid_amount",
        )

    @property
    def tax_reason_text(self) -> Optional[str]:
        if self.tax_reason is not None:
            return self.tax_reason
        return tax_exemption_reason(self.tax_category)

    @property
    def payment_code(self) -> str:
        return payment_code(self.payment_type)

    @property
    def is_unpaid(self) -> bool:
        return _status_value(self.payment_status) == PaymentStatus.UNPAID.value

    @property
    def payment_status_text(self) -> Optional[str]:
        status = _status_value(self.payment_status)
        return status.capitalize() if status else None

    def tax_category_code(self, version: int = 2) -> str:
        return tax_category_code(self.tax_category, version)


def _status_value(status: Optional[PaymentStatus | str]) -> Optional[str]:
    if isinstance(status, PaymentStatus):
        return status.value
    return status
