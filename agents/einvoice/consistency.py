"""Arithmetic consistency checks for line items and invoices.

Each validator recomputes the derived amounts with exact ``Decimal``
arithmetic, rounds the computed side to two places (half away from zero) and
compares it to the stored value. Checks run in a fixed order and stop at the
first deviation, so a failing result carries exactly one message.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple

from .dto import Invoice, LineItem
from .errors import ValidationError
from .formatting import round_money

HUNDRED = Decimal(100)


@dataclass(frozen=True, slots=True)
class ConsistencyResult:
    errors: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    def __bool__(self) -> bool:
        return self.ok

    def raise_for_errors(self, subject: str) -> None:
        if self.errors:
            raise ValidationError(f"{subject} is invalid", self.errors)


VALID = ConsistencyResult()


def _fail(message: str) -> ConsistencyResult:
    return ConsistencyResult((message,))


def validate_line_item(item: LineItem) -> ConsistencyResult:
    calculated_charge = round_money(item.net_amount * item.quantity)
    if item.charge_amount != calculated_charge:
        return _fail(
            "Charge amount and net amount times quantity deviate: "
            f"{item.charge_amount} / {calculated_charge}"
        )

    if item.discount_amount is not None:
        calculated_net = round_money(item.gross_amount - item.discount_amount)
        if calculated_net != item.net_amount:
            return _fail(
                "Calculated net amount and net amount deviate: "
                f"{calculated_net} / {item.net_amount}"
            )

    calculated_tax = round_money(item.charge_amount * item.tax_percent / HUNDRED)
    if item.tax_amount != calculated_tax:
        return _fail(f"Tax amount and calculated tax amount deviate: {item.tax_amount} / {calculated_tax}")

    return VALID


def validate_invoice(invoice: Invoice) -> ConsistencyResult:
    calculated_tax = round_money(invoice.basis_amount * invoice.tax_percent / HUNDRED)
    if invoice.tax_amount != calculated_tax:
        return _fail(
            f"Tax amount and calculated tax amount deviate: {invoice.tax_amount} / {calculated_tax}"
        )

    calculated_grand_total = invoice.basis_amount + invoice.tax_amount
    if invoice.grand_total_amount != calculated_grand_total:
        return _fail(
            "Grand total amount and calculated grand total amount deviate: "
            f"{invoice.grand_total_amount} / {calculated_grand_total}"
        )

    # Exact sum, no rounding of intermediate terms
    line_item_sum = sum((item.charge_amount for item in invoice.line_items), Decimal(0))
    if line_item_sum != invoice.basis_amount:
        return _fail(
            f"Line items do not add up to basis amount: {line_item_sum} / {invoice.basis_amount}"
        )

    return VALID
