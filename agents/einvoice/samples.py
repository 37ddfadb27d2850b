"""Deterministische Beispielrechnungen für Tests & CLI."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, Iterator, List

from .constants import PaymentStatus, PaymentType, TaxCategory, Unit
from .dto import Invoice, LineItem, TradeParty

SAMPLE_ISSUE_DATE = date(2025, 1, 1)
SAMPLE_DUE_DATE = date(2025, 1, 15)

SELLER_PARTY = TradeParty(
    name="Tenant Seller GmbH",
    street1="Sample Street 1",
    city="Berlin",
    postal_code="10115",
    country_id="DE",
    vat_id="DE123456789",
)

DE_BUYER_PARTY = TradeParty(
    name="Customer GmbH",
    street1="Customer Way 5",
    street2="Building B",
    city="Hamburg",
    postal_code="20095",
    country_id="DE",
    vat_id="DE987654321",
)

SE_BUYER_PARTY = TradeParty(
    name="Kund AB",
    street1="Drottninggatan 12",
    city="Stockholm",
    postal_code="11151",
    country_id="SE",
    vat_id="SE556677889901",
)


def reverse_charge_invoice(**overrides) -> Invoice:
    """EU reverse-charge invoice: DE seller, SE buyer, no VAT."""

    item = LineItem(
        name="Starter Plan",
        quantity="1",
        unit=Unit.PIECE,
        gross_amount="29.00",
        net_amount="29.00",
        charge_amount="29.00",
        tax_category=TaxCategory.REVERSECHARGE,
        tax_percent="0",
        tax_amount="0",
        origin_country_code="DE",
        currency_code="EUR",
    )
    fields = dict(
        id="RE-2025-0001",
        issue_date=SAMPLE_ISSUE_DATE,
        seller=SELLER_PARTY,
        buyer=SE_BUYER_PARTY,
        line_items=(item,),
        currency_code="EUR",
        payment_type=PaymentType.CREDITCARD,
        payment_text="Kreditkarte",
        tax_category=TaxCategory.REVERSECHARGE,
        tax_percent="0",
        tax_amount="0",
        basis_amount="29.00",
        grand_total_amount="29.00",
        due_amount="0",
        paid_amount="29.00",
        buyer_reference="REF-112233",
        payment_status=PaymentStatus.PAID,
    )
    fields.update(overrides)
    return Invoice(**fields)


def discount_line_item(**overrides) -> LineItem:
    fields = dict(
        name="Starter Plan",
        quantity="1",
        unit=Unit.PIECE,
        gross_amount="29.00",
        net_amount="20.00",
        charge_amount="20.00",
        discount_amount="9.00",
        discount_reason="Rabatt",
        tax_category=TaxCategory.STANDARDRATE,
        tax_percent="19",
        tax_amount="3.80",
        origin_country_code="DE",
        currency_code="EUR",
    )
    fields.update(overrides)
    return LineItem(**fields)


def domestic_discount_invoice(**overrides) -> Invoice:
    """Domestic invoice at 19 % with a discounted line, unpaid with due date."""

    fields = dict(
        id="RE-2025-0002",
        issue_date=SAMPLE_ISSUE_DATE,
        seller=SELLER_PARTY,
        buyer=DE_BUYER_PARTY,
        line_items=(discount_line_item(),),
        currency_code="EUR",
        payment_type=PaymentType.SEPACREDITTRANSFER,
        payment_text="Überweisung",
        payment_iban="DE02120300000000202051",
        tax_category=TaxCategory.STANDARDRATE,
        tax_percent="19",
        tax_amount="3.80",
        basis_amount="20.00",
        grand_total_amount="23.80",
        due_amount="23.80",
        paid_amount="0",
        buyer_reference="04011000-12345-34",
        payment_description="Zahlbar innerhalb 14 Tagen ohne Abzug",
        payment_status=PaymentStatus.UNPAID,
        payment_due_date=SAMPLE_DUE_DATE,
    )
    fields.update(overrides)
    return Invoice(**fields)


def multi_line_invoice(**overrides) -> Invoice:
    """Three fractional lines whose charges sum exactly to the basis."""

    lines = (
        LineItem(
            name="Half-day consulting",
            quantity="0.5",
            unit=Unit.DAY,
            gross_amount="799.99",
            net_amount="799.99",
            charge_amount="400.00",
            tax_percent="19",
            tax_amount="76.00",
            origin_country_code="DE",
        ),
        LineItem(
            name="Workshop",
            quantity="1.25",
            unit=Unit.HOUR,
            gross_amount="80.40",
            net_amount="80.40",
            charge_amount="100.50",
            tax_percent="19",
            tax_amount="19.10",
            origin_country_code="DE",
        ),
        LineItem(
            name="Travel lump sum",
            quantity="1",
            unit=Unit.LUMPSUM,
            gross_amount="49.50",
            net_amount="49.50",
            charge_amount="49.50",
            tax_percent="19",
            tax_amount="9.41",
            origin_country_code="DE",
        ),
    )
    fields = dict(
        id="RE-2025-0003",
        issue_date=SAMPLE_ISSUE_DATE,
        seller=SELLER_PARTY,
        buyer=DE_BUYER_PARTY,
        line_items=lines,
        currency_code="EUR",
        payment_type=PaymentType.BANKTRANSFER,
        payment_text="Überweisung",
        payment_iban="DE02120300000000202051",
        tax_percent="19",
        tax_amount="104.50",
        basis_amount="550.00",
        grand_total_amount="654.50",
        due_amount="654.50",
        paid_amount="0",
        payment_status=PaymentStatus.UNPAID,
        payment_due_date=SAMPLE_DUE_DATE,
    )
    fields.update(overrides)
    return Invoice(**fields)


@dataclass(frozen=True)
class SampleScenario:
    code: str
    description: str
    factory: Callable[..., Invoice]


SCENARIOS: List[SampleScenario] = [
    SampleScenario("reverse_charge", "EU reverse charge, DE -> SE", reverse_charge_invoice),
    SampleScenario("domestic_discount", "Domestic 19 % with line discount", domestic_discount_invoice),
    SampleScenario("multi_line", "Fractional quantities, several lines", multi_line_invoice),
]

SCENARIOS_BY_CODE: Dict[str, SampleScenario] = {scenario.code: scenario for scenario in SCENARIOS}


def iter_sample_scenarios() -> Iterator[SampleScenario]:
    return iter(SCENARIOS)


def build_sample_invoice(code: str, **overrides) -> Invoice:
    try:
        scenario = SCENARIOS_BY_CODE[code]
    except KeyError as err:
        raise KeyError(f"Unknown sample scenario '{code}'") from err
    return scenario.factory(**overrides)
