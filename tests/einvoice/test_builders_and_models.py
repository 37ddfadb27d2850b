"""Tests for value objects, profiles and the standalone subtree builders."""

from __future__ import annotations

from decimal import Decimal

import pytest
from lxml import etree

from agents.einvoice import (
    ConfigurationError,
    DocumentProfile,
    Mode,
    PaymentStatus,
    TradeParty,
    ValidationError,
    Version,
    build_sample_invoice,
    resolve_profile,
)
from agents.einvoice.cii import build_line_item, build_trade_party
from agents.einvoice.formatting import NS
from agents.einvoice.profiles import PEPPOL_BUSINESS_PROCESS, by_version
from agents.einvoice.samples import DE_BUYER_PARTY, discount_line_item


def _container(tag: str = "rsm:SupplyChainTradeTransaction") -> etree._Element:
    prefix, local = tag.split(":")
    return etree.Element(f"{{{NS[prefix]}}}{local}", nsmap=dict(NS))


def test_amounts_are_normalised_to_decimal():
    item = discount_line_item(quantity=2, tax_percent="19")

    assert item.quantity == Decimal(2)
    assert isinstance(item.tax_percent, Decimal)
    assert item.discount_amount == Decimal("9.00")


def test_float_amounts_are_rejected():
    with pytest.raises(TypeError):
        discount_line_item(net_amount=20.0)


def test_non_finite_amounts_are_rejected_on_construction():
    with pytest.raises(ValueError):
        build_sample_invoice("reverse_charge", paid_amount=Decimal("Infinity"))
    with pytest.raises(ValueError):
        discount_line_item(tax_amount="NaN")


def test_invoice_line_items_become_tuple(domestic_discount):
    invoice = build_sample_invoice("domestic_discount", line_items=[discount_line_item()])

    assert isinstance(invoice.line_items, tuple)
    assert invoice.line_items == domestic_discount.line_items


def test_unknown_sample_scenario():
    with pytest.raises(KeyError, match="does-not-exist"):
        build_sample_invoice("does-not-exist")


@pytest.mark.parametrize(
    "status, unpaid, text",
    [
        (PaymentStatus.UNPAID, True, "Unpaid"),
        ("unpaid", True, "Unpaid"),
        (PaymentStatus.PAID, False, "Paid"),
        (None, False, None),
    ],
)
def test_payment_status(status, unpaid, text):
    invoice = build_sample_invoice("reverse_charge", payment_status=status)

    assert invoice.is_unpaid is unpaid
    assert invoice.payment_status_text == text


def test_profiles_cover_every_version_and_mode():
    for version in Version:
        for mode in Mode:
            profile = resolve_profile(int(version), mode.value)
            assert isinstance(profile, DocumentProfile)
            assert profile.version is version
            assert profile.mode is mode
            assert profile.includes_line_items is (version != Version.V1)
            assert profile.currency_on_amounts is (version == Version.V1)

    assert resolve_profile(3, "xrechnung").business_process_id == PEPPOL_BUSINESS_PROCESS
    assert resolve_profile(3, "zugferd").business_process_id is None


def test_by_version_groups_two_and_three():
    assert by_version(1, "a", "b") == "a"
    assert by_version(2, "a", "b") == "b"
    assert by_version(Version.V3, "a", "b") == "b"
    with pytest.raises(ConfigurationError):
        by_version(5, "a", "b")


def test_trade_party_without_street2_or_vat():
    parent = _container("ram:SellerTradeParty")
    party = TradeParty(
        name="Kund AB",
        street1="Drottninggatan 12",
        city="Stockholm",
        postal_code="11151",
        country_id="SE",
    )

    build_trade_party(parent, party)

    assert [etree.QName(child).localname for child in parent] == ["Name", "PostalTradeAddress"]
    address = parent.find("ram:PostalTradeAddress", NS)
    assert address.find("ram:LineTwo", NS) is None


@pytest.mark.parametrize("exclude_tax, expected", [(False, 1), (True, 0)])
def test_trade_party_tax_registration(exclude_tax, expected):
    parent = _container("ram:BuyerTradeParty")

    build_trade_party(parent, DE_BUYER_PARTY, 2, exclude_tax=exclude_tax)

    assert len(parent.findall("ram:SpecifiedTaxRegistration", NS)) == expected


def test_trade_party_layout_is_shared_by_all_versions():
    rendered = set()
    for version in Version:
        parent = _container("ram:BuyerTradeParty")
        build_trade_party(parent, DE_BUYER_PARTY, version)
        rendered.add(etree.tostring(parent))

    assert len(rendered) == 1


def test_trade_party_rejects_unknown_version():
    with pytest.raises(ConfigurationError):
        build_trade_party(_container("ram:BuyerTradeParty"), DE_BUYER_PARTY, 4)


def test_line_item_index_is_line_id():
    line = build_line_item(_container(), discount_line_item(), 7)

    assert line.findtext("ram:AssociatedDocumentLineDocument/ram:LineID", namespaces=NS) == "7"


def test_line_item_version_1_has_no_product():
    line = build_line_item(_container(), discount_line_item(), 1, 1)

    assert line.find("ram:SpecifiedTradeProduct", NS) is None
    assert line.find(".//ram:BilledQuantity", NS) is not None


def test_line_item_without_reason_omits_reason_element():
    line = build_line_item(_container(), discount_line_item(discount_reason=None), 1)

    allowance = line.find(".//ram:AppliedTradeAllowanceCharge", NS)
    assert allowance is not None
    assert allowance.find("ram:Reason", NS) is None


def test_inconsistent_line_item_leaves_parent_untouched():
    parent = _container()

    with pytest.raises(ValidationError) as excinfo:
        build_line_item(parent, discount_line_item(charge_amount="21.00", tax_amount="3.99"), 2)

    assert len(parent) == 0
    assert excinfo.value.message == "LineItem 2 is invalid"
    assert excinfo.value.errors == ["Charge amount and net amount times quantity deviate: 21.00 / 20.00"]


def test_line_item_skip_validation():
    line = build_line_item(_container(), discount_line_item(tax_amount="4.00"), 1, skip_validation=True)

    assert line.find(".//ram:LineTotalAmount", NS).text == "20.00"
