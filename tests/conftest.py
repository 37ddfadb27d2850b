from pathlib import Path

import pytest
from lxml import etree

from backend.core.config import settings
from agents.einvoice.formatting import NS
from agents.einvoice.samples import (
    domestic_discount_invoice,
    multi_line_invoice,
    reverse_charge_invoice,
)

MINIMAL_XSD = """<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema"
           targetNamespace="urn:un:unece:uncefact:data:standard:CrossIndustryInvoice:100"
           elementFormDefault="qualified">
  <xs:element name="CrossIndustryInvoice">
    <xs:complexType>
      <xs:sequence>
        <xs:element name="ExchangedDocumentContext" type="xs:anyType"/>
        <xs:element name="ExchangedDocument" type="xs:anyType"/>
        <xs:element name="SupplyChainTradeTransaction" type="xs:anyType"/>
      </xs:sequence>
    </xs:complexType>
  </xs:element>
</xs:schema>
"""

MINIMAL_SCHEMATRON = """<?xml version="1.0" encoding="UTF-8"?>
<sch:schema xmlns:sch="http://purl.oclc.org/dsdl/schematron">
  <sch:ns prefix="rsm" uri="urn:un:unece:uncefact:data:standard:CrossIndustryInvoice:100"/>
  <sch:ns prefix="ram" uri="urn:un:unece:uncefact:data:standard:ReusableAggregateBusinessInformationEntity:100"/>
  <sch:pattern>
    <sch:rule context="/rsm:CrossIndustryInvoice/rsm:ExchangedDocument">
      <sch:assert test="ram:TypeCode = '380'">Document type code must be 380</sch:assert>
    </sch:rule>
    <sch:rule context="//ram:SpecifiedTradeSettlementHeaderMonetarySummation">
      <sch:assert test="ram:TaxTotalAmount/@currencyID">Tax total must carry a currency</sch:assert>
    </sch:rule>
  </sch:pattern>
</sch:schema>
"""


@pytest.fixture
def reverse_charge():
    return reverse_charge_invoice()


@pytest.fixture
def domestic_discount():
    return domestic_discount_invoice()


@pytest.fixture
def multi_line():
    return multi_line_invoice()


@pytest.fixture
def parse():
    """Parse emitted XML and return a ``find``/``findall`` friendly root."""

    def _parse(xml: str) -> etree._Element:
        return etree.fromstring(xml.encode("utf-8"))

    return _parse


@pytest.fixture
def ns():
    return NS


@pytest.fixture
def schema_dir(tmp_path: Path) -> Path:
    """Schema directory with minimal resources for versions 2/3 only."""

    for filename, content in (
        (settings.EINVOICE_SCHEMA_V2, MINIMAL_XSD),
        (settings.EINVOICE_SCHEMATRON_V2, MINIMAL_SCHEMATRON),
    ):
        path = tmp_path / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return tmp_path
