"""Seller/buyer/ship-to party subtrees."""

from __future__ import annotations

from lxml import etree

from agents.einvoice.constants import VAT_SCHEME_ID
from agents.einvoice.dto import TradeParty
from agents.einvoice.formatting import el
from agents.einvoice.profiles import coerce_version


def build_trade_party(
    parent: etree._Element,
    party: TradeParty,
    version: int = 2,
    *,
    exclude_tax: bool = False,
) -> etree._Element:
    """Append name, postal address and (unless excluded) VAT registration to ``parent``.

    ``exclude_tax`` is used when the buyer is repeated as ship-to party, where
    the tax registration is not emitted again.

    ``version`` is validated but does not change the output: all supported
    generations share this layout. It is kept so party blocks dispatch like
    the other builders once a generation diverges.
    """

    coerce_version(version)

    el(parent, "ram:Name", party.name)

    address = el(parent, "ram:PostalTradeAddress")
    el(address, "ram:PostcodeCode", party.postal_code)
    el(address, "ram:LineOne", party.street1)
    if party.street2:
        el(address, "ram:LineTwo", party.street2)
    el(address, "ram:CityName", party.city)
    el(address, "ram:CountryID", party.country_id)

    if not exclude_tax and party.vat_id:
        registration = el(parent, "ram:SpecifiedTaxRegistration")
        el(registration, "ram:ID", party.vat_id, schemeID=VAT_SCHEME_ID)

    return parent
