"""``IncludedSupplyChainTradeLineItem`` subtree for one invoice position."""

from __future__ import annotations

from lxml import etree

from backend.core.logging import get_logger
from agents.einvoice.consistency import validate_line_item
from agents.einvoice.constants import BASIS_QUANTITY, TAX_TYPE_CODE
from agents.einvoice.dto import LineItem
from agents.einvoice.formatting import currency_element, el, format_decimal
from agents.einvoice.profiles import Version, coerce_version

logger = get_logger(__name__)


def build_line_item(
    parent: etree._Element,
    item: LineItem,
    index: int,
    version: int = 2,
    *,
    skip_validation: bool = False,
) -> etree._Element:
    """Append line ``index`` (1-based) to ``parent`` and return the new element.

    Raises ``ValidationError`` if the item is inconsistent, unless
    ``skip_validation`` is set. Line amounts never carry a currency attribute.
    """

    version = coerce_version(version)
    if not skip_validation:
        result = validate_line_item(item)
        if not result:
            logger.info("Line item %s failed consistency check: %s", index, result.errors[0])
        result.raise_for_errors(f"LineItem {index}")

    line = el(parent, "ram:IncludedSupplyChainTradeLineItem")

    document = el(line, "ram:AssociatedDocumentLineDocument")
    el(document, "ram:LineID", str(index))

    if version >= Version.V2:
        product = el(line, "ram:SpecifiedTradeProduct")
        el(product, "ram:Name", item.name)
        origin = el(product, "ram:OriginTradeCountry")
        el(origin, "ram:ID", item.origin_country_code or "")

    agreement = el(line, "ram:SpecifiedLineTradeAgreement")
    gross_price = el(agreement, "ram:GrossPriceProductTradePrice")
    currency_element(gross_price, "ram:ChargeAmount", item.gross_amount, item.currency_code, False, digits=4)
    if item.has_discount:
        el(gross_price, "ram:BasisQuantity", format_decimal(BASIS_QUANTITY, 4), unitCode=item.unit_code)
        allowance = el(gross_price, "ram:AppliedTradeAllowanceCharge")
        indicator = el(allowance, "ram:ChargeIndicator")
        el(indicator, "udt:Indicator", "false")
        currency_element(allowance, "ram:ActualAmount", item.discount_amount, item.currency_code, False)
        if item.discount_reason:
            el(allowance, "ram:Reason", item.discount_reason)

    net_price = el(agreement, "ram:NetPriceProductTradePrice")
    currency_element(net_price, "ram:ChargeAmount", item.net_amount, item.currency_code, False, digits=4)
    el(net_price, "ram:BasisQuantity", format_decimal(BASIS_QUANTITY, 4), unitCode=item.unit_code)

    delivery = el(line, "ram:SpecifiedLineTradeDelivery")
    el(delivery, "ram:BilledQuantity", format_decimal(item.quantity, 4), unitCode=item.unit_code)

    settlement = el(line, "ram:SpecifiedLineTradeSettlement")
    tax = el(settlement, "ram:ApplicableTradeTax")
    el(tax, "ram:TypeCode", TAX_TYPE_CODE)
    el(tax, "ram:CategoryCode", item.tax_category_code(version))
    el(tax, "ram:RateApplicablePercent", format_decimal(item.tax_percent))

    summation = el(settlement, "ram:SpecifiedTradeSettlementLineMonetarySummation")
    currency_element(summation, "ram:LineTotalAmount", item.charge_amount, item.currency_code, False)

    return line
