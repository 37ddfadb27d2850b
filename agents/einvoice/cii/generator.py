"""Cross Industry Invoice (CII) generator for ZUGFeRD and XRechnung.

Builds ``rsm:CrossIndustryInvoice`` documents for schema generations 1, 2
and 3 in ``zugferd`` or ``xrechnung`` mode. The invoice is validated for
arithmetic consistency first (unless explicitly skipped); on failure nothing
is emitted. Output is deterministic: the same invoice and parameters always
produce byte-identical XML.

References:
- ZUGFeRD: https://www.ferd-net.de/standards/zugferd
- XRechnung: https://xeinkauf.de/xrechnung/
- UN/CEFACT CrossIndustryInvoice D16B
"""

from __future__ import annotations

from decimal import Decimal

from lxml import etree

from backend.core.config import settings
from backend.core.logging import get_logger
from agents.einvoice.consistency import validate_invoice, validate_line_item
from agents.einvoice.constants import TAX_TYPE_CODE, TYPE_CODE_COMMERCIAL_INVOICE
from agents.einvoice.dto import Invoice
from agents.einvoice.formatting import NS, currency_element, date_element, el, format_decimal
from agents.einvoice.profiles import DocumentProfile, Mode, resolve_profile

from .line_item import build_line_item
from .trade_party import build_trade_party

GENERATOR_VERSION = "cii-1.0.0"
ZERO = Decimal(0)

logger = get_logger(__name__)


def version() -> str:
    """Return the generator version."""

    return GENERATOR_VERSION


def _add_context(root: etree._Element, profile: DocumentProfile) -> None:
    context = el(root, "rsm:ExchangedDocumentContext")
    if profile.business_process_id:
        process = el(context, "ram:BusinessProcessSpecifiedDocumentContextParameter")
        el(process, "ram:ID", profile.business_process_id)
    guideline = el(context, "ram:GuidelineSpecifiedDocumentContextParameter")
    el(guideline, "ram:ID", profile.guideline_id)


def _add_document(root: etree._Element, invoice: Invoice) -> None:
    document = el(root, "rsm:ExchangedDocument")
    el(document, "ram:ID", invoice.id)
    el(document, "ram:TypeCode", TYPE_CODE_COMMERCIAL_INVOICE)
    date_element(document, "ram:IssueDateTime", invoice.issue_date)


def _add_agreement(transaction: etree._Element, invoice: Invoice, profile: DocumentProfile) -> None:
    agreement = el(transaction, "ram:ApplicableHeaderTradeAgreement")
    if profile.includes_buyer_reference and invoice.buyer_reference is not None:
        el(agreement, "ram:BuyerReference", invoice.buyer_reference)
    build_trade_party(el(agreement, "ram:SellerTradeParty"), invoice.seller, profile.version)
    build_trade_party(el(agreement, "ram:BuyerTradeParty"), invoice.buyer, profile.version)


def _add_delivery(transaction: etree._Element, invoice: Invoice, profile: DocumentProfile) -> None:
    delivery = el(transaction, "ram:ApplicableHeaderTradeDelivery")
    if profile.includes_ship_to:
        ship_to = el(delivery, "ram:ShipToTradeParty")
        build_trade_party(ship_to, invoice.buyer, profile.version, exclude_tax=True)
    event = el(delivery, "ram:ActualDeliverySupplyChainEvent")
    date_element(event, "ram:OccurrenceDateTime", invoice.issue_date)


def _add_payment_terms(settlement: etree._Element, invoice: Invoice) -> None:
    terms = el(settlement, "ram:SpecifiedTradePaymentTerms")
    if invoice.is_unpaid:
        if invoice.payment_description:
            el(terms, "ram:Description", invoice.payment_description)
        if invoice.payment_due_date is not None:
            date_element(terms, "ram:DueDateDateTime", invoice.payment_due_date)
    elif invoice.payment_status_text:
        el(terms, "ram:Description", invoice.payment_status_text)


def _add_settlement(transaction: etree._Element, invoice: Invoice, profile: DocumentProfile) -> None:
    currency = invoice.currency_code
    add_currency = profile.currency_on_amounts

    settlement = el(transaction, "ram:ApplicableHeaderTradeSettlement")
    el(settlement, "ram:InvoiceCurrencyCode", currency)

    means = el(settlement, "ram:SpecifiedTradeSettlementPaymentMeans")
    el(means, "ram:TypeCode", invoice.payment_code)
    el(means, "ram:Information", invoice.payment_text)
    if invoice.payment_iban:
        account = el(means, "ram:PayeePartyCreditorFinancialAccount")
        el(account, "ram:IBANID", invoice.payment_iban)

    tax = el(settlement, "ram:ApplicableTradeTax")
    currency_element(tax, "ram:CalculatedAmount", invoice.tax_amount, currency, add_currency)
    el(tax, "ram:TypeCode", TAX_TYPE_CODE)
    reason = invoice.tax_reason_text
    if reason:
        el(tax, "ram:ExemptionReason", reason)
    currency_element(tax, "ram:BasisAmount", invoice.basis_amount, currency, add_currency)
    el(tax, "ram:CategoryCode", invoice.tax_category_code(profile.version))
    el(tax, "ram:RateApplicablePercent", format_decimal(invoice.tax_percent))

    _add_payment_terms(settlement, invoice)

    summation = el(settlement, "ram:SpecifiedTradeSettlementHeaderMonetarySummation")
    currency_element(summation, "ram:LineTotalAmount", invoice.basis_amount, currency, add_currency)
    currency_element(summation, "ram:ChargeTotalAmount", ZERO, currency, add_currency)
    currency_element(summation, "ram:AllowanceTotalAmount", ZERO, currency, add_currency)
    currency_element(summation, "ram:TaxBasisTotalAmount", invoice.basis_amount, currency, add_currency)
    # TaxTotalAmount requires currencyID in every version
    currency_element(summation, "ram:TaxTotalAmount", invoice.tax_amount, currency, True)
    currency_element(summation, "ram:GrandTotalAmount", invoice.grand_total_amount, currency, add_currency)
    currency_element(summation, "ram:TotalPrepaidAmount", invoice.paid_amount, currency, add_currency)
    currency_element(summation, "ram:DuePayableAmount", invoice.due_amount, currency, add_currency)


def build_cii_tree(
    invoice: Invoice,
    version: int = 2,
    mode: Mode | str = Mode.ZUGFERD,
    *,
    skip_validation: bool = False,
) -> etree._Element:
    """Build the ``rsm:CrossIndustryInvoice`` element tree.

    Raises ``ConfigurationError`` for unsupported version/mode before any
    work is done and ``ValidationError`` if the invoice or one of its line
    items is inconsistent (unless ``skip_validation`` is set).
    """

    profile = resolve_profile(version, mode)
    logger.debug(
        "Building CII invoice %s (version=%s, mode=%s)",
        invoice.id,
        int(profile.version),
        profile.mode.value,
    )

    if skip_validation:
        logger.warning("Consistency validation skipped for invoice %s", invoice.id)
    else:
        result = validate_invoice(invoice)
        if not result:
            logger.info("Invoice %s failed consistency check: %s", invoice.id, result.errors[0])
        result.raise_for_errors("Invoice")
        # lines are checked for every version, also where they are not emitted
        for index, item in enumerate(invoice.line_items, start=1):
            result = validate_line_item(item)
            if not result:
                logger.info("Line item %s failed consistency check: %s", index, result.errors[0])
            result.raise_for_errors(f"LineItem {index}")

    root = etree.Element(f"{{{NS['rsm']}}}CrossIndustryInvoice", nsmap=dict(NS))
    _add_context(root, profile)
    _add_document(root, invoice)

    transaction = el(root, "rsm:SupplyChainTradeTransaction")
    if profile.includes_line_items:
        for index, item in enumerate(invoice.line_items, start=1):
            build_line_item(
                transaction,
                item,
                index,
                profile.version,
                skip_validation=True,
            )
    _add_agreement(transaction, invoice, profile)
    _add_delivery(transaction, invoice, profile)
    _add_settlement(transaction, invoice, profile)

    return root


def build_cii_xml(
    invoice: Invoice,
    version: int = 2,
    mode: Mode | str = Mode.ZUGFERD,
    *,
    skip_validation: bool = False,
    pretty_print: bool | None = None,
) -> str:
    """Serialize the invoice to a CII XML document string."""

    root = build_cii_tree(invoice, version, mode, skip_validation=skip_validation)
    if pretty_print is None:
        pretty_print = settings.EINVOICE_PRETTY_PRINT
    xml_bytes = etree.tostring(
        root, pretty_print=pretty_print, xml_declaration=True, encoding="UTF-8"
    )
    return xml_bytes.decode("utf-8")
