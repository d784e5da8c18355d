"""
Invoice XML Deserializer.

Binds one electronic invoice XML document to the EInvoice record tree.
Only the elements the renderer needs are read; anything else in the
document is ignored. Element namespaces, if present, are stripped so
lookups work on local names.

Usage:
    from einvoice_pdf.model import load_invoice

    invoice = load_invoice("assets/24322000000012345678.xml")
"""

from datetime import datetime
from pathlib import Path
from typing import Optional, Union
from xml.etree.ElementTree import Element, ParseError as XMLSyntaxError

from dateutil import parser as date_parser
from defusedxml import ElementTree as SafeET
from defusedxml import DefusedXmlException

from einvoice_pdf.utils.logger import get_logger
from einvoice_pdf.utils.exceptions import ParseError
from .invoice import (
    AdditionalInformation,
    BasicInformation,
    EInvoice,
    Header,
    ItemInformation,
    Label,
    PartyInformation,
    TaxSupervisionInfo,
)

logger = get_logger(__name__)

ISSUE_TIME_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d",
)

# Two defaults differing in year, month and day
_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 2)


def _strip_namespaces(root: Element) -> Element:
    """Rewrite '{uri}Tag' to 'Tag' in place."""
    for element in root.iter():
        if isinstance(element.tag, str) and element.tag.startswith('{'):
            element.tag = element.tag.split('}', 1)[1]
    return root


def _find(parent: Element, path: str, context: str) -> Element:
    """Find a required child element."""
    element = parent.find(path)
    if element is None:
        raise ParseError("Missing required element", element=f"{context}/{path}")
    return element


def _text(parent: Element, path: str, context: str) -> str:
    """Text of a required element; an empty element yields ''."""
    return (_find(parent, path, context).text or "").strip()


def _optional_text(parent: Optional[Element], path: str) -> str:
    if parent is None:
        return ""
    element = parent.find(path)
    if element is None or element.text is None:
        return ""
    return element.text.strip()


def _parse_label(inherent_label: Element, tag: str) -> Label:
    context = f"Header/InherentLabel/{tag}"
    element = _find(inherent_label, tag, "Header/InherentLabel")
    return Label(
        code=_optional_text(element, "LabelCode"),
        name=_text(element, "LabelName", context),
    )


def _parse_header(root: Element) -> Header:
    inherent_label = _find(root, "Header/InherentLabel", "EInvoice")
    return Header(
        einvoice_type=_parse_label(inherent_label, "EInvoiceType"),
        vat_category=_parse_label(inherent_label, "GeneralOrSpecialVAT"),
    )


def _try_explicit_formats(raw_time: str) -> Optional[datetime]:
    for fmt in ISSUE_TIME_FORMATS:
        try:
            return datetime.strptime(raw_time, fmt)
        except ValueError:
            continue
    return None


def _parse_issue_time(raw_time: str) -> datetime:
    """
    Parse an IssueTime value.

    The standard layouts are tried first, then dateutil. dateutil fills
    absent fields from a default, so the value is parsed against two
    different defaults: if the dates disagree, the year, month or day
    was missing from the document.

    Raises:
        ValueError: If the value is not a complete date.
    """
    issue_time = _try_explicit_formats(raw_time)
    if issue_time is not None:
        return issue_time

    first = date_parser.parse(raw_time, default=_DEFAULT_A)
    second = date_parser.parse(raw_time, default=_DEFAULT_B)
    if first.date() != second.date():
        raise ValueError("incomplete date")
    return first


def _parse_tax_supervision(root: Element) -> TaxSupervisionInfo:
    context = "TaxSupervisionInfo"
    block = _find(root, context, "EInvoice")
    raw_time = _text(block, "IssueTime", context)
    try:
        issue_time = _parse_issue_time(raw_time)
    except (ValueError, OverflowError) as e:
        raise ParseError(f"Invalid issue time '{raw_time}': {e}", element=f"{context}/IssueTime")

    return TaxSupervisionInfo(
        invoice_number=_text(block, "InvoiceNumber", context),
        issue_time=issue_time,
    )


def _parse_party(data: Element, role: str) -> PartyInformation:
    """Parse BuyerInformation (role='Buyer') or SellerInformation (role='Seller')."""
    context = f"EInvoiceData/{role}Information"
    block = _find(data, f"{role}Information", "EInvoiceData")
    return PartyInformation(
        name=_text(block, f"{role}Name", context),
        id_num=_text(block, f"{role}IdNum", context),
    )


def _parse_item(element: Element, index: int) -> ItemInformation:
    context = f"EInvoiceData/IssuItemInformation[{index}]"
    return ItemInformation(
        item_name=_text(element, "ItemName", context),
        spec_mod=_optional_text(element, "SpecMod"),
        mea_units=_optional_text(element, "MeaUnits"),
        quantity=_optional_text(element, "Quantity"),
        un_price=_optional_text(element, "UnPrice"),
        amount=_text(element, "Amount", context),
        tax_rate=_text(element, "TaxRate", context),
        com_tax_am=_text(element, "ComTaxAm", context),
    )


def _parse_basic_information(data: Element) -> BasicInformation:
    context = "EInvoiceData/BasicInformation"
    block = _find(data, "BasicInformation", "EInvoiceData")
    return BasicInformation(
        total_am_without_tax=_text(block, "TotalAmWithoutTax", context),
        total_tax_am=_text(block, "TotalTaxAm", context),
        total_tax_included_amount=_text(block, "TotalTax-includedAmount", context),
        total_tax_included_amount_in_chinese=_text(
            block, "TotalTax-includedAmountInChinese", context
        ),
        drawer=_text(block, "Drawer", context),
    )


def parse_invoice(data: Union[bytes, str], source: Optional[str] = None) -> EInvoice:
    """
    Deserialize one invoice document.

    Args:
        data: Raw XML document.
        source: Optional file name, used in error details.

    Returns:
        Populated EInvoice.

    Raises:
        ParseError: If the XML is malformed, unsafe, or a required
            element is absent or has the wrong type.
    """
    try:
        root = SafeET.fromstring(data)
    except (XMLSyntaxError, DefusedXmlException) as e:
        raise ParseError(f"Malformed XML: {e}", source=source)

    root = _strip_namespaces(root)
    if root.tag != "EInvoice":
        raise ParseError(f"Unexpected root element '{root.tag}'", element="EInvoice", source=source)

    try:
        einvoice_data = _find(root, "EInvoiceData", "EInvoice")
        invoice = EInvoice(
            header=_parse_header(root),
            tax_supervision_info=_parse_tax_supervision(root),
            buyer=_parse_party(einvoice_data, "Buyer"),
            seller=_parse_party(einvoice_data, "Seller"),
            items=tuple(
                _parse_item(element, index)
                for index, element in enumerate(einvoice_data.findall("IssuItemInformation"))
            ),
            basic_information=_parse_basic_information(einvoice_data),
            additional_information=AdditionalInformation(
                remark=_optional_text(einvoice_data.find("AdditionalInformation"), "Remark")
            ),
        )
    except ParseError as e:
        if source:
            e.details.setdefault("source", source)
        raise

    logger.debug(f"Parsed {invoice!r}")
    return invoice


def load_invoice(filepath: Union[str, Path]) -> EInvoice:
    """
    Read and deserialize an invoice file.

    Args:
        filepath: Path to the XML document.

    Returns:
        Populated EInvoice.

    Raises:
        ParseError: If the document does not match the schema.
        OSError: If the file cannot be read.
    """
    path = Path(filepath)
    return parse_invoice(path.read_bytes(), source=path.name)
