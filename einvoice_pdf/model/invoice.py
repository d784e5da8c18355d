"""
Electronic Invoice Data Classes.

This module defines the typed record tree for one electronic invoice
(全电发票) as described by the accounting data standard. Instances are
frozen: the renderer only reads them.

Author: E-Invoice Tooling Team
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Tuple


@dataclass(frozen=True)
class Label:
    """An enumerated label/code pair such as the invoice type."""
    code: str
    name: str


@dataclass(frozen=True)
class Header:
    """
    Inherent labels of the invoice.

    Attributes:
        einvoice_type: Invoice kind, e.g. 电子发票.
        vat_category: General or special VAT, e.g. 普通发票.
    """
    einvoice_type: Label
    vat_category: Label

    @property
    def title(self) -> str:
        """Title line as printed on the invoice."""
        return f"{self.einvoice_type.name}（{self.vat_category.name}）"


@dataclass(frozen=True)
class TaxSupervisionInfo:
    invoice_number: str
    issue_time: datetime


@dataclass(frozen=True)
class PartyInformation:
    """
    Buyer or seller block.

    Attributes:
        name: Registered party name.
        id_num: Unified social credit code / taxpayer id.
    """
    name: str
    id_num: str


@dataclass(frozen=True)
class ItemInformation:
    """
    One line item. Numeric values are the document's own decimal strings.

    Attributes:
        item_name: Goods or service name.
        spec_mod: Specification / model, may be empty.
        mea_units: Unit of measure, may be empty.
        quantity: Quantity, may be empty.
        un_price: Unit price, may be empty.
        amount: Line amount excluding tax.
        tax_rate: Decimal rate ("0.06") or a placeholder token ("***").
        com_tax_am: Tax amount.
    """
    item_name: str
    spec_mod: str
    mea_units: str
    quantity: str
    un_price: str
    amount: str
    tax_rate: str
    com_tax_am: str


@dataclass(frozen=True)
class BasicInformation:
    """Aggregate totals and the drawer."""
    total_am_without_tax: str
    total_tax_am: str
    total_tax_included_amount: str
    total_tax_included_amount_in_chinese: str
    drawer: str


@dataclass(frozen=True)
class AdditionalInformation:
    remark: str = ""


@dataclass(frozen=True)
class EInvoice:
    """
    Root record for one invoice document.

    Example:
        >>> invoice = load_invoice("assets/invoice.xml")
        >>> invoice.header.title
        '电子发票（普通发票）'
        >>> len(invoice.items)
        2
    """
    header: Header
    tax_supervision_info: TaxSupervisionInfo
    buyer: PartyInformation
    seller: PartyInformation
    items: Tuple[ItemInformation, ...]
    basic_information: BasicInformation
    additional_information: AdditionalInformation = field(
        default_factory=AdditionalInformation
    )

    @property
    def invoice_number(self) -> str:
        return self.tax_supervision_info.invoice_number

    def __repr__(self) -> str:
        return (
            f"EInvoice("
            f"number={self.invoice_number}, "
            f"seller={self.seller.name}, "
            f"items={len(self.items)}, "
            f"total={self.basic_information.total_tax_included_amount})"
        )
