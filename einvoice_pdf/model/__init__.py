"""
Invoice Model Module.

This module provides:
    - Frozen data classes for the electronic invoice record tree
    - XML deserialization into that tree

Author: E-Invoice Tooling Team
"""

from .invoice import (
    EInvoice,
    Header,
    Label,
    TaxSupervisionInfo,
    PartyInformation,
    ItemInformation,
    BasicInformation,
    AdditionalInformation,
)
from .deserializer import parse_invoice, load_invoice

__all__ = [
    'EInvoice',
    'Header',
    'Label',
    'TaxSupervisionInfo',
    'PartyInformation',
    'ItemInformation',
    'BasicInformation',
    'AdditionalInformation',
    'parse_invoice',
    'load_invoice',
]
