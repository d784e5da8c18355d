"""
Renderer Module for the E-Invoice PDF Renderer.

This module provides functionality for:
    - Loading fonts and the amount-in-words glyph
    - Formatting tax rates, dates and amounts
    - Laying out the seven invoice regions
    - Producing PDF bytes

Author: E-Invoice Tooling Team
"""

from .resources import ResourceLoader, RenderContext
from .formatters import format_tax_rate, format_issue_date, format_currency
from .document import InvoiceRenderer

__all__ = [
    'ResourceLoader',
    'RenderContext',
    'InvoiceRenderer',
    'format_tax_rate',
    'format_issue_date',
    'format_currency',
]
