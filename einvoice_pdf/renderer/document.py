"""
Invoice Document Renderer.

This module provides the InvoiceRenderer class that composes the seven
layout blocks onto a single fixed-size page and returns the PDF bytes.

Usage:
    from einvoice_pdf.renderer import InvoiceRenderer, ResourceLoader

    renderer = InvoiceRenderer(ResourceLoader().load())
    pdf_bytes = renderer.render(invoice)

Author: E-Invoice Tooling Team
"""

import io
from typing import List

from reportlab.platypus import BaseDocTemplate, Flowable, Frame, PageTemplate
from reportlab.platypus.doctemplate import LayoutError

from config import get_config
from einvoice_pdf.model import EInvoice
from einvoice_pdf.utils.logger import get_logger
from einvoice_pdf.utils.exceptions import RenderError
from .blocks import (
    build_item_table,
    build_party_block,
    build_remarks_block,
    build_signature,
    build_subtotal_block,
    build_title_block,
    build_total_block,
)
from .resources import RenderContext

logger = get_logger(__name__)

PAGE_SIZE = (610, 394)
LEFT_MARGIN = 13
RIGHT_MARGIN = 13
TOP_MARGIN = 10
BOTTOM_MARGIN = 0

# Double rule under the title, in page coordinates relative to the frame top
TITLE_RULE_OFFSETS = (42, 45)
TITLE_RULE_LEFT = 190
TITLE_RULE_RIGHT_INSET = 200
TITLE_RULE_WIDTH = 0.6


class InvoiceRenderer:
    """
    Renders EInvoice records to single-page PDFs.

    Attributes:
        context: Shared fonts, colours, styles and glyph image.
        item_table_height: Minimum height of the line-item region.
        remarks_height: Fixed height of the remarks row.
        invariant: Produce byte-identical output for identical input.

    Example:
        >>> renderer = InvoiceRenderer(context)
        >>> story = renderer.build_story(invoice)
        >>> len(story)
        7
    """

    def __init__(self, context: RenderContext) -> None:
        """
        Initialize the renderer with configuration.

        Args:
            context: RenderContext from ResourceLoader.load().
        """
        self.context = context
        self.item_table_height = get_config("render.item_table_height", 110)
        self.remarks_height = get_config("render.remarks_height", 56)
        self.invariant = get_config("render.invariant", True)

        logger.debug(
            f"InvoiceRenderer initialized (page={PAGE_SIZE[0]}x{PAGE_SIZE[1]}, "
            f"item_table_height={self.item_table_height})"
        )

    @property
    def content_width(self) -> float:
        return PAGE_SIZE[0] - LEFT_MARGIN - RIGHT_MARGIN

    @property
    def content_top(self) -> float:
        return PAGE_SIZE[1] - TOP_MARGIN

    def build_story(self, invoice: EInvoice) -> List[Flowable]:
        """
        Build the seven page regions in drawing order.

        Args:
            invoice: Invoice to lay out.

        Returns:
            [title, buyer/seller, items, subtotal, grand total, remarks, signature]
        """
        width = self.content_width
        return [
            build_title_block(invoice, self.context, width),
            build_party_block(invoice, self.context, width),
            build_item_table(invoice, self.context, width, self.item_table_height),
            build_subtotal_block(invoice, self.context, width),
            build_total_block(invoice, self.context, width),
            build_remarks_block(invoice, self.context, width, self.remarks_height),
            build_signature(invoice, self.context),
        ]

    def render(self, invoice: EInvoice) -> bytes:
        """
        Render one invoice.

        Args:
            invoice: Invoice to render.

        Returns:
            Complete PDF document bytes.

        Raises:
            RenderError: If the layout cannot be placed on the page.
        """
        buffer = io.BytesIO()
        document = self._create_document(buffer, invoice)

        try:
            document.build(self.build_story(invoice))
        except LayoutError as e:
            raise RenderError(invoice.invoice_number, str(e))

        pdf_bytes = buffer.getvalue()
        logger.debug(f"Rendered invoice {invoice.invoice_number} ({len(pdf_bytes)} bytes)")
        return pdf_bytes

    def _create_document(self, buffer: io.BytesIO, invoice: EInvoice) -> BaseDocTemplate:
        document = BaseDocTemplate(
            buffer,
            pagesize=PAGE_SIZE,
            leftMargin=LEFT_MARGIN,
            rightMargin=RIGHT_MARGIN,
            topMargin=TOP_MARGIN,
            bottomMargin=BOTTOM_MARGIN,
            title=f"{invoice.header.title}{invoice.invoice_number}",
            author=invoice.seller.name,
            creator="einvoice-pdf",
            invariant=self.invariant,
        )
        frame = Frame(
            document.leftMargin,
            document.bottomMargin,
            document.width,
            document.height,
            leftPadding=0,
            rightPadding=0,
            topPadding=0,
            bottomPadding=0,
            id="content",
        )
        document.addPageTemplates([
            PageTemplate(id="invoice", frames=[frame], onPage=self._draw_title_rules),
        ])
        return document

    def _draw_title_rules(self, canvas, document) -> None:
        """Double rule under the title, drawn straight onto the first page."""
        if canvas.getPageNumber() != 1:
            return

        canvas.saveState()
        canvas.setLineWidth(TITLE_RULE_WIDTH)
        canvas.setStrokeColor(self.context.field_color)
        right = PAGE_SIZE[0] - TITLE_RULE_RIGHT_INSET
        for offset in TITLE_RULE_OFFSETS:
            y = self.content_top - offset
            canvas.line(TITLE_RULE_LEFT, y, right, y)
        canvas.restoreState()
