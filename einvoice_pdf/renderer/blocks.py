"""
Invoice Layout Blocks.

Each builder returns one flowable for one region of the invoice page,
in the order they are stacked:

    1. title            build_title_block
    2. buyer / seller   build_party_block
    3. line items       build_item_table
    4. subtotal         build_subtotal_block
    5. grand total      build_total_block
    6. remarks          build_remarks_block
    7. signature        build_signature

Column widths are given as relative weights and scaled to the content
width. Borders use the label colour at BORDER_WIDTH.

Author: E-Invoice Tooling Team
"""

from typing import List, Sequence, Tuple
from xml.sax.saxutils import escape

from reportlab.lib.enums import TA_CENTER, TA_LEFT, TA_RIGHT
from reportlab.lib.styles import ParagraphStyle
from reportlab.platypus import Paragraph, Table, TableStyle

from einvoice_pdf.model import EInvoice, ItemInformation, PartyInformation
from .flowables import ImageRun, RunLine, TextRun
from .formatters import format_currency, format_issue_date, format_tax_rate
from .resources import RenderContext

BORDER_WIDTH = 0.5

TITLE_WEIGHTS = (210, 374, 210)
PARTY_WEIGHTS = (34, 550, 34, 550)
ITEM_WEIGHTS = (170, 114, 62, 120, 120, 120, 106, 126)
SUBTOTAL_WEIGHTS = (247, 460, 240)
TOTAL_WEIGHTS = (247, 414, 287)
REMARKS_WEIGHTS = (18, 566)

TITLE_SPACE_AFTER = 25
PARTY_ROW_HEIGHT = 32
ID_NUM_SCALE = 90
TOTAL_IMAGE_SIZE = 14
WORDS_RISE = 4
LOWERCASE_RISE = 1.2
SIGNATURE_INDENT = 45
SIGNATURE_SPACE_BEFORE = 12

# (label, header alignment, content alignment)
ITEM_COLUMNS = (
    ("项目名称", TA_CENTER, TA_LEFT),
    ("规格型号", TA_CENTER, TA_CENTER),
    ("单 位", TA_CENTER, TA_CENTER),
    ("数 量", TA_CENTER, TA_CENTER),
    ("单 价", TA_RIGHT, TA_RIGHT),
    ("金 额", TA_RIGHT, TA_RIGHT),
    ("税率/征收率", TA_CENTER, TA_CENTER),
    ("税 额", TA_RIGHT, TA_RIGHT),
)


def scale_widths(weights: Sequence[float], total_width: float) -> List[float]:
    """
    Scale relative column weights to an absolute total width.

    Example:
        >>> scale_widths((1, 3), 100)
        [25.0, 75.0]
    """
    weight_sum = float(sum(weights))
    return [total_width * weight / weight_sum for weight in weights]


def filler_height(table_height: float, fixed_height: float) -> float:
    """Height of the padding row that brings a table up to fixed_height."""
    return max(0.0, fixed_height - table_height)


def _markup(text: str) -> str:
    return escape(text or "").replace("\n", "<br/>")


def _hex_color(color) -> str:
    return "#" + "".join(f"{round(channel * 255):02x}" for channel in color.rgb())


def _field_markup(context: RenderContext, text: str) -> str:
    """Inline label markup for paragraphs written in another font."""
    return (
        f'<font name="{context.field_font}" color="{_hex_color(context.field_color)}">'
        f'{_markup(text)}</font>'
    )


def _field_run(context: RenderContext, text: str, rise: float = 0.0) -> TextRun:
    style = context.field_style
    return TextRun(text, style.fontName, style.fontSize, context.field_color, rise=rise)


def _content_run(context: RenderContext, text: str, rise: float = 0.0) -> TextRun:
    style = context.content_style
    return TextRun(text, style.fontName, style.fontSize, context.content_color, rise=rise)


def _edge_lines(context: RenderContext) -> List[Tuple]:
    """Left and right frame lines shared by the stacked body tables."""
    return [
        ('LINEBEFORE', (0, 0), (0, -1), BORDER_WIDTH, context.field_color),
        ('LINEAFTER', (-1, 0), (-1, -1), BORDER_WIDTH, context.field_color),
    ]


# =============================================================================
# 1. TITLE
# =============================================================================

def build_title_block(invoice: EInvoice, context: RenderContext, width: float) -> Table:
    """
    Three columns: empty, centred title, invoice number and date.

    The double rule under the title is drawn on the page canvas by the
    document template, not by this table.
    """
    title = Paragraph(
        _markup(invoice.header.title),
        context.aligned(context.title_style, TA_CENTER),
    )
    number_line = RunLine([
        _field_run(context, "发票号码："),
        _content_run(context, invoice.tax_supervision_info.invoice_number),
    ])
    date_line = RunLine([
        _field_run(context, "开票日期："),
        _content_run(context, format_issue_date(invoice.tax_supervision_info.issue_time)),
    ])

    table = Table(
        [["", title, [number_line, date_line]]],
        colWidths=scale_widths(TITLE_WEIGHTS, width),
        spaceBefore=0,
        spaceAfter=TITLE_SPACE_AFTER,
    )
    table.setStyle(TableStyle([
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ('LEFTPADDING', (0, 0), (-1, -1), 0),
        ('RIGHTPADDING', (0, 0), (-1, -1), 0),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 0),
        ('TOPPADDING', (0, 0), (0, 0), 0),
        ('TOPPADDING', (1, 0), (-1, 0), 10),
    ]))
    return table


# =============================================================================
# 2. BUYER / SELLER
# =============================================================================

def _party_name(context: RenderContext, party: PartyInformation) -> Paragraph:
    return Paragraph(
        _field_markup(context, "名称：") + _markup(party.name),
        context.content_style,
    )


def _party_id(context: RenderContext, party: PartyInformation) -> RunLine:
    style = context.id_num_style
    return RunLine([
        _field_run(context, "统一社会信用代码/纳税人识别号："),
        TextRun(
            party.id_num, style.fontName, style.fontSize, context.id_num_color,
            horizontal_scale=ID_NUM_SCALE,
        ),
    ])


def build_party_block(invoice: EInvoice, context: RenderContext, width: float) -> Table:
    """
    2 x 4 grid: role label (spanning both rows), name, then taxpayer id.

    Buyer occupies columns 0-1, seller columns 2-3.
    """
    role_style = context.aligned(context.field_style, TA_CENTER)
    data = [
        [
            Paragraph("购买方信息", role_style),
            _party_name(context, invoice.buyer),
            Paragraph("销售方信息", role_style),
            _party_name(context, invoice.seller),
        ],
        [
            "",
            _party_id(context, invoice.buyer),
            "",
            _party_id(context, invoice.seller),
        ],
    ]

    table = Table(
        data,
        colWidths=scale_widths(PARTY_WEIGHTS, width),
        rowHeights=[PARTY_ROW_HEIGHT, PARTY_ROW_HEIGHT],
    )
    table.setStyle(TableStyle([
        ('SPAN', (0, 0), (0, 1)),
        ('SPAN', (2, 0), (2, 1)),
        ('BOX', (0, 0), (-1, -1), BORDER_WIDTH, context.field_color),
        ('LINEAFTER', (0, 0), (2, -1), BORDER_WIDTH, context.field_color),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('LEFTPADDING', (0, 0), (-1, -1), 3),
        ('RIGHTPADDING', (0, 0), (-1, -1), 3),
        ('TOPPADDING', (0, 0), (-1, -1), 3),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 3),
        ('LEFTPADDING', (1, 0), (1, -1), 10),
        ('LEFTPADDING', (3, 0), (3, -1), 10),
    ]))
    return table


# =============================================================================
# 3. LINE ITEMS
# =============================================================================

def _item_row(item: ItemInformation, styles: Sequence[ParagraphStyle]) -> List[Paragraph]:
    values = (
        item.item_name,
        item.spec_mod,
        item.mea_units,
        item.quantity,
        item.un_price,
        item.amount,
        format_tax_rate(item.tax_rate),
        item.com_tax_am,
    )
    return [Paragraph(_markup(value), style) for value, style in zip(values, styles)]


def build_item_table(
    invoice: EInvoice,
    context: RenderContext,
    width: float,
    fixed_height: float
) -> Table:
    """
    Header row, one row per item in document order, and a filler row.

    The filler row pads the table to fixed_height so the region keeps a
    constant height; when the items already exceed it the filler is
    zero-height and the table simply grows.
    """
    col_widths = scale_widths(ITEM_WEIGHTS, width)
    header_styles = [context.aligned(context.field_style, align) for _, align, _ in ITEM_COLUMNS]
    content_styles = [context.aligned(context.content_style, align) for _, _, align in ITEM_COLUMNS]

    rows = [[
        Paragraph(label, style) for (label, _, _), style in zip(ITEM_COLUMNS, header_styles)
    ]]
    rows.extend(_item_row(item, content_styles) for item in invoice.items)

    commands = _edge_lines(context) + [
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ('LEFTPADDING', (0, 0), (-1, -1), 4),
        ('RIGHTPADDING', (0, 0), (-1, -1), 4),
        ('TOPPADDING', (0, 0), (-1, 0), 4),
        ('BOTTOMPADDING', (0, 0), (-1, 0), 4),
        ('TOPPADDING', (0, 1), (-1, -1), 0),
        ('BOTTOMPADDING', (0, 1), (-1, -1), 1),
    ]

    _, table_height = Table(rows, colWidths=col_widths, style=TableStyle(commands)).wrap(width, fixed_height)
    padding = filler_height(table_height, fixed_height)

    filler_row = len(rows)
    table = Table(
        rows + [[""] * len(ITEM_COLUMNS)],
        colWidths=col_widths,
        rowHeights=[None] * filler_row + [padding],
    )
    table.setStyle(TableStyle(commands + [
        ('SPAN', (0, filler_row), (-1, filler_row)),
        ('TOPPADDING', (0, filler_row), (-1, filler_row), 0),
        ('BOTTOMPADDING', (0, filler_row), (-1, filler_row), 0),
    ]))
    return table


# =============================================================================
# 4. SUBTOTAL
# =============================================================================

def build_subtotal_block(invoice: EInvoice, context: RenderContext, width: float) -> Table:
    """Label, amount excluding tax, tax amount."""
    basic = invoice.basic_information
    amount_style = context.aligned(context.content_style, TA_RIGHT)

    table = Table(
        [[
            Paragraph("合　　　　计", context.aligned(context.field_style, TA_CENTER)),
            Paragraph(_markup(format_currency(basic.total_am_without_tax)), amount_style),
            Paragraph(_markup(format_currency(basic.total_tax_am)), amount_style),
        ]],
        colWidths=scale_widths(SUBTOTAL_WEIGHTS, width),
    )
    table.setStyle(TableStyle(_edge_lines(context) + [
        ('LINEBELOW', (0, 0), (-1, -1), BORDER_WIDTH, context.field_color),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('TOPPADDING', (0, 0), (-1, -1), 5),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 5),
        ('LEFTPADDING', (0, 0), (-1, -1), 6),
        ('RIGHTPADDING', (0, 0), (-1, -1), 4),
    ]))
    return table


# =============================================================================
# 5. GRAND TOTAL
# =============================================================================

def build_total_block(invoice: EInvoice, context: RenderContext, width: float) -> Table:
    """
    Label, glyph plus amount in words, and the numeric amount.

    The words are raised so they sit level with the middle of the glyph.
    """
    basic = invoice.basic_information
    words = RunLine([
        ImageRun(context.total_image, TOTAL_IMAGE_SIZE, TOTAL_IMAGE_SIZE),
        _content_run(context, basic.total_tax_included_amount_in_chinese, rise=WORDS_RISE),
    ])
    figures = RunLine([
        _field_run(context, "（小写）", rise=LOWERCASE_RISE),
        _content_run(context, format_currency(basic.total_tax_included_amount), rise=LOWERCASE_RISE),
    ])

    table = Table(
        [[
            Paragraph("价税合计（大写）", context.aligned(context.field_style, TA_CENTER)),
            words,
            figures,
        ]],
        colWidths=scale_widths(TOTAL_WEIGHTS, width),
    )
    table.setStyle(TableStyle(_edge_lines(context) + [
        ('LINEAFTER', (0, 0), (0, 0), BORDER_WIDTH, context.field_color),
        ('LINEBELOW', (0, 0), (-1, -1), BORDER_WIDTH, context.field_color),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('TOPPADDING', (0, 0), (-1, -1), 5),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 5),
        ('LEFTPADDING', (0, 0), (-1, -1), 6),
        ('RIGHTPADDING', (0, 0), (-1, -1), 4),
    ]))
    return table


# =============================================================================
# 6. REMARKS
# =============================================================================

def build_remarks_block(
    invoice: EInvoice,
    context: RenderContext,
    width: float,
    fixed_height: float
) -> Table:
    """Stacked 备/注 label and the remark text at a fixed height."""
    remark = invoice.additional_information.remark

    table = Table(
        [[
            Paragraph("备<br/><br/>注", context.aligned(context.field_style, TA_CENTER)),
            Paragraph(_markup(remark), context.content_style),
        ]],
        colWidths=scale_widths(REMARKS_WEIGHTS, width),
        rowHeights=[fixed_height],
    )
    table.setStyle(TableStyle(_edge_lines(context) + [
        ('LINEAFTER', (0, 0), (0, 0), BORDER_WIDTH, context.field_color),
        ('LINEBELOW', (0, 0), (-1, -1), BORDER_WIDTH, context.field_color),
        ('VALIGN', (0, 0), (0, 0), 'MIDDLE'),
        ('VALIGN', (1, 0), (1, 0), 'TOP'),
        ('LEFTPADDING', (0, 0), (0, 0), 0),
        ('RIGHTPADDING', (0, 0), (0, 0), 0),
        ('LEFTPADDING', (1, 0), (1, 0), 3),
        ('TOPPADDING', (1, 0), (1, 0), 3),
    ]))
    return table


# =============================================================================
# 7. SIGNATURE
# =============================================================================

def build_signature(invoice: EInvoice, context: RenderContext) -> Paragraph:
    """开票人 line below the frame."""
    style = ParagraphStyle(
        name="signature",
        parent=context.content_style,
        firstLineIndent=SIGNATURE_INDENT,
        spaceBefore=SIGNATURE_SPACE_BEFORE,
    )
    return Paragraph(
        _field_markup(context, "开票人：") + _markup(invoice.basic_information.drawer),
        style,
    )
