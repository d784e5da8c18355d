"""
Font and Image Resource Loader.

Loads the three TrueType fonts and the amount-in-words glyph bitmap once
per process and derives the text styles used by every layout block.
The resulting RenderContext is read-only and is passed explicitly to the
renderer.

Expected layout under the resources directory (configurable):
    fonts/simkai.ttf    field labels and title
    fonts/simsun.ttf    content
    fonts/cour.ttf      fixed-width taxpayer ids
    images/total.gif    glyph printed before the amount in words

Author: E-Invoice Tooling Team
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Sequence, Union

from PIL import Image, UnidentifiedImageError
from reportlab.lib import colors
from reportlab.lib.enums import TA_LEFT
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont, TTFError

from config import get_config
from einvoice_pdf.utils.logger import get_logger
from einvoice_pdf.utils.helpers import validate_file_exists
from einvoice_pdf.utils.exceptions import ResourceLoadError

logger = get_logger(__name__)

LEADING_RATIO = 1.2


@dataclass(frozen=True)
class RenderContext:
    """
    Shared, read-only rendering resources.

    Attributes:
        field_font: Registered name of the label font.
        content_font: Registered name of the content font.
        id_num_font: Registered name of the fixed-width id font.
        field_color: Colour of labels, rules and borders.
        content_color: Colour of content text.
        id_num_color: Colour of taxpayer ids.
        title_style: Invoice title style.
        field_style: Label style.
        content_style: Content style.
        id_num_style: Taxpayer id style.
        total_image: Decoded glyph printed before the amount in words.
    """
    field_font: str
    content_font: str
    id_num_font: str
    field_color: colors.Color
    content_color: colors.Color
    id_num_color: colors.Color
    title_style: ParagraphStyle
    field_style: ParagraphStyle
    content_style: ParagraphStyle
    id_num_style: ParagraphStyle
    total_image: ImageReader

    def aligned(self, style: ParagraphStyle, alignment: int) -> ParagraphStyle:
        """Derive a copy of a style with another horizontal alignment."""
        return ParagraphStyle(
            name=f"{style.name}-{alignment}",
            parent=style,
            alignment=alignment,
        )


def _to_color(rgb: Sequence[int]) -> colors.Color:
    red, green, blue = rgb
    return colors.Color(red / 255, green / 255, blue / 255)


class ResourceLoader:
    """
    Loads fonts and images from a resources directory.

    Attributes:
        resources_dir: Root directory of the assets.
        font_files: Role -> path relative to resources_dir.
        total_image_file: Glyph path relative to resources_dir.

    Example:
        >>> context = ResourceLoader("resources").load()
        >>> context.field_font
        'EInvoice-field'
    """

    FONT_ROLES = ('field', 'content', 'id_num')

    DEFAULT_FONT_FILES = {
        'field': 'fonts/simkai.ttf',
        'content': 'fonts/simsun.ttf',
        'id_num': 'fonts/cour.ttf',
    }

    def __init__(self, resources_dir: Optional[Union[str, Path]] = None) -> None:
        """
        Initialize the loader with configuration.

        Args:
            resources_dir: Override for paths.resources_dir.
        """
        self.resources_dir = Path(
            resources_dir or get_config("paths.resources_dir", "resources")
        )
        self.font_files: Dict[str, str] = {
            role: get_config(f"resources.fonts.{role}", default)
            for role, default in self.DEFAULT_FONT_FILES.items()
        }
        self.total_image_file = get_config("resources.total_image", "images/total.gif")

        self.font_sizes = {
            'title': get_config("render.font_sizes.title", 20.5),
            'field': get_config("render.font_sizes.field", 9),
            'content': get_config("render.font_sizes.content", 9),
            'id_num': get_config("render.font_sizes.id_num", 12),
        }
        self.field_color = _to_color(get_config("render.field_color", [128, 0, 0]))
        self.content_color = _to_color(get_config("render.content_color", [0, 0, 0]))
        self.id_num_color = _to_color(get_config("render.id_num_color", [0, 0, 0]))

        logger.debug(f"ResourceLoader initialized (resources_dir: {self.resources_dir})")

    def load(self) -> RenderContext:
        """
        Load every asset and build the render context.

        Returns:
            RenderContext shared by all invoices in the batch.

        Raises:
            ResourceLoadError: If any font or image is missing or unreadable.
        """
        logger.info(f"Loading resources from: {self.resources_dir}")

        fonts = {role: self._register_font(role) for role in self.FONT_ROLES}
        total_image = self._load_image(self.resources_dir / self.total_image_file)

        context = RenderContext(
            field_font=fonts['field'],
            content_font=fonts['content'],
            id_num_font=fonts['id_num'],
            field_color=self.field_color,
            content_color=self.content_color,
            id_num_color=self.id_num_color,
            title_style=self._make_style('title', fonts['field'], 'title', self.field_color),
            field_style=self._make_style('field', fonts['field'], 'field', self.field_color),
            content_style=self._make_style('content', fonts['content'], 'content', self.content_color),
            id_num_style=self._make_style('id_num', fonts['id_num'], 'id_num', self.id_num_color),
            total_image=total_image,
        )

        logger.info("Resources loaded: 3 fonts, 1 image")
        return context

    def _register_font(self, role: str) -> str:
        """
        Register one TrueType font with reportlab.

        Returns:
            The registered font name.
        """
        path = self.resources_dir / self.font_files[role]
        if not validate_file_exists(path):
            raise ResourceLoadError(str(path), "File not found")

        font_name = f"EInvoice-{role}"
        try:
            pdfmetrics.registerFont(TTFont(font_name, str(path)))
        except (TTFError, OSError) as e:
            raise ResourceLoadError(str(path), str(e))

        logger.debug(f"Registered font {font_name} from {path.name}")
        return font_name

    def _load_image(self, path: Path) -> ImageReader:
        if not validate_file_exists(path):
            raise ResourceLoadError(str(path), "File not found")

        try:
            with Image.open(path) as image:
                image.load()
                decoded = image.convert("RGBA")
        except (UnidentifiedImageError, OSError) as e:
            raise ResourceLoadError(str(path), str(e))

        logger.debug(f"Loaded image {path.name} ({decoded.width}x{decoded.height})")
        return ImageReader(decoded)

    def _make_style(self, name: str, font_name: str, size_key: str, color: colors.Color) -> ParagraphStyle:
        font_size = self.font_sizes[size_key]
        return ParagraphStyle(
            name=name,
            fontName=font_name,
            fontSize=font_size,
            leading=font_size * LEADING_RATIO,
            textColor=color,
            alignment=TA_LEFT,
            wordWrap='CJK',
        )
