"""
Single-line Mixed Run Flowable.

Paragraph markup cannot express horizontal scaling, so lines that mix a
label with a scaled taxpayer id, an inline image, or raised text are
drawn run by run on the canvas. Lines never wrap.

Author: E-Invoice Tooling Team
"""

from dataclasses import dataclass
from typing import List, Sequence, Union

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT, TA_RIGHT
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.platypus import Flowable

DESCENT_RATIO = 0.2


@dataclass(frozen=True)
class TextRun:
    """A piece of text in one font, optionally scaled and raised."""
    text: str
    font_name: str
    font_size: float
    color: colors.Color
    horizontal_scale: float = 100.0
    rise: float = 0.0

    @property
    def width(self) -> float:
        return stringWidth(self.text, self.font_name, self.font_size) * self.horizontal_scale / 100

    @property
    def top(self) -> float:
        return self.font_size + self.rise


@dataclass(frozen=True)
class ImageRun:
    """An inline image sitting on the baseline."""
    image: ImageReader
    width: float
    height: float
    rise: float = 0.0

    @property
    def top(self) -> float:
        return self.height + self.rise


Run = Union[TextRun, ImageRun]


class RunLine(Flowable):
    """
    Draws a sequence of runs on one baseline.

    Example:
        >>> RunLine([
        ...     TextRun("名称：", "EInvoice-field", 9, red),
        ...     TextRun("91320000MA1XXXXX0X", "EInvoice-id_num", 12, black, horizontal_scale=90),
        ... ])
    """

    def __init__(self, runs: Sequence[Run], alignment: int = TA_LEFT) -> None:
        super().__init__()
        self.runs: List[Run] = list(runs)
        self.alignment = alignment
        self._avail_width = 0.0

        text_sizes = [run.font_size for run in self.runs if isinstance(run, TextRun)]
        self.baseline = max(text_sizes, default=0) * DESCENT_RATIO
        self.height = self.baseline + max((run.top for run in self.runs), default=0)

    @property
    def content_width(self) -> float:
        return sum(run.width for run in self.runs)

    def wrap(self, availWidth, availHeight):
        self._avail_width = availWidth
        self.width = availWidth
        return availWidth, self.height

    def _start_x(self) -> float:
        slack = max(0.0, self._avail_width - self.content_width)
        if self.alignment == TA_RIGHT:
            return slack
        if self.alignment == TA_CENTER:
            return slack / 2
        return 0.0

    def draw(self) -> None:
        canvas = self.canv
        x = self._start_x()

        for run in self.runs:
            if isinstance(run, ImageRun):
                canvas.drawImage(
                    run.image, x, self.baseline + run.rise,
                    width=run.width, height=run.height, mask='auto',
                )
            else:
                text = canvas.beginText(x, self.baseline)
                text.setFont(run.font_name, run.font_size)
                text.setFillColor(run.color)
                text.setHorizScale(run.horizontal_scale)
                text.setRise(run.rise)
                text.textOut(run.text)
                canvas.drawText(text)
            x += run.width

    def __repr__(self) -> str:
        return f"RunLine({''.join(getattr(run, 'text', '[img]') for run in self.runs)!r})"
