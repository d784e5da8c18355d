"""Tests for font and image loading."""

import pytest
from reportlab.pdfbase import pdfmetrics

from einvoice_pdf.renderer import ResourceLoader
from einvoice_pdf.utils.exceptions import ResourceLoadError


def test_load_registers_fonts_and_styles(resources_dir):
    context = ResourceLoader(resources_dir).load()

    assert context.field_font == "EInvoice-field"
    assert context.content_font == "EInvoice-content"
    assert context.id_num_font == "EInvoice-id_num"
    for name in (context.field_font, context.content_font, context.id_num_font):
        assert pdfmetrics.getFont(name) is not None

    assert context.title_style.fontSize == 20.5
    assert context.field_style.fontSize == 9
    assert context.content_style.fontSize == 9
    assert context.id_num_style.fontSize == 12
    assert context.id_num_style.fontName == context.id_num_font
    assert context.title_style.textColor is context.field_color
    assert context.total_image.getSize() == (14, 14)


def test_field_colour_comes_from_settings(render_context):
    assert render_context.field_color.rgb() == pytest.approx((128 / 255, 0, 0))
    assert render_context.content_color.rgb() == pytest.approx((0, 0, 0))


def test_aligned_derives_a_new_style(render_context):
    centred = render_context.aligned(render_context.content_style, 1)

    assert centred.alignment == 1
    assert centred.fontName == render_context.content_font
    assert render_context.content_style.alignment == 0


@pytest.mark.parametrize("relative", ["fonts/simkai.ttf", "fonts/simsun.ttf", "fonts/cour.ttf", "images/total.gif"])
def test_missing_asset_raises(resources_dir, relative):
    (resources_dir / relative).unlink()

    with pytest.raises(ResourceLoadError) as exc_info:
        ResourceLoader(resources_dir).load()
    assert relative.split("/")[-1] in exc_info.value.details["resource"]


def test_corrupt_font_raises(resources_dir):
    (resources_dir / "fonts" / "cour.ttf").write_bytes(b"not a font")

    with pytest.raises(ResourceLoadError):
        ResourceLoader(resources_dir).load()


def test_corrupt_image_raises(resources_dir):
    (resources_dir / "images" / "total.gif").write_bytes(b"GIF? no")

    with pytest.raises(ResourceLoadError):
        ResourceLoader(resources_dir).load()
