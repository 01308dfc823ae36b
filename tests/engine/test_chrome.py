"""Tests for ChromeRenderer."""

import pytest
from PIL import Image

from formpager.engine.chrome import ChromeContext, ChromeRenderer, ChromeTemplate, fit_image
from formpager.engine.geometry import A4_LANDSCAPE, A4_PORTRAIT, DEFAULT_MARGINS, PageGeometry, Rect
from formpager.engine.surface import ImageOp, RecordingSurface
from formpager.engine.text_metrics import FontSpec

PORTRAIT = PageGeometry(A4_PORTRAIT, DEFAULT_MARGINS)


def _paint(template, surface, page=1, total=1, geometry=PORTRAIT):
    renderer = ChromeRenderer(template, geometry)
    renderer.paint(surface, ChromeContext.for_page(template, page, total))
    return renderer


class TestChromeTemplate:
    """Test cases for ChromeTemplate geometry."""

    def test_defaults_follow_printed_forms(self):
        template = ChromeTemplate("Título", "FOR-EC-1", "0")
        assert template.header_top == 10
        assert template.header_height == 16
        assert template.logo_width == 40
        assert template.page_cell_width == 35

    def test_banner_moves_content_down(self):
        plain = ChromeTemplate("T", "C", "0")
        banner = ChromeTemplate("T", "C", "0", study_code="00-0001-25")
        assert banner.bottom == pytest.approx(plain.bottom + banner.banner_height)

    def test_content_top_never_above_margin(self):
        template = ChromeTemplate("T", "C", "0", header_top=0, header_height=2, meta_height=1, gap_after=0)
        assert ChromeRenderer(template, PORTRAIT).content_top == DEFAULT_MARGINS.top


class TestChromeRenderer:
    """Test cases for chrome painting."""

    def test_paints_header_cells_and_metadata(self, surface):
        template = ChromeTemplate("14.0 – NECROPSIA", "FOR-EC-14", "0")
        _paint(template, surface, page=2, total=3)

        texts = [op.text for op in surface.texts()]
        assert "LOGO" in texts
        assert "14.0 – NECROPSIA" in texts
        assert "Página 2 de 3" in texts
        assert "Área: Estudos clínicos" in texts
        assert "Nº DOC.: FOR-EC-14" in texts
        assert "Versão: 0" in texts

    def test_same_context_paints_same_operations(self, metrics):
        template = ChromeTemplate("Título", "FOR-EC-1", "0", study_code="00-0001-25")
        first = RecordingSurface(A4_PORTRAIT, metrics)
        second = RecordingSurface(A4_PORTRAIT, metrics)
        _paint(template, first, 1, 2)
        _paint(template, second, 1, 2)
        assert first.pages == second.pages

    def test_study_code_banner(self, surface):
        template = ChromeTemplate("T", "C", "0", study_code="00-0001-25", banner_fields=(("Data:", ""),))
        _paint(template, surface)

        texts = [op.text for op in surface.texts()]
        assert "Código do estudo:" in texts
        assert "00-0001-25" in texts
        assert "Data:" in texts

    def test_banner_value_follows_its_label(self, surface):
        template = ChromeTemplate("T", "C", "0", study_code="00-0001-25")
        _paint(template, surface)

        ops = {op.text: op for op in surface.texts()}
        label, value = ops["Código do estudo:"], ops["00-0001-25"]
        label_width = surface.string_width(label.text, FontSpec("Helvetica", 10.0, 5.0, bold=True))
        assert value.x == pytest.approx(label.x + label_width + 2)
        assert surface.string_width(value.text, FontSpec()) > 0

    def test_no_banner_by_default(self, surface):
        _paint(ChromeTemplate("T", "C", "0"), surface)
        assert "Código do estudo:" not in [op.text for op in surface.texts()]

    def test_short_title_keeps_nominal_size(self, surface):
        renderer = _paint(ChromeTemplate("PESAGEM", "C", "0"), surface)
        assert renderer.fit_title_size(surface.metrics) == 12

    def test_long_title_shrinks_within_bounds(self, metrics):
        template = ChromeTemplate("13.0 – FINALIZAÇÃO DA PARTICIPAÇÃO NA PESQUISA", "FOR-EC-13", "0")
        renderer = ChromeRenderer(template, PORTRAIT)
        available = renderer.title_cell_width - template.title_padding
        nominal = FontSpec("Helvetica", 12.0, bold=True)

        size = renderer.fit_title_size(metrics)

        assert metrics.string_width(template.title, nominal) > available
        assert 9 <= size < 12
        if size > 9:
            assert metrics.string_width(template.title, nominal.derive(size=size)) <= available

    def test_title_size_floor(self, metrics):
        template = ChromeTemplate("TÍTULO EXCESSIVAMENTE LONGO " * 6, "C", "0")
        assert ChromeRenderer(template, PORTRAIT).fit_title_size(metrics) == 9

    def test_title_is_never_wrapped(self, surface):
        template = ChromeTemplate("TÍTULO EXCESSIVAMENTE LONGO " * 6, "C", "0")
        _paint(template, surface)
        assert [op.text for op in surface.texts()].count(template.title) == 1

    def test_footer_only_when_enabled(self, surface):
        geometry = PageGeometry(A4_LANDSCAPE, DEFAULT_MARGINS)
        ChromeRenderer(ChromeTemplate("T", "C", "0"), geometry).paint_footer(
            surface, ChromeContext(1, 2, "C", "0", "T")
        )
        assert surface.texts() == []

        template = ChromeTemplate("T", "C", "0", footer_page_numbers=True)
        ChromeRenderer(template, geometry).paint_footer(surface, ChromeContext(1, 2, "C", "0", "T"))
        (footer,) = surface.texts()
        assert footer.text == "Página 1 de 2"
        assert footer.align == "right"
        assert footer.baseline == pytest.approx(205)
        assert footer.x == pytest.approx(282)

    @pytest.mark.parametrize(
        "label, expected",
        [
            ("Página {page} de {total}", "Página 3 de 7"),
            ("Pág. {page}/{total} {lote}", "Pág. 3/7 {lote}"),
            ("Folha {page} {", "Folha 3 {"),
        ],
    )
    def test_page_label_fills_only_page_placeholders(self, label, expected):
        assert ChromeContext(3, 7, "C", "0", "T").page_text(label) == expected

    def test_custom_page_label_is_painted(self, surface):
        template = ChromeTemplate("T", "C", "0", page_label="{page} de {total} ({lote})")
        _paint(template, surface, page=2, total=4)
        assert "2 de 4 ({lote})" in [op.text for op in surface.texts()]


class TestLogo:
    """Test cases for the logo region."""

    def test_fit_image_keeps_aspect_ratio(self, temp_dir):
        path = temp_dir / "logo.png"
        Image.new("RGB", (200, 100), "white").save(path)

        rect = fit_image(str(path), Rect(0, 0, 36, 12))

        assert rect.height == pytest.approx(12)
        assert rect.width == pytest.approx(24)
        assert rect.x == pytest.approx(6)

    def test_logo_image_is_drawn_inside_logo_cell(self, temp_dir, surface):
        path = temp_dir / "logo.png"
        Image.new("RGB", (300, 100), "white").save(path)

        _paint(ChromeTemplate("T", "C", "0", logo_path=str(path)), surface)

        images = [op for op in surface.ops(1) if isinstance(op, ImageOp)]
        assert len(images) == 1
        assert Rect(15, 10, 40, 16).contains(images[0].rect)
        assert "LOGO" not in [op.text for op in surface.texts()]

    def test_unreadable_logo_falls_back_to_placeholder(self, temp_dir, surface):
        path = temp_dir / "logo.png"
        path.write_bytes(b"not an image")

        _paint(ChromeTemplate("T", "C", "0", logo_path=str(path)), surface)

        assert "LOGO" in [op.text for op in surface.texts()]
        assert not any(isinstance(op, ImageOp) for op in surface.ops(1))
