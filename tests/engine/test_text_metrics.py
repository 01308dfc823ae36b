"""Tests for TextMetricsEngine and FontSpec."""

import pytest

from formpager.engine.text_metrics import FontSpec, TextMetricsEngine
from formpager.exceptions import MeasurementError


class TestFontSpec:
    """Test cases for FontSpec."""

    def test_pdf_name_resolves_bold_variant(self):
        assert FontSpec("Helvetica", bold=True).pdf_name == "Helvetica-Bold"
        assert FontSpec("Times-Roman", italic=True).pdf_name == "Times-Italic"
        assert FontSpec("Arial").pdf_name == "Helvetica"

    def test_baseline_inside_line_box(self):
        font = FontSpec("Helvetica", 10.0, 5.0)
        assert 0 < font.baseline_offset < font.line_height

    def test_derive_keeps_other_fields(self):
        font = FontSpec("Helvetica", 10.0, 5.0, bold=True)
        smaller = font.derive(size=9.0)
        assert smaller.size == 9.0
        assert smaller.bold is True
        assert smaller.line_height == 5.0


class TestTextMetricsEngine:
    """Test cases for measurement and wrapping."""

    def test_string_width_grows_with_text(self, metrics):
        font = FontSpec()
        assert metrics.string_width("", font) == 0.0
        assert metrics.string_width("abc", font) < metrics.string_width("abcdef", font)

    def test_bold_is_wider(self, metrics):
        text = "Registrado por"
        assert metrics.string_width(text, FontSpec(bold=True)) > metrics.string_width(text, FontSpec())

    def test_wrap_empty_string_yields_one_empty_line(self, metrics):
        assert metrics.wrap("", 50, FontSpec()) == ("",)

    def test_wrap_respects_explicit_newlines(self, metrics):
        assert metrics.wrap("um\ndois", 100, FontSpec()) == ("um", "dois")

    def test_wrap_keeps_lines_within_width(self, metrics):
        font = FontSpec()
        text = "Achados macroscópicos compatíveis com processo inflamatório agudo em múltiplos órgãos"
        lines = metrics.wrap(text, 40, font)

        assert len(lines) > 1
        assert " ".join(lines) == text
        for line in lines:
            assert metrics.string_width(line, font) <= 40

    def test_wrap_is_idempotent(self, metrics):
        font = FontSpec()
        text = "texto longo " * 20
        assert metrics.wrap(text, 60, font) == metrics.wrap(text, 60, font)

    def test_overlong_word_gets_its_own_line(self, metrics):
        font = FontSpec()
        word = "X" * 80
        lines = metrics.wrap(f"a {word} b", 30, font)

        assert lines == ("a", word, "b")

    def test_text_height(self, metrics):
        font = FontSpec(line_height=5.0)
        assert metrics.text_height("a\nb\nc", 100, font) == pytest.approx(15.0)

    def test_unknown_font_raises_measurement_error(self, metrics):
        with pytest.raises(MeasurementError):
            metrics.string_width("abc", FontSpec("NoSuchFontAnywhere"))

    def test_fit_font_size_keeps_nominal_when_text_fits(self, metrics):
        assert metrics.fit_font_size("Curto", 100, FontSpec(size=12), 9) == 12

    def test_fit_font_size_shrinks_to_fit(self, metrics):
        font = FontSpec(size=12, bold=True)
        text = "14.0 – NECROPSIA E COLHEITA"
        width = metrics.string_width(text, font)
        available = width * 0.9

        size = metrics.fit_font_size(text, available, font, 6)

        assert size < 12
        assert metrics.string_width(text, font.derive(size=size)) <= available
        assert size == pytest.approx(round(size, 1))

    def test_fit_font_size_never_below_floor(self, metrics):
        size = metrics.fit_font_size("W" * 200, 20, FontSpec(size=12), 9)
        assert size == 9
