"""Tests for geometry helpers and drawing surfaces."""

import pytest

from formpager.engine.geometry import (
    A4_LANDSCAPE,
    A4_PORTRAIT,
    Margins,
    PageGeometry,
    Rect,
    Size,
    mm_to_pt,
    pt_to_mm,
    resolve_page_size,
)
from formpager.engine.surface import LineOp, NullSurface, RecordingSurface, RectOp, TextOp
from formpager.engine.text_metrics import FontSpec


class TestGeometry:
    """Test cases for units and page geometry."""

    def test_unit_conversion(self):
        assert mm_to_pt(25.4) == pytest.approx(72.0)
        assert pt_to_mm(72.0) == pytest.approx(25.4)

    def test_resolve_page_size(self):
        assert resolve_page_size("A4") == A4_PORTRAIT
        assert resolve_page_size("a4", "landscape") == A4_LANDSCAPE
        assert resolve_page_size([297, 210], "portrait") == A4_PORTRAIT
        assert resolve_page_size(Size(100, 50)) == Size(100, 50)

    def test_resolve_page_size_rejects_unknown(self):
        with pytest.raises(ValueError):
            resolve_page_size("B7")
        with pytest.raises(ValueError):
            resolve_page_size("A4", "diagonal")

    def test_page_geometry(self):
        geometry = PageGeometry(A4_LANDSCAPE, Margins.uniform(15))
        assert geometry.content_width == pytest.approx(267)
        assert geometry.content_right == pytest.approx(282)
        assert geometry.content_bottom == pytest.approx(195)

    def test_rect_contains(self):
        outer = Rect(0, 0, 10, 10)
        assert outer.contains(Rect(1, 1, 5, 5))
        assert not outer.contains(Rect(8, 8, 5, 5))


class TestSurfaces:
    """Test cases for NullSurface and RecordingSurface."""

    def test_surface_starts_on_page_one(self, surface):
        assert surface.page_count == 1
        assert surface.current_page == 1

    def test_new_page_and_set_page(self, surface):
        font = FontSpec()
        surface.draw_text(10, 10, "primeira", font)
        assert surface.new_page() == 2
        surface.draw_text(10, 10, "segunda", font)

        surface.set_page(1)
        surface.draw_line(0, 0, 10, 0)

        assert [op.text for op in surface.texts(1)] == ["primeira"]
        assert [op.text for op in surface.texts(2)] == ["segunda"]
        assert isinstance(surface.ops(1)[-1], LineOp)

    def test_set_page_out_of_range(self, surface):
        with pytest.raises(IndexError):
            surface.set_page(2)

    def test_empty_text_is_not_recorded(self, surface):
        surface.draw_text(0, 0, "", FontSpec())
        assert surface.ops(1) == []

    def test_recorded_operations_carry_values(self, surface):
        surface.draw_rect(Rect(1, 2, 3, 4), line_width=0.5)
        surface.draw_text(5, 6, "x", FontSpec(bold=True), "right")

        rect_op, text_op = surface.ops(1)
        assert rect_op == RectOp(Rect(1, 2, 3, 4), 0.5)
        assert text_op == TextOp(5, 6, "x", "Helvetica-Bold", 10.0, "right")

    def test_null_surface_counts_pages_only(self, metrics):
        surface = NullSurface(A4_PORTRAIT, metrics)
        surface.draw_text(0, 0, "ignored", FontSpec())
        surface.new_page()
        assert surface.page_count == 2
        assert not hasattr(surface, "pages")
