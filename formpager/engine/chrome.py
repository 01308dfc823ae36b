"""
Chrome renderer - the header, metadata band, study banner and footer that
repeat on every page.

Chrome is a pure function of a :class:`ChromeContext`: the same context
always paints the same operations, so the rendering pass can repeat it on
every page with the final page total.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from PIL import Image

from ..config import DEFAULTS
from .geometry import PageGeometry, Rect
from .surface import Surface
from .text_metrics import FontSpec, TextMetricsEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ChromeTemplate:
    """Per-document chrome data and geometry.

    Geometry defaults are those of the printed forms: a 16mm header starting
    10mm from the top of the page, a 40mm logo cell on the left and a 35mm
    page-number cell on the right.
    """

    title: str
    document_code: str
    version: str
    area: str = "Estudos clínicos"
    study_code: Optional[str] = None
    study_code_label: str = "Código do estudo:"
    banner_fields: Tuple[Tuple[str, str], ...] = ()
    logo_path: Optional[str] = None
    logo_text: str = "LOGO"
    page_label: str = "Página {page} de {total}"
    footer_page_numbers: bool = False

    header_top: float = 10.0
    header_height: float = 16.0
    logo_width: float = 40.0
    page_cell_width: float = 35.0
    meta_height: float = 7.0
    banner_height: float = 10.0
    gap_after: float = 4.0
    footer_offset: float = 5.0

    title_font_size: float = 12.0
    title_min_font_size: float = 9.0
    title_padding: float = 12.0

    @property
    def has_banner(self) -> bool:
        return self.study_code is not None or bool(self.banner_fields)

    @property
    def bottom(self) -> float:
        """Lowest y (mm) the chrome occupies at the top of a page."""
        bottom = self.header_top + self.header_height + self.meta_height
        if self.has_banner:
            bottom += self.banner_height
        return bottom + self.gap_after


@dataclass(frozen=True, slots=True)
class ChromeContext:
    page_index: int
    total_pages: int
    document_code: str
    version: str
    title: str

    @classmethod
    def for_page(cls, template: ChromeTemplate, page_index: int, total_pages: int) -> "ChromeContext":
        return cls(page_index, total_pages, template.document_code, template.version, template.title)

    def page_text(self, label: str) -> str:
        """Fills the ``{page}`` and ``{total}`` placeholders; other braces are kept as written."""
        return label.replace("{page}", str(self.page_index)).replace("{total}", str(self.total_pages))


_TITLE_FONT = FontSpec("Helvetica", 12.0, 6.0, bold=True)
_LOGO_FONT = FontSpec("Helvetica", 11.0, 5.5, bold=True)
_PAGE_FONT = FontSpec("Helvetica", 10.0, 5.0)
_META_FONT = FontSpec("Helvetica", 9.0, 4.5)
_BANNER_FONT = FontSpec("Helvetica", 10.0, 5.0)
_FOOTER_FONT = FontSpec("Helvetica", 10.0, 5.0, bold=True)


def fit_image(path: str, frame: Rect) -> Optional[Rect]:
    """Largest rectangle with the image's aspect ratio, centred inside ``frame``.

    Returns None when the image cannot be read.
    """
    try:
        with Image.open(path) as image:
            pixel_width, pixel_height = image.size
    except (OSError, ValueError) as exc:
        logger.warning(f"Cannot read logo image {path}: {exc}")
        return None
    if pixel_width <= 0 or pixel_height <= 0:
        return None

    scale = min(frame.width / pixel_width, frame.height / pixel_height)
    width = pixel_width * scale
    height = pixel_height * scale
    return Rect(frame.x + (frame.width - width) / 2, frame.y + (frame.height - height) / 2, width, height)


class ChromeRenderer:
    """Paints the repeated page chrome for one document."""

    def __init__(self, template: ChromeTemplate, geometry: PageGeometry):
        self.template = template
        self.geometry = geometry
        self._logo_rect: Optional[Rect] = None
        self._logo_checked = False

    @property
    def content_top(self) -> float:
        return max(self.geometry.margins.top, self.template.bottom)

    @property
    def title_cell_width(self) -> float:
        template = self.template
        return self.geometry.content_width - template.logo_width - template.page_cell_width

    def fit_title_size(self, metrics: TextMetricsEngine) -> float:
        """Title size in points after auto-shrink; the title is never wrapped."""
        template = self.template
        font = _TITLE_FONT.derive(size=template.title_font_size)
        available = self.title_cell_width - template.title_padding
        size = metrics.fit_font_size(template.title, available, font, template.title_min_font_size)
        if size < template.title_font_size:
            logger.debug(f"Title shrunk from {template.title_font_size}pt to {size}pt")
        return size

    def paint(self, surface: Surface, context: ChromeContext) -> None:
        template = self.template
        metrics = surface.metrics
        left = self.geometry.content_left
        width = self.geometry.content_width
        top = template.header_top
        height = template.header_height

        logo_cell = Rect(left, top, template.logo_width, height)
        title_cell = Rect(logo_cell.right, top, self.title_cell_width, height)
        page_cell = Rect(title_cell.right, top, template.page_cell_width, height)

        surface.draw_rect(Rect(left, top, width, height), DEFAULTS.line_width)
        surface.draw_rect(logo_cell, DEFAULTS.line_width)
        surface.draw_rect(page_cell, DEFAULTS.line_width)

        self._paint_logo(surface, logo_cell)

        title_font = _TITLE_FONT.derive(size=self.fit_title_size(metrics))
        surface.draw_text(
            title_cell.x + title_cell.width / 2,
            _centred_baseline(title_cell, title_font),
            context.title,
            title_font,
            "center",
        )

        page_text = context.page_text(template.page_label)
        page_size = metrics.fit_font_size(page_text, page_cell.width - 4, _PAGE_FONT, 7.0)
        page_font = _PAGE_FONT.derive(size=page_size)
        surface.draw_text(
            page_cell.x + page_cell.width / 2,
            _centred_baseline(page_cell, page_font),
            page_text,
            page_font,
            "center",
        )

        meta_top = top + height
        meta_baseline = meta_top + template.meta_height * 0.7
        surface.draw_text(left + 5, meta_baseline, f"Área: {template.area}", _META_FONT)
        surface.draw_text(
            title_cell.x + title_cell.width / 2,
            meta_baseline,
            f"Nº DOC.: {context.document_code}",
            _META_FONT,
            "center",
        )
        surface.draw_text(left + width - 5, meta_baseline, f"Versão: {context.version}", _META_FONT, "right")

        if template.has_banner:
            self._paint_banner(surface, Rect(left, meta_top + template.meta_height, width, template.banner_height))

    def _paint_logo(self, surface: Surface, cell: Rect) -> None:
        template = self.template
        if template.logo_path and not self._logo_checked:
            frame = Rect(cell.x + 2, cell.y + 2, cell.width - 4, cell.height - 4)
            self._logo_rect = fit_image(template.logo_path, frame)
            self._logo_checked = True

        if self._logo_rect is not None:
            surface.draw_image(template.logo_path, self._logo_rect)
            return
        surface.draw_text(cell.x + cell.width / 2, _centred_baseline(cell, _LOGO_FONT), template.logo_text,
                          _LOGO_FONT, "center")

    def _paint_banner(self, surface: Surface, band: Rect) -> None:
        template = self.template
        label_font = _BANNER_FONT.derive(bold=True)
        baseline = _centred_baseline(band, _BANNER_FONT)
        surface.draw_rect(band, DEFAULTS.line_width)

        segments = []
        if template.study_code is not None:
            segments.append((template.study_code_label, template.study_code))
        segments.extend(template.banner_fields)

        x = band.x + 5
        for label, value in segments:
            surface.draw_text(x, baseline, label, label_font)
            x += surface.string_width(label, label_font) + 2
            shown = value or "______________"
            surface.draw_text(x, baseline, shown, _BANNER_FONT)
            x += surface.string_width(shown, _BANNER_FONT) + 10

    def paint_footer(self, surface: Surface, context: ChromeContext) -> None:
        """Footer page number, painted when a page is closed out."""
        if not self.template.footer_page_numbers:
            return
        baseline = self.geometry.size.height - self.template.footer_offset
        surface.draw_text(
            self.geometry.content_right,
            baseline,
            context.page_text(self.template.page_label),
            _FOOTER_FONT,
            "right",
        )


def _centred_baseline(cell: Rect, font: FontSpec) -> float:
    return cell.y + cell.height / 2 + font.size_mm * 0.35
