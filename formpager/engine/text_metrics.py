"""
TextMetricsEngine - text measurement and line wrapping.

Uses ReportLab font metrics (the same metrics the PDF canvas uses when it
draws the text) so that a measured height always matches the painted one:
- string width in millimetres
- greedy word wrapping inside a maximum width
- line height / baseline placement for a font
- font size fitting for single-line cells
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Dict, List, Tuple

from reportlab.pdfbase import pdfmetrics

from ..exceptions import MeasurementError
from .font_utils import resolve_font_variant
from .geometry import pt_to_mm

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FontSpec:
    """Font used for a run of text.

    ``size`` is in points (as fonts are specified everywhere), ``line_height``
    in millimetres (as all layout values are).
    """

    name: str = "Helvetica"
    size: float = 10.0
    line_height: float = 5.0
    bold: bool = False
    italic: bool = False

    @property
    def pdf_name(self) -> str:
        return resolve_font_variant(self.name, self.bold, self.italic)

    @property
    def size_mm(self) -> float:
        return pt_to_mm(self.size)

    @property
    def baseline_offset(self) -> float:
        """Distance from the top of a line box to the text baseline (mm)."""
        return (self.line_height - self.size_mm) / 2.0 + self.size_mm * 0.8

    def derive(self, **changes) -> "FontSpec":
        return replace(self, **changes)


class TextMetricsEngine:
    """
    Engine for measuring and wrapping text.

    Instances hold only a per-instance record of fonts already verified, so
    concurrent exports can each use their own engine.
    """

    def __init__(self):
        self._verified_fonts: Dict[str, bool] = {}

    def _ensure_font(self, font_name: str) -> None:
        """Fail fast if ReportLab has no metrics for ``font_name``."""
        if font_name in self._verified_fonts:
            return
        try:
            pdfmetrics.getFont(font_name)
        except (KeyError, ValueError) as exc:
            raise MeasurementError(
                f"No font metrics available for '{font_name}'",
                details="register the font with reportlab.pdfbase.pdfmetrics first",
            ) from exc
        self._verified_fonts[font_name] = True

    def string_width(self, text: str, font: FontSpec) -> float:
        """
        Measures the width of a single line of text.

        Args:
            text: Text to measure
            font: Font specification

        Returns:
            Width in millimetres
        """
        if not text:
            return 0.0
        font_name = font.pdf_name
        self._ensure_font(font_name)
        return pt_to_mm(pdfmetrics.stringWidth(text, font_name, font.size))

    def wrap(self, text: str, max_width: float, font: FontSpec) -> Tuple[str, ...]:
        """
        Breaks text into lines no wider than ``max_width``.

        Explicit newlines always start a new line. An empty string yields a
        single empty line. A word wider than ``max_width`` is emitted on its
        own line and left to overflow.

        Args:
            text: Text to wrap
            max_width: Maximum line width in millimetres
            font: Font specification

        Returns:
            Tuple of lines
        """
        font_name = font.pdf_name
        self._ensure_font(font_name)

        lines: List[str] = []
        for paragraph in (text or "").split("\n"):
            lines.extend(self._break_paragraph(paragraph, max_width, font))
        return tuple(lines) if lines else ("",)

    def _break_paragraph(self, paragraph: str, max_width: float, font: FontSpec) -> List[str]:
        words = paragraph.split()
        if not words:
            return [""]

        lines: List[str] = []
        current_line = ""
        for word in words:
            candidate = f"{current_line} {word}" if current_line else word
            if self.string_width(candidate, font) <= max_width:
                current_line = candidate
                continue

            if current_line:
                lines.append(current_line)
            current_line = word
            if self.string_width(word, font) > max_width:
                logger.debug(
                    f"Word '{word[:30]}' is wider than {max_width:.2f}mm, placing it on its own line"
                )
                lines.append(word)
                current_line = ""

        if current_line:
            lines.append(current_line)
        return lines

    def text_height(self, text: str, max_width: float, font: FontSpec) -> float:
        return len(self.wrap(text, max_width, font)) * font.line_height

    def fit_font_size(
        self,
        text: str,
        max_width: float,
        font: FontSpec,
        min_size: float,
    ) -> float:
        """
        Returns the largest size (<= ``font.size``) at which ``text`` fits on one line.

        The nominal size is kept when the text already fits. Otherwise the size
        is scaled down proportionally and rounded down to 0.1pt, but never below
        ``min_size``.
        """
        width = self.string_width(text, font)
        if width <= max_width or width <= 0:
            return font.size
        scale = max(max_width, 0.0) / width
        fitted = math.floor(font.size * scale * 10) / 10
        return max(min_size, fitted)
