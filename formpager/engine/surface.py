"""Drawing surfaces the layout passes paint onto.

A surface is a pure sink of drawing calls: it makes no layout decisions.
Coordinates are millimetres from the top-left corner of the page.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Literal, Optional, Union

from .geometry import Rect, Size
from .text_metrics import FontSpec, TextMetricsEngine

logger = logging.getLogger(__name__)

Align = Literal["left", "center", "right"]


@dataclass(frozen=True, slots=True)
class RectOp:
    rect: Rect
    line_width: float = 0.3


@dataclass(frozen=True, slots=True)
class LineOp:
    x1: float
    y1: float
    x2: float
    y2: float
    line_width: float = 0.3


@dataclass(frozen=True, slots=True)
class TextOp:
    x: float
    baseline: float
    text: str
    font_name: str
    font_size: float
    align: Align = "left"


@dataclass(frozen=True, slots=True)
class ImageOp:
    path: str
    rect: Rect


DrawOp = Union[RectOp, LineOp, TextOp, ImageOp]


class Surface(ABC):
    """Base surface: page bookkeeping plus the drawing primitives.

    A surface always starts with page 1 open. Pages are 1-based.
    """

    def __init__(self, page_size: Size, metrics: Optional[TextMetricsEngine] = None):
        self.page_size = page_size
        self.metrics = metrics or TextMetricsEngine()
        self._page_count = 1
        self._current_page = 1

    @property
    def page_count(self) -> int:
        return self._page_count

    @property
    def current_page(self) -> int:
        return self._current_page

    def new_page(self) -> int:
        """Append a page, make it current and return its index."""
        self._page_count += 1
        self._current_page = self._page_count
        self._on_new_page()
        return self._current_page

    def set_page(self, page_index: int) -> None:
        """Switch drawing to an existing page."""
        if not 1 <= page_index <= self._page_count:
            raise IndexError(f"Page {page_index} does not exist (surface has {self._page_count})")
        self._current_page = page_index

    def string_width(self, text: str, font: FontSpec) -> float:
        return self.metrics.string_width(text, font)

    def draw_rect(self, rect: Rect, line_width: float = 0.3) -> None:
        self._emit(RectOp(rect=rect, line_width=line_width))

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, line_width: float = 0.3) -> None:
        self._emit(LineOp(x1, y1, x2, y2, line_width))

    def draw_text(self, x: float, baseline: float, text: str, font: FontSpec, align: Align = "left") -> None:
        if not text:
            return
        self._emit(TextOp(x, baseline, text, font.pdf_name, font.size, align))

    def draw_image(self, path: str, rect: Rect) -> None:
        self._emit(ImageOp(path, rect))

    def _on_new_page(self) -> None:
        pass

    @abstractmethod
    def _emit(self, op: DrawOp) -> None:
        ...


class NullSurface(Surface):
    """Throwaway surface for the simulation pass: counts pages, keeps nothing."""

    def _emit(self, op: DrawOp) -> None:
        pass


class RecordingSurface(Surface):
    """Surface that records drawing operations per page for later output."""

    def __init__(self, page_size: Size, metrics: Optional[TextMetricsEngine] = None):
        super().__init__(page_size, metrics)
        self.pages: List[List[DrawOp]] = [[]]

    def _on_new_page(self) -> None:
        self.pages.append([])

    def _emit(self, op: DrawOp) -> None:
        self.pages[self._current_page - 1].append(op)

    def ops(self, page_index: int) -> List[DrawOp]:
        return list(self.pages[page_index - 1])

    def texts(self, page_index: Optional[int] = None) -> List[TextOp]:
        """Text operations of one page (or of all pages)."""
        pages = self.pages if page_index is None else [self.pages[page_index - 1]]
        return [op for page in pages for op in page if isinstance(op, TextOp)]
