"""
Two-pass pagination.

Page numbering ("Página i de N") needs the total page count before the first
page is painted. The document is therefore laid out twice by the same
function, :func:`layout_pass`: once on a :class:`NullSurface` to count the
pages, and once on a :class:`RecordingSurface` with the real total. Because
both passes share every measurement and every break decision they cannot
disagree, and :func:`compose` verifies that they did not.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..exceptions import LayoutError
from .chrome import ChromeContext, ChromeRenderer
from .document import Document
from .geometry import Point
from .layout_validator import LayoutValidator
from .surface import NullSurface, RecordingSurface, Surface
from .text_metrics import TextMetricsEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LayoutCursor:
    """Current write position; replaced, never mutated."""

    page_index: int
    y: float

    def advance(self, height: float) -> "LayoutCursor":
        return LayoutCursor(self.page_index, self.y + height)

    def next_page(self, top: float) -> "LayoutCursor":
        return LayoutCursor(self.page_index + 1, top)


@dataclass(frozen=True, slots=True)
class Placement:
    """Where one fragment was put; ``height`` is its painted height, trailing space excluded."""

    page_index: int
    y: float
    height: float
    kind: str
    section_index: int
    block_index: int
    row_index: Optional[int] = None
    overflow: bool = False

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(frozen=True, slots=True)
class LayoutWarning:
    """A fragment taller than the usable height of a page.

    It is placed at the top of its own page and overflows the bottom limit.
    """

    message: str
    page_index: int
    kind: str
    height: float
    available: float


@dataclass(frozen=True, slots=True)
class LayoutResult:
    total_pages: int
    placements: Tuple[Placement, ...]
    warnings: Tuple[LayoutWarning, ...]

    def page_placements(self, page_index: int) -> Tuple[Placement, ...]:
        return tuple(p for p in self.placements if p.page_index == page_index)

    def rows_per_page(self) -> dict:
        """Number of table rows placed on each page."""
        counts: dict = {}
        for placement in self.placements:
            if placement.kind == "table_row":
                counts[placement.page_index] = counts.get(placement.page_index, 0) + 1
        return counts


@dataclass(frozen=True)
class Composition:
    """Outcome of both passes: the recorded pages and their layout."""

    document: Document
    surface: RecordingSurface
    result: LayoutResult

    @property
    def total_pages(self) -> int:
        return self.result.total_pages


def layout_pass(document: Document, surface: Surface, total_pages: int) -> LayoutResult:
    """
    Lays the document out on ``surface``.

    ``document`` must already be prepared (see :meth:`Document.prepare`).
    ``total_pages`` is only used for page numbering in the chrome.

    Args:
        document: Prepared document
        surface: Surface to paint on (starts with page 1 open)
        total_pages: Page total shown by the chrome

    Returns:
        LayoutResult with the page count, placements and overflow warnings
    """
    metrics = surface.metrics
    geometry = document.geometry
    width = geometry.content_width
    left = geometry.content_left
    if width <= 0:
        raise LayoutError("Page has no content width", details=f"page {geometry.size}, margins {geometry.margins}")

    chrome = ChromeRenderer(document.chrome, geometry)
    bottom_limit = document.bottom_limits(metrics)

    def context(page_index: int) -> ChromeContext:
        return ChromeContext.for_page(document.chrome, page_index, total_pages)

    def break_page(current: LayoutCursor) -> LayoutCursor:
        chrome.paint_footer(surface, context(current.page_index))
        surface.new_page()
        following = current.next_page(document.content_top(current.page_index + 1))
        chrome.paint(surface, context(following.page_index))
        logger.debug(f"Page break at y={current.y:.2f}mm, continuing on page {following.page_index}")
        return following

    cursor = LayoutCursor(1, document.content_top(1))
    page_top = cursor.y
    if page_top >= bottom_limit(1):
        raise LayoutError(
            "Content area of page 1 is empty",
            details=f"content top {page_top:.2f}mm, bottom limit {bottom_limit(1):.2f}mm",
        )
    chrome.paint(surface, context(1))

    placements: List[Placement] = []
    warnings: List[LayoutWarning] = []

    for section_index, section in enumerate(document.sections):
        if section.start_on_new_page and cursor.y > page_top:
            cursor = break_page(cursor)
            page_top = cursor.y

        for block_index, fragment in section.fragments(width, metrics):
            limit = bottom_limit(cursor.page_index)
            if cursor.y + fragment.keep_height > limit and cursor.y > page_top:
                cursor = break_page(cursor)
                page_top = cursor.y
                limit = bottom_limit(cursor.page_index)
                if fragment.header is not None:
                    header = fragment.header
                    header.paint(surface, Point(left, cursor.y))
                    placements.append(
                        Placement(cursor.page_index, cursor.y, header.painted_height, header.kind,
                                  section_index, block_index)
                    )
                    cursor = cursor.advance(header.height)

            available = limit - cursor.y
            overflow = fragment.painted_height > available + 1e-9
            if overflow:
                warning = LayoutWarning(
                    f"{fragment.kind} of {fragment.painted_height:.1f}mm does not fit in the "
                    f"{available:.1f}mm available on page {cursor.page_index}",
                    cursor.page_index,
                    fragment.kind,
                    fragment.painted_height,
                    available,
                )
                logger.warning(warning.message)
                warnings.append(warning)

            fragment.paint(surface, Point(left, cursor.y))
            placements.append(
                Placement(cursor.page_index, cursor.y, fragment.painted_height, fragment.kind,
                          section_index, block_index, fragment.row_index, overflow)
            )
            cursor = cursor.advance(fragment.height)

    chrome.paint_footer(surface, context(cursor.page_index))

    if document.first_page_footer:
        last_page = surface.current_page
        surface.set_page(1)
        y = bottom_limit(1) + document.footer_gap
        for block in document.first_page_footer:
            block.paint(surface, Point(left, y), width, metrics)
            y += block.required_height(width, metrics)
        surface.set_page(last_page)

    return LayoutResult(surface.page_count, tuple(placements), tuple(warnings))


def simulate(document: Document, metrics: Optional[TextMetricsEngine] = None) -> int:
    """First pass: the number of pages the document needs, nothing else."""
    prepared = document.prepare()
    surface = NullSurface(prepared.page_size, metrics)
    result = layout_pass(prepared, surface, total_pages=1)
    logger.debug(f"Simulation pass: {result.total_pages} page(s)")
    return result.total_pages


def render(
    document: Document,
    total_pages: int,
    metrics: Optional[TextMetricsEngine] = None,
) -> Tuple[RecordingSurface, LayoutResult]:
    """Second pass: paint every page with the known page total."""
    prepared = document.prepare()
    surface = RecordingSurface(prepared.page_size, metrics)
    result = layout_pass(prepared, surface, total_pages)
    return surface, result


def compose(document: Document, metrics: Optional[TextMetricsEngine] = None) -> Composition:
    """
    Runs both passes and checks they agree.

    Raises:
        LayoutError: If the rendering pass produced a different number of
            pages than the simulation, or the layout is inconsistent
    """
    metrics = metrics or TextMetricsEngine()
    prepared = document.prepare()

    simulated = layout_pass(prepared, NullSurface(prepared.page_size, metrics), total_pages=1).total_pages
    surface = RecordingSurface(prepared.page_size, metrics)
    result = layout_pass(prepared, surface, simulated)

    if result.total_pages != simulated:
        raise LayoutError(
            "Page count changed between the simulation and rendering passes",
            details=f"simulated {simulated}, rendered {result.total_pages}",
        )

    validator = LayoutValidator(result, prepared, metrics)
    is_valid, errors, warnings = validator.validate()
    for message in warnings:
        logger.debug(f"Layout check: {message}")
    if not is_valid:
        raise LayoutError("Layout validation failed", details="; ".join(errors))

    logger.info(
        f"Composed '{prepared.chrome.title}': {result.total_pages} page(s), "
        f"{len(result.placements)} fragment(s), {len(result.warnings)} overflow warning(s)"
    )
    return Composition(prepared, surface, result)
