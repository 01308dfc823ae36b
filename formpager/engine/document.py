"""Document model: sections of blocks plus the page setup they are laid out on."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Callable, List, Optional, Tuple

from ..config import DEFAULTS
from .blocks import Block, Fragment, Paragraph
from .chrome import ChromeRenderer, ChromeTemplate
from .geometry import A4_PORTRAIT, DEFAULT_MARGINS, Margins, PageGeometry, Size
from .text_metrics import TextMetricsEngine

logger = logging.getLogger(__name__)

BottomLimit = Callable[[int], float]


@dataclass(frozen=True, slots=True)
class PageLimits:
    """Bottom limits (mm from the top of the page) for page 1 and the rest.

    Forms that print a legend only on their first page stop content earlier
    there than on the following pages.
    """

    first: float
    other: float

    def __call__(self, page_index: int) -> float:
        return self.first if page_index == 1 else self.other


@dataclass(frozen=True, slots=True)
class Section:
    blocks: Tuple[Block, ...] = ()
    title: Optional[str] = None
    start_on_new_page: bool = False

    def content_blocks(self) -> Tuple[Block, ...]:
        if not self.title:
            return tuple(self.blocks)
        heading = Paragraph(self.title, font=DEFAULTS.heading_font, space_after=2.0)
        return (heading,) + tuple(self.blocks)

    def fragments(self, width: float, metrics: TextMetricsEngine) -> Tuple[Tuple[int, Fragment], ...]:
        """
        Pagination units of the section, each with the index of its block.

        A title heading keeps with the first fragment that follows it, so it
        is never left alone at the bottom of a page.
        """
        placed: List[Tuple[int, Fragment]] = [
            (block_index, fragment)
            for block_index, block in enumerate(self.content_blocks())
            for fragment in block.fragments(width, metrics)
        ]
        if self.title and len(placed) > 1:
            heading = placed[0][1]
            keep_height = heading.height + placed[1][1].keep_height
            placed[0] = (0, replace(heading, keep_height=keep_height))
        return tuple(placed)


@dataclass(frozen=True, slots=True)
class Document:
    """
    Everything needed to compose an artifact.

    ``page_limits`` overrides the bottom limit of each page. Without it the
    limit is the bottom margin, raised on page 1 by the height of
    ``first_page_footer`` (a legend or signature printed on the first page
    only, right below the content area).
    """

    chrome: ChromeTemplate
    sections: Tuple[Section, ...] = ()
    page_size: Size = A4_PORTRAIT
    margins: Margins = DEFAULT_MARGINS
    page_limits: Optional[BottomLimit] = field(default=None, compare=False)
    first_page_footer: Tuple[Block, ...] = ()
    footer_gap: float = 2.0

    @property
    def geometry(self) -> PageGeometry:
        return PageGeometry(self.page_size, self.margins)

    def prepare(self) -> "Document":
        """Return a copy with every block normalised (blank table rows removed)."""
        sections = tuple(
            replace(section, blocks=tuple(block.prepare() for block in section.blocks))
            for section in self.sections
        )
        footer = tuple(block.prepare() for block in self.first_page_footer)
        return replace(self, sections=sections, first_page_footer=footer)

    def content_top(self, page_index: int) -> float:
        return ChromeRenderer(self.chrome, self.geometry).content_top

    def footer_height(self, metrics: TextMetricsEngine) -> float:
        width = self.geometry.content_width
        return sum(block.required_height(width, metrics) for block in self.first_page_footer)

    def bottom_limits(self, metrics: TextMetricsEngine) -> BottomLimit:
        """Per-page bottom limit function for this document."""
        if self.page_limits is not None:
            return self.page_limits

        other = self.geometry.content_bottom
        if self.chrome.footer_page_numbers:
            other = min(other, self.page_size.height - self.chrome.footer_offset - 5.0)
        first = other
        if self.first_page_footer:
            first = other - self.footer_height(metrics) - self.footer_gap
        return PageLimits(first, other)

    def bottom_limit(self, page_index: int, metrics: Optional[TextMetricsEngine] = None) -> float:
        return self.bottom_limits(metrics or TextMetricsEngine())(page_index)
