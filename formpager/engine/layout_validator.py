"""
Layout Validator - consistency checks on a finished layout pass.

Checks:
- the layout has at least one page
- every placement lies on an existing page
- placements start inside the content area and do not cross the bottom
  limit (unless flagged as overflow)
- placements on a page never move back up
"""

from __future__ import annotations

from typing import List, Tuple

from .text_metrics import TextMetricsEngine

_TOLERANCE = 1e-6


class LayoutValidator:
    """Validates a LayoutResult against the document it was produced from."""

    def __init__(self, result, document, metrics: TextMetricsEngine):
        """
        Args:
            result: LayoutResult of a layout pass
            document: The prepared Document that was laid out
            metrics: Metrics engine used for the pass
        """
        self.result = result
        self.document = document
        self.metrics = metrics
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def validate(self) -> Tuple[bool, List[str], List[str]]:
        """
        Runs every check.

        Returns:
            Tuple (is_valid, errors, warnings)
        """
        self.errors.clear()
        self.warnings.clear()

        self._validate_pages_exist()
        self._validate_page_indexes()
        self._validate_bounds()
        self._validate_monotonic()
        self._validate_empty_pages()

        return len(self.errors) == 0, self.errors.copy(), self.warnings.copy()

    def _validate_pages_exist(self) -> None:
        if self.result.total_pages < 1:
            self.errors.append(f"Layout has {self.result.total_pages} pages")

    def _validate_page_indexes(self) -> None:
        for placement in self.result.placements:
            if not 1 <= placement.page_index <= self.result.total_pages:
                self.errors.append(
                    f"{placement.kind} placed on page {placement.page_index} "
                    f"of a {self.result.total_pages}-page layout"
                )

    def _validate_bounds(self) -> None:
        bottom_limit = self.document.bottom_limits(self.metrics)
        for placement in self.result.placements:
            top = self.document.content_top(placement.page_index)
            if placement.y < top - _TOLERANCE:
                self.errors.append(
                    f"{placement.kind} on page {placement.page_index} starts at y={placement.y:.2f} "
                    f"above the content top {top:.2f}"
                )

            limit = bottom_limit(placement.page_index)
            if placement.bottom > limit + _TOLERANCE and not placement.overflow:
                message = (
                    f"{placement.kind} on page {placement.page_index} ends at y={placement.bottom:.2f} "
                    f"below the bottom limit {limit:.2f}"
                )
                if placement.kind == "table_header":
                    # Repeated headers are placed unconditionally at the top of a page.
                    self.warnings.append(message)
                else:
                    self.errors.append(message)

    def _validate_monotonic(self) -> None:
        previous = {}
        for placement in self.result.placements:
            last = previous.get(placement.page_index)
            if last is not None and placement.y < last.bottom - _TOLERANCE:
                self.errors.append(
                    f"{placement.kind} on page {placement.page_index} at y={placement.y:.2f} "
                    f"overlaps the previous {last.kind} ending at y={last.bottom:.2f}"
                )
            previous[placement.page_index] = placement

    def _validate_empty_pages(self) -> None:
        used = {placement.page_index for placement in self.result.placements}
        for page_index in range(2, self.result.total_pages + 1):
            if page_index not in used:
                self.warnings.append(f"Page {page_index} has no content")
