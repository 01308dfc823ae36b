"""Geometry primitives and unit helpers for layout calculations.

All layout values are in millimetres with the origin at the top-left corner
of the page and y growing downwards. Only the PDF writer converts to points
and flips the vertical axis.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


MM_PER_INCH = 25.4
POINTS_PER_INCH = 72.0


@dataclass(frozen=True, slots=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class Size:
    width: float
    height: float

    @classmethod
    def from_tuple(cls, value: Iterable[float]) -> "Size":
        width, height = value
        return cls(float(width), float(height))

    @property
    def landscape(self) -> "Size":
        return Size(max(self.width, self.height), min(self.width, self.height))

    @property
    def portrait(self) -> "Size":
        return Size(min(self.width, self.height), max(self.width, self.height))


@dataclass(frozen=True, slots=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, other: "Rect", tolerance: float = 1e-6) -> bool:
        """Check whether ``other`` lies completely inside this rectangle."""
        return (
            other.left >= self.left - tolerance
            and other.right <= self.right + tolerance
            and other.top >= self.top - tolerance
            and other.bottom <= self.bottom + tolerance
        )


@dataclass(frozen=True, slots=True)
class Margins:
    top: float = 0.0
    bottom: float = 0.0
    left: float = 0.0
    right: float = 0.0

    @classmethod
    def uniform(cls, value: float) -> "Margins":
        return cls(value, value, value, value)


A4_PORTRAIT = Size(210.0, 297.0)
A4_LANDSCAPE = Size(297.0, 210.0)
DEFAULT_MARGINS = Margins.uniform(15.0)

PAGE_SIZES = {
    "A4": A4_PORTRAIT,
    "A4-PORTRAIT": A4_PORTRAIT,
    "A4-LANDSCAPE": A4_LANDSCAPE,
}


def mm_to_pt(value: float) -> float:
    return float(value) * POINTS_PER_INCH / MM_PER_INCH


def pt_to_mm(value: float) -> float:
    return float(value) * MM_PER_INCH / POINTS_PER_INCH


def resolve_page_size(value: str | Size | Iterable[float], orientation: str | None = None) -> Size:
    """Turn a preset name, a Size or a ``(width, height)`` pair into a Size.

    Args:
        value: Preset name (``"A4"``), Size instance or iterable of two numbers
        orientation: Optional ``"portrait"`` or ``"landscape"`` override

    Returns:
        Page size in millimetres
    """
    if isinstance(value, Size):
        size = value
    elif isinstance(value, str):
        preset = PAGE_SIZES.get(value.strip().upper())
        if preset is None:
            raise ValueError(f"Unsupported page size preset: {value}")
        size = preset
    else:
        values = list(value)
        if len(values) != 2:
            raise ValueError("Page size iterable must contain exactly two values")
        size = Size.from_tuple(values)

    if orientation is None:
        return size
    orientation = orientation.lower()
    if orientation == "landscape":
        return size.landscape
    if orientation == "portrait":
        return size.portrait
    raise ValueError(f"Unsupported orientation: {orientation}")


@dataclass(frozen=True, slots=True)
class PageGeometry:
    """Page size plus margins, with the derived content box."""

    size: Size
    margins: Margins

    @property
    def content_left(self) -> float:
        return self.margins.left

    @property
    def content_right(self) -> float:
        return self.size.width - self.margins.right

    @property
    def content_width(self) -> float:
        return self.size.width - self.margins.left - self.margins.right

    @property
    def content_bottom(self) -> float:
        return self.size.height - self.margins.bottom
