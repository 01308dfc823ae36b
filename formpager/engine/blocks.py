"""
Block primitives: the declarative content units of a form.

Every block reports the height it needs for a given width and paints itself
at a given top-left origin. Both answers come from the same private
``_layout`` computation, so a measured height always matches what is painted.

The paginator never places blocks directly; it places *fragments*. Most
blocks are a single fragment, a table is one fragment per row (plus a header
fragment) so it can continue on the next page.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from functools import partial
from typing import Any, Callable, ClassVar, List, NamedTuple, Optional, Sequence, Tuple, Union

from ..config import DEFAULTS
from ..exceptions import LayoutError
from .geometry import Point, Rect
from .row_filter import BlankPredicate, default_is_blank, filter_rows
from .surface import Align, Surface
from .text_metrics import FontSpec, TextMetricsEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Fragment:
    """Smallest unit the paginator places.

    ``height`` is what the cursor advances by, ``space_after`` included.
    ``keep_height`` is the height that must fit for the fragment to stay on
    the current page: the painted height without trailing space, plus the
    following row for a table header, which must not be left alone at the
    bottom of a page.
    """

    kind: str
    height: float
    keep_height: float
    painter: Callable[[Surface, Point], None] = field(compare=False, repr=False)
    header: Optional["Fragment"] = field(default=None, compare=False, repr=False)
    row_index: Optional[int] = None
    space_after: float = 0.0

    @property
    def painted_height(self) -> float:
        return self.height - self.space_after

    def paint(self, surface: Surface, origin: Point) -> None:
        self.painter(surface, origin)


class Block(ABC):
    """Base class for all blocks."""

    kind: ClassVar[str] = "block"

    @abstractmethod
    def required_height(self, width: float, metrics: TextMetricsEngine) -> float:
        """Height in mm the block occupies at ``width``, trailing space included."""

    @abstractmethod
    def paint(self, surface: Surface, origin: Point, width: float, metrics: TextMetricsEngine) -> None:
        """Paint the block with its top-left corner at ``origin``."""

    def fragments(self, width: float, metrics: TextMetricsEngine) -> Tuple[Fragment, ...]:
        height = self.required_height(width, metrics)
        trailing = min(self.trailing_space(), height)
        painter = partial(self.paint, width=width, metrics=metrics)
        return (Fragment(self.kind, height, height - trailing, painter, space_after=trailing),)

    def trailing_space(self) -> float:
        """Blank space below the painted content, counted in ``required_height``."""
        return 0.0

    def has_data(self) -> bool:
        """Whether the block carries user data (used by the blank-row filter)."""
        return True

    def prepare(self) -> "Block":
        """Return the block with its data normalised for layout."""
        return self


# ---------------------------------------------------------------------------
# Labeled lines
# ---------------------------------------------------------------------------


class _LineLayout(NamedTuple):
    label_width: float
    lines: Tuple[str, ...]
    line_height: float
    font: FontSpec
    label_font: FontSpec
    height: float


@dataclass(frozen=True, slots=True)
class LabeledLine(Block):
    """Label followed by a value written on an underline.

    An empty value still reserves one line and shows the blank underline, or
    the placeholder (``"___/___/___"``) when one is given.
    """

    label: str
    value: str = ""
    label_width: Optional[float] = None
    underline: bool = True
    placeholder: str = ""
    font: Optional[FontSpec] = None
    label_font: Optional[FontSpec] = None
    space_after: float = 2.0

    kind: ClassVar[str] = "labeled_line"

    def _layout(self, width: float, metrics: TextMetricsEngine) -> _LineLayout:
        font = self.font or DEFAULTS.body_font
        label_font = self.label_font or DEFAULTS.label_font

        if self.label_width is not None:
            label_width = self.label_width
        elif self.label:
            label_width = metrics.string_width(self.label, label_font) + DEFAULTS.label_gap
        else:
            label_width = 0.0

        text = self.value if self.value.strip() else self.placeholder
        lines = metrics.wrap(text, max(width - label_width, 0.0), font)
        line_height = max(font.line_height, label_font.line_height)
        height = len(lines) * line_height + self.space_after
        return _LineLayout(label_width, lines, line_height, font, label_font, height)

    def required_height(self, width: float, metrics: TextMetricsEngine) -> float:
        return self._layout(width, metrics).height

    def paint(self, surface: Surface, origin: Point, width: float, metrics: TextMetricsEngine) -> None:
        layout = self._layout(width, metrics)
        surface.draw_text(origin.x, origin.y + layout.label_font.baseline_offset, self.label, layout.label_font)

        value_x = origin.x + layout.label_width
        for index, line in enumerate(layout.lines):
            baseline = origin.y + index * layout.line_height + layout.font.baseline_offset
            surface.draw_text(value_x, baseline, line, layout.font)
            if self.underline:
                rule_y = baseline + DEFAULTS.underline_offset
                surface.draw_line(value_x, rule_y, origin.x + width, rule_y, DEFAULTS.line_width)

    def has_data(self) -> bool:
        return bool(self.value.strip())

    def trailing_space(self) -> float:
        return self.space_after


@dataclass(frozen=True, slots=True)
class FieldRow(Block):
    """Several labeled lines side by side (``Data: ___  Hora: ___``).

    ``widths`` are relative: they are scaled to the available width once the
    gaps are taken out. Without widths the fields share the row equally.
    """

    fields: Tuple[LabeledLine, ...]
    widths: Optional[Tuple[float, ...]] = None
    gap: float = 4.0

    kind: ClassVar[str] = "field_row"

    def _columns(self, width: float) -> Tuple[Tuple[float, float], ...]:
        count = len(self.fields)
        if count == 0:
            return ()
        usable = width - self.gap * (count - 1)
        if usable <= 0:
            raise LayoutError(f"Field row does not fit in {width:.2f}mm", details=f"{count} fields")

        if self.widths is None:
            weights = [1.0] * count
        else:
            if len(self.widths) != count:
                raise LayoutError(
                    "Field row widths do not match its fields",
                    details=f"{len(self.widths)} widths for {count} fields",
                )
            weights = [float(w) for w in self.widths]
        total = sum(weights)
        if total <= 0 or any(w <= 0 for w in weights):
            raise LayoutError("Field row widths must be positive")

        columns = []
        offset = 0.0
        for weight in weights:
            column_width = usable * weight / total
            columns.append((offset, column_width))
            offset += column_width + self.gap
        return tuple(columns)

    def required_height(self, width: float, metrics: TextMetricsEngine) -> float:
        columns = self._columns(width)
        return max(
            (f.required_height(w, metrics) for f, (_, w) in zip(self.fields, columns)),
            default=0.0,
        )

    def paint(self, surface: Surface, origin: Point, width: float, metrics: TextMetricsEngine) -> None:
        for field_, (offset, column_width) in zip(self.fields, self._columns(width)):
            field_.paint(surface, Point(origin.x + offset, origin.y), column_width, metrics)

    def has_data(self) -> bool:
        return any(f.has_data() for f in self.fields)

    def trailing_space(self) -> float:
        return min((f.space_after for f in self.fields), default=0.0)


@dataclass(frozen=True, slots=True)
class SignatureLine(Block):
    """``Registrado por (iniciais): ______   Data: ______``"""

    label: str
    value: str = ""
    date_label: str = "Data:"
    date_value: str = ""
    date_width: float = 45.0
    gap: float = 4.0
    space_after: float = 4.0

    kind: ClassVar[str] = "signature_line"

    def _row(self, width: float) -> FieldRow:
        date_width = min(self.date_width, width / 2)
        return FieldRow(
            fields=(
                LabeledLine(self.label, self.value, space_after=self.space_after),
                LabeledLine(self.date_label, self.date_value, space_after=self.space_after),
            ),
            widths=(width - self.gap - date_width, date_width),
            gap=self.gap,
        )

    def required_height(self, width: float, metrics: TextMetricsEngine) -> float:
        return self._row(width).required_height(width, metrics)

    def paint(self, surface: Surface, origin: Point, width: float, metrics: TextMetricsEngine) -> None:
        self._row(width).paint(surface, origin, width, metrics)

    def has_data(self) -> bool:
        return bool(self.value.strip() or self.date_value.strip())

    def trailing_space(self) -> float:
        return self.space_after


# ---------------------------------------------------------------------------
# Free text
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Paragraph(Block):
    text: str
    font: Optional[FontSpec] = None
    bold: bool = False
    font_size: Optional[float] = None
    align: Align = "left"
    space_after: float = 2.0

    kind: ClassVar[str] = "paragraph"

    def _font(self) -> FontSpec:
        font = self.font or DEFAULTS.body_font
        if self.font_size is not None:
            font = font.derive(size=self.font_size, line_height=self.font_size * 0.5)
        if self.bold:
            font = font.derive(bold=True)
        return font

    def _layout(self, width: float, metrics: TextMetricsEngine) -> Tuple[Tuple[str, ...], FontSpec]:
        font = self._font()
        return metrics.wrap(self.text, width, font), font

    def required_height(self, width: float, metrics: TextMetricsEngine) -> float:
        lines, font = self._layout(width, metrics)
        return len(lines) * font.line_height + self.space_after

    def paint(self, surface: Surface, origin: Point, width: float, metrics: TextMetricsEngine) -> None:
        lines, font = self._layout(width, metrics)
        if self.align == "center":
            x = origin.x + width / 2
        elif self.align == "right":
            x = origin.x + width
        else:
            x = origin.x
        for index, line in enumerate(lines):
            surface.draw_text(x, origin.y + index * font.line_height + font.baseline_offset, line, font, self.align)

    def has_data(self) -> bool:
        return bool(self.text.strip())

    def trailing_space(self) -> float:
        return self.space_after


@dataclass(frozen=True, slots=True)
class Spacer(Block):
    height: float

    kind: ClassVar[str] = "spacer"

    def required_height(self, width: float, metrics: TextMetricsEngine) -> float:
        return max(self.height, 0.0)

    def paint(self, surface: Surface, origin: Point, width: float, metrics: TextMetricsEngine) -> None:
        pass

    def has_data(self) -> bool:
        return False


class _BoxLayout(NamedTuple):
    box_width: float
    box_height: float
    label_height: float
    lines: Tuple[str, ...]
    font: FontSpec
    label_font: FontSpec
    padding: float
    height: float


@dataclass(frozen=True, slots=True)
class MultilineTextBox(Block):
    """Label above a bordered box holding wrapped text.

    ``height`` is the minimum box height. When the wrapped text needs more
    room the box grows, so no line is ever clipped.
    """

    label: str
    text: str = ""
    width: Optional[float] = None
    height: float = 0.0
    padding: Optional[float] = None
    font: Optional[FontSpec] = None
    label_font: Optional[FontSpec] = None
    space_after: float = 3.0

    kind: ClassVar[str] = "multiline_text_box"

    def _layout(self, width: float, metrics: TextMetricsEngine) -> _BoxLayout:
        font = self.font or DEFAULTS.body_font
        label_font = self.label_font or DEFAULTS.label_font
        padding = DEFAULTS.box_padding if self.padding is None else self.padding

        box_width = min(self.width, width) if self.width else width
        inner_width = box_width - 2 * padding
        if inner_width <= 0:
            raise LayoutError(f"Text box '{self.label}' is narrower than its padding")

        lines = metrics.wrap(self.text, inner_width, font)
        content_height = len(lines) * font.line_height + 2 * padding
        box_height = max(self.height, content_height)
        if content_height > self.height > 0:
            logger.debug(
                f"Text box '{self.label}' grows from {self.height:.1f}mm to {content_height:.1f}mm"
            )

        label_height = label_font.line_height if self.label else 0.0
        height = label_height + box_height + self.space_after
        return _BoxLayout(box_width, box_height, label_height, lines, font, label_font, padding, height)

    def required_height(self, width: float, metrics: TextMetricsEngine) -> float:
        return self._layout(width, metrics).height

    def paint(self, surface: Surface, origin: Point, width: float, metrics: TextMetricsEngine) -> None:
        layout = self._layout(width, metrics)
        surface.draw_text(origin.x, origin.y + layout.label_font.baseline_offset, self.label, layout.label_font)

        box_top = origin.y + layout.label_height
        surface.draw_rect(Rect(origin.x, box_top, layout.box_width, layout.box_height), DEFAULTS.line_width)

        text_x = origin.x + layout.padding
        for index, line in enumerate(layout.lines):
            line_top = box_top + layout.padding + index * layout.font.line_height
            surface.draw_text(text_x, line_top + layout.font.baseline_offset, line, layout.font)

    def has_data(self) -> bool:
        return bool(self.text.strip())

    def trailing_space(self) -> float:
        return self.space_after


# ---------------------------------------------------------------------------
# Checkboxes
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CheckboxOption:
    label: str
    checked: bool = False


class _PlacedOption(NamedTuple):
    option: CheckboxOption
    column: int
    top: float
    lines: Tuple[str, ...]


class _CheckboxLayout(NamedTuple):
    placed: Tuple[_PlacedOption, ...]
    column_width: float
    label_height: float
    font: FontSpec
    label_font: FontSpec
    height: float


@dataclass(frozen=True, slots=True)
class CheckboxGroup(Block):
    """Options with square boxes, laid out row by row in ``columns`` columns.

    The option label always starts at the same offset from the box, checked
    or not; a checked box gets an X made of two crossing lines.
    """

    options: Tuple[CheckboxOption, ...]
    columns: int = 1
    label: str = ""
    font: Optional[FontSpec] = None
    label_font: Optional[FontSpec] = None
    box_size: float = DEFAULTS.checkbox_size
    space_after: float = 2.0

    kind: ClassVar[str] = "checkbox_group"

    @classmethod
    def single_choice(cls, labels: Sequence[str], selected: Optional[str], **kwargs: Any) -> "CheckboxGroup":
        """Build a group where only the option equal to ``selected`` is checked."""
        options = tuple(CheckboxOption(label, label == selected) for label in labels)
        return cls(options=options, **kwargs)

    def _layout(self, width: float, metrics: TextMetricsEngine) -> _CheckboxLayout:
        font = self.font or DEFAULTS.body_font
        label_font = self.label_font or DEFAULTS.label_font
        columns = max(1, self.columns)
        column_width = width / columns
        text_width = max(column_width - DEFAULTS.checkbox_label_offset, 0.0)
        label_height = label_font.line_height if self.label else 0.0

        placed: List[_PlacedOption] = []
        y = label_height
        for start in range(0, len(self.options), columns):
            row = self.options[start:start + columns]
            row_height = 0.0
            for column, option in enumerate(row):
                lines = metrics.wrap(option.label, text_width, font)
                placed.append(_PlacedOption(option, column, y, lines))
                row_height = max(row_height, self.box_size, len(lines) * font.line_height)
            y += row_height
            if start + columns < len(self.options):
                y += DEFAULTS.checkbox_row_gap

        return _CheckboxLayout(tuple(placed), column_width, label_height, font, label_font, y + self.space_after)

    def required_height(self, width: float, metrics: TextMetricsEngine) -> float:
        return self._layout(width, metrics).height

    def paint(self, surface: Surface, origin: Point, width: float, metrics: TextMetricsEngine) -> None:
        layout = self._layout(width, metrics)
        surface.draw_text(origin.x, origin.y + layout.label_font.baseline_offset, self.label, layout.label_font)

        font = layout.font
        box_inset = max((font.line_height - self.box_size) / 2, 0.0)
        for item in layout.placed:
            box_x = origin.x + item.column * layout.column_width
            row_top = origin.y + item.top
            box = Rect(box_x, row_top + box_inset, self.box_size, self.box_size)
            surface.draw_rect(box, DEFAULTS.line_width)
            if item.option.checked:
                _draw_check(surface, box)

            text_x = box_x + DEFAULTS.checkbox_label_offset
            for index, line in enumerate(item.lines):
                surface.draw_text(text_x, row_top + index * font.line_height + font.baseline_offset, line, font)

    def has_data(self) -> bool:
        return any(option.checked for option in self.options)

    def trailing_space(self) -> float:
        return self.space_after


def _draw_check(surface: Surface, box: Rect) -> None:
    inset = box.width * 0.2
    surface.draw_line(box.left + inset, box.top + inset, box.right - inset, box.bottom - inset, DEFAULTS.check_line_width)
    surface.draw_line(box.right - inset, box.top + inset, box.left + inset, box.bottom - inset, DEFAULTS.check_line_width)


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

Cell = Union[str, Block, None]


@dataclass(frozen=True, slots=True)
class Column:
    header: str = ""
    width: float = 0.0
    align: Align = "left"


class _CellLayout(NamedTuple):
    lines: Tuple[str, ...]
    block: Optional[Block]
    height: float


class _RowLayout(NamedTuple):
    cells: Tuple[_CellLayout, ...]
    height: float


@dataclass(frozen=True, slots=True)
class Table(Block):
    """Bordered grid of cells.

    Column widths are explicit; when they do not add up to the available
    width they are scaled proportionally. Columns declared with width 0 share
    whatever width the others leave. A row is ``max(min_row_height, tallest
    cell)`` high when ``auto_height`` is set, otherwise exactly
    ``min_row_height`` with surplus lines dropped.

    Cells are text or nested blocks (a checkbox group inside a cell, for
    instance).
    """

    columns: Tuple[Column, ...]
    rows: Tuple[Tuple[Cell, ...], ...] = ()
    min_row_height: float = 8.0
    auto_height: bool = True
    is_blank: Optional[BlankPredicate] = field(default=None, compare=False)
    filter_blank_rows: bool = True
    font: Optional[FontSpec] = None
    header_font: Optional[FontSpec] = None
    padding: Optional[float] = None
    valign: str = "middle"
    space_after: float = 3.0

    kind: ClassVar[str] = "table"

    @property
    def has_header(self) -> bool:
        return any(column.header for column in self.columns)

    def prepare(self) -> "Table":
        if not self.filter_blank_rows:
            return self
        rows = filter_rows(self.rows, self.is_blank or default_is_blank)
        return replace(self, rows=rows, filter_blank_rows=False)

    def has_data(self) -> bool:
        return bool(self.rows)

    def column_widths(self, width: float) -> Tuple[float, ...]:
        """Resolve the width of every column for an available ``width``."""
        if not self.columns:
            raise LayoutError("Table has no columns")
        declared = [column.width for column in self.columns]
        if any(w < 0 for w in declared):
            raise LayoutError("Table column widths must not be negative", details=str(declared))

        free = [index for index, w in enumerate(declared) if w == 0]
        if free:
            share = (width - sum(declared)) / len(free)
            if share <= 0:
                raise LayoutError(
                    "No width left for the table's flexible columns",
                    details=f"fixed columns take {sum(declared):.2f}mm of {width:.2f}mm",
                )
            for index in free:
                declared[index] = share

        total = sum(declared)
        if abs(total - width) > 0.01:
            logger.debug(f"Scaling table columns from {total:.2f}mm to {width:.2f}mm")
            declared = [w * width / total for w in declared]
        return tuple(declared)

    def _padding(self) -> float:
        return DEFAULTS.cell_padding if self.padding is None else self.padding

    def _layout_row(
        self,
        cells: Sequence[Cell],
        widths: Sequence[float],
        font: FontSpec,
        metrics: TextMetricsEngine,
        header: bool = False,
    ) -> _RowLayout:
        if len(cells) > len(widths):
            raise LayoutError(
                "Table row has more cells than columns",
                details=f"{len(cells)} cells for {len(widths)} columns",
            )
        padding = self._padding()
        laid_out = []
        tallest = 0.0
        for index, column_width in enumerate(widths):
            cell = cells[index] if index < len(cells) else None
            inner_width = column_width - 2 * padding
            if isinstance(cell, Block):
                height = cell.required_height(inner_width, metrics) + 2 * padding
                laid_out.append(_CellLayout((), cell, height))
            else:
                lines = metrics.wrap("" if cell is None else str(cell), inner_width, font)
                height = len(lines) * font.line_height + 2 * padding
                laid_out.append(_CellLayout(lines, None, height))
            tallest = max(tallest, height)

        if header:
            row_height = tallest
        elif self.auto_height:
            row_height = max(self.min_row_height, tallest)
        else:
            row_height = self.min_row_height
        return _RowLayout(tuple(laid_out), row_height)

    def _paint_row(
        self,
        surface: Surface,
        origin: Point,
        widths: Sequence[float],
        row: _RowLayout,
        font: FontSpec,
        metrics: TextMetricsEngine,
        header: bool = False,
    ) -> None:
        padding = self._padding()
        x = origin.x
        for column, column_width, cell in zip(self.columns, widths, row.cells):
            surface.draw_rect(Rect(x, origin.y, column_width, row.height), DEFAULTS.line_width)
            if cell.block is not None:
                cell.block.paint(surface, Point(x + padding, origin.y + padding), column_width - 2 * padding, metrics)
            else:
                self._paint_cell_text(surface, x, origin.y, column_width, row.height, cell.lines, font,
                                      "center" if header else column.align)
            x += column_width

    def _paint_cell_text(
        self,
        surface: Surface,
        x: float,
        y: float,
        width: float,
        height: float,
        lines: Tuple[str, ...],
        font: FontSpec,
        align: Align,
    ) -> None:
        padding = self._padding()
        capacity = max(1, math.floor((height - 2 * padding) / font.line_height + 1e-9))
        if len(lines) > capacity:
            logger.debug(f"Dropping {len(lines) - capacity} line(s) that do not fit a fixed-height row")
            lines = lines[:capacity]

        content_height = len(lines) * font.line_height
        if self.valign == "top":
            top = y + padding
        else:
            top = y + (height - content_height) / 2

        if align == "center":
            text_x = x + width / 2
        elif align == "right":
            text_x = x + width - padding
        else:
            text_x = x + padding
        for index, line in enumerate(lines):
            surface.draw_text(text_x, top + index * font.line_height + font.baseline_offset, line, font, align)

    def fragments(self, width: float, metrics: TextMetricsEngine) -> Tuple[Fragment, ...]:
        widths = self.column_widths(width)
        font = self.font or DEFAULTS.table_font
        header_font = self.header_font or DEFAULTS.table_header_font

        rows = [self._layout_row(cells, widths, font, metrics) for cells in self.rows]

        header_fragment: Optional[Fragment] = None
        result: List[Fragment] = []
        if self.has_header:
            header_row = self._layout_row([c.header for c in self.columns], widths, header_font, metrics, header=True)
            trailing = 0.0 if rows else self.space_after
            keep_height = header_row.height + (rows[0].height if rows else 0.0)
            painter = partial(self._paint_row, widths=widths, row=header_row, font=header_font,
                              metrics=metrics, header=True)
            header_fragment = Fragment("table_header", header_row.height + trailing, keep_height, painter,
                                       space_after=trailing)
            result.append(header_fragment)

        for index, row in enumerate(rows):
            trailing = self.space_after if index == len(rows) - 1 else 0.0
            painter = partial(self._paint_row, widths=widths, row=row, font=font, metrics=metrics)
            result.append(
                Fragment("table_row", row.height + trailing, row.height, painter, header=header_fragment,
                         row_index=index, space_after=trailing)
            )
        return tuple(result)

    def required_height(self, width: float, metrics: TextMetricsEngine) -> float:
        return sum(fragment.height for fragment in self.fragments(width, metrics))

    def paint(self, surface: Surface, origin: Point, width: float, metrics: TextMetricsEngine) -> None:
        y = origin.y
        for fragment in self.fragments(width, metrics):
            fragment.paint(surface, Point(origin.x, y))
            y += fragment.height
