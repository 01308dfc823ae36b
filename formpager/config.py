"""
Layout defaults for the printed forms.

Values come from the paper forms the engine replicates: Helvetica throughout,
10pt body text on 5mm lines, 9pt table text, 0.3mm rules, 3.2mm checkboxes
with the label 5mm from the box edge.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .engine.text_metrics import FontSpec


@dataclass(frozen=True, slots=True)
class LayoutDefaults:
    body_font: FontSpec = field(default_factory=lambda: FontSpec("Helvetica", 10.0, 5.0))
    label_font: FontSpec = field(default_factory=lambda: FontSpec("Helvetica", 10.0, 5.0, bold=True))
    heading_font: FontSpec = field(default_factory=lambda: FontSpec("Helvetica", 11.0, 6.0, bold=True))
    table_font: FontSpec = field(default_factory=lambda: FontSpec("Helvetica", 9.0, 4.2))
    table_header_font: FontSpec = field(default_factory=lambda: FontSpec("Helvetica", 9.0, 4.2, bold=True))
    legend_font: FontSpec = field(default_factory=lambda: FontSpec("Helvetica", 9.0, 4.5))

    line_width: float = 0.3
    check_line_width: float = 0.5
    cell_padding: float = 1.5
    box_padding: float = 2.0
    label_gap: float = 1.0
    underline_offset: float = 0.6

    checkbox_size: float = 3.2
    checkbox_label_offset: float = 5.0
    checkbox_row_gap: float = 1.0


DEFAULTS = LayoutDefaults()
