"""Layout engine: measurement, blocks, chrome and two-pass pagination."""

from .geometry import A4_LANDSCAPE, A4_PORTRAIT, DEFAULT_MARGINS, Margins, PageGeometry, Point, Rect, Size
from .text_metrics import FontSpec, TextMetricsEngine
from .surface import NullSurface, RecordingSurface, Surface
from .blocks import (
    Block,
    CheckboxGroup,
    CheckboxOption,
    Column,
    FieldRow,
    Fragment,
    LabeledLine,
    MultilineTextBox,
    Paragraph,
    SignatureLine,
    Spacer,
    Table,
)
from .row_filter import default_is_blank, filter_rows
from .chrome import ChromeContext, ChromeRenderer, ChromeTemplate
from .document import Document, PageLimits, Section
from .paginator import (
    Composition,
    LayoutCursor,
    LayoutResult,
    LayoutWarning,
    Placement,
    compose,
    layout_pass,
    render,
    simulate,
)

__all__ = [
    "A4_LANDSCAPE",
    "A4_PORTRAIT",
    "DEFAULT_MARGINS",
    "Margins",
    "PageGeometry",
    "Point",
    "Rect",
    "Size",
    "FontSpec",
    "TextMetricsEngine",
    "NullSurface",
    "RecordingSurface",
    "Surface",
    "Block",
    "CheckboxGroup",
    "CheckboxOption",
    "Column",
    "FieldRow",
    "Fragment",
    "LabeledLine",
    "MultilineTextBox",
    "Paragraph",
    "SignatureLine",
    "Spacer",
    "Table",
    "default_is_blank",
    "filter_rows",
    "ChromeContext",
    "ChromeRenderer",
    "ChromeTemplate",
    "Document",
    "PageLimits",
    "Section",
    "Composition",
    "LayoutCursor",
    "LayoutResult",
    "LayoutWarning",
    "Placement",
    "compose",
    "layout_pass",
    "render",
    "simulate",
]
