"""
formpager - paginated layout and PDF export for fixed-geometry paper forms.

Forms are described as a Document: ordered sections of blocks (labeled
lines, text boxes, checkbox groups, tables) plus the chrome repeated on
every page. The engine lays the document out twice, first to count the
pages and then to paint them with correct "Página i de N" numbering, and
writes the result as PDF.

Quick Start:
    from formpager import ChromeTemplate, Document, Section, LabeledLine, export_document

    doc = Document(
        chrome=ChromeTemplate("14.0 – NECROPSIA", "FOR-EC-14", "0"),
        sections=(Section((LabeledLine("Animal:", "A-01"),)),),
    )
    result = export_document(doc, output_dir="out")
    print(result.filename, result.total_pages)
"""

from .version import __version__, __version_info__

from .exceptions import (
    DocumentLoadError,
    FormPagerError,
    LayoutError,
    MeasurementError,
    OutputError,
    RowFilterError,
)
from .engine import (
    A4_LANDSCAPE,
    A4_PORTRAIT,
    CheckboxGroup,
    CheckboxOption,
    ChromeTemplate,
    Column,
    Document,
    FieldRow,
    LabeledLine,
    LayoutWarning,
    Margins,
    MultilineTextBox,
    PageLimits,
    Paragraph,
    Section,
    SignatureLine,
    Spacer,
    Table,
    compose,
    simulate,
)
from .api import ExportResult, count_pages, export_document, submit_export
from .importers import load_document
from .forms import available_forms, build_form

__all__ = [
    "__version__",
    "__version_info__",
    "DocumentLoadError",
    "FormPagerError",
    "LayoutError",
    "MeasurementError",
    "OutputError",
    "RowFilterError",
    "A4_LANDSCAPE",
    "A4_PORTRAIT",
    "CheckboxGroup",
    "CheckboxOption",
    "ChromeTemplate",
    "Column",
    "Document",
    "FieldRow",
    "LabeledLine",
    "LayoutWarning",
    "Margins",
    "MultilineTextBox",
    "PageLimits",
    "Paragraph",
    "Section",
    "SignatureLine",
    "Spacer",
    "Table",
    "compose",
    "simulate",
    "ExportResult",
    "count_pages",
    "export_document",
    "submit_export",
    "load_document",
    "available_forms",
    "build_form",
]
