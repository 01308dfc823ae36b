"""
High-level export API.

``export_document`` runs the whole pipeline (row filter, simulation pass,
rendering pass, PDF output) for one Document. ``submit_export`` runs the same
pipeline on an executor so a caller can keep its own thread responsive.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, Future
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from .engine.document import Document
from .engine.paginator import LayoutWarning, compose, simulate
from .engine.text_metrics import TextMetricsEngine
from .export.naming import artifact_filename
from .export.pdf_writer import PdfWriter, write_atomic

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportResult:
    filename: str
    data: bytes
    total_pages: int
    warnings: Tuple[LayoutWarning, ...] = ()
    path: Optional[Path] = None


def count_pages(document: Document, metrics: Optional[TextMetricsEngine] = None) -> int:
    """Number of pages the document will need."""
    return simulate(document, metrics)


def export_document(
    document: Document,
    output_dir: Optional[str | Path] = None,
    metrics: Optional[TextMetricsEngine] = None,
    filename: Optional[str] = None,
) -> ExportResult:
    """
    Composes a document and produces its PDF.

    Args:
        document: Document to export
        output_dir: Directory to write the PDF into; nothing is written when None
        metrics: Metrics engine (a fresh one per export by default)
        filename: Override for the generated filename

    Returns:
        ExportResult with the PDF bytes, the filename and any overflow warnings

    Raises:
        MeasurementError: If a font has no metrics
        LayoutError: If the layout passes disagree or the geometry is invalid
        OutputError: If the PDF cannot be produced or written
    """
    composition = compose(document, metrics or TextMetricsEngine())
    chrome = composition.document.chrome

    writer = PdfWriter(composition.document.page_size, title=chrome.title, subject=chrome.document_code)
    data = writer.render_bytes(composition.surface)
    name = filename or artifact_filename(chrome.document_code, chrome.version, chrome.title)

    path = None
    if output_dir is not None:
        path = write_atomic(data, output_dir, name)

    logger.info(f"Exported {name}: {composition.total_pages} page(s), {len(data)} bytes")
    return ExportResult(name, data, composition.total_pages, composition.result.warnings, path)


def submit_export(
    executor: Executor,
    document: Document,
    output_dir: Optional[str | Path] = None,
    filename: Optional[str] = None,
) -> "Future[ExportResult]":
    """
    Schedules ``export_document`` on ``executor``.

    The export is all-or-nothing: cancelling the future before it starts
    means no pass runs and no file is written; once running it completes.
    Each job gets its own metrics engine.
    """
    logger.debug(f"Submitting export of '{document.chrome.title}'")
    return executor.submit(export_document, document, output_dir, None, filename)
