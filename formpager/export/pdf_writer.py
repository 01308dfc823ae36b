"""PDF output sink - replays recorded pages onto a ReportLab canvas."""

from __future__ import annotations

import io
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from reportlab.lib.utils import ImageReader
from reportlab.pdfgen.canvas import Canvas

from ..engine.geometry import Size, mm_to_pt
from ..engine.surface import DrawOp, ImageOp, LineOp, RecordingSurface, RectOp, TextOp
from ..exceptions import OutputError

logger = logging.getLogger(__name__)

PRODUCER = "formpager"


class PdfWriter:
    """Writes a recorded surface as PDF.

    The canvas runs in ReportLab's invariant mode (fixed document id and
    dates), so the same pages always produce the same bytes.
    """

    def __init__(
        self,
        page_size: Size,
        title: str = "",
        author: str = "",
        subject: str = "",
    ):
        """
        Args:
            page_size: Page size in millimetres
            title: PDF title metadata
            author: PDF author metadata
            subject: PDF subject metadata
        """
        self.page_size = page_size
        self.title = title
        self.author = author
        self.subject = subject
        self._page_height_pt = mm_to_pt(page_size.height)

    def render_bytes(self, surface: RecordingSurface) -> bytes:
        """Render every recorded page and return the PDF document.

        Raises:
            OutputError: If ReportLab cannot produce the document
        """
        buffer = io.BytesIO()
        try:
            canvas = Canvas(
                buffer,
                pagesize=(mm_to_pt(self.page_size.width), self._page_height_pt),
                invariant=1,
                pageCompression=1,
            )
            canvas.setTitle(self.title)
            canvas.setAuthor(self.author)
            canvas.setSubject(self.subject)
            canvas.setCreator(PRODUCER)
            canvas.setProducer(PRODUCER)

            for page_index, ops in enumerate(surface.pages, start=1):
                for op in ops:
                    self._draw(canvas, op)
                canvas.showPage()
                logger.debug(f"Wrote page {page_index} ({len(ops)} operations)")
            canvas.save()
        except (OSError, ValueError, KeyError) as exc:
            raise OutputError("Failed to render PDF", details=str(exc)) from exc
        return buffer.getvalue()

    def _y(self, y_mm: float) -> float:
        return self._page_height_pt - mm_to_pt(y_mm)

    def _draw(self, canvas: Canvas, op: DrawOp) -> None:
        if isinstance(op, RectOp):
            rect = op.rect
            canvas.setLineWidth(mm_to_pt(op.line_width))
            canvas.rect(
                mm_to_pt(rect.x),
                self._y(rect.bottom),
                mm_to_pt(rect.width),
                mm_to_pt(rect.height),
                stroke=1,
                fill=0,
            )
        elif isinstance(op, LineOp):
            canvas.setLineWidth(mm_to_pt(op.line_width))
            canvas.line(mm_to_pt(op.x1), self._y(op.y1), mm_to_pt(op.x2), self._y(op.y2))
        elif isinstance(op, TextOp):
            canvas.setFont(op.font_name, op.font_size)
            x = mm_to_pt(op.x)
            y = self._y(op.baseline)
            if op.align == "center":
                canvas.drawCentredString(x, y, op.text)
            elif op.align == "right":
                canvas.drawRightString(x, y, op.text)
            else:
                canvas.drawString(x, y, op.text)
        elif isinstance(op, ImageOp):
            rect = op.rect
            canvas.drawImage(
                ImageReader(op.path),
                mm_to_pt(rect.x),
                self._y(rect.bottom),
                width=mm_to_pt(rect.width),
                height=mm_to_pt(rect.height),
                preserveAspectRatio=True,
                mask="auto",
            )
        else:
            raise OutputError(f"Unsupported drawing operation: {type(op).__name__}")


def write_atomic(data: bytes, directory: str | Path, filename: str) -> Path:
    """
    Writes ``data`` to ``directory/filename`` without ever exposing a partial file.

    The bytes go to a temporary file in the target directory which is then
    renamed over the destination.

    Raises:
        OutputError: If the directory is missing or the file cannot be written
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise OutputError(f"Output directory does not exist: {directory}")

    target = directory / filename
    fd, temp_name = tempfile.mkstemp(prefix=f".{filename}.", suffix=".tmp", dir=directory)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_name, target)
    except OSError as exc:
        _discard(temp_name)
        raise OutputError(f"Failed to write {target}", details=str(exc)) from exc

    logger.info(f"Wrote {target} ({len(data)} bytes)")
    return target


def _discard(path: Optional[str]) -> None:
    if path and os.path.exists(path):
        try:
            os.unlink(path)
        except OSError as exc:
            logger.warning(f"Could not remove temporary file {path}: {exc}")
