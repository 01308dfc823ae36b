from .naming import artifact_filename, slugify
from .pdf_writer import PdfWriter, write_atomic

__all__ = ["PdfWriter", "artifact_filename", "slugify", "write_atomic"]
