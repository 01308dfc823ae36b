"""
Pytest configuration for formpager
"""

import logging
import sys
from pathlib import Path

import pytest

from formpager.engine.chrome import ChromeTemplate
from formpager.engine.document import Document, Section
from formpager.engine.geometry import A4_PORTRAIT
from formpager.engine.surface import RecordingSurface
from formpager.engine.text_metrics import TextMetricsEngine


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid file handler issues."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    # Console-only logging, warnings and errors only
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter("%(name)s - %(levelname)s - %(message)s"))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    import tempfile
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def metrics():
    """Fresh text metrics engine."""
    return TextMetricsEngine()


@pytest.fixture
def surface(metrics):
    """Recording surface on an A4 portrait page."""
    return RecordingSurface(A4_PORTRAIT, metrics)


@pytest.fixture
def chrome():
    """Chrome of a small test form."""
    return ChromeTemplate(title="1.0 – FORMULÁRIO DE TESTE", document_code="FOR-EC-1", version="0")


@pytest.fixture
def make_document(chrome):
    """Factory building a single-section document from blocks."""

    def _make(*blocks, **kwargs):
        return Document(chrome=chrome, sections=(Section(tuple(blocks)),), **kwargs)

    return _make
