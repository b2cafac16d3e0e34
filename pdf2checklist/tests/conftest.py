import logging
from typing import List

import fitz
import pytest

from pdf2checklist.checklist import ChecklistParser
from pdf2checklist.logging_config import LOGGER_NAME
from pdf2checklist.models import TextFragment


class FakePositioner:
    """Positioner returning canned fragments instead of decoding a PDF."""

    def __init__(self, pages: List[List[TextFragment]]):
        self.pages = pages
        self.calls = 0

    def extract_pages(self, buffer: bytes) -> List[List[TextFragment]]:
        self.calls += 1
        return self.pages


def fragments_for(lines: List[str]) -> List[TextFragment]:
    """One fragment per word, one line per unit of y."""
    fragments = []
    for row, line in enumerate(lines, 1):
        for col, word in enumerate(line.split()):
            fragments.append(TextFragment(content=word, x=float(col), y=float(row)))
    return fragments


@pytest.fixture
def parser_for():
    def _make(*pages: List[str]) -> ChecklistParser:
        positioner = FakePositioner([fragments_for(lines) for lines in pages])
        return ChecklistParser(b"%PDF-1.7 stub", positioner=positioner)
    return _make


@pytest.fixture
def sample_pdf(tmp_path):
    """Write a small single-page English checklist PDF."""
    path = tmp_path / "AML Circular.pdf"
    doc = fitz.open()
    page = doc.new_page()
    lines = [
        "CUSTOMER DUE DILIGENCE",
        "1.1 The institution must maintain customer records.",
        "1.1.a Records shall be retained for five years.",
    ]
    for i, text in enumerate(lines):
        page.insert_text((72, 72 + 18 * i), text, fontsize=11)
    doc.save(str(path))
    doc.close()
    return path


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
