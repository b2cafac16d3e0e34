"""PDF text decoding and line reconstruction using PyMuPDF."""

import logging
from typing import List, Optional, Protocol
from urllib.parse import unquote

import fitz  # PyMuPDF

from pdf2checklist.errors import DecodeError, EmptyContentError
from pdf2checklist.models import TextFragment

logger = logging.getLogger(__name__)

DEFAULT_LINE_TOLERANCE = 0.3


class GlyphPositioner(Protocol):
    """Decodes a PDF buffer into positioned text fragments, one list per page."""

    def extract_pages(self, buffer: bytes) -> List[List[TextFragment]]:
        ...


class PyMuPDFPositioner:
    """Glyph positioner backed by PyMuPDF text spans."""

    def __init__(self, points_per_unit: float = 16.0):
        """Initialize positioner.

        Args:
            points_per_unit: PDF points per page unit; fragment coordinates are
                divided by it so line tolerances stay in page units
        """
        self.points_per_unit = points_per_unit

    def extract_pages(self, buffer: bytes) -> List[List[TextFragment]]:
        """Extract per-page fragments from a PDF buffer.

        Args:
            buffer: Raw PDF bytes

        Returns:
            List of pages, each a list of TextFragment in decoder order

        Raises:
            DecodeError: If the buffer is empty or PyMuPDF cannot read it
        """
        if not buffer:
            raise DecodeError("PDF parsing error: empty buffer")

        try:
            doc = fitz.open(stream=buffer, filetype="pdf")
        except Exception as e:
            raise DecodeError(f"PDF parsing error: {e}") from e

        try:
            pages: List[List[TextFragment]] = []
            for page in doc:
                pages.append(self._page_fragments(page))
            return pages
        finally:
            doc.close()

    def _page_fragments(self, page: fitz.Page) -> List[TextFragment]:
        fragments: List[TextFragment] = []
        page_dict = page.get_text("dict")
        for block in page_dict.get("blocks", []):
            if "lines" not in block:
                continue
            for line in block.get("lines", []):
                for span in line.get("spans", []):
                    text = span.get("text", "")
                    if not text.strip():
                        continue
                    origin = span.get("origin") or (span.get("bbox") or (0, 0))[:2]
                    fragments.append(TextFragment(
                        content=text.strip(),
                        x=origin[0] / self.points_per_unit,
                        y=origin[1] / self.points_per_unit,
                    ))
        return fragments


def decode_fragment(content: str) -> str:
    """Decode percent-escaped characters in fragment content.

    Invalid escape sequences are left untouched.
    """
    if "%" not in content:
        return content
    return unquote(content)


def reconstruct_lines(fragments: List[TextFragment], tolerance: float = DEFAULT_LINE_TOLERANCE) -> List[str]:
    """Group fragments of one page into visual lines.

    Fragments are sorted by (y, x, content); a fragment stays on the current line while
    its y is within tolerance of the previous fragment's y. Each line is then joined
    left to right.

    Args:
        fragments: Fragments of a single page, in any order
        tolerance: Maximum vertical distance between fragments of one line

    Returns:
        Line strings in reading order
    """
    if not fragments:
        return []

    sorted_fragments = sorted(fragments, key=lambda f: (f.y, f.x, f.content))

    lines: List[str] = []
    current_line: List[TextFragment] = []
    last_y: Optional[float] = None

    for fragment in sorted_fragments:
        if last_y is not None and abs(fragment.y - last_y) >= tolerance:
            lines.append(_join_line(current_line))
            current_line = []
        current_line.append(fragment)
        last_y = fragment.y

    if current_line:
        lines.append(_join_line(current_line))

    return lines


def _join_line(fragments: List[TextFragment]) -> str:
    ordered = sorted(fragments, key=lambda f: (f.x, f.content))
    return " ".join(decode_fragment(f.content) for f in ordered)


def extract_page_lines(
    pages: List[List[TextFragment]],
    tolerance: float = DEFAULT_LINE_TOLERANCE,
) -> List[List[str]]:
    """Reconstruct lines for every page and drop pages without text.

    Raises:
        EmptyContentError: If no page has any non-blank line
    """
    page_lines: List[List[str]] = []
    for page_num, fragments in enumerate(pages, 1):
        lines = [line.strip() for line in reconstruct_lines(fragments, tolerance)]
        lines = [line for line in lines if line]
        if not lines:
            logger.debug("Page %d has no text, skipping", page_num)
            continue
        page_lines.append(lines)

    if not page_lines:
        raise EmptyContentError()

    logger.info("Reconstructed %d non-empty pages out of %d", len(page_lines), len(pages))
    return page_lines
