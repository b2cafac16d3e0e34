"""Public entry point: PDF buffer to checklist document."""

import asyncio
import logging
from pathlib import Path
from typing import List, Optional, Union

from pdf2checklist.config import Settings, settings as default_settings
from pdf2checklist.diagnostics import diagnose_empty_result
from pdf2checklist.errors import DecodeError
from pdf2checklist.extractor import Extractor
from pdf2checklist.models import Language, ParsedDocument, ParsedItem
from pdf2checklist.parser import GlyphPositioner, PyMuPDFPositioner, extract_page_lines

logger = logging.getLogger(__name__)

SUPPORTED_LANGUAGES = ("en", "ar")


def document_title(file_name: str) -> str:
    """Derive a document title from its file name (extension removed)."""
    name = Path(file_name).name
    stem, dot, _ = name.rpartition(".")
    return stem if dot and stem else name


def assemble_document(file_name: str, language: Language, items: List[ParsedItem]) -> ParsedDocument:
    return ParsedDocument(
        title=document_title(file_name),
        file_name=file_name,
        language=language,
        items=items,
    )


class ChecklistParser:
    """Extracts compliance checklist items from a PDF buffer.

    Each parse() call builds fresh parser state, so one instance can be used
    for several target languages and concurrent calls do not interfere.
    """

    def __init__(
        self,
        buffer: Union[bytes, bytearray, memoryview],
        positioner: Optional[GlyphPositioner] = None,
        settings: Optional[Settings] = None,
    ):
        """Initialize parser.

        Args:
            buffer: Raw PDF bytes
            positioner: Decoder yielding positioned fragments (PyMuPDF by default)
            settings: Tunables (module-level settings by default)
        """
        self.buffer = bytes(buffer)
        self.settings = settings or default_settings
        self.positioner = positioner or PyMuPDFPositioner(points_per_unit=self.settings.points_per_unit)

    @classmethod
    def from_file(cls, pdf_path: Union[str, Path], **kwargs) -> "ChecklistParser":
        return cls(Path(pdf_path).read_bytes(), **kwargs)

    def extract_lines(self) -> List[List[str]]:
        """Decode the buffer and reconstruct per-page lines.

        Raises:
            DecodeError: If the PDF cannot be decoded
            EmptyContentError: If no page has text
        """
        if not self.buffer:
            raise DecodeError("PDF parsing error: empty buffer")

        pages = self.positioner.extract_pages(self.buffer)
        logger.info("Decoded %d pages", len(pages))
        return extract_page_lines(pages, tolerance=self.settings.line_tolerance)

    def parse(self, file_name: str, language: Language = "en") -> ParsedDocument:
        """Parse the PDF into a checklist document.

        Args:
            file_name: Original file name, used for the title
            language: Target language, "en" or "ar"

        Returns:
            ParsedDocument with items in emission order

        Raises:
            ValueError: If language is not supported
            DecodeError: If the PDF cannot be decoded
            EmptyContentError: If no page has text
            NoItemsError: If no items could be extracted (subclass names the likely cause)
        """
        if language not in SUPPORTED_LANGUAGES:
            raise ValueError(f"Unsupported language: {language!r} (expected 'en' or 'ar')")

        pages = self.extract_lines()
        extractor = Extractor(max_fallback_items=self.settings.fallback_max_items)
        items = extractor.extract(pages, language)

        if not items:
            error = diagnose_empty_result(pages)
            logger.warning("No items found in %s: %s", file_name, error)
            raise error

        return assemble_document(file_name, language, items)

    async def parse_async(self, file_name: str, language: Language = "en") -> ParsedDocument:
        """Run parse() in a worker thread.

        Deadlines are the caller's concern (e.g. asyncio.wait_for).
        """
        return await asyncio.to_thread(self.parse, file_name, language)
