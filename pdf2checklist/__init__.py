"""Regulatory PDF to compliance checklist converter."""

__version__ = "0.1.0"

from pdf2checklist.checklist import ChecklistParser
from pdf2checklist.errors import (
    ChecklistParseError,
    DecodeError,
    EmptyContentError,
    NoItemsError,
    NotComplianceDocumentError,
    UnsupportedFormatError,
    WrongDocumentTypeError,
)
from pdf2checklist.models import ParsedDocument, ParsedItem, TextFragment

__all__ = [
    "ChecklistParser",
    "ChecklistParseError",
    "DecodeError",
    "EmptyContentError",
    "NoItemsError",
    "NotComplianceDocumentError",
    "UnsupportedFormatError",
    "WrongDocumentTypeError",
    "ParsedDocument",
    "ParsedItem",
    "TextFragment",
]
