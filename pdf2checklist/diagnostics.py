"""Classification of documents that produced no checklist items."""

from typing import List

from pdf2checklist.errors import (
    NoItemsError,
    NotComplianceDocumentError,
    UnsupportedFormatError,
    WrongDocumentTypeError,
)

COMMERCIAL_KEYWORDS = ("invoice", "tax invoice", "bill of supply", "gst")
COMPLIANCE_KEYWORDS = ("compliance", "regulation", "cbuae", "aml", "kyc", "suspicious")


def diagnose_empty_result(pages: List[List[str]]) -> NoItemsError:
    """Pick the error explaining why a document yielded no items.

    Only affects the message shown to the user; it runs after parsing failed.

    Args:
        pages: Reconstructed page lines

    Returns:
        A NoItemsError subclass instance (not raised)
    """
    full_text = " ".join(" ".join(lines) for lines in pages).lower()
    is_commercial = any(keyword in full_text for keyword in COMMERCIAL_KEYWORDS)
    is_compliance = any(keyword in full_text for keyword in COMPLIANCE_KEYWORDS)

    if is_commercial and not is_compliance:
        return WrongDocumentTypeError()
    if not is_compliance:
        return NotComplianceDocumentError()
    return UnsupportedFormatError()
