"""Exceptions raised by the checklist parser."""


class ChecklistParseError(Exception):
    """Base class for fatal parse failures."""


class DecodeError(ChecklistParseError):
    """The PDF decoder reported a structural error or got no input."""


class EmptyContentError(ChecklistParseError):
    """No page produced any text after line reconstruction."""

    def __init__(self, message: str = "No text content found in PDF"):
        super().__init__(message)


class NoItemsError(ChecklistParseError):
    """Neither the structural nor the content-based pass produced items."""

    default_message = "No checklist items found in the document."

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)


class WrongDocumentTypeError(NoItemsError):
    default_message = (
        "This appears to be a commercial document (invoice/bill). "
        "Please upload regulatory compliance documents instead."
    )


class NotComplianceDocumentError(NoItemsError):
    default_message = (
        "No compliance checklist items found. "
        "Please ensure this is a regulatory compliance document."
    )


class UnsupportedFormatError(NoItemsError):
    default_message = (
        "No checklist items found in the document. "
        "The document may have an unsupported format."
    )
