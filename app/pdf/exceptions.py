class PdfExtractionError(Exception):
    """Raised when text cannot be extracted from a PDF."""


class PdfEncryptedError(PdfExtractionError):
    """Raised when a PDF needs a password to be read."""
