class OcrError(Exception):
    """Raised when the OCR provider returns an unusable response."""


class OcrNetworkError(OcrError):
    """Raised when the OCR provider call fails due to network/infrastructure issues."""


class OcrServiceError(OcrError):
    """Raised when the OCR provider rejects the request."""
