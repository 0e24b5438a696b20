class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class UploadValidationError(ProcessorError):
    """Raised when an upload batch is empty, too large, or has too many files."""


class ExtractionFailedError(ProcessorError):
    """Raised when text extraction fails for the batch as a whole."""
