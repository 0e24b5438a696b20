class ExtractionError(Exception):
    """Base exception for text extraction failures."""


class TextBudgetExceededError(ExtractionError):
    """Raised when the aggregated corpus would exceed its character budget."""

    def __init__(self, limit_chars: int) -> None:
        super().__init__(f"Aggregated text exceeds {limit_chars} characters")
        self.limit_chars = limit_chars
