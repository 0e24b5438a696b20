class ClassificationError(Exception):
    """Raised when classification fails."""


class ClassificationNetworkError(ClassificationError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""


class AiTimeoutError(ClassificationError):
    """Raised when the classification call does not finish within its deadline."""

    def __init__(self, timeout_seconds: float) -> None:
        super().__init__(f"AI request timed out after {timeout_seconds:g}s")
        self.timeout_seconds = timeout_seconds
