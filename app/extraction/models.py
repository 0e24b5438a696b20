from dataclasses import dataclass


@dataclass(frozen=True)
class ExtractionResult:
    """Text extracted from one uploaded file, keyed by its position in the batch."""

    index: int
    safe_name: str
    content: bytes
    text: str = ""
