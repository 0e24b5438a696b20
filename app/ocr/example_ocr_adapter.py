"""Offline OCR adapter.

Returns a fixed string for every image. Useful for local development and
tests; no network calls are made.
"""

from app.ocr.base import BaseOcrClient


class ExampleOcrAdapter(BaseOcrClient):
    """OCR adapter that never calls a provider."""

    def __init__(self, text: str = "") -> None:
        self._text = text

    def extract_text(self, image_bytes: bytes, mime_type: str) -> str:
        _ = image_bytes, mime_type
        return self._text
