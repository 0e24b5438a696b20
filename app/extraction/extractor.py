"""Format-specific text extraction for uploaded files.

PDFs go through the configured embedded-text adapter; raster images go through
the OCR provider. Anything else yields empty text.
"""

import asyncio
from typing import ClassVar

from app.logging.logger import Log
from app.naming.sanitizer import split_extension
from app.ocr.base import BaseOcrClient
from app.pdf.base import BasePdfExtractor
from app.pdf.exceptions import PdfExtractionError


class TextExtractor:
    """Dispatches extraction on the lowercase filename extension."""

    DOCUMENT_EXTENSIONS: ClassVar[frozenset[str]] = frozenset({".pdf"})
    IMAGE_MIME_TYPES: ClassVar[dict[str, str]] = {
        ".png": "image/png",
        ".jpg": "image/jpeg",
        ".jpeg": "image/jpeg",
        ".webp": "image/webp",
    }

    def __init__(self, pdf_extractor: BasePdfExtractor, ocr_client: BaseOcrClient) -> None:
        self._pdf_extractor = pdf_extractor
        self._ocr_client = ocr_client

    async def extract(self, content: bytes, filename: str) -> str:
        """Return the text of one file.

        PDF parse failures return "". OCR failures propagate as OcrError so the
        caller decides whether to recover.
        """
        ext = split_extension(filename)[1].lower()
        if ext in self.DOCUMENT_EXTENSIONS:
            return self._extract_document(content, filename)
        mime_type = self.IMAGE_MIME_TYPES.get(ext)
        if mime_type is not None:
            text = await asyncio.to_thread(self._ocr_client.extract_text, content, mime_type)
            return text or ""
        Log.debug(f"No extractor for {filename}, using empty text")
        return ""

    def _extract_document(self, content: bytes, filename: str) -> str:
        try:
            return self._pdf_extractor.extract(content)
        except PdfExtractionError as exc:
            Log.warning(f"PDF text extraction failed for {filename}: {type(exc).__name__}")
            return ""
