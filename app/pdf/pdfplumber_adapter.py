import io

import pdfplumber
from pdfminer.pdfdocument import PDFPasswordIncorrect

from app.pdf.base import BasePdfExtractor
from app.pdf.exceptions import PdfEncryptedError, PdfExtractionError


class PdfPlumberAdapter(BasePdfExtractor):
    """Extracts the text layer of a PDF using pdfplumber."""

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                return self._join_pages([page.extract_text() or "" for page in pdf.pages])
        except Exception as exc:
            if _is_password_error(exc):
                raise PdfEncryptedError("PDF is password protected") from exc
            raise PdfExtractionError(f"pdfplumber extraction failed: {type(exc).__name__}") from exc


def _is_password_error(exc: Exception) -> bool:
    # pdfplumber wraps pdfminer errors in PdfminerException(original)
    wrapped = exc.args[0] if exc.args else None
    return isinstance(exc, PDFPasswordIncorrect) or isinstance(wrapped, PDFPasswordIncorrect)
