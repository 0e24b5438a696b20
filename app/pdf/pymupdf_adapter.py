import pymupdf

from app.pdf.base import BasePdfExtractor
from app.pdf.exceptions import PdfEncryptedError, PdfExtractionError


class PyMuPdfAdapter(BasePdfExtractor):
    """Extracts the text layer of a PDF using PyMuPDF."""

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                if doc.needs_pass:
                    raise PdfEncryptedError("PDF is password protected")
                return self._join_pages([page.get_text() for page in doc])
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf extraction failed: {type(exc).__name__}") from exc
