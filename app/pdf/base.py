from abc import ABC, abstractmethod


class BasePdfExtractor(ABC):
    """Contract for embedded-text PDF extraction adapters."""

    PAGE_SEPARATOR = "\n\n"

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> str:
        """Extract the embedded text layer of a PDF.

        Scanned PDFs without a text layer yield "".

        Raises:
            PdfExtractionError: if the bytes are not a readable PDF.
        """

    def _join_pages(self, pages: list[str]) -> str:
        return self.PAGE_SEPARATOR.join(page.strip() for page in pages if page.strip())
