from abc import ABC, abstractmethod


class BaseOcrClient(ABC):
    """Contract for image-to-text providers."""

    @abstractmethod
    def extract_text(self, image_bytes: bytes, mime_type: str) -> str:
        """Return all readable text in the image, or "" if there is none.

        Raises:
            OcrError: if the provider call fails or its response is unusable.
        """
