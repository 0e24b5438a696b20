from app.config.providers import resolve_base_url
from app.config.settings import Settings
from app.ocr.base import BaseOcrClient
from app.ocr.example_ocr_adapter import ExampleOcrAdapter
from app.ocr.openai_vision_adapter import OpenAIVisionAdapter


class OcrClientFactory:
    """Creates the configured OCR client."""

    @classmethod
    def create(cls, settings: Settings) -> BaseOcrClient:
        if settings.ai_provider.lower() == "example":
            return ExampleOcrAdapter()
        return OpenAIVisionAdapter(
            api_key=settings.ai_api_key,
            model=settings.ocr_model_name,
            timeout_seconds=settings.ai_timeout_seconds,
            max_tokens=settings.ocr_max_tokens,
            base_url=resolve_base_url(settings),
        )
