from unittest.mock import MagicMock, patch

from app.ocr.example_ocr_adapter import ExampleOcrAdapter
from app.ocr.factory import OcrClientFactory
from app.ocr.openai_vision_adapter import OpenAIVisionAdapter


def _make_settings(provider: str) -> MagicMock:
    return MagicMock(
        ai_provider=provider,
        ai_api_key="k",
        ai_base_url="",
        ai_timeout_seconds=30,
        ocr_model_name="vision",
        ocr_max_tokens=4096,
    )


class TestOcrClientFactory:
    def test_example_provider(self) -> None:
        client = OcrClientFactory.create(_make_settings("example"))
        assert isinstance(client, ExampleOcrAdapter)
        assert client.extract_text(b"img", "image/png") == ""

    def test_openai_provider(self) -> None:
        with patch("app.ocr.openai_vision_adapter.openai.OpenAI") as mock_openai:
            client = OcrClientFactory.create(_make_settings("openai"))
        assert isinstance(client, OpenAIVisionAdapter)
        assert mock_openai.call_args.kwargs["base_url"] is None

    def test_compatible_provider_gets_base_url(self) -> None:
        with patch("app.ocr.openai_vision_adapter.openai.OpenAI") as mock_openai:
            OcrClientFactory.create(_make_settings("openrouter"))
        assert mock_openai.call_args.kwargs["base_url"] == "https://openrouter.ai/api/v1"
