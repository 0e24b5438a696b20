import base64

import httpx
import openai

from app.ocr.base import BaseOcrClient
from app.ocr.exceptions import OcrError, OcrNetworkError, OcrServiceError

OCR_INSTRUCTION = "Extract all readable text from this image. Return only the text."


class OpenAIVisionAdapter(BaseOcrClient):
    """OCR via an OpenAI-compatible vision chat model."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        timeout_seconds: int,
        max_tokens: int = 4096,
        base_url: str | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        # Single attempt per call.
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
            http_client=http_client,
        )
        self._model = model
        self._max_tokens = max_tokens

    def extract_text(self, image_bytes: bytes, mime_type: str) -> str:
        data_url = f"data:{mime_type};base64,{base64.b64encode(image_bytes).decode('ascii')}"
        try:
            response = self._client.chat.completions.create(
                model=self._model,
                temperature=0,
                max_tokens=self._max_tokens,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": OCR_INSTRUCTION},
                            {"type": "image_url", "image_url": {"url": data_url}},
                        ],
                    }
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise OcrNetworkError(f"OCR provider network error: {type(exc).__name__}") from exc
        except openai.APIError as exc:
            raise OcrServiceError(f"OCR provider API error: {type(exc).__name__}") from exc

        choices = getattr(response, "choices", None)
        if choices is None:
            raise OcrError("OCR provider returned a malformed response")
        if not choices:
            return ""
        return choices[0].message.content or ""
