import httpx
import openai

from app.classification.client_base import BaseClassificationClient
from app.classification.exceptions import ClassificationError, ClassificationNetworkError


class OpenAIClientAdapter(BaseClassificationClient):
    """Classification AI client adapter built on OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
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

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        messages = [{"role": "user", "content": user_prompt}]
        if system_prompt:
            messages.insert(0, {"role": "system", "content": system_prompt})
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": "file_plan",
                        "strict": True,
                        "schema": json_schema,
                    },
                },
                messages=messages,
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ClassificationNetworkError(
                f"AI provider network error: {type(exc).__name__}"
            ) from exc
        except openai.APIError as exc:
            raise ClassificationNetworkError(
                f"AI provider API error: {type(exc).__name__}"
            ) from exc

        if not response.choices:
            raise ClassificationError("AI returned no choices")
        # An empty message is malformed output; the reconciler falls back on it.
        return response.choices[0].message.content or ""
