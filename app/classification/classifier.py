"""AI-powered document classifier."""

import asyncio
import json
from pathlib import Path

from app.classification.client_base import BaseClassificationClient
from app.classification.exceptions import AiTimeoutError
from app.classification.models import DEFAULT_FOLDERS
from app.classification.prompt_loader import load_json_schema, load_prompt_template
from app.extraction.aggregator import file_names_from_corpus
from app.logging.logger import Log


class Classifier:
    """Asks an AI provider for a folder plan covering every file in a corpus."""

    def __init__(
        self,
        *,
        client: BaseClassificationClient,
        model: str,
        temperature: float = 0.0,
        timeout_seconds: float = 45.0,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
        system_prompt: str = "",
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._timeout_seconds = timeout_seconds
        self._system_prompt = system_prompt
        self._prompt_template = load_prompt_template(prompt_template_path)
        schema_str = load_json_schema(json_schema_path)
        self._json_schema = schema_str
        self._json_schema_dict = json.loads(schema_str)

    async def classify(self, corpus: str, file_names: list[str] | None = None) -> str:
        """Return the provider's raw (expected JSON) answer for `corpus`.

        `file_names` defaults to the labels found in the corpus.

        Raises:
            AiTimeoutError: if the provider does not answer within the deadline.
                The in-flight call is abandoned, not cancelled.
            ClassificationError: on provider failure.
        """
        if file_names is None:
            file_names = file_names_from_corpus(corpus)
        prompt = self._build_prompt(corpus, file_names)
        Log.debug(f"Classification prompt:\n{prompt}")

        try:
            raw_response = await asyncio.wait_for(
                asyncio.to_thread(self._call_ai, prompt),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise AiTimeoutError(self._timeout_seconds) from exc

        Log.debug(f"AI raw response:\n{raw_response}")
        Log.info(f"Classification complete: {len(raw_response)} chars for {len(file_names)} files")
        return raw_response

    def _build_prompt(self, corpus: str, file_names: list[str]) -> str:
        listing = "\n".join(f"- {name}" for name in file_names) or "(none found)"
        return self._prompt_template.format(
            json_schema=self._json_schema,
            folders=", ".join(DEFAULT_FOLDERS),
            file_names=listing,
            corpus=corpus,
        )

    def _call_ai(self, prompt: str) -> str:
        return self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
            json_schema=self._json_schema_dict,
        )
