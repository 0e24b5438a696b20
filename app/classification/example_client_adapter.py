"""Example classification client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseClassificationClient and register the provider in ClassifierFactory.
"""

import json
import re

from app.classification.client_base import BaseClassificationClient

_LISTED_FILE = re.compile(r"^- (.+)$", re.MULTILINE)


class ExampleClientAdapter(BaseClassificationClient):
    """Example adapter that files every listed document under Other.

    No network calls. Useful for local development, tests, and as a template
    for building real provider adapters.
    """

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        _ = model, temperature, system_prompt, json_schema
        _, _, listing = user_prompt.partition("ORIGINAL FILENAMES")
        listing, _, _ = listing.partition("CONTENT:")
        file_plan = [
            {
                "original": name,
                "folder": "Other",
                "new_name": name,
                "reason": "Example provider files everything under Other",
            }
            for name in _LISTED_FILE.findall(listing)
        ]
        return json.dumps({
            "summary_for_recipient": f"{len(file_plan)} documents organized.",
            "timeline": [],
            "folders": ["Other", "Unsorted"],
            "file_plan": file_plan,
        })
