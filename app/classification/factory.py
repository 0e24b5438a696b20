from app.classification.classifier import Classifier
from app.classification.example_client_adapter import ExampleClientAdapter
from app.classification.openai_client_adapter import OpenAIClientAdapter
from app.config.providers import resolve_base_url
from app.config.settings import Settings


class ClassifierFactory:
    """Creates the configured classifier."""

    @classmethod
    def create(cls, settings: Settings) -> Classifier:
        """Create a configured classifier from application settings."""
        if settings.ai_provider.lower() == "example":
            return Classifier(
                client=ExampleClientAdapter(),
                model="example",
                timeout_seconds=settings.classification_timeout_seconds,
            )
        client = OpenAIClientAdapter(
            api_key=settings.ai_api_key,
            timeout_seconds=settings.ai_timeout_seconds,
            base_url=resolve_base_url(settings),
        )
        return Classifier(
            client=client,
            model=settings.classification_model_name,
            temperature=settings.classification_temperature,
            timeout_seconds=settings.classification_timeout_seconds,
        )
