from app.config.settings import Settings

OPENAI_COMPATIBLE_BASE_URLS: dict[str, str] = {
    "openrouter": "https://openrouter.ai/api/v1",
    "groq": "https://api.groq.com/openai/v1",
    "together": "https://api.together.xyz/v1",
    "deepseek": "https://api.deepseek.com/v1",
    "ollama": "http://localhost:11434/v1",
}

SUPPORTED_PROVIDERS = [
    "example",
    "openai",
    "openai_compatible",
    *sorted(OPENAI_COMPATIBLE_BASE_URLS),
]


def resolve_base_url(settings: Settings) -> str | None:
    """Return the OpenAI-compatible base URL for the configured AI provider.

    Raises:
        ValueError: for an unknown provider, or openai_compatible without a URL.
    """
    provider = settings.ai_provider.lower()
    if provider == "openai":
        return settings.ai_base_url.strip() or None
    if provider == "openai_compatible":
        url = settings.ai_base_url.strip()
        if not url:
            raise ValueError(
                "ai_base_url is required for ai_provider=openai_compatible"
            )
        return url
    default_base_url = OPENAI_COMPATIBLE_BASE_URLS.get(provider)
    if default_base_url is not None:
        return settings.ai_base_url.strip() or default_base_url
    raise ValueError(
        f"Unknown AI provider '{provider}'. Choose from: {SUPPORTED_PROVIDERS}"
    )
