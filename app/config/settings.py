from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 8000

    upload_field_name: str = "files"
    max_files: int = 100
    max_file_size_mb: int = 5
    max_text_chars: int = 30000
    extract_concurrency: int = 4
    classification_timeout_seconds: float = 45.0

    pdf_engine: str = "pdfplumber"

    ai_provider: str = "openai"
    ai_api_key: str = ""
    ai_base_url: str = ""
    ai_timeout_seconds: int = 60

    classification_model_name: str = "gpt-4.1-mini"
    classification_temperature: float = 0.0

    ocr_model_name: str = "gpt-4.1-mini"
    ocr_max_tokens: int = 4096

    waitlist_path: str = "data/waitlist.txt"

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024
