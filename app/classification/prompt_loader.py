from pathlib import Path

from app.classification.exceptions import ClassificationError

PROMPT_DIR = Path(__file__).parent / "prompts"
PROMPT_TEMPLATE_FILE = "classification_prompt.txt"
JSON_SCHEMA_FILE = "classification_schema.json"


def load_prompt_template(path: Path | None = None) -> str:
    """Return the prompt template with its {json_schema}, {folders}, {file_names}
    and {corpus} placeholders still in place."""
    return _read_prompt_file(path or PROMPT_DIR / PROMPT_TEMPLATE_FILE, "prompt template")


def load_json_schema(path: Path | None = None) -> str:
    return _read_prompt_file(path or PROMPT_DIR / JSON_SCHEMA_FILE, "JSON schema")


def _read_prompt_file(path: Path, label: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ClassificationError(f"Failed to load {label}: {exc}") from exc
