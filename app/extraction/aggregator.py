import re
from collections.abc import Iterable

from app.extraction.exceptions import TextBudgetExceededError
from app.extraction.models import ExtractionResult

_FILE_LABEL = re.compile(r"^=== FILE:\s*(.+?)\s*===\s*$", re.MULTILINE | re.IGNORECASE)


def file_chunk(name: str, text: str) -> str:
    return f"\n\n=== FILE: {name} ===\n{text}"


def aggregate(results: Iterable[ExtractionResult], limit_chars: int) -> str:
    """Concatenate labeled per-file chunks in input order.

    Raises:
        TextBudgetExceededError: as soon as the next chunk would push the
            corpus past `limit_chars`. Nothing is truncated.
    """
    parts: list[str] = []
    length = 0
    for result in results:
        chunk = file_chunk(result.safe_name, result.text)
        if length + len(chunk) > limit_chars:
            raise TextBudgetExceededError(limit_chars)
        parts.append(chunk)
        length += len(chunk)
    return "".join(parts)


def file_names_from_corpus(corpus: str) -> list[str]:
    """Recover the file labels written by `aggregate`, in order."""
    return [match.strip() for match in _FILE_LABEL.findall(corpus)]
