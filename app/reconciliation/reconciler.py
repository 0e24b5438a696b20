"""Repairs a classifier answer into a plan that covers every uploaded file once.

The uploaded names are authoritative: entries the model invents are ignored,
files it forgets get a fallback entry, folders outside the fixed taxonomy
become Unsorted, and every new name keeps the original's extension.
"""

import json
from typing import Any

from app.classification.models import (
    DEFAULT_FOLDERS,
    UNSORTED,
    ClassificationPlan,
    FilePlanEntry,
    TimelineEvent,
)
from app.logging.logger import Log
from app.naming.sanitizer import ensure_extension, is_usable_name, sanitize, split_extension

PARSE_FAILURE_REASON = "Failed to parse model output"
MISSING_ENTRY_REASON = "Insufficient signal to classify confidently"
NO_REASON = "No reason provided"

_FALLBACK_BASE_CHARS = 40


class MalformedModelOutput(ValueError):
    """Raised internally when the classifier answer is not a JSON object."""


def reconcile(raw_output: str, original_names: list[str]) -> ClassificationPlan:
    """Build a plan with exactly one entry per name in `original_names`.

    Never raises on bad model output: an unparseable answer yields a plan that
    files everything under Unsorted and keeps the raw text as the summary.
    """
    try:
        parsed = parse_model_output(raw_output)
    except MalformedModelOutput as exc:
        Log.warning(f"Classifier output could not be parsed, using fallback plan: {exc}")
        return fallback_plan(raw_output, original_names)

    proposed = parsed.get("file_plan")
    entries = [p for p in proposed if isinstance(p, dict)] if isinstance(proposed, list) else []
    matches = [(name, _find_entry(entries, name)) for name in original_names]
    file_plan = [_reconcile_entry(name, entry) for name, entry in matches]

    missing = sum(1 for _, entry in matches if entry is None)
    if missing:
        Log.warning(f"Classifier omitted {missing} of {len(original_names)} files")

    summary = parsed.get("summary_for_recipient")
    return ClassificationPlan(
        summary=summary if isinstance(summary, str) else "",
        timeline=_build_timeline(parsed.get("timeline")),
        folders=list(DEFAULT_FOLDERS),
        file_plan=file_plan,
    )


def fallback_plan(raw_output: str, original_names: list[str]) -> ClassificationPlan:
    """Plan used when the classifier answer is unusable."""
    return ClassificationPlan(
        summary=(raw_output or "").strip(),
        timeline=[],
        folders=list(DEFAULT_FOLDERS),
        file_plan=[
            FilePlanEntry(
                original=name,
                folder=UNSORTED,
                new_name=name,
                reason=PARSE_FAILURE_REASON,
            )
            for name in original_names
        ],
    )


def parse_model_output(raw: str) -> dict[str, Any]:
    cleaned = (raw or "").strip()
    if cleaned.startswith("```"):
        lines = cleaned.splitlines()
        if lines and lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines)

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise MalformedModelOutput(f"Invalid JSON response: {exc}") from exc

    if not isinstance(parsed, dict):
        raise MalformedModelOutput("JSON response must be an object")
    return parsed


def resolve_folder(folder: object) -> str:
    """Return the sanitized folder if it is in the taxonomy, else Unsorted."""
    if not isinstance(folder, str) or not folder.strip():
        return UNSORTED
    candidate = sanitize(folder.strip())
    return candidate if candidate in DEFAULT_FOLDERS else UNSORTED


def _find_entry(entries: list[dict[str, Any]], name: str) -> dict[str, Any] | None:
    for entry in entries:
        if entry.get("original") == name:
            return entry
    return None


def _reconcile_entry(name: str, entry: dict[str, Any] | None) -> FilePlanEntry:
    new_name = entry.get("new_name") if entry is not None else None
    # An entry without a usable name counts as missing.
    if not isinstance(new_name, str) or not is_usable_name(new_name):
        base, ext = split_extension(name)
        return FilePlanEntry(
            original=name,
            folder=UNSORTED,
            new_name=f"{base[:_FALLBACK_BASE_CHARS] or 'file'}{ext}",
            reason=MISSING_ENTRY_REASON,
        )
    reason = entry.get("reason")
    return FilePlanEntry(
        original=name,
        folder=resolve_folder(entry.get("folder")),
        new_name=ensure_extension(name, new_name.strip()),
        reason=reason.strip() if isinstance(reason, str) and reason.strip() else NO_REASON,
    )


def _build_timeline(raw: object) -> list[TimelineEvent]:
    if not isinstance(raw, list):
        return []
    events: list[TimelineEvent] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        period = item.get("date_or_period", item.get("period", ""))
        event = item.get("event", "")
        events.append(TimelineEvent(period=str(period or ""), event=str(event or "")))
    return events
