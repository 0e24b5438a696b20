"""Filename helpers shared by extraction, reconciliation and archive assembly."""

import re

DEFAULT_NAME = "file"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.\-]+")


def sanitize(name: str | None) -> str:
    """Replace every run of characters outside [A-Za-z0-9_.-] with '_'.

    A result made only of dots (".", "..") becomes the default name.
    """
    cleaned = _UNSAFE_CHARS.sub("_", name or DEFAULT_NAME)
    return cleaned if is_usable_name(cleaned) else DEFAULT_NAME


def is_usable_name(name: str) -> bool:
    """False for names that are empty, blank or made only of dots."""
    return bool(name.strip().strip("."))


def split_extension(name: str) -> tuple[str, str]:
    """Split 'report.final.PDF' into ('report.final', '.PDF').

    The extension keeps its leading dot and original case; a name without a
    dot has an empty extension.
    """
    idx = name.rfind(".")
    if idx < 0:
        return name, ""
    return name[:idx], name[idx:]


def ensure_extension(original: str | None, suggested: str | None) -> str:
    """Return `suggested` carrying the extension of `original`, if it has one."""
    original = original or ""
    suggested = suggested or ""
    _, original_ext = split_extension(original)
    if not original_ext:
        return suggested
    suggested_base, suggested_ext = split_extension(suggested)
    if not suggested_ext:
        return suggested + original_ext
    if suggested_ext.lower() != original_ext.lower():
        return suggested_base + original_ext
    return suggested


def unique_path(used: set[str], folder: str, filename: str) -> str:
    """Register and return a `folder/filename` path not yet in `used`.

    Collisions insert `_1`, `_2`, ... before the extension.
    """
    return _claim(used, f"{folder}/", filename)


def unique_names(names: list[str]) -> list[str]:
    """Suffix repeated names so every entry is distinct, keeping input order."""
    used: set[str] = set()
    return [_claim(used, "", name) for name in names]


def _claim(used: set[str], prefix: str, filename: str) -> str:
    base, ext = split_extension(filename)
    candidate = f"{prefix}{filename}"
    counter = 1
    while candidate in used:
        candidate = f"{prefix}{base}_{counter}{ext}"
        counter += 1
    used.add(candidate)
    return candidate
