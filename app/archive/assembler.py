"""Builds the ReadyToSend ZIP: renamed originals plus generated text files."""

import io
import zipfile
from collections.abc import Mapping
from typing import ClassVar

from app.classification.models import DEFAULT_FOLDERS, ClassificationPlan, FilePlanEntry
from app.logging.logger import Log
from app.naming.sanitizer import ensure_extension, sanitize, unique_path
from app.reconciliation.reconciler import resolve_folder

SUMMARY_FILE = "Overview_Summary.txt"
TIMELINE_FILE = "Timeline.txt"
FOLDERS_FILE = "Folders.txt"
FILE_PLAN_FILE = "File_Plan.txt"

NO_SUMMARY = "No summary generated."
NO_TIMELINE = "No timeline found."
NO_FILE_PLAN = "No file plan generated."


class ArchiveAssembler:
    """Lays out files by plan and writes them into a single ZIP archive.

    Entries carry a fixed timestamp so identical inputs give identical bytes.
    """

    ENTRY_DATE_TIME: ClassVar[tuple[int, int, int, int, int, int]] = (1980, 1, 1, 0, 0, 0)

    def layout(
        self,
        plan: ClassificationPlan,
        files_by_name: Mapping[str, bytes],
    ) -> list[tuple[str, FilePlanEntry | None, bytes]]:
        """Resolve a unique archive path for every file, in input order."""
        entries = {entry.original: entry for entry in plan.file_plan}
        used: set[str] = set()
        resolved: list[tuple[str, FilePlanEntry | None, bytes]] = []
        for original, content in files_by_name.items():
            entry = entries.get(original)
            folder = resolve_folder(entry.folder if entry else None)
            new_name = entry.new_name if entry else original
            filename = sanitize(ensure_extension(original, new_name))
            resolved.append((unique_path(used, folder, filename), entry, content))
        return resolved

    def assemble(self, plan: ClassificationPlan, files_by_name: Mapping[str, bytes]) -> bytes:
        layout = self.layout(plan, files_by_name)
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            self._write_text(archive, SUMMARY_FILE, plan.summary or NO_SUMMARY)
            self._write_text(archive, TIMELINE_FILE, self._timeline_text(plan))
            for folder in DEFAULT_FOLDERS:
                self._write_dir(archive, folder)
            for path, _, content in layout:
                self._write(archive, path, content)
            self._write_text(archive, FOLDERS_FILE, self._folders_text(plan))
            self._write_text(archive, FILE_PLAN_FILE, self._file_plan_text(layout))
        Log.info(f"Assembled archive with {len(layout)} files")
        return buf.getvalue()

    @staticmethod
    def _timeline_text(plan: ClassificationPlan) -> str:
        lines = [f"- {item.period}: {item.event}" for item in plan.timeline]
        return "\n".join(lines) if lines else NO_TIMELINE

    @staticmethod
    def _folders_text(plan: ClassificationPlan) -> str:
        folders = [sanitize(folder) for folder in plan.folders]
        return "\n".join(folders or DEFAULT_FOLDERS)

    @staticmethod
    def _file_plan_text(layout: list[tuple[str, FilePlanEntry | None, bytes]]) -> str:
        lines = [
            f"{entry.original} -> {path} ({entry.reason})"
            for path, entry, _ in layout
            if entry is not None
        ]
        return "\n".join(lines) if lines else NO_FILE_PLAN

    def _write_text(self, archive: zipfile.ZipFile, name: str, text: str) -> None:
        self._write(archive, name, text.encode("utf-8"))

    def _write(self, archive: zipfile.ZipFile, name: str, content: bytes) -> None:
        info = zipfile.ZipInfo(name, date_time=self.ENTRY_DATE_TIME)
        info.compress_type = zipfile.ZIP_DEFLATED
        info.external_attr = 0o644 << 16
        archive.writestr(info, content)

    def _write_dir(self, archive: zipfile.ZipFile, folder: str) -> None:
        info = zipfile.ZipInfo(f"{folder}/", date_time=self.ENTRY_DATE_TIME)
        info.external_attr = (0o40755 << 16) | 0x10
        archive.writestr(info, b"")
