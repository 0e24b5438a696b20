from app.archive.assembler import ArchiveAssembler
from app.classification.classifier import Classifier
from app.extraction.aggregator import aggregate
from app.extraction.exceptions import TextBudgetExceededError
from app.extraction.extractor import TextExtractor
from app.extraction.models import ExtractionResult
from app.extraction.runner import map_limit
from app.logging.logger import Log
from app.naming.sanitizer import sanitize, unique_names
from app.ocr.exceptions import OcrError, OcrNetworkError, OcrServiceError
from app.processor.exceptions import ExtractionFailedError, UploadValidationError
from app.processor.models import UploadedFile
from app.processor.pipeline import PipelineContext, PipelineStep
from app.reconciliation.reconciler import reconcile


class ValidateUploadStep(PipelineStep):
    def __init__(self, max_files: int, max_file_size_bytes: int) -> None:
        self._max_files = max_files
        self._max_file_size_bytes = max_file_size_bytes

    async def run(self, context: PipelineContext) -> PipelineContext:
        self.check([(upload.name, upload.size) for upload in context.files])
        return context

    def check(self, entries: list[tuple[str, int | None]]) -> None:
        """Validate a batch from (name, size) pairs; an unknown size is skipped."""
        if not entries:
            raise UploadValidationError("No files uploaded")
        if len(entries) > self._max_files:
            raise UploadValidationError(
                f"Too many files: {len(entries)}. Max {self._max_files} per run. "
                "Please split into smaller batches."
            )
        for name, size in entries:
            if size is not None and size > self._max_file_size_bytes:
                max_mb = self._max_file_size_bytes // (1024 * 1024)
                raise UploadValidationError(f"File too large: {name}. Max {max_mb}MB per file.")


class ExtractTextStep(PipelineStep):
    """Extracts text from every file with bounded concurrency.

    A failing file contributes empty text instead of failing the batch.
    """

    def __init__(self, extractor: TextExtractor, concurrency: int) -> None:
        self._extractor = extractor
        self._concurrency = concurrency

    async def run(self, context: PipelineContext) -> PipelineContext:
        safe_names = unique_names([sanitize(f.name or "upload") for f in context.files])

        async def extract_one(upload: UploadedFile, index: int) -> ExtractionResult:
            safe_name = safe_names[index]
            text = await self._extract_or_empty(upload.content, safe_name)
            return ExtractionResult(
                index=index,
                safe_name=safe_name,
                content=upload.content,
                text=text,
            )

        try:
            context.extraction_results = await map_limit(
                context.files, self._concurrency, extract_one
            )
        except Exception as exc:
            Log.error(f"generate: extract_error {type(exc).__name__}")
            raise ExtractionFailedError("Failed to extract text from one or more files.") from exc

        total = sum(len(result.text) for result in context.extraction_results)
        Log.info(f"Extracted {total} chars from {len(context.extraction_results)} files")
        return context

    async def _extract_or_empty(self, content: bytes, safe_name: str) -> str:
        try:
            return await self._extractor.extract(content, safe_name)
        except OcrError as exc:
            Log.warning(f"Extraction failed for {safe_name} ({_failure_kind(exc)}): {exc}")
            return ""


def _failure_kind(exc: OcrError) -> str:
    if isinstance(exc, OcrNetworkError):
        return "network error"
    if isinstance(exc, OcrServiceError):
        return "service error"
    return "malformed response"


class AggregateTextStep(PipelineStep):
    def __init__(self, max_text_chars: int) -> None:
        self._max_text_chars = max_text_chars

    async def run(self, context: PipelineContext) -> PipelineContext:
        try:
            context.corpus = aggregate(context.extraction_results, self._max_text_chars)
        except TextBudgetExceededError:
            Log.warning(
                f"generate: reject_text_limit limit={self._max_text_chars} "
                f"files={len(context.files)}"
            )
            raise
        return context


class ClassifyStep(PipelineStep):
    def __init__(self, classifier: Classifier) -> None:
        self._classifier = classifier

    async def run(self, context: PipelineContext) -> PipelineContext:
        context.raw_output = await self._classifier.classify(
            context.corpus, context.safe_names
        )
        return context


class ReconcileStep(PipelineStep):
    async def run(self, context: PipelineContext) -> PipelineContext:
        context.plan = reconcile(context.raw_output, context.safe_names)
        return context


class AssembleArchiveStep(PipelineStep):
    def __init__(self, assembler: ArchiveAssembler) -> None:
        self._assembler = assembler

    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.plan is None:
            raise ValueError("PipelineContext.plan must be set before archive assembly")
        files_by_name = {r.safe_name: r.content for r in context.extraction_results}
        context.archive = self._assembler.assemble(context.plan, files_by_name)
        return context
