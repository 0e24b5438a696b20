from app.archive.assembler import ArchiveAssembler
from app.classification.factory import ClassifierFactory
from app.config.settings import Settings
from app.extraction.extractor import TextExtractor
from app.logging.logger import Log
from app.ocr.factory import OcrClientFactory
from app.pdf.factory import PdfExtractorFactory
from app.processor.models import UploadedFile
from app.processor.pipeline import PipelineContext, PipelineStep
from app.processor.steps import (
    AggregateTextStep,
    AssembleArchiveStep,
    ClassifyStep,
    ExtractTextStep,
    ReconcileStep,
    ValidateUploadStep,
)


class Processor:
    """Orchestrates one upload batch through the organizing pipeline.

    Pipeline: validate -> extract -> aggregate -> classify -> reconcile -> assemble.
    """

    def __init__(self, steps: list[PipelineStep]) -> None:
        self._steps = steps

    async def process(self, files: list[UploadedFile]) -> bytes:
        """Return the ZIP archive for `files`.

        Raises:
            UploadValidationError, TextBudgetExceededError, ExtractionFailedError,
            AiTimeoutError, ClassificationError: see the individual steps.
        """
        Log.info(f"generate: start files={len(files)}")
        context = PipelineContext(files=files)
        for step in self._steps:
            context = await step.run(context)
        Log.info(f"generate: success files={len(files)} archive_bytes={len(context.archive)}")
        return context.archive

    def check_uploads(self, entries: list[tuple[str, int | None]]) -> None:
        """Apply the upload limits to (name, size) pairs before any content is read."""
        for step in self._steps:
            if isinstance(step, ValidateUploadStep):
                step.check(entries)


def build_processor(settings: Settings) -> Processor:
    """Build a Processor with all required adapters."""
    extractor = TextExtractor(
        pdf_extractor=PdfExtractorFactory.create(settings),
        ocr_client=OcrClientFactory.create(settings),
    )
    classifier = ClassifierFactory.create(settings)
    return Processor(
        steps=[
            ValidateUploadStep(settings.max_files, settings.max_file_size_bytes),
            ExtractTextStep(extractor, settings.extract_concurrency),
            AggregateTextStep(settings.max_text_chars),
            ClassifyStep(classifier),
            ReconcileStep(),
            AssembleArchiveStep(ArchiveAssembler()),
        ]
    )
