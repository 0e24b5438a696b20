import io
import json
import zipfile
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.archive.assembler import ArchiveAssembler
from app.classification.exceptions import AiTimeoutError
from app.extraction.exceptions import TextBudgetExceededError
from app.ocr.exceptions import OcrNetworkError
from app.processor.exceptions import ExtractionFailedError, UploadValidationError
from app.processor.models import UploadedFile
from app.processor.pipeline import PipelineContext
from app.processor.processor import Processor
from app.processor.steps import (
    AggregateTextStep,
    AssembleArchiveStep,
    ClassifyStep,
    ExtractTextStep,
    ReconcileStep,
    ValidateUploadStep,
)

MB = 1024 * 1024


def _upload(name: str, content: bytes = b"data") -> UploadedFile:
    return UploadedFile(name=name, size=len(content), content=content)


def _make_processor(
    extractor: MagicMock,
    classifier: MagicMock,
    max_text_chars: int = 30000,
) -> Processor:
    return Processor(
        steps=[
            ValidateUploadStep(max_files=100, max_file_size_bytes=5 * MB),
            ExtractTextStep(extractor, concurrency=4),
            AggregateTextStep(max_text_chars),
            ClassifyStep(classifier),
            ReconcileStep(),
            AssembleArchiveStep(ArchiveAssembler()),
        ]
    )


def _extractor(texts: dict[str, str] | None = None) -> MagicMock:
    extractor = MagicMock()

    async def extract(content: bytes, filename: str) -> str:
        return (texts or {}).get(filename, f"text of {filename}")

    extractor.extract = AsyncMock(side_effect=extract)
    return extractor


def _classifier(answer: str) -> MagicMock:
    classifier = MagicMock()
    classifier.classify = AsyncMock(return_value=answer)
    return classifier


class TestValidateUploadStep:
    async def test_rejects_empty_batch(self) -> None:
        step = ValidateUploadStep(max_files=100, max_file_size_bytes=5 * MB)
        with pytest.raises(UploadValidationError, match="No files uploaded"):
            await step.run(PipelineContext(files=[]))

    async def test_rejects_too_many_files(self) -> None:
        step = ValidateUploadStep(max_files=100, max_file_size_bytes=5 * MB)
        files = [_upload(f"f{i}.pdf") for i in range(101)]
        with pytest.raises(UploadValidationError, match="Max 100 per run"):
            await step.run(PipelineContext(files=files))

    async def test_rejects_large_file(self) -> None:
        step = ValidateUploadStep(max_files=100, max_file_size_bytes=5 * MB)
        big = UploadedFile(name="big.pdf", size=5 * MB + 1, content=b"")
        with pytest.raises(UploadValidationError, match="File too large: big.pdf. Max 5MB"):
            await step.run(PipelineContext(files=[big]))

    async def test_accepts_file_at_limit(self) -> None:
        step = ValidateUploadStep(max_files=100, max_file_size_bytes=5 * MB)
        ok = UploadedFile(name="ok.pdf", size=5 * MB, content=b"")
        context = await step.run(PipelineContext(files=[ok]))
        assert context.files == [ok]


class TestCheckUploads:
    def test_rejects_over_count_from_metadata(self) -> None:
        processor = _make_processor(_extractor(), _classifier("{}"))
        entries = [(f"f{i}.pdf", 10) for i in range(101)]
        with pytest.raises(UploadValidationError, match="Too many files: 101"):
            processor.check_uploads(entries)

    def test_rejects_oversized_entry(self) -> None:
        processor = _make_processor(_extractor(), _classifier("{}"))
        with pytest.raises(UploadValidationError, match="File too large: big.pdf"):
            processor.check_uploads([("a.pdf", 10), ("big.pdf", 5 * MB + 1)])

    def test_unknown_size_is_left_to_the_pipeline(self) -> None:
        processor = _make_processor(_extractor(), _classifier("{}"))
        processor.check_uploads([("a.pdf", None)])

    def test_processor_without_validation_step_accepts_anything(self) -> None:
        Processor(steps=[ReconcileStep()]).check_uploads([])


class TestExtractTextStep:
    async def test_sanitizes_and_deduplicates_names(self) -> None:
        step = ExtractTextStep(_extractor(), concurrency=2)
        files = [_upload("my scan.png"), _upload("my?scan.png"), _upload("")]
        context = await step.run(PipelineContext(files=files))
        assert context.safe_names == ["my_scan.png", "my_scan_1.png", "upload"]
        assert [r.index for r in context.extraction_results] == [0, 1, 2]

    async def test_ocr_failure_becomes_empty_text(self) -> None:
        extractor = MagicMock()

        async def extract(content: bytes, filename: str) -> str:
            if filename == "bad.png":
                raise OcrNetworkError("OCR provider network error: ConnectError")
            return "ok"

        extractor.extract = AsyncMock(side_effect=extract)
        step = ExtractTextStep(extractor, concurrency=4)
        context = await step.run(PipelineContext(files=[_upload("bad.png"), _upload("good.pdf")]))
        assert [r.text for r in context.extraction_results] == ["", "ok"]
        assert [r.content for r in context.extraction_results] == [b"data", b"data"]

    async def test_unexpected_failure_fails_batch(self) -> None:
        extractor = MagicMock()
        extractor.extract = AsyncMock(side_effect=RuntimeError("bug"))
        step = ExtractTextStep(extractor, concurrency=4)
        with pytest.raises(ExtractionFailedError, match="Failed to extract text"):
            await step.run(PipelineContext(files=[_upload("a.pdf")]))


class TestProcessor:
    async def test_three_file_scenario(self) -> None:
        answer = json.dumps({
            "summary_for_recipient": "A lease, a receipt and an ID.",
            "timeline": [{"date_or_period": "2024", "event": "Moved in"}],
            "folders": ["Contracts", "Expenses", "IDs"],
            "file_plan": [
                {"original": "a.pdf", "folder": "Contracts", "new_name": "Lease.pdf", "reason": "Residential lease agreement"},
                {"original": "b.jpg", "folder": "Expenses", "new_name": "Receipt.jpg", "reason": "Grocery store receipt"},
                {"original": "c.png", "folder": "IDs", "new_name": "Drivers_License.png", "reason": "Photo identification card"},
            ],
        })
        processor = _make_processor(_extractor(), _classifier(answer))
        archive = await processor.process([_upload("a.pdf", b"A"), _upload("b.jpg", b"B"), _upload("c.png", b"C")])

        zf = zipfile.ZipFile(io.BytesIO(archive))
        assert zf.read("Contracts/Lease.pdf") == b"A"
        assert zf.read("Expenses/Receipt.jpg") == b"B"
        assert zf.read("IDs/Drivers_License.png") == b"C"
        assert zf.read("Overview_Summary.txt").decode() == "A lease, a receipt and an ID."
        assert len(zf.read("File_Plan.txt").decode().splitlines()) == 3

    async def test_every_upload_appears_exactly_once(self) -> None:
        answer = json.dumps({
            "file_plan": [
                {"original": "x.pdf", "folder": "Income", "new_name": "Pay.pdf", "reason": "r"},
                {"original": "x_1.pdf", "folder": "Income", "new_name": "Pay.pdf", "reason": "r"},
            ]
        })
        files = [_upload("x.pdf", b"1"), _upload("x.pdf", b"2"), _upload("y.webp", b"3")]
        processor = _make_processor(_extractor(), _classifier(answer))
        archive = await processor.process(files)

        zf = zipfile.ZipFile(io.BytesIO(archive))
        originals = [i for i in zf.infolist() if "/" in i.filename and not i.is_dir()]
        assert len(originals) == 3
        assert len({i.filename for i in originals}) == 3
        assert sorted(zf.read(i) for i in originals) == [b"1", b"2", b"3"]
        assert zf.read("Income/Pay.pdf") == b"1"
        assert zf.read("Income/Pay_1.pdf") == b"2"
        assert zf.read("Unsorted/y.webp") == b"3"

    async def test_unparseable_answer_files_everything_as_unsorted(self) -> None:
        processor = _make_processor(_extractor(), _classifier("I could not read these."))
        archive = await processor.process([_upload("a.pdf", b"A"), _upload("b.jpg", b"B")])
        zf = zipfile.ZipFile(io.BytesIO(archive))
        assert zf.read("Unsorted/a.pdf") == b"A"
        assert zf.read("Unsorted/b.jpg") == b"B"
        assert zf.read("Overview_Summary.txt").decode() == "I could not read these."

    async def test_over_budget_never_calls_classifier(self) -> None:
        classifier = _classifier("{}")
        extractor = _extractor({"a.pdf": "x" * 40})
        processor = _make_processor(extractor, classifier, max_text_chars=30)
        with pytest.raises(TextBudgetExceededError):
            await processor.process([_upload("a.pdf")])
        classifier.classify.assert_not_called()

    async def test_validation_failure_skips_extraction(self) -> None:
        extractor = _extractor()
        processor = _make_processor(extractor, _classifier("{}"))
        with pytest.raises(UploadValidationError, match="100"):
            await processor.process([_upload(f"f{i}.pdf") for i in range(101)])
        extractor.extract.assert_not_called()

    async def test_timeout_propagates(self) -> None:
        classifier = MagicMock()
        classifier.classify = AsyncMock(side_effect=AiTimeoutError(45))
        processor = _make_processor(_extractor(), classifier)
        with pytest.raises(AiTimeoutError):
            await processor.process([_upload("a.pdf")])

    async def test_classifier_receives_sanitized_names(self) -> None:
        classifier = _classifier("{}")
        processor = _make_processor(_extractor(), classifier)
        await processor.process([_upload("tax return.pdf")])
        corpus, names = classifier.classify.call_args.args
        assert names == ["tax_return.pdf"]
        assert "=== FILE: tax_return.pdf ===" in corpus

    async def test_reconcile_and_assemble_are_idempotent(self) -> None:
        answer = json.dumps({"file_plan": [{"original": "a.pdf", "folder": "Income", "new_name": "P.pdf", "reason": "r"}]})
        files = [_upload("a.pdf", b"A"), _upload("b.png", b"B")]
        first = await _make_processor(_extractor(), _classifier(answer)).process(files)
        second = await _make_processor(_extractor(), _classifier(answer)).process(files)
        assert first == second
