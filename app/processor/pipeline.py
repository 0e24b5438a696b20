from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from app.classification.models import ClassificationPlan
from app.extraction.models import ExtractionResult
from app.processor.models import UploadedFile


@dataclass(slots=True)
class PipelineContext:
    files: list[UploadedFile]
    extraction_results: list[ExtractionResult] = field(default_factory=list)
    corpus: str = ""
    raw_output: str = ""
    plan: ClassificationPlan | None = None
    archive: bytes = b""

    @property
    def safe_names(self) -> list[str]:
        return [result.safe_name for result in self.extraction_results]


class PipelineStep(ABC):
    @abstractmethod
    async def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
