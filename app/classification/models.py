from dataclasses import dataclass, field

UNSORTED = "Unsorted"

DEFAULT_FOLDERS: tuple[str, ...] = (
    "Income",
    "Expenses",
    "Bank_Statements",
    "Emails",
    "Contracts",
    "IDs",
    "Medical",
    "Education",
    "Other",
    UNSORTED,
)


@dataclass(frozen=True)
class TimelineEvent:
    """A dated event found in the documents."""

    period: str
    event: str


@dataclass(frozen=True)
class FilePlanEntry:
    """Destination of one uploaded file."""

    original: str
    folder: str
    new_name: str
    reason: str


@dataclass(frozen=True)
class ClassificationPlan:
    """Folder plan for a batch.

    After reconciliation `file_plan` holds exactly one entry per uploaded file,
    in upload order.
    """

    summary: str = ""
    timeline: list[TimelineEvent] = field(default_factory=list)
    folders: list[str] = field(default_factory=lambda: list(DEFAULT_FOLDERS))
    file_plan: list[FilePlanEntry] = field(default_factory=list)
