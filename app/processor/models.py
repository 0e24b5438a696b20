from dataclasses import dataclass


@dataclass(frozen=True)
class UploadedFile:
    """One file from a multipart upload, held in memory for the request."""

    name: str
    size: int
    content: bytes
