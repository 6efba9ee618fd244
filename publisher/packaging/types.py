"""Types for the packaging stage: resolved inputs, built archives, and errors.

The PublishError family is raised by individual stages and converted into a
PublishResult at the pipeline boundary, so callers see one result type with
an explicit error kind instead of a bare exception.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class ResolvedFile:
    """A concrete regular file produced by expanding one input spec."""

    path: Path
    size_bytes: int
    spec: str

    @property
    def name(self) -> str:
        return self.path.name


@dataclass
class ArchiveArtifact:
    """A fully written zip archive.

    entries lists the archive member names in the order they were written.
    """

    path: Path
    entries: list[str] = field(default_factory=list)
    size_bytes: int = 0


class PublishErrorKind(StrEnum):
    """Normalized failure kinds reported in a PublishResult."""

    INPUT_NOT_FOUND = "input_not_found"
    ARCHIVE_BUILD_FAILURE = "archive_build_failure"
    UPLOAD_FAILURE = "upload_failure"
    TOKEN_ISSUANCE_FAILURE = "token_issuance_failure"


class PublishError(Exception):
    """Base class for stage failures that end a publish run.

    Carries the error kind and the original error for upstream logging.
    """

    kind: PublishErrorKind

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)


class InputNotFoundError(PublishError):
    """A literal input spec does not name an existing regular file."""

    kind = PublishErrorKind.INPUT_NOT_FOUND

    def __init__(self, spec: str):
        self.spec = spec
        super().__init__(f"File not found: {spec!r}")


class ArchiveBuildError(PublishError):
    """Copying into the staging area or compressing it failed."""

    kind = PublishErrorKind.ARCHIVE_BUILD_FAILURE


class UploadError(PublishError):
    """The storage service rejected the upload or the transport failed."""

    kind = PublishErrorKind.UPLOAD_FAILURE


class TokenIssuanceError(PublishError):
    """The shared access signature could not be generated."""

    kind = PublishErrorKind.TOKEN_ISSUANCE_FAILURE
