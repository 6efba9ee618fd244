"""Publish pipeline.

Runs resolve -> build -> upload -> sign inside one StagingWorkspace:

  1. Expand input specs into files (missing literal path aborts the run)
  2. No files at all is a clean no-op: nothing built, uploaded or printed
  3. Stage and zip the files
  4. Upload the zip as `<epoch-seconds>.zip`
  5. Sign a 30-minute read-only URL for it

Stage failures (PublishError) are caught here, logged, and returned as a
failed PublishResult carrying the error kind. Anything else is a bug and
propagates. The workspace is cleaned up on every path out.
"""

import time
import uuid
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Callable, Iterable, Optional

import structlog

from publisher.core.logging import bind_invocation_id
from publisher.packaging.bundler import build_archive
from publisher.packaging.resolver import resolve_inputs
from publisher.packaging.types import PublishError, PublishErrorKind
from publisher.packaging.workspace import StagingWorkspace
from publisher.storage.base import BlobStore
from publisher.storage.signer import issue_download_url
from publisher.storage.uploader import publish_archive

logger = structlog.get_logger(__name__)


class PublishStatus(StrEnum):
    PUBLISHED = "published"
    NO_FILES = "no_files"
    FAILED = "failed"


@dataclass
class PublishResult:
    """Outcome of one publish run.

    url is set only when status is PUBLISHED. error_kind and error are set
    only when status is FAILED.
    """

    status: PublishStatus
    invocation_id: str = ""
    url: Optional[str] = None
    blob_name: Optional[str] = None
    expires_at: Optional[str] = None
    archive_entries: list[str] = field(default_factory=list)
    error_kind: Optional[PublishErrorKind] = None
    error: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.status != PublishStatus.FAILED

    def to_dict(self) -> dict:
        return {
            "status": str(self.status),
            "invocation_id": self.invocation_id,
            "url": self.url,
            "blob_name": self.blob_name,
            "expires_at": self.expires_at,
            "archive_entries": self.archive_entries,
            "error_kind": str(self.error_kind) if self.error_kind else None,
            "error": self.error,
            "is_success": self.is_success,
        }


def publish_artifacts(
    specs: Iterable[str],
    store: BlobStore,
    container: str,
    *,
    base_dir: Optional[Path] = None,
    temp_root: Optional[Path] = None,
    clock: Callable[[], float] = time.time,
) -> PublishResult:
    """Zip the files named by `specs`, upload them, and sign a download URL.

    Args:
        specs: Literal paths and/or glob patterns.
        store: Authenticated BlobStore for the target account.
        container: Target container name.
        base_dir: Directory relative specs resolve against (default: cwd).
        temp_root: Parent of the staging dir and archive (default: system temp).
        clock: Epoch-seconds source used for the blob name.

    Returns:
        A PublishResult; never raises for the enumerated failure kinds.
    """
    spec_list = list(specs)
    invocation_id = uuid.uuid4().hex[:12]

    with bind_invocation_id(invocation_id):
        try:
            with StagingWorkspace(temp_root=temp_root) as workspace:
                files = resolve_inputs(spec_list, base_dir=base_dir)
                if not files:
                    logger.info("publish.no_files", specs=spec_list)
                    return PublishResult(
                        status=PublishStatus.NO_FILES,
                        invocation_id=invocation_id,
                    )

                archive = build_archive(files, workspace)
                blob = publish_archive(store, container, archive, clock=clock)
                download = issue_download_url(store, blob)

        except PublishError as exc:
            logger.error(
                "publish.failed",
                error_kind=str(exc.kind),
                error=str(exc),
                exc_info=exc.cause is not None,
            )
            return PublishResult(
                status=PublishStatus.FAILED,
                invocation_id=invocation_id,
                error_kind=exc.kind,
                error=str(exc),
            )

        logger.info(
            "publish.completed",
            container=blob.container,
            blob_name=blob.name,
            entries=len(archive.entries),
            expires_at=download.grant.expires_on.isoformat(),
        )
        return PublishResult(
            status=PublishStatus.PUBLISHED,
            invocation_id=invocation_id,
            url=download.url,
            blob_name=blob.name,
            expires_at=download.grant.expires_on.isoformat(),
            archive_entries=archive.entries,
        )
