"""Blob uploader — publishes a built archive under a time-derived name.

Blob names are `<epoch-seconds>.zip`. The upload never overwrites: if a
blob with that name already exists (two runs in the same second), the
store rejects it and the run fails with UploadError rather than replacing
someone else's artifact.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Callable

from publisher.packaging.types import ArchiveArtifact, UploadError
from publisher.storage.base import BlobStore
from publisher.storage.types import UploadedBlob

logger = logging.getLogger(__name__)


def generate_blob_name(clock: Callable[[], float] = time.time) -> str:
    """Return a blob name derived from the current epoch second."""
    return f"{int(clock())}.zip"


def publish_archive(
    store: BlobStore,
    container: str,
    archive: ArchiveArtifact,
    clock: Callable[[], float] = time.time,
) -> UploadedBlob:
    """Upload the archive as a new blob.

    Returns an UploadedBlob reference for signing.

    Raises:
        UploadError: Wrapping whatever the store or transport raised.
    """
    blob_name = generate_blob_name(clock)
    logger.info(
        "Uploading %s (%d bytes) to %s/%s",
        archive.path.name, archive.size_bytes, container, blob_name,
    )

    try:
        with archive.path.open("rb") as data:
            store.upload(container, blob_name, data)
        url = store.blob_url(container, blob_name)
    except Exception as exc:
        raise UploadError(
            f"Upload of {blob_name} to container {container!r} failed: {exc}",
            cause=exc,
        ) from exc

    return UploadedBlob(
        container=container,
        name=blob_name,
        url=url,
        uploaded_at=datetime.now(timezone.utc),
    )
