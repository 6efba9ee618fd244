"""Shared access signature issuance for uploaded blobs.

Generates a short-lived, read-only download URL for exactly one blob.
The validity window is fixed at 30 minutes and is not configurable.

Signing happens locally with the account key; failures (missing or
malformed key material) are reported as TokenIssuanceError.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from publisher.packaging.types import TokenIssuanceError
from publisher.storage.base import BlobStore
from publisher.storage.types import DownloadUrl, SasGrant, UploadedBlob

logger = logging.getLogger(__name__)

SAS_VALIDITY = timedelta(minutes=30)
READ_PERMISSION = "r"


def issue_download_url(
    store: BlobStore,
    blob: UploadedBlob,
    now: Optional[datetime] = None,
) -> DownloadUrl:
    """Sign a read-only URL for `blob` that expires 30 minutes from `now`.

    Args:
        store: The store the blob was uploaded to.
        blob: Reference returned by publish_archive().
        now: Issuance time (UTC). Defaults to the current time.

    Returns:
        DownloadUrl whose url is `blob.url + "?" + token`.

    Raises:
        TokenIssuanceError: If the store cannot produce a signature.
    """
    issued_at = now or datetime.now(timezone.utc)
    grant = SasGrant(
        container=blob.container,
        blob_name=blob.name,
        permission=READ_PERMISSION,
        issued_at=issued_at,
        expires_on=issued_at + SAS_VALIDITY,
    )

    try:
        token = store.generate_read_sas(blob.container, blob.name, grant.expires_on)
    except Exception as exc:
        raise TokenIssuanceError(
            f"Failed to sign download URL for {blob.name}: {exc}", cause=exc,
        ) from exc

    if not token:
        raise TokenIssuanceError(f"Store returned an empty SAS token for {blob.name}")

    logger.info(
        "Issued read-only URL for %s/%s, expires %s",
        blob.container, blob.name, grant.expires_on.isoformat(),
    )
    return DownloadUrl(url=f"{blob.url}?{token.lstrip('?')}", grant=grant)
