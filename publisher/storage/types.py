"""Types for the storage stage: uploaded blobs and their signed URLs."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class UploadedBlob:
    """Reference to a blob this run created."""

    container: str
    name: str
    url: str
    uploaded_at: datetime


@dataclass(frozen=True)
class SasGrant:
    """Scope of a shared access signature.

    Always read-only and scoped to a single blob.
    """

    container: str
    blob_name: str
    permission: str
    issued_at: datetime
    expires_on: datetime


@dataclass(frozen=True)
class DownloadUrl:
    """Blob URI plus SAS query string. Valid until grant.expires_on."""

    url: str
    grant: SasGrant

    def __str__(self) -> str:
        return self.url
