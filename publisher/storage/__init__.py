"""Storage module for blob upload and signed URL issuance.

Public API:
    publish_archive(store, container, archive) -> UploadedBlob
    issue_download_url(store, blob) -> DownloadUrl
    BlobStore — protocol the pipeline depends on
"""

from publisher.storage.base import BlobStore
from publisher.storage.signer import issue_download_url
from publisher.storage.uploader import publish_archive

__all__ = ["BlobStore", "issue_download_url", "publish_archive"]
