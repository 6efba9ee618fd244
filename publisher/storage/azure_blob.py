"""Azure Blob Storage implementation of the BlobStore protocol.

Authenticates with the storage account's shared key. The same key signs
SAS tokens locally, so issuing a download URL needs no extra round trip.
"""

import logging
from datetime import datetime
from typing import BinaryIO

from azure.storage.blob import (
    BlobSasPermissions,
    BlobServiceClient,
    ContentSettings,
    generate_blob_sas,
)

from publisher.core.config import Settings

logger = logging.getLogger(__name__)

ZIP_CONTENT_TYPE = "application/zip"


class AzureBlobStore:
    """BlobStore backed by azure-storage-blob."""

    def __init__(self, account_name: str, account_key: str, account_url: str):
        self.account_name = account_name
        self._account_key = account_key
        self._service = BlobServiceClient(
            account_url=account_url,
            credential={"account_name": account_name, "account_key": account_key},
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "AzureBlobStore":
        return cls(
            account_name=settings.storage_account_name,
            account_key=settings.storage_account_key,
            account_url=settings.account_url,
        )

    def upload(self, container: str, blob_name: str, data: BinaryIO) -> None:
        blob_client = self._service.get_blob_client(container=container, blob=blob_name)
        blob_client.upload_blob(
            data,
            overwrite=False,
            content_settings=ContentSettings(content_type=ZIP_CONTENT_TYPE),
        )
        logger.debug("Uploaded blob %s/%s", container, blob_name)

    def blob_url(self, container: str, blob_name: str) -> str:
        return self._service.get_blob_client(container=container, blob=blob_name).url

    def generate_read_sas(
        self,
        container: str,
        blob_name: str,
        expires_on: datetime,
    ) -> str:
        return generate_blob_sas(
            account_name=self.account_name,
            container_name=container,
            blob_name=blob_name,
            account_key=self._account_key,
            permission=BlobSasPermissions(read=True),
            expiry=expires_on,
        )
