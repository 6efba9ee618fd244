"""Tests for read-only download URL issuance.

The Azure-backed cases sign with the real azure-storage-blob SAS generator
and a dummy account key; signing is local, so nothing touches the network.
"""

import base64
from datetime import datetime, timedelta, timezone
from urllib.parse import parse_qs, urlsplit

import pytest

from publisher.packaging.types import PublishErrorKind, TokenIssuanceError
from publisher.storage.azure_blob import AzureBlobStore
from publisher.storage.signer import SAS_VALIDITY, issue_download_url
from publisher.storage.types import UploadedBlob

TEST_ACCOUNT = "teststorage"
TEST_ACCOUNT_KEY = base64.b64encode(b"k" * 64).decode()
ISSUED_AT = datetime(2026, 10, 19, 10, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def uploaded_blob() -> UploadedBlob:
    return UploadedBlob(
        container="artifacts",
        name="1760868000.zip",
        url=f"https://{TEST_ACCOUNT}.blob.core.windows.net/artifacts/1760868000.zip",
        uploaded_at=ISSUED_AT,
    )


@pytest.fixture
def azure_store() -> AzureBlobStore:
    return AzureBlobStore(
        account_name=TEST_ACCOUNT,
        account_key=TEST_ACCOUNT_KEY,
        account_url=f"https://{TEST_ACCOUNT}.blob.core.windows.net",
    )


class TestIssueDownloadUrl:
    def test_validity_window_is_thirty_minutes(self) -> None:
        assert SAS_VALIDITY == timedelta(minutes=30)

    def test_grant_is_read_only_and_scoped_to_the_blob(self, fake_store, uploaded_blob) -> None:
        download = issue_download_url(fake_store, uploaded_blob, now=ISSUED_AT)

        assert download.grant.permission == "r"
        assert download.grant.container == "artifacts"
        assert download.grant.blob_name == "1760868000.zip"
        assert download.grant.issued_at == ISSUED_AT
        assert download.grant.expires_on == ISSUED_AT + timedelta(minutes=30)
        assert fake_store.sas_requests == [
            ("artifacts", "1760868000.zip", ISSUED_AT + timedelta(minutes=30)),
        ]

    def test_url_is_blob_uri_plus_query(self, fake_store, uploaded_blob) -> None:
        download = issue_download_url(fake_store, uploaded_blob, now=ISSUED_AT)

        base, _, query = download.url.partition("?")
        assert base == uploaded_blob.url
        assert "sp=r" in query
        assert str(download) == download.url

    def test_defaults_to_current_time(self, fake_store, uploaded_blob) -> None:
        before = datetime.now(timezone.utc)
        download = issue_download_url(fake_store, uploaded_blob)
        after = datetime.now(timezone.utc)

        assert before + SAS_VALIDITY <= download.grant.expires_on <= after + SAS_VALIDITY

    def test_signing_failure_raises_token_issuance_error(self, fake_store, uploaded_blob) -> None:
        fake_store.sign_error = ValueError("missing key material")

        with pytest.raises(TokenIssuanceError, match="missing key material") as exc_info:
            issue_download_url(fake_store, uploaded_blob)

        assert exc_info.value.kind == PublishErrorKind.TOKEN_ISSUANCE_FAILURE

    def test_empty_token_is_rejected(self, fake_store, uploaded_blob, monkeypatch) -> None:
        monkeypatch.setattr(fake_store, "generate_read_sas", lambda *args: "")
        with pytest.raises(TokenIssuanceError):
            issue_download_url(fake_store, uploaded_blob)


class TestAzureSignedUrl:
    def test_query_decodes_to_read_permission_and_expiry(
        self, azure_store, uploaded_blob,
    ) -> None:
        download = issue_download_url(azure_store, uploaded_blob, now=ISSUED_AT)

        parts = urlsplit(download.url)
        params = parse_qs(parts.query)

        assert f"{parts.scheme}://{parts.netloc}{parts.path}" == uploaded_blob.url
        assert params["sp"] == ["r"]
        assert params["sr"] == ["b"]
        assert params["se"] == ["2026-10-19T10:30:00Z"]
        assert params["sig"][0]

    def test_missing_account_key_fails_to_sign(self, uploaded_blob) -> None:
        store = AzureBlobStore(
            account_name=TEST_ACCOUNT,
            account_key="",
            account_url=f"https://{TEST_ACCOUNT}.blob.core.windows.net",
        )
        with pytest.raises(TokenIssuanceError):
            issue_download_url(store, uploaded_blob, now=ISSUED_AT)
