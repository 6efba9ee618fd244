from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_account_url(account_name: str) -> str:
    """Return the public blob endpoint for a storage account."""
    return f"https://{account_name}.blob.core.windows.net"


class Settings(BaseSettings):
    """Publisher settings loaded from environment variables.

    The storage account name and key are required to upload and sign, but
    their presence is checked by the CLI, not here, so tests and library
    callers can build a Settings object without real credentials.

    STORAGE_ACCOUNT_URL overrides the endpoint derived from the account
    name (Azurite, sovereign clouds, private endpoints).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Azure Storage
    storage_account_name: str = ""
    storage_account_key: str = ""
    storage_account_url: str = ""
    storage_container: str = "artifacts"

    @field_validator("storage_account_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return (v or "").rstrip("/")

    # Logging — JSON lines for CI log collectors, console renderer otherwise.
    log_json: bool = False
    log_level: str = "INFO"

    @property
    def account_url(self) -> str:
        if self.storage_account_url:
            return self.storage_account_url
        return _default_account_url(self.storage_account_name)


def get_settings(**overrides) -> Settings:
    """Build settings, letting explicit non-empty overrides win over the env."""
    values = {k: v for k, v in overrides.items() if v not in (None, "")}
    return Settings(**values)
