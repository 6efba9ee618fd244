"""Command-line entry point.

Usage:
    publisher [--account NAME] [--container NAME] [--account-key KEY]
              [--account-url URL] [--json] PATH_OR_GLOB [PATH_OR_GLOB ...]

Flags override STORAGE_* environment variables (and .env). On success the
download URL is the only thing written to stdout; logs go to stderr.

Exit codes:
    0  published, or no input pattern matched any file
    1  a publish stage failed (see logs for the error kind)
    2  invalid arguments or missing credentials
"""

import argparse
import json
import sys
from typing import Optional, Sequence

import structlog

from publisher.core.config import get_settings
from publisher.core.logging import configure_structlog
from publisher.pipeline import PublishStatus, publish_artifacts
from publisher.storage.azure_blob import AzureBlobStore

logger = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="publisher",
        description=(
            "Zip local files, upload the archive to Azure Blob Storage, and "
            "print a read-only download URL valid for 30 minutes."
        ),
    )
    parser.add_argument(
        "inputs",
        nargs="+",
        metavar="PATH_OR_GLOB",
        help="File path or glob pattern (use ** to recurse). Quote patterns.",
    )
    parser.add_argument("--account", help="Storage account name (STORAGE_ACCOUNT_NAME)")
    parser.add_argument("--container", help="Target container (STORAGE_CONTAINER)")
    parser.add_argument("--account-key", help="Storage account key (STORAGE_ACCOUNT_KEY)")
    parser.add_argument("--account-url", help="Blob endpoint override (STORAGE_ACCOUNT_URL)")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full result as JSON instead of only the URL",
    )
    parser.add_argument("--log-json", action="store_true", default=None, help="Emit JSON log lines")
    parser.add_argument("--log-level", help="Log level (LOG_LEVEL, default INFO)")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings(
        storage_account_name=args.account,
        storage_container=args.container,
        storage_account_key=args.account_key,
        storage_account_url=args.account_url,
        log_json=args.log_json,
        log_level=args.log_level,
    )
    configure_structlog(json_logs=settings.log_json, level=settings.log_level)

    if not settings.storage_account_name:
        parser.error("storage account name is required (--account or STORAGE_ACCOUNT_NAME)")
    if not settings.storage_account_key:
        parser.error("storage account key is required (--account-key or STORAGE_ACCOUNT_KEY)")

    store = AzureBlobStore.from_settings(settings)
    result = publish_artifacts(args.inputs, store, settings.storage_container)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    elif result.status == PublishStatus.PUBLISHED:
        print(result.url)

    if not result.is_success:
        logger.error("publisher.exit", status=str(result.status), error_kind=str(result.error_kind))
        return EXIT_FAILED
    return EXIT_OK


def run() -> None:
    sys.exit(main())
