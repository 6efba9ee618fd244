"""Publish local build artifacts as a zip in Azure Blob Storage.

Public API:
    publish_artifacts(specs, store, container) -> PublishResult
"""

from publisher.pipeline import PublishResult, PublishStatus, publish_artifacts

__all__ = ["PublishResult", "PublishStatus", "publish_artifacts"]
