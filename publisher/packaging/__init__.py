"""Packaging module for input resolution and archive assembly.

Public API:
    resolve_inputs(specs, base_dir) -> list[ResolvedFile]
    build_archive(files, workspace) -> ArchiveArtifact
    StagingWorkspace — scoped owner of the staging dir and archive path
"""

from publisher.packaging.bundler import build_archive
from publisher.packaging.resolver import resolve_inputs
from publisher.packaging.workspace import StagingWorkspace

__all__ = ["build_archive", "resolve_inputs", "StagingWorkspace"]
