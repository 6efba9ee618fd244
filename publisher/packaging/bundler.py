"""Archive bundler — stages resolved files and compresses them into one zip.

Files are copied flat into the workspace's staging directory by base name.
When two different files share a base name (ignoring case), later ones are
renamed with a numeric suffix (report.txt, report-1.txt, report-2.txt)
instead of overwriting earlier copies.

The archive is written to the workspace's archive path, which sits next to
the staging directory rather than inside it. If any copy or compression
step fails, the partial archive is deleted and ArchiveBuildError is raised.
"""

import logging
import shutil
import zipfile
from pathlib import Path

from publisher.packaging.types import ArchiveArtifact, ArchiveBuildError, ResolvedFile
from publisher.packaging.workspace import StagingWorkspace

logger = logging.getLogger(__name__)


def build_archive(
    files: list[ResolvedFile],
    workspace: StagingWorkspace,
) -> ArchiveArtifact:
    """Stage files and compress them into the workspace's archive path.

    Args:
        files: Resolved input files, in archive enumeration order.
        workspace: An entered StagingWorkspace that owns the temp paths.

    Returns:
        An ArchiveArtifact describing the finished zip file.

    Raises:
        ArchiveBuildError: If staging or compression fails.
    """
    archive_path = workspace.archive_path

    try:
        staging_dir = workspace.create_staging_dir()
        staged = _stage_files(files, staging_dir)
        _write_zip(archive_path, staged)
    except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile) as exc:
        _discard_partial(archive_path)
        raise ArchiveBuildError(f"Failed to build archive: {exc}", cause=exc) from exc

    artifact = ArchiveArtifact(
        path=archive_path,
        entries=[p.name for p in staged],
        size_bytes=archive_path.stat().st_size,
    )
    logger.info(
        "Built archive %s with %d entries (%d bytes)",
        archive_path.name, len(artifact.entries), artifact.size_bytes,
    )
    return artifact


def staged_name(name: str, taken: set[str]) -> str:
    """Return a base name not already in `taken`, suffixing -1, -2, ... if needed.

    Names are compared case-insensitively: `taken` holds casefolded names,
    so README.md and readme.md collide on every filesystem the staging
    directory might live on.
    """
    if name.casefold() not in taken:
        return name

    path = Path(name)
    stem, suffix = path.stem, path.suffix
    counter = 1
    while f"{stem}-{counter}{suffix}".casefold() in taken:
        counter += 1
    return f"{stem}-{counter}{suffix}"


def _stage_files(files: list[ResolvedFile], staging_dir: Path) -> list[Path]:
    """Copy each file flat into the staging directory, renaming on collision."""
    taken: set[str] = set()  # casefolded
    staged: list[Path] = []

    for resolved in files:
        name = staged_name(resolved.name, taken)
        if name != resolved.name:
            logger.warning(
                "Base name collision for %s; staging as %s", resolved.path, name,
            )
        taken.add(name.casefold())

        destination = staging_dir / name
        shutil.copy2(resolved.path, destination)
        staged.append(destination)

    return staged


def _write_zip(archive_path: Path, staged: list[Path]) -> None:
    with zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for path in staged:
            zf.write(path, arcname=path.name)


def _discard_partial(archive_path: Path) -> None:
    try:
        archive_path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("Could not remove partial archive %s: %s", archive_path, exc)
