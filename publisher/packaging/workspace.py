"""Per-invocation temporary workspace with guaranteed cleanup.

A StagingWorkspace owns exactly two filesystem paths under the system temp
root, both derived from a random token minted when the workspace is
entered:

  publisher-<token>/        staging directory holding flat copies of inputs
  publisher-<token>.zip     archive file, a sibling of the staging directory

Nothing is created on disk until a stage asks for it, so a run that fails
during input resolution leaves no footprint at all. On exit, whatever exists
is removed regardless of how the block ended. Cleanup problems are logged
and never replace an exception that is already propagating.
"""

import logging
import shutil
import tempfile
import uuid
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

WORKSPACE_PREFIX = "publisher-"


class StagingWorkspace:
    """Context manager owning the staging directory and archive path."""

    def __init__(self, temp_root: Optional[Path] = None):
        self._temp_root = Path(temp_root) if temp_root else Path(tempfile.gettempdir())
        self.token: str = ""
        self.staging_dir: Optional[Path] = None
        self.archive_path: Optional[Path] = None

    def __enter__(self) -> "StagingWorkspace":
        self.token = uuid.uuid4().hex
        self.staging_dir = self._temp_root / f"{WORKSPACE_PREFIX}{self.token}"
        self.archive_path = self._temp_root / f"{WORKSPACE_PREFIX}{self.token}.zip"
        logger.debug("Workspace %s allocated under %s", self.token, self._temp_root)
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.cleanup()
        return False

    def create_staging_dir(self) -> Path:
        """Create the staging directory. It must not already exist."""
        if self.staging_dir is None:
            raise RuntimeError("StagingWorkspace used outside of a with-block")
        self.staging_dir.mkdir(parents=True, exist_ok=False)
        return self.staging_dir

    def cleanup(self) -> None:
        """Remove the staging directory and archive file if they exist."""
        if self.staging_dir is not None and self.staging_dir.exists():
            shutil.rmtree(self.staging_dir, onexc=self._log_rmtree_failure)
            if self.staging_dir.exists():
                logger.warning("Staging directory %s was left behind", self.staging_dir)
            else:
                logger.debug("Removed staging directory %s", self.staging_dir)

        if self.archive_path is not None:
            try:
                self.archive_path.unlink(missing_ok=True)
            except OSError as exc:
                logger.warning(
                    "Could not remove archive %s: %s", self.archive_path, exc,
                )

    @staticmethod
    def _log_rmtree_failure(func, path, exc) -> None:
        logger.warning("Cleanup could not remove %s (%s): %s", path, func.__name__, exc)
