"""Input resolution — expands literal paths and glob patterns into files.

Literal specs must name an existing regular file; glob specs may match
nothing. Results keep input order and are deduplicated by real path, so the
same file named twice (directly, through a pattern, or via a symlink) is
archived once.
"""

import glob
import logging
import os
from pathlib import Path
from typing import Iterable, Optional

from publisher.packaging.types import InputNotFoundError, ResolvedFile

logger = logging.getLogger(__name__)

GLOB_METACHARACTERS = frozenset("*?[")


def is_glob_pattern(spec: str) -> bool:
    """Return True when the spec contains any glob metacharacter."""
    return any(ch in GLOB_METACHARACTERS for ch in spec)


def resolve_inputs(
    specs: Iterable[str],
    base_dir: Optional[Path] = None,
) -> list[ResolvedFile]:
    """Expand input specs into a deduplicated, ordered list of files.

    Args:
        specs: Literal paths or glob patterns (``**`` recurses).
        base_dir: Directory that relative specs are resolved against.
                  Defaults to the current working directory.

    Returns:
        ResolvedFile objects in input order. May be empty when every spec
        is a pattern that matched nothing.

    Raises:
        InputNotFoundError: If a literal spec is missing or not a regular file.
    """
    spec_list = list(specs)
    root = Path(base_dir) if base_dir is not None else Path.cwd()
    resolved: list[ResolvedFile] = []
    seen: set[str] = set()

    for spec in spec_list:
        for path in _expand_spec(spec, root):
            real = os.path.realpath(path)
            if real in seen:
                logger.debug("Skipping duplicate input %s (from %r)", path, spec)
                continue
            seen.add(real)
            resolved.append(ResolvedFile(
                path=path,
                size_bytes=path.stat().st_size,
                spec=spec,
            ))

    logger.info(
        "Resolved %d file(s) from %d input spec(s)",
        len(resolved), len(spec_list),
    )
    return resolved


def _expand_spec(spec: str, root: Path) -> list[Path]:
    """Expand one spec into absolute paths of regular files."""
    candidate = Path(os.path.expanduser(spec))
    if not candidate.is_absolute():
        candidate = root / candidate

    if not is_glob_pattern(spec):
        if not candidate.is_file():
            raise InputNotFoundError(spec)
        return [candidate.absolute()]

    # Relative patterns are matched under root_dir so metacharacters in the
    # base directory's own name are never interpreted.
    expanded = os.path.expanduser(spec)
    if os.path.isabs(expanded):
        found = glob.glob(expanded, recursive=True)
    else:
        found = [
            str(root / match)
            for match in glob.glob(expanded, root_dir=root, recursive=True)
        ]
    matches = sorted(
        Path(match).absolute() for match in found if os.path.isfile(match)
    )
    if not matches:
        logger.debug("Pattern %r matched no files", spec)
    return matches
