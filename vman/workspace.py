"""
Filesystem helpers: locating POMs, backing them up and choosing where the
modified copies are written.
"""

import shutil
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .logging_config import get_logger

logger = get_logger('workspace')

DEFAULT_POM_PATTERN = "**/*.pom,**/pom.xml"
BACKUP_DIR = "backup"
MODIFIED_DIR = "modified"


def find_poms(directory: Union[str, Path], pattern: str = DEFAULT_POM_PATTERN,
              exclude: Optional[Iterable[Union[str, Path]]] = None) -> List[Path]:
    """
    Find POM files below a directory.

    Args:
        directory: Directory to search
        pattern: Comma-separated glob patterns relative to the directory
        exclude: Directories whose contents are ignored (e.g. the workspace)

    Returns:
        Sorted, de-duplicated list of resolved POM paths
    """
    base = Path(directory).resolve()
    excluded = [Path(e).resolve() for e in (exclude or [])]

    found = set()
    for glob in (p.strip() for p in pattern.split(",")):
        if not glob:
            continue
        for candidate in base.glob(glob):
            candidate = candidate.resolve()
            if not candidate.is_file():
                continue
            if any(_is_within(candidate, e) for e in excluded):
                continue
            found.add(candidate)

    logger.debug(f"Found {len(found)} POM files in {base} matching '{pattern}'")
    return sorted(found)


def _is_within(path: Path, directory: Path) -> bool:
    try:
        path.relative_to(directory)
        return True
    except ValueError:
        return False


def relative_location(pom: Path, base: Optional[Path]) -> Path:
    """Path of a POM relative to the run's base directory, or just its name."""
    pom = Path(pom).resolve()
    if base is not None and _is_within(pom, Path(base).resolve()):
        return pom.relative_to(Path(base).resolve())
    return Path(pom.name)


def backup(pom: Union[str, Path], workspace: Union[str, Path], base: Optional[Path] = None) -> Path:
    """
    Copy the original POM into the workspace before it is modified.

    Returns:
        Path of the backup copy
    """
    destination = Path(workspace) / BACKUP_DIR / relative_location(Path(pom), base)
    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(pom, destination)
    return destination


def output_path(pom: Union[str, Path], workspace: Union[str, Path], preserve_files: bool,
                base: Optional[Path] = None) -> Path:
    """Where a modified POM is written: in place, or mirrored under the workspace."""
    if preserve_files:
        return Path(pom)
    return Path(workspace) / MODIFIED_DIR / relative_location(Path(pom), base)
