from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HarvestReport:
    source_root: Path
    staging_dir: Path
    copied: list[Path] = field(default_factory=list)
    overwritten: list[Path] = field(default_factory=list)


def discover_files(root: Path, extension: str) -> list[Path]:
    """Recursively list files under `root` whose suffix equals `extension`."""

    root = Path(root)
    if not root.is_dir():
        raise FileNotFoundError(f"Source root not found: {root}")
    logger.info("Traversing directory: %s", root)
    return sorted(p for p in root.rglob(f"*{extension}") if p.is_file() and p.suffix == extension)


def list_directory_files(directory: Path, extension: Optional[str] = None) -> list[str]:
    """List file names (not paths) directly inside `directory`, sorted."""

    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Directory not found: {directory}")
    names = [p.name for p in directory.iterdir() if p.is_file()]
    if extension is not None:
        names = [name for name in names if Path(name).suffix == extension]
    return sorted(names)


def harvest(source_root: Path, staging_dir: Path, extension: str = ".xml") -> HarvestReport:
    """Copy every `extension` file found under `source_root` into the flat `staging_dir`."""

    files = discover_files(source_root, extension)
    staging_dir = Path(staging_dir)
    staging_dir.mkdir(parents=True, exist_ok=True)

    copied: list[Path] = []
    overwritten: list[Path] = []
    seen: set[str] = set()
    for source in files:
        destination = staging_dir / source.name
        # Already staged (staging dir nested under the source root).
        if source.resolve() == destination.resolve():
            continue
        if source.name in seen:
            logger.warning("Duplicate file name %s; %s overwrites the earlier copy", source.name, source)
            overwritten.append(destination)
        seen.add(source.name)

        logger.info("Copying %s to %s", source, destination)
        shutil.copyfile(source, destination)
        copied.append(destination)

    return HarvestReport(
        source_root=Path(source_root),
        staging_dir=staging_dir,
        copied=copied,
        overwritten=overwritten,
    )
