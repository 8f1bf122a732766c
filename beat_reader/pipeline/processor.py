"""Process individual map folders into normalized data."""

import dataclasses
import hashlib
import logging
from pathlib import Path

from beat_reader.errors import BeatmapReaderError
from beat_reader.parsers.beatmap_parser import INFO_FILENAMES, find_info_dat, parse_map_folder
from beat_reader.schemas.normalized import MapFolder

logger = logging.getLogger(__name__)


def compute_map_hash(folder: Path, info_filenames: tuple[str, ...] = INFO_FILENAMES) -> str:
    """SHA-256 of a map folder: difficulty .dat files by name, then Info.dat."""
    folder = Path(folder)
    info_path = find_info_dat(folder, info_filenames)
    beatmap_paths = [p for p in sorted(folder.glob("*.dat")) if p.name not in info_filenames]

    hasher = hashlib.sha256()
    for path in [*beatmap_paths, info_path]:
        hasher.update(path.read_bytes())
    return hasher.hexdigest()


def process_map_folder(
    folder: Path, info_filenames: tuple[str, ...] = INFO_FILENAMES
) -> MapFolder | None:
    """Parse one map folder and attach its content hash. Returns None on failure."""
    try:
        parsed = parse_map_folder(folder, info_filenames)
        return dataclasses.replace(parsed, hash=compute_map_hash(folder, info_filenames))
    except (BeatmapReaderError, OSError):
        logger.exception("Failed to process %s", folder)
        return None
