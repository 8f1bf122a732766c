"""Top-level orchestrator: parse difficulty files and whole map folders."""

import json
import logging
from pathlib import Path
from typing import Any

from beat_reader.errors import BeatmapParsingError, BeatmapReaderError
from beat_reader.parsers.converters import normalize
from beat_reader.parsers.dat_reader import read_dat_text
from beat_reader.parsers.info_parser import read_info_file
from beat_reader.schemas.detection import detect_and_parse
from beat_reader.schemas.normalized import Beatmap, MapDifficulty, MapFolder

logger = logging.getLogger(__name__)

INFO_FILENAMES = ("Info.dat", "info.dat", "INFO.dat")


def parse_beatmap(beatmap_data: Any) -> Beatmap:
    """Detect the schema of a decoded difficulty document and normalize it.

    Raises:
        BeatmapParsingError: If the document matches neither the v3 nor the v2 shape.
    """
    return normalize(detect_and_parse(beatmap_data))


def read_beatmap_str(data: str) -> Beatmap:
    try:
        beatmap_data = json.loads(data)
    except json.JSONDecodeError as exc:
        # Neither shape can be tried on text that is not JSON at all.
        raise BeatmapParsingError(err_as_new=exc, err_as_old=exc) from exc
    return parse_beatmap(beatmap_data)


def read_beatmap_file(path: str | Path) -> Beatmap:
    return read_beatmap_str(read_dat_text(path))


def find_info_dat(folder: Path, names: tuple[str, ...] = INFO_FILENAMES) -> Path:
    """Find Info.dat in a folder, case-insensitive."""
    for name in names:
        path = folder / name
        if path.exists():
            return path
    raise FileNotFoundError(f"No Info.dat found in {folder}")


def parse_map_folder(
    folder: Path,
    info_filenames: tuple[str, ...] = INFO_FILENAMES,
) -> MapFolder:
    """Parse Info.dat and every difficulty it lists.

    Logs and skips individual difficulties that are missing or fail to parse;
    a missing or malformed Info.dat is an error.
    """
    folder = Path(folder)
    set_meta = read_info_file(find_info_dat(folder, info_filenames))

    difficulties: list[MapDifficulty] = []
    for difficulty_set in set_meta.difficulty_sets:
        for meta in difficulty_set.beatmaps:
            dat_path = folder / meta.filename
            if not dat_path.exists():
                logger.warning("Missing difficulty file: %s", dat_path)
                continue
            try:
                beatmap = read_beatmap_file(dat_path)
            except BeatmapReaderError:
                logger.exception("Failed to parse %s", dat_path)
                continue
            difficulties.append(MapDifficulty(
                game_mode=difficulty_set.game_mode,
                meta=meta,
                beatmap=beatmap,
            ))

    return MapFolder(
        source_id=folder.name,
        set_meta=set_meta,
        difficulties=tuple(difficulties),
    )
