"""Parse many map folders and export them in one run."""

from __future__ import annotations

import json
import logging
import os
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Iterable, Iterator

from beat_reader.parsers.beatmap_parser import INFO_FILENAMES
from beat_reader.pipeline.processor import process_map_folder
from beat_reader.schemas.normalized import MapFolder
from beat_reader.storage.writer import MAX_FILE_BYTES, write_parquet

logger = logging.getLogger(__name__)


@dataclass
class BatchConfig:
    input_dir: Path = Path("data/raw")
    output_dir: Path = Path("data/processed")
    max_workers: int | None = None  # None = min(cpu_count, 8); 1 = in-process
    max_file_bytes: int = MAX_FILE_BYTES
    info_filenames: tuple[str, ...] = INFO_FILENAMES

    def __post_init__(self) -> None:
        self.input_dir = Path(self.input_dir)
        self.output_dir = Path(self.output_dir)
        self.info_filenames = tuple(self.info_filenames)

    def save(self, path: Path) -> None:
        """Save config to JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        data = asdict(self)
        data["input_dir"] = str(self.input_dir)
        data["output_dir"] = str(self.output_dir)
        data["info_filenames"] = list(self.info_filenames)
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    @classmethod
    def load(cls, path: Path) -> BatchConfig:
        """Load config from JSON file."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        # Only pass known fields to handle forward/backward compat
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass
class BatchResult:
    total_maps: int = 0
    total_beatmaps: int = 0
    total_events: int = 0
    errors: list[str] = field(default_factory=list)


def iter_map_folders(
    root: Path, info_filenames: tuple[str, ...] = INFO_FILENAMES
) -> Iterator[Path]:
    """Yield every folder under *root* that holds an Info.dat, sorted."""
    folders: set[Path] = set()
    for name in info_filenames:
        folders.update(info_file.parent for info_file in Path(root).rglob(name))
    yield from sorted(folders)


def parse_map_folders(
    folders: Iterable[Path],
    max_workers: int | None = None,
    info_filenames: tuple[str, ...] = INFO_FILENAMES,
) -> list[MapFolder | None]:
    """Parse map folders independently, in worker processes when useful.

    Results follow the order of *folders*; a folder that failed is ``None``.
    """
    folders = list(folders)
    if max_workers is None:
        max_workers = min(os.cpu_count() or 4, 8)

    if max_workers <= 1 or len(folders) <= 1:
        return [process_map_folder(folder, info_filenames) for folder in folders]

    results: list[MapFolder | None] = [None] * len(folders)
    with ProcessPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(process_map_folder, folder, info_filenames): index
            for index, folder in enumerate(folders)
        }
        for i, future in enumerate(as_completed(futures), 1):
            results[futures[future]] = future.result()
            if i % 500 == 0 or i == len(futures):
                logger.info("Map folder progress: %d/%d parsed", i, len(futures))
    return results


def run_batch(config: BatchConfig) -> BatchResult:
    """Parse every map folder under the input dir and write Parquet output."""
    result = BatchResult()
    folders = list(iter_map_folders(config.input_dir, config.info_filenames))
    logger.info("Found %d map folders in %s", len(folders), config.input_dir)

    parsed: list[MapFolder] = []
    for folder, map_folder in zip(
        folders, parse_map_folders(folders, config.max_workers, config.info_filenames)
    ):
        if map_folder is None:
            result.errors.append(str(folder))
            continue
        parsed.append(map_folder)
        result.total_beatmaps += len(map_folder.difficulties)
        result.total_events += sum(len(d.beatmap.events) for d in map_folder.difficulties)
    result.total_maps = len(parsed)

    write_parquet(parsed, config.output_dir, config.max_file_bytes)

    logger.info(
        "Batch complete: %d maps, %d beatmaps, %d events, %d failed folders",
        result.total_maps,
        result.total_beatmaps,
        result.total_events,
        len(result.errors),
    )
    return result
