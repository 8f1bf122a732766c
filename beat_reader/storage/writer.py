"""Write normalized Beat Saber events to Parquet files and JSON metadata."""

import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import pyarrow as pa
import pyarrow.parquet as pq

from beat_reader.schemas.enums import EventKind
from beat_reader.schemas.normalized import MapFolder

logger = logging.getLogger(__name__)

# Maximum Parquet file size in bytes before starting a new file.
MAX_FILE_BYTES: int = 1_000_000_000  # 1 GB

# Arrow schemas, one per exported event kind.

_KEY_FIELDS = [
    pa.field("map_hash", pa.string()),
    pa.field("game_mode", pa.string()),
    pa.field("difficulty", pa.string()),
]

NOTES_SCHEMA = pa.schema(
    _KEY_FIELDS
    + [
        pa.field("beat", pa.float32()),
        pa.field("x", pa.int8()),
        pa.field("y", pa.int8()),
        pa.field("color", pa.int8()),
        pa.field("direction", pa.int8()),
        pa.field("angle_offset", pa.float32()),
    ]
)

BOMBS_SCHEMA = pa.schema(
    _KEY_FIELDS
    + [
        pa.field("beat", pa.float32()),
        pa.field("x", pa.int8()),
        pa.field("y", pa.int8()),
    ]
)

OBSTACLES_SCHEMA = pa.schema(
    _KEY_FIELDS
    + [
        pa.field("beat", pa.float32()),
        pa.field("duration", pa.float32()),
        pa.field("x", pa.int8()),
        pa.field("y", pa.int8()),
        pa.field("width", pa.float32()),
        pa.field("height", pa.float32()),
    ]
)

BASIC_EVENTS_SCHEMA = pa.schema(
    _KEY_FIELDS
    + [
        pa.field("beat", pa.float32()),
        pa.field("type", pa.int32()),
        pa.field("value", pa.int32()),
        pa.field("float_value", pa.float32()),
    ]
)


@dataclass(frozen=True)
class EventTable:
    """One Parquet table: which event kind feeds it and with what schema.

    Every non-key column of *schema* is read from the event attribute of the
    same name.
    """

    kind: EventKind
    schema: pa.Schema

    @property
    def event_columns(self) -> list[str]:
        return self.schema.names[len(_KEY_FIELDS):]


EVENT_TABLES: dict[str, EventTable] = {
    "notes": EventTable(EventKind.NOTE, NOTES_SCHEMA),
    "bombs": EventTable(EventKind.BOMB, BOMBS_SCHEMA),
    "obstacles": EventTable(EventKind.OBSTACLE, OBSTACLES_SCHEMA),
    "basic_events": EventTable(EventKind.BASIC_EVENT, BASIC_EVENTS_SCHEMA),
}


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value


def _map_key(map_folder: MapFolder) -> str:
    return map_folder.hash or map_folder.source_id


def event_tables(map_folder: MapFolder) -> dict[str, pa.Table]:
    """Flatten one parsed map folder into one Arrow table per EVENT_TABLES entry."""
    columns: dict[str, dict[str, list]] = {
        name: {k: [] for k in table.schema.names} for name, table in EVENT_TABLES.items()
    }
    by_kind = {table.kind: name for name, table in EVENT_TABLES.items()}
    map_hash = _map_key(map_folder)

    for diff in map_folder.difficulties:
        for event in diff.beatmap.events:
            name = by_kind.get(event.kind)
            if name is None:
                continue
            cols = columns[name]
            cols["map_hash"].append(map_hash)
            cols["game_mode"].append(diff.game_mode)
            cols["difficulty"].append(diff.meta.difficulty.value)
            for column in EVENT_TABLES[name].event_columns:
                cols[column].append(_plain(getattr(event, column)))

    # Clamp int8 columns to [-128, 127] to handle mapping-extension maps
    for name, table in EVENT_TABLES.items():
        for column in table.event_columns:
            if table.schema.field(column).type == pa.int8():
                columns[name][column] = [max(-128, min(127, v)) for v in columns[name][column]]

    return {
        name: pa.table(columns[name], schema=table.schema)
        for name, table in EVENT_TABLES.items()
    }


def _write_row_groups(
    tables_by_map: dict[str, pa.Table],
    output_dir: Path,
    prefix: str,
    schema: pa.Schema,
    max_file_bytes: int,
) -> list[Path]:
    """Write each map's table as its own row group of ``<prefix>_NNNN.parquet``.

    The current file is closed once it reaches *max_file_bytes*; the next map
    starts a new one. Empty tables are skipped.
    """
    paths: list[Path] = []
    writer: pq.ParquetWriter | None = None
    for map_key in sorted(tables_by_map):
        table = tables_by_map[map_key]
        if table.num_rows == 0:
            continue
        if writer is None:
            paths.append(output_dir / f"{prefix}_{len(paths):04d}.parquet")
            writer = pq.ParquetWriter(paths[-1], schema, compression="snappy")
        writer.write_table(table)

        size = paths[-1].stat().st_size
        if size >= max_file_bytes:
            writer.close()
            writer = None
            logger.debug("Split %s at %d bytes", paths[-1].name, size)

    if writer is not None:
        writer.close()
    return paths


def write_parquet(
    map_folders: list[MapFolder],
    output_dir: Path,
    max_file_bytes: int = MAX_FILE_BYTES,
) -> dict[str, list[Path]]:
    """Write parsed map folders to Parquet files and JSON metadata.

    Each map gets its own row group so that readers can push down predicates
    and skip irrelevant data. When a Parquet file exceeds *max_file_bytes*
    (default 1 GB), a new numbered file is started.

    Produces inside *output_dir*:
      - notes_NNNN.parquet, bombs_NNNN.parquet, obstacles_NNNN.parquet,
        basic_events_NNNN.parquet  (one or more each, none for an empty table)
      - metadata.json

    Returns the written Parquet paths keyed by table name.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    tables_by_name: dict[str, dict[str, pa.Table]] = {name: {} for name in EVENT_TABLES}
    metadata_by_hash: dict[str, dict] = {}

    for map_folder in map_folders:
        map_hash = _map_key(map_folder)
        for name, table in event_tables(map_folder).items():
            tables_by_name[name][map_hash] = table

        meta = map_folder.set_meta
        metadata_by_hash[map_hash] = {
            "hash": map_hash,
            "source_id": map_folder.source_id,
            "song_name": meta.song_name,
            "song_author": meta.song_author,
            "mapper_name": meta.map_author,
            "bpm": meta.bpm,
            "difficulties": [
                {
                    "game_mode": diff.game_mode,
                    "difficulty": diff.meta.difficulty.value,
                    "version": diff.beatmap.version,
                    "event_count": len(diff.beatmap.events),
                }
                for diff in map_folder.difficulties
            ],
        }

    written = {
        name: _write_row_groups(
            tables_by_name[name], output_dir, name, table.schema, max_file_bytes,
        )
        for name, table in EVENT_TABLES.items()
    }

    logger.info(
        "Wrote %s to %s",
        ", ".join(f"{len(paths)} {name} files" for name, paths in written.items()),
        output_dir,
    )

    with open(output_dir / "metadata.json", "w", encoding="utf-8") as f:
        json.dump(list(metadata_by_hash.values()), f, indent=2)

    return written


def read_event_parquet(path: Path, name: str = "notes") -> pa.Table:
    """Read Parquet file(s) of one event table and return a single Arrow table.

    Accepts either a single ``.parquet`` file or a directory containing
    ``<name>_*.parquet`` files.
    """
    path = Path(path)
    if path.is_dir():
        files = sorted(path.glob(f"{name}_*.parquet"))
        if not files:
            raise FileNotFoundError(f"No {name} Parquet files in {path}")
        return pa.concat_tables([pq.read_table(f) for f in files])
    return pq.read_table(path)
