"""Tests for Parquet writer — row groups, file splitting, and reader."""

import dataclasses
import json
from pathlib import Path

import pyarrow.parquet as pq
import pytest

from beat_reader.parsers.beatmap_parser import parse_map_folder
from beat_reader.schemas.enums import Difficulty, Direction, NoteColor
from beat_reader.schemas.normalized import (
    BasicEvent,
    Beatmap,
    BeatmapMeta,
    BeatmapSetMeta,
    Bomb,
    ColorBoost,
    MapDifficulty,
    MapFolder,
    Note,
    Obstacle,
)
from beat_reader.storage.writer import event_tables, read_event_parquet, write_parquet

FIXTURES = Path(__file__).parent / "fixtures"


def _make_map_folder(map_hash: str, n_notes: int = 10) -> MapFolder:
    """Create a minimal single-difficulty map folder with *n_notes* notes."""
    notes = tuple(
        Note(beat=float(i), x=i % 4, y=i % 3, color=NoteColor(i % 2), direction=Direction(i % 9))
        for i in range(n_notes)
    )
    events = notes + (
        Bomb(beat=0.5, x=0, y=0),
        Obstacle(beat=1.0, x=0, y=0, duration=2.0, width=1.0, height=5.0),
        BasicEvent(beat=0.0, type=1, value=3),
        ColorBoost(beat=2.0, enable=True),
    )
    meta = BeatmapMeta(
        difficulty=Difficulty.EXPERT,
        rank=7,
        filename="Expert.dat",
        note_jump_speed=16.0,
        note_jump_start_beat_offset=0.0,
    )
    set_meta = BeatmapSetMeta(
        version="2.0.0",
        song_name=f"Song {map_hash}",
        song_subname="",
        song_author="Artist",
        map_author="Mapper",
        bpm=120.0,
        shuffle=0.0,
        shuffle_period=0.5,
        preview_start=0.0,
        preview_duration=10.0,
        song_filename="song.egg",
        cover_image_filename="cover.jpg",
        environment_name="DefaultEnvironment",
        all_directions_environment_name=None,
        song_offset=0.0,
    )
    return MapFolder(
        source_id=f"id_{map_hash}",
        set_meta=set_meta,
        difficulties=(MapDifficulty("Standard", meta, Beatmap(version="3.0.0", events=events)),),
        hash=map_hash,
    )


def _fixture_folders() -> list[MapFolder]:
    return [
        dataclasses.replace(parse_map_folder(FIXTURES / name), hash=name)
        for name in ("v2_map", "v3_map")
    ]


class TestEventTables:
    def test_fixture_rows(self):
        v2_map, v3_map = _fixture_folders()
        v2_tables = event_tables(v2_map)
        assert v2_tables["notes"].num_rows == 6  # Easy 4 + Expert 2
        assert v2_tables["bombs"].num_rows == 2
        assert v2_tables["obstacles"].num_rows == 2
        assert v2_tables["basic_events"].num_rows == 3
        assert event_tables(v3_map)["notes"].num_rows == 3

    def test_key_columns(self):
        v2_map, _ = _fixture_folders()
        notes = event_tables(v2_map)["notes"]
        assert set(notes.column("map_hash").to_pylist()) == {"v2_map"}
        assert set(notes.column("game_mode").to_pylist()) == {"Standard"}
        assert notes.column("difficulty").to_pylist() == ["Easy"] * 4 + ["Expert"] * 2

    def test_enums_stored_as_codes(self):
        _, v3_map = _fixture_folders()
        notes = event_tables(v3_map)["notes"]
        assert notes.column("color").to_pylist() == [0, 1, 0]
        assert notes.column("direction").to_pylist() == [1, 1, 8]
        assert notes.column("angle_offset").to_pylist() == [0.0, 15.0, 0.0]

    def test_wall_geometry(self):
        v2_map, _ = _fixture_folders()
        walls = event_tables(v2_map)["obstacles"]
        assert walls.column("y").to_pylist() == [0, 2]
        assert walls.column("height").to_pylist() == [5.0, 2.0]
        assert walls.column("width").to_pylist() == [1.0, 4.0]

    def test_null_float_value(self):
        v2_map, _ = _fixture_folders()
        basic = event_tables(v2_map)["basic_events"]
        assert basic.column("float_value").to_pylist() == [None, 1.0, None]

    def test_int8_columns_are_clamped(self):
        folder = _make_map_folder("ext", n_notes=0)
        beatmap = Beatmap(
            version="2.0.0",
            events=(Bomb(beat=1.0, x=1000, y=-1000),),
        )
        folder = dataclasses.replace(
            folder,
            difficulties=(dataclasses.replace(folder.difficulties[0], beatmap=beatmap),),
        )
        bombs = event_tables(folder)["bombs"]
        assert bombs.column("x").to_pylist() == [127]
        assert bombs.column("y").to_pylist() == [-128]

    def test_source_id_used_without_hash(self):
        folder = dataclasses.replace(_make_map_folder("x", n_notes=1), hash="")
        notes = event_tables(folder)["notes"]
        assert notes.column("map_hash").to_pylist() == ["id_x"]


class TestWriteParquet:
    """Test the core write_parquet function."""

    def test_produces_numbered_files(self, tmp_path):
        written = write_parquet(_fixture_folders(), tmp_path)

        notes_files = sorted(tmp_path.glob("notes_*.parquet"))
        assert [p.name for p in notes_files] == ["notes_0000.parquet"]
        assert written["notes"] == notes_files
        assert set(written) == {"notes", "bombs", "obstacles", "basic_events"}

    def test_fixture_note_count(self, tmp_path):
        write_parquet(_fixture_folders(), tmp_path)
        assert read_event_parquet(tmp_path).num_rows == 9

    def test_one_row_group_per_map(self, tmp_path):
        """Each map should get its own row group."""
        folders = [
            _make_map_folder("aaa", n_notes=5),
            _make_map_folder("bbb", n_notes=8),
            _make_map_folder("ccc", n_notes=3),
        ]
        write_parquet(folders, tmp_path)

        pf = pq.ParquetFile(tmp_path / "notes_0000.parquet")
        assert pf.metadata.num_row_groups == 3

        hashes_per_rg = set()
        for i in range(pf.metadata.num_row_groups):
            unique = set(pf.read_row_group(i).column("map_hash").to_pylist())
            assert len(unique) == 1, f"Row group {i} has multiple hashes: {unique}"
            hashes_per_rg.update(unique)
        assert hashes_per_rg == {"aaa", "bbb", "ccc"}

    def test_metadata_json_written(self, tmp_path):
        write_parquet(_fixture_folders(), tmp_path)

        meta = json.loads((tmp_path / "metadata.json").read_text())
        assert [m["hash"] for m in meta] == ["v2_map", "v3_map"]
        assert meta[0]["song_name"] == "Test Song V2"
        assert meta[0]["mapper_name"] == "Test Mapper"
        assert meta[0]["difficulties"] == [
            {"game_mode": "Standard", "difficulty": "Easy", "version": "2.2.0", "event_count": 9},
            {"game_mode": "Standard", "difficulty": "Expert", "version": "2.6.0", "event_count": 5},
        ]
        assert meta[1]["difficulties"][0]["event_count"] == 16

    def test_empty_table_writes_no_file(self, tmp_path):
        write_parquet([_make_map_folder("solo", n_notes=0)], tmp_path)
        assert list(tmp_path.glob("notes_*.parquet")) == []
        assert len(list(tmp_path.glob("bombs_*.parquet"))) == 1


class TestFileSplitting:
    """Test that files are split when exceeding max_file_bytes."""

    def test_splits_at_max_size(self, tmp_path):
        folders = [_make_map_folder(h, n_notes=100) for h in ("alpha", "beta", "gamma")]
        write_parquet(folders, tmp_path, max_file_bytes=1)

        notes_files = sorted(tmp_path.glob("notes_*.parquet"))
        assert len(notes_files) >= 2

    def test_all_data_survives_split(self, tmp_path):
        folders = [_make_map_folder(f"song_{i}", n_notes=50) for i in range(5)]
        write_parquet(folders, tmp_path, max_file_bytes=1)

        assert read_event_parquet(tmp_path).num_rows == 250
        assert read_event_parquet(tmp_path, "bombs").num_rows == 5

    def test_single_file_when_small(self, tmp_path):
        write_parquet([_make_map_folder("tiny", n_notes=5)], tmp_path)
        assert len(list(tmp_path.glob("notes_*.parquet"))) == 1


class TestReadEventParquet:
    def test_reads_single_file_path(self, tmp_path):
        write_parquet([_make_map_folder("direct", n_notes=5)], tmp_path)

        single_file = sorted(tmp_path.glob("notes_*.parquet"))[0]
        assert read_event_parquet(single_file).num_rows == 5

    def test_reads_named_table(self, tmp_path):
        write_parquet([_make_map_folder("named", n_notes=5)], tmp_path)

        table = read_event_parquet(tmp_path, "basic_events")
        assert table.column("type").to_pylist() == [1]
        assert table.column("value").to_pylist() == [3]

    def test_raises_on_empty_dir(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_event_parquet(tmp_path)
