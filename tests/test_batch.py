"""Tests for map folder processing and batch runs."""

import json
import shutil
from pathlib import Path

import pytest

from beat_reader.pipeline.batch import (
    BatchConfig,
    iter_map_folders,
    parse_map_folders,
    run_batch,
)
from beat_reader.pipeline.processor import compute_map_hash, process_map_folder
from beat_reader.storage.writer import read_event_parquet

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def maps_dir(tmp_path) -> Path:
    root = tmp_path / "maps"
    shutil.copytree(FIXTURES, root)
    return root


class TestBatchConfig:
    def test_defaults(self):
        config = BatchConfig()
        assert config.input_dir == Path("data/raw")
        assert config.max_workers is None
        assert config.info_filenames == ("Info.dat", "info.dat", "INFO.dat")

    def test_save_load_roundtrip(self, tmp_path):
        config = BatchConfig(input_dir="in", output_dir="out", max_workers=2, max_file_bytes=1024)
        path = tmp_path / "config" / "batch.json"
        config.save(path)
        assert BatchConfig.load(path) == config

    def test_load_ignores_unknown_keys(self, tmp_path):
        path = tmp_path / "batch.json"
        path.write_text(json.dumps({"max_workers": 1, "download_scores": True}))
        config = BatchConfig.load(path)
        assert config.max_workers == 1
        assert config.output_dir == Path("data/processed")


class TestProcessor:
    def test_hash_is_deterministic(self, maps_dir):
        first = compute_map_hash(maps_dir / "v2_map")
        assert first == compute_map_hash(maps_dir / "v2_map")
        assert len(first) == 64

    def test_hash_changes_with_content(self, maps_dir):
        before = compute_map_hash(maps_dir / "v2_map")
        (maps_dir / "v2_map" / "Easy.dat").write_text('{"_version": "2.0.0"}')
        assert compute_map_hash(maps_dir / "v2_map") != before

    def test_hash_differs_between_maps(self, maps_dir):
        assert compute_map_hash(maps_dir / "v2_map") != compute_map_hash(maps_dir / "v3_map")

    def test_process_sets_hash(self, maps_dir):
        result = process_map_folder(maps_dir / "v3_map")
        assert result.hash == compute_map_hash(maps_dir / "v3_map")
        assert len(result.difficulties) == 1

    def test_process_failure_returns_none(self, tmp_path, caplog):
        assert process_map_folder(tmp_path) is None
        assert "Failed to process" in caplog.text


class TestBatch:
    def test_iter_map_folders(self, maps_dir):
        (maps_dir / "not_a_map").mkdir()
        assert list(iter_map_folders(maps_dir)) == [maps_dir / "v2_map", maps_dir / "v3_map"]

    def test_parallel_matches_sequential(self, maps_dir):
        folders = list(iter_map_folders(maps_dir))
        sequential = parse_map_folders(folders, max_workers=1)
        parallel = parse_map_folders(folders, max_workers=2)
        assert parallel == sequential
        assert [f.source_id for f in parallel] == ["v2_map", "v3_map"]

    def test_failed_folder_is_none(self, maps_dir):
        (maps_dir / "v2_map" / "Info.dat").write_text("[]")
        results = parse_map_folders(list(iter_map_folders(maps_dir)), max_workers=1)
        assert results[0] is None
        assert results[1].source_id == "v3_map"

    def test_run_batch(self, maps_dir, tmp_path):
        out = tmp_path / "out"
        result = run_batch(BatchConfig(input_dir=maps_dir, output_dir=out, max_workers=1))
        assert result.total_maps == 2
        assert result.total_beatmaps == 3
        assert result.total_events == 30
        assert result.errors == []
        assert read_event_parquet(out).num_rows == 9
        assert len(json.loads((out / "metadata.json").read_text())) == 2

    def test_run_batch_reports_failed_folders(self, maps_dir, tmp_path):
        broken = maps_dir / "broken"
        broken.mkdir()
        (broken / "Info.dat").write_text("not json")
        config = BatchConfig(input_dir=maps_dir, output_dir=tmp_path / "out", max_workers=1)
        result = run_batch(config)
        assert result.total_maps == 2
        assert result.errors == [str(broken)]
