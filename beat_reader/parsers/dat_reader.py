"""Utility to read Beat Saber .dat files with automatic gzip detection."""

import gzip
import json
from pathlib import Path
from typing import Any

from beat_reader.errors import DatReadError

GZIP_MAGIC = b'\x1f\x8b'


def decode_dat_bytes(raw: bytes) -> str:
    """Decompress if gzipped, then decode as UTF-8.

    Invalid byte sequences are replaced rather than rejected and a leading BOM
    is dropped; map editors are not consistent about either.
    """
    if raw[:2] == GZIP_MAGIC:
        raw = gzip.decompress(raw)
    return raw.decode("utf-8-sig", errors="replace")


def read_dat_text(filepath: str | Path) -> str:
    """Read a .dat file as text, auto-detecting gzip compression."""
    filepath = Path(filepath)
    try:
        return decode_dat_bytes(filepath.read_bytes())
    except (OSError, EOFError) as exc:
        raise DatReadError(filepath, exc) from exc


def read_dat_file(filepath: str | Path) -> Any:
    """Read a .dat file, auto-detecting gzip compression. Returns parsed JSON."""
    return json.loads(read_dat_text(filepath))
