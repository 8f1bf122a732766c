"""Parse Info.dat (set-level metadata) files."""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from beat_reader.errors import InfoParsingError
from beat_reader.parsers.converters import convert_info
from beat_reader.parsers.dat_reader import read_dat_text
from beat_reader.schemas.info import Info
from beat_reader.schemas.normalized import BeatmapSetMeta


def parse_info(info_data: Any) -> BeatmapSetMeta:
    """Validate decoded Info.dat content and convert it to BeatmapSetMeta.

    Raises:
        InfoParsingError: If the document does not have the info.dat shape.
    """
    try:
        raw = Info.model_validate(info_data)
    except ValidationError as exc:
        raise InfoParsingError(exc) from exc
    return convert_info(raw)


def read_info_str(data: str) -> BeatmapSetMeta:
    try:
        info_data = json.loads(data)
    except json.JSONDecodeError as exc:
        raise InfoParsingError(exc) from exc
    return parse_info(info_data)


def read_info_file(path: str | Path) -> BeatmapSetMeta:
    return read_info_str(read_dat_text(path))
