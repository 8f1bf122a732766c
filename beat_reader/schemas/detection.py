"""Detect which Beat Saber difficulty schema a JSON document follows.

v2 files carry no dependable version tag, so detection is structural: the
document is validated against the v3 shape and then the v2 shape, and the
first one that matches exactly wins. A document matching neither is rejected
with both validation reports attached.
"""

import logging
from typing import Any, Union

from pydantic import BaseModel, ValidationError

from beat_reader.errors import BeatmapParsingError
from beat_reader.schemas.v2 import OldBeatmapFile
from beat_reader.schemas.v3 import NewBeatmapFile

logger = logging.getLogger(__name__)

BeatmapFile = Union[NewBeatmapFile, OldBeatmapFile]

# Order matters: v3 wins when a document satisfies both shapes.
CANDIDATE_SHAPES: tuple[type[BaseModel], ...] = (NewBeatmapFile, OldBeatmapFile)

SCHEMA_VERSIONS: dict[type[BaseModel], str] = {
    NewBeatmapFile: "3",
    OldBeatmapFile: "2",
}


def _attempt(shape: type[BaseModel], document: Any) -> BaseModel | ValidationError:
    try:
        return shape.model_validate(document)
    except ValidationError as exc:
        return exc


def detect_and_parse(document: Any) -> BeatmapFile:
    """Validate a decoded difficulty document against the known shapes.

    Args:
        document: Parsed JSON value of a difficulty file.

    Returns:
        The raw v3 (``NewBeatmapFile``) or v2 (``OldBeatmapFile``) model.

    Raises:
        BeatmapParsingError: If neither shape matches. Carries the v3 and v2
            validation errors as ``err_as_new`` and ``err_as_old``.
    """
    failures: list[ValidationError] = []
    for shape in CANDIDATE_SHAPES:
        result = _attempt(shape, document)
        if isinstance(result, ValidationError):
            failures.append(result)
            continue
        logger.debug("Difficulty document matched the v%s schema", SCHEMA_VERSIONS[shape])
        return result

    err_as_new, err_as_old = failures
    raise BeatmapParsingError(err_as_new=err_as_new, err_as_old=err_as_old)


def detect_beatmap_version(document: Any) -> str:
    """Return "3" or "2" for the schema a difficulty document matches.

    Raises:
        BeatmapParsingError: If the document matches neither schema.
    """
    return SCHEMA_VERSIONS[type(detect_and_parse(document))]
