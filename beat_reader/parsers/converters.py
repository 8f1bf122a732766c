"""Convert raw v2/v3 records into the normalized data structures.

Every raw record kind has one entry in ``RECORD_MAPPINGS`` describing where
each normalized field comes from: either a raw attribute, copied as is, or a
function of the whole raw record for derived values. Conversion never fails;
anything malformed has already been rejected by the raw models.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Union

from beat_reader.schemas import info, v2, v3
from beat_reader.schemas.detection import SCHEMA_VERSIONS, BeatmapFile
from beat_reader.schemas.enums import BoxFilterKind, NoteColor, OldNoteKind, OldObstacleKind
from beat_reader.schemas.lighting import (
    BoxFilter,
    ColorLightEvents,
    LightColorEvent,
    LightEventBox,
    LightEventLane,
    LightRotationEvent,
    LightTranslationEvent,
    RotationLightEvents,
    Sections,
    StepAndOffset,
    TranslationLightEvents,
)
from beat_reader.schemas.normalized import (
    BasicEvent,
    Beatmap,
    BeatmapMeta,
    BeatmapSetMeta,
    Bomb,
    BPMEvent,
    BurstSlider,
    ColorBoost,
    DifficultySet,
    Event,
    Note,
    Obstacle,
    Rotation,
    Slider,
)

logger = logging.getLogger(__name__)

# v2 walls only store a type; their vertical placement is fixed per type.
OBSTACLE_GEOMETRY: dict[OldObstacleKind, tuple[int, float]] = {
    OldObstacleKind.FULL: (0, 5.0),  # (y, height)
    OldObstacleKind.CROUCH: (2, 2.0),
}

# Source lists in the order their events appear in Beatmap.events.
OLD_SCHEMA_CATEGORIES = ("notes", "sliders", "obstacles", "events")
NEW_SCHEMA_CATEGORIES = (
    "bpmEvents",
    "rotationEvents",
    "colorNotes",
    "bombNotes",
    "sliders",
    "obstacles",
    "burstSliders",
    "basicBeatmapEvents",
    "colorBoostBeatmapEvents",
    "lightColorEventBoxGroups",
    "lightRotationEventBoxGroups",
    "lightTranslationEventBoxGroups",
)

FieldSource = Union[str, Callable[[Any], Any]]


@dataclass(frozen=True)
class RecordMapping:
    """Build *target* from a raw record.

    ``fields`` maps each target field name to the raw attribute it is copied
    from, or to a function of the raw record.
    """

    target: type
    fields: dict[str, FieldSource]

    def convert(self, record: Any) -> Any:
        values = {
            name: getattr(record, source) if isinstance(source, str) else source(record)
            for name, source in self.fields.items()
        }
        return self.target(**values)


@dataclass(frozen=True)
class DiscriminatedMapping:
    """Pick a mapping by the value of the record's *key* attribute.

    A ``None`` mapping drops the record.
    """

    key: str
    mappings: dict[Any, RecordMapping | None]

    def convert(self, record: Any) -> Any:
        mapping = self.mappings[getattr(record, self.key)]
        if mapping is None:
            return None
        return mapping.convert(record)


def convert_record(record: Any) -> Any:
    """Convert one raw record. Returns ``None`` for records that are dropped."""
    return RECORD_MAPPINGS[type(record)].convert(record)


def convert_records(records: Iterable[Any]) -> tuple:
    converted = (convert_record(record) for record in records)
    return tuple(value for value in converted if value is not None)


def _const(value: Any) -> Callable[[Any], Any]:
    return lambda record: value


def _nested(attr: str) -> Callable[[Any], Any]:
    return lambda record: convert_record(getattr(record, attr))


def _each(attr: str, wrapper: Callable[[tuple], Any] = tuple) -> Callable[[Any], Any]:
    return lambda record: wrapper(convert_records(getattr(record, attr)))


def _copy(attr: str) -> Callable[[Any], Any]:
    return lambda record: dict(getattr(record, attr))


def _wall_y(obstacle: v2.OldObstacle) -> int:
    return OBSTACLE_GEOMETRY[obstacle.type][0]


def _wall_height(obstacle: v2.OldObstacle) -> float:
    return OBSTACLE_GEOMETRY[obstacle.type][1]


# --- v2 ----------------------------------------------------------------------

_OLD_NOTE_COLORS = {OldNoteKind.RED: NoteColor.RED, OldNoteKind.BLUE: NoteColor.BLUE}

_OLD_COLOR_NOTE = RecordMapping(Note, {
    "beat": "time",
    "x": "lineIndex",
    "y": "lineLayer",
    "color": lambda note: _OLD_NOTE_COLORS[note.type],
    "direction": "cutDirection",
    "angle_offset": _const(0.0),
})

_OLD_BOMB = RecordMapping(Bomb, {"beat": "time", "x": "lineIndex", "y": "lineLayer"})

_V2_MAPPINGS = {
    v2.OldNote: DiscriminatedMapping("type", {
        OldNoteKind.RED: _OLD_COLOR_NOTE,
        OldNoteKind.BLUE: _OLD_COLOR_NOTE,
        OldNoteKind.BOMB: _OLD_BOMB,
        OldNoteKind.UNUSED: None,
    }),
    v2.OldSlider: RecordMapping(Slider, {
        "head_beat": "headTime",
        "color": "colorType",
        "head_x": "headLineIndex",
        "head_y": "headLineLayer",
        "head_direction": "headCutDirection",
        "head_bulge": "headControlPointLengthMultiplier",
        "tail_beat": "tailTime",
        "tail_x": "tailLineIndex",
        "tail_y": "tailLineLayer",
        "tail_direction": "tailCutDirection",
        "tail_bulge": "tailControlPointLengthMultiplier",
        "special_curving": "sliderMidAnchorMode",
    }),
    v2.OldObstacle: RecordMapping(Obstacle, {
        "beat": "time",
        "x": "lineIndex",
        "y": _wall_y,
        "duration": "duration",
        "width": "width",
        "height": _wall_height,
    }),
    v2.OldEvent: RecordMapping(BasicEvent, {
        "beat": "time",
        "type": "type",
        "value": "value",
        "float_value": "floatValue",
        "custom_data": _copy("customData"),
    }),
}

# --- v3 ----------------------------------------------------------------------

_V3_MAPPINGS = {
    v3.BpmEvent: RecordMapping(BPMEvent, {"beat": "b", "value": "m"}),
    v3.RotationEvent: RecordMapping(Rotation, {"beat": "b", "is_late": "e", "value": "r"}),
    v3.ColorNote: RecordMapping(Note, {
        "beat": "b",
        "x": "x",
        "y": "y",
        "color": "c",
        "direction": "d",
        "angle_offset": lambda note: float(note.a),
    }),
    v3.BombNote: RecordMapping(Bomb, {"beat": "b", "x": "x", "y": "y"}),
    v3.Obstacle: RecordMapping(Obstacle, {
        "beat": "b",
        "x": "x",
        "y": "y",
        "duration": "d",
        "width": "w",
        "height": "h",
    }),
    v3.Slider: RecordMapping(Slider, {
        "head_beat": "b",
        "color": "c",
        "head_x": "x",
        "head_y": "y",
        "head_direction": "d",
        "head_bulge": "mu",
        "tail_beat": "tb",
        "tail_x": "tx",
        "tail_y": "ty",
        "tail_direction": "tc",
        "tail_bulge": "tmu",
        "special_curving": "m",
    }),
    v3.BurstSlider: RecordMapping(BurstSlider, {
        "head_beat": "b",
        "color": "c",
        "head_x": "x",
        "head_y": "y",
        "head_direction": "d",
        "tail_beat": "tb",
        "tail_x": "tx",
        "tail_y": "ty",
        "segment_count": "sc",
        "squish": "s",
    }),
    v3.BasicBeatmapEvent: RecordMapping(BasicEvent, {
        "beat": "b",
        "type": "et",
        "value": "i",
        "float_value": "f",
    }),
    v3.ColorBoostBeatmapEvent: RecordMapping(ColorBoost, {"beat": "b", "enable": "o"}),
}

# --- v3 light event boxes ----------------------------------------------------


def _lane_mapping(
    dist: str,
    events: str,
    wrapper: type,
    directional: bool,
) -> RecordMapping:
    """Fold one of the three lane shapes into LightEventLane.

    *dist* names the raw field holding the secondary distribution (``r`` on
    color lanes, ``s`` on rotation/translation lanes). Only *directional*
    lanes have an axis and a reverse flag.
    """
    return RecordMapping(LightEventLane, {
        "filter": _nested("f"),
        "beat_dist": "w",
        "beat_dist_kind": "d",
        "dist": dist,
        "dist_kind": "t",
        "dist_affects_first_event": "b",
        "dist_easing": "i",
        "axis": "a" if directional else _const(None),
        "reverse": "r" if directional else _const(None),
        "events": _each(events, wrapper),
    })


# ``p`` and ``t`` mean different things depending on the filter type ``f``.
_FILTER_SETTINGS = DiscriminatedMapping("f", {
    BoxFilterKind.SECTIONS: RecordMapping(Sections, {"count": "p", "index": "t"}),
    BoxFilterKind.STEP_AND_OFFSET: RecordMapping(StepAndOffset, {"start": "p", "skip": "t"}),
})

_BOX_GROUP = RecordMapping(LightEventBox, {"beat": "b", "group": "g", "lanes": _each("e")})

_LIGHT_MAPPINGS = {
    v3.LightColorEventBoxGroup: _BOX_GROUP,
    v3.LightRotationEventBoxGroup: _BOX_GROUP,
    v3.LightTranslationEventBoxGroup: _BOX_GROUP,
    v3.LightColorEventBoxGroupLane: _lane_mapping("r", "e", ColorLightEvents, directional=False),
    v3.LightRotationEventBoxGroupLane: _lane_mapping(
        "s", "e", RotationLightEvents, directional=True
    ),
    v3.LightTranslationEventBoxGroupLane: _lane_mapping(
        "s", "l", TranslationLightEvents, directional=True
    ),
    v3.LightColorEventData: RecordMapping(LightColorEvent, {
        "relative_beat": "b",
        "transition_kind": "i",
        "color": "c",
        "brightness": "s",
        "frequency": "f",
    }),
    v3.LightRotationEventData: RecordMapping(LightRotationEvent, {
        "relative_beat": "b",
        "behaviour": "p",
        "easing": "e",
        "loops": "l",
        "amount": "r",
        "direction": "o",
    }),
    v3.LightTranslationEventData: RecordMapping(LightTranslationEvent, {
        "relative_beat": "b",
        "rotation_behaviour": "p",
        "easing": "e",
        "amount": "t",
    }),
    v3.FilterObject: RecordMapping(BoxFilter, {
        "chunks": "c",
        "settings": _FILTER_SETTINGS.convert,
        "reverse": "r",
        "ordering": "n",
        "random_seed": "s",
        "limit": "l",
        "limit_kind": "d",
    }),
}

# --- info.dat ----------------------------------------------------------------

_INFO_MAPPINGS = {
    info.Info: RecordMapping(BeatmapSetMeta, {
        "version": "version",
        "song_name": "songName",
        "song_subname": "songSubName",
        "song_author": "songAuthorName",
        "map_author": "levelAuthorName",
        "bpm": "beatsPerMinute",
        "shuffle": "shuffle",
        "shuffle_period": "shufflePeriod",
        "preview_start": "previewStartTime",
        "preview_duration": "previewDuration",
        "song_filename": "songFilename",
        "cover_image_filename": "coverImageFilename",
        "environment_name": "environmentName",
        "all_directions_environment_name": "allDirectionsEnvironmentName",
        "song_offset": "songTimeOffset",
        "custom_data": _copy("customData"),
        "difficulty_sets": _each("difficultyBeatmapSets"),
    }),
    info.DifficultyBeatmapSet: RecordMapping(DifficultySet, {
        "game_mode": "beatmapCharacteristicName",
        "beatmaps": _each("difficultyBeatmaps"),
    }),
    info.DifficultyBeatmap: RecordMapping(BeatmapMeta, {
        "difficulty": "difficulty",
        "rank": "difficultyRank",
        "filename": "beatmapFilename",
        "note_jump_speed": "noteJumpMovementSpeed",
        "note_jump_start_beat_offset": "noteJumpStartBeatOffset",
        "custom_data": _copy("customData"),
    }),
}

RECORD_MAPPINGS: dict[type, RecordMapping | DiscriminatedMapping] = {
    **_V2_MAPPINGS,
    **_V3_MAPPINGS,
    **_LIGHT_MAPPINGS,
    **_INFO_MAPPINGS,
}


def _timeline(beatmap_file: BeatmapFile, categories: tuple[str, ...]) -> tuple[Event, ...]:
    events: list[Event] = []
    for category in categories:
        events.extend(convert_records(getattr(beatmap_file, category)))
    return tuple(events)


def normalize(beatmap_file: BeatmapFile) -> Beatmap:
    """Convert a raw v2 or v3 difficulty file into a Beatmap.

    Events are concatenated category by category (see ``OLD_SCHEMA_CATEGORIES``
    and ``NEW_SCHEMA_CATEGORIES``); order inside a category follows the file.
    """
    if isinstance(beatmap_file, v3.NewBeatmapFile):
        beatmap = Beatmap(
            version=beatmap_file.version,
            events=_timeline(beatmap_file, NEW_SCHEMA_CATEGORIES),
            waypoints=tuple(beatmap_file.waypoints),
            basic_event_types_with_keywords=dict(beatmap_file.basicEventTypesWithKeywords),
            use_normal_events_as_compatible_events=beatmap_file.useNormalEventsAsCompatibleEvents,
            custom_data=dict(beatmap_file.customData),
        )
    else:
        beatmap = Beatmap(
            version=beatmap_file.version,
            events=_timeline(beatmap_file, OLD_SCHEMA_CATEGORIES),
            waypoints=tuple(beatmap_file.waypoints),
            basic_event_types_with_keywords={},
            use_normal_events_as_compatible_events=True,
            custom_data=dict(beatmap_file.customData),
        )

    logger.debug(
        "Normalized v%s difficulty: %d events",
        SCHEMA_VERSIONS[type(beatmap_file)],
        len(beatmap.events),
    )
    return beatmap


def convert_info(raw_info: info.Info) -> BeatmapSetMeta:
    """Convert a raw info.dat model into BeatmapSetMeta."""
    return convert_record(raw_info)
