"""Normalized Beat Saber map data format.

Dataclasses that represent a unified schema across the v2 and v3 difficulty
formats. Converters turn the version-specific raw records into these
structures; downstream tools only ever see this module's types. Classes that
carry open custom-data maps compare by value but are not hashable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar, Union

from beat_reader.schemas.enums import (
    Difficulty,
    Direction,
    EventKind,
    NoteColor,
    SliderMidAnchorMode,
)
from beat_reader.schemas.lighting import LightEventBox


@dataclass(frozen=True)
class BPMEvent:
    kind: ClassVar[EventKind] = EventKind.BPM

    beat: float
    value: float


@dataclass(frozen=True)
class Rotation:
    kind: ClassVar[EventKind] = EventKind.ROTATION

    beat: float
    is_late: bool
    value: float  # degrees


@dataclass(frozen=True)
class Note:
    """A single color note (red or blue saber)."""

    kind: ClassVar[EventKind] = EventKind.NOTE

    beat: float
    x: int  # column 0-3
    y: int  # row 0-2
    color: NoteColor
    direction: Direction
    angle_offset: float = 0.0  # only non-zero in v3


@dataclass(frozen=True)
class Bomb:
    """A bomb note that the player must avoid hitting."""

    kind: ClassVar[EventKind] = EventKind.BOMB

    beat: float
    x: int
    y: int


@dataclass(frozen=True)
class Obstacle:
    """A wall/obstacle the player must dodge."""

    kind: ClassVar[EventKind] = EventKind.OBSTACLE

    beat: float
    x: int
    y: int
    duration: float
    width: float
    height: float  # v2: derived from the wall type; v3: explicit


@dataclass(frozen=True)
class Slider:
    """An arc connecting a head and a tail position."""

    kind: ClassVar[EventKind] = EventKind.SLIDER

    head_beat: float
    color: NoteColor
    head_x: int
    head_y: int
    head_direction: Direction
    head_bulge: float
    tail_beat: float
    tail_x: int
    tail_y: int
    tail_direction: Direction
    tail_bulge: float
    special_curving: SliderMidAnchorMode


@dataclass(frozen=True)
class BurstSlider:
    """A chain: a head note followed by *segment_count* links."""

    kind: ClassVar[EventKind] = EventKind.BURST_SLIDER

    head_beat: float
    color: NoteColor
    head_x: int
    head_y: int
    head_direction: Direction
    tail_beat: float
    tail_x: int
    tail_y: int
    segment_count: int
    squish: float


@dataclass(frozen=True)
class BasicEvent:
    """Legacy lighting / environment event."""

    kind: ClassVar[EventKind] = EventKind.BASIC_EVENT
    __hash__ = None  # custom_data is an open map

    beat: float
    type: int
    value: int
    float_value: float | None = None
    custom_data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ColorBoost:
    kind: ClassVar[EventKind] = EventKind.COLOR_BOOST

    beat: float
    enable: bool


Event = Union[
    BPMEvent,
    Rotation,
    Note,
    Bomb,
    Obstacle,
    Slider,
    BurstSlider,
    BasicEvent,
    ColorBoost,
    LightEventBox,
]

EVENT_TYPES: tuple[type, ...] = (
    BPMEvent,
    Rotation,
    Note,
    Bomb,
    Obstacle,
    Slider,
    BurstSlider,
    BasicEvent,
    ColorBoost,
    LightEventBox,
)


@dataclass(frozen=True)
class Beatmap:
    """One difficulty of a map, independent of the file format it came from."""

    __hash__ = None  # custom_data is an open map

    version: str
    events: tuple[Event, ...] = ()
    waypoints: tuple[Any, ...] = ()
    basic_event_types_with_keywords: dict[str, Any] = field(default_factory=dict)
    use_normal_events_as_compatible_events: bool = True
    custom_data: dict[str, Any] = field(default_factory=dict)

    def events_of(self, kind: EventKind) -> list[Event]:
        """Events of one kind, in timeline order."""
        return [event for event in self.events if event.kind is kind]

    @classmethod
    def read_from_str(cls, data: str) -> Beatmap:
        from beat_reader.parsers.beatmap_parser import read_beatmap_str

        return read_beatmap_str(data)

    @classmethod
    def read_from_file(cls, path: str | Path) -> Beatmap:
        from beat_reader.parsers.beatmap_parser import read_beatmap_file

        return read_beatmap_file(path)


@dataclass(frozen=True)
class BeatmapMeta:
    """Metadata for one difficulty level, as listed in info.dat."""

    __hash__ = None  # custom_data is an open map

    difficulty: Difficulty
    rank: int  # 1, 3, 5, 7, 9
    filename: str
    note_jump_speed: float
    note_jump_start_beat_offset: float
    custom_data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DifficultySet:
    game_mode: str  # "Standard", "OneSaber", "NoArrows", "360Degree", "90Degree", ...
    beatmaps: tuple[BeatmapMeta, ...] = ()


@dataclass(frozen=True)
class BeatmapSetMeta:
    """Song-level metadata from info.dat and the list of difficulties."""

    __hash__ = None  # custom_data is an open map

    version: str
    song_name: str
    song_subname: str
    song_author: str
    map_author: str
    bpm: float
    shuffle: float
    shuffle_period: float
    preview_start: float
    preview_duration: float
    song_filename: str
    cover_image_filename: str
    environment_name: str
    all_directions_environment_name: str | None
    song_offset: float
    custom_data: dict[str, Any] = field(default_factory=dict)
    difficulty_sets: tuple[DifficultySet, ...] = ()

    @classmethod
    def read_from_str(cls, data: str) -> BeatmapSetMeta:
        from beat_reader.parsers.info_parser import read_info_str

        return read_info_str(data)

    @classmethod
    def read_from_file(cls, path: str | Path) -> BeatmapSetMeta:
        from beat_reader.parsers.info_parser import read_info_file

        return read_info_file(path)


@dataclass(frozen=True)
class MapDifficulty:
    """A parsed difficulty file together with its info.dat entry."""

    game_mode: str
    meta: BeatmapMeta
    beatmap: Beatmap


@dataclass(frozen=True)
class MapFolder:
    """Complete parsed result for one map folder."""

    source_id: str  # folder name
    set_meta: BeatmapSetMeta
    difficulties: tuple[MapDifficulty, ...] = ()
    hash: str = ""  # content hash for dedup
