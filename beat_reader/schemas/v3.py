"""Raw shape of Beat Saber v3 ("new") difficulty files.

V3 maps use short single-letter keys (b, x, y, c, d, a) and keep every record
kind in its own top-level array. Field names here are the wire names.
"""

from typing import Any

from pydantic import Field, StrictFloat, StrictInt, StrictStr

from beat_reader.schemas.enums import (
    Axis,
    BoxFilterKind,
    BoxFilterOrdering,
    Direction,
    DistributionKind,
    Easing,
    LightColor,
    LimitKind,
    NoteColor,
    RotationBehaviour,
    RotationDirection,
    SliderMidAnchorMode,
    TransitionKind,
)
from beat_reader.schemas.raw import Code, CustomData, Flag, RawModel


class BpmEvent(RawModel):
    b: StrictFloat
    m: StrictFloat  # beats per minute


class RotationEvent(RawModel):
    b: StrictFloat
    e: Flag  # 0 = early, 1 = late
    r: StrictFloat


class ColorNote(RawModel):
    b: StrictFloat
    x: StrictInt
    y: StrictInt
    c: Code[NoteColor]
    d: Code[Direction]
    a: StrictInt  # angle offset in degrees


class BombNote(RawModel):
    b: StrictFloat
    x: StrictInt
    y: StrictInt


class Obstacle(RawModel):
    b: StrictFloat
    x: StrictInt
    y: StrictInt
    d: StrictFloat  # duration in beats
    w: StrictFloat
    h: StrictFloat


class Slider(RawModel):
    b: StrictFloat
    c: Code[NoteColor]
    x: StrictInt
    y: StrictInt
    d: Code[Direction]
    mu: StrictFloat  # head control point length multiplier
    tb: StrictFloat
    tx: StrictInt
    ty: StrictInt
    tc: Code[Direction]
    tmu: StrictFloat
    m: Code[SliderMidAnchorMode]


class BurstSlider(RawModel):
    b: StrictFloat
    c: Code[NoteColor]
    x: StrictInt
    y: StrictInt
    d: Code[Direction]
    tb: StrictFloat
    tx: StrictInt
    ty: StrictInt
    sc: StrictInt  # segment count
    s: StrictFloat  # squish factor


class BasicBeatmapEvent(RawModel):
    b: StrictFloat
    et: StrictInt
    i: StrictInt
    f: StrictFloat | None = None


class ColorBoostBeatmapEvent(RawModel):
    b: StrictFloat
    o: Flag


class FilterObject(RawModel):
    c: StrictInt  # chunks
    f: Code[BoxFilterKind]
    p: StrictInt  # section count, or start index for step-and-offset
    t: StrictInt  # section index, or step for step-and-offset
    r: Flag
    n: Code[BoxFilterOrdering]
    s: StrictInt  # random seed
    l: StrictFloat  # limit
    d: Code[LimitKind]


class LightColorEventData(RawModel):
    b: StrictFloat
    i: Code[TransitionKind]
    c: Code[LightColor]
    s: StrictFloat  # brightness
    f: StrictInt  # strobe frequency


class LightRotationEventData(RawModel):
    b: StrictFloat
    p: Code[RotationBehaviour]
    l: StrictInt  # loop count
    e: Code[Easing]
    r: StrictFloat
    o: Code[RotationDirection]


class LightTranslationEventData(RawModel):
    b: StrictFloat
    p: Code[RotationBehaviour]
    e: Code[Easing]
    t: StrictFloat


class LightColorEventBoxGroupLane(RawModel):
    f: FilterObject
    w: StrictFloat  # beat distribution
    d: Code[DistributionKind]
    r: StrictFloat  # brightness distribution
    t: Code[DistributionKind]
    b: Flag
    i: Code[Easing] | None = None
    e: list[LightColorEventData]


class LightRotationEventBoxGroupLane(RawModel):
    f: FilterObject
    w: StrictFloat
    d: Code[DistributionKind]
    s: StrictFloat  # rotation distribution
    t: Code[DistributionKind]
    b: Flag
    i: Code[Easing] | None = None
    a: Code[Axis]
    r: Flag
    e: list[LightRotationEventData]


class LightTranslationEventBoxGroupLane(RawModel):
    f: FilterObject
    w: StrictFloat
    d: Code[DistributionKind]
    s: StrictFloat  # translation distribution
    t: Code[DistributionKind]
    b: Flag
    i: Code[Easing] | None = None
    a: Code[Axis]
    r: Flag
    l: list[LightTranslationEventData]


class LightColorEventBoxGroup(RawModel):
    b: StrictFloat
    g: StrictInt
    e: list[LightColorEventBoxGroupLane]


class LightRotationEventBoxGroup(RawModel):
    b: StrictFloat
    g: StrictInt
    e: list[LightRotationEventBoxGroupLane]


class LightTranslationEventBoxGroup(RawModel):
    b: StrictFloat
    g: StrictInt
    e: list[LightTranslationEventBoxGroupLane]


class NewBeatmapFile(RawModel):
    version: StrictStr
    bpmEvents: list[BpmEvent]
    rotationEvents: list[RotationEvent]
    colorNotes: list[ColorNote]
    bombNotes: list[BombNote]
    obstacles: list[Obstacle]
    sliders: list[Slider]
    burstSliders: list[BurstSlider]
    waypoints: list[Any]
    basicBeatmapEvents: list[BasicBeatmapEvent]
    colorBoostBeatmapEvents: list[ColorBoostBeatmapEvent]
    lightColorEventBoxGroups: list[LightColorEventBoxGroup]
    lightRotationEventBoxGroups: list[LightRotationEventBoxGroup]
    lightTranslationEventBoxGroups: list[LightTranslationEventBoxGroup] = Field(
        default_factory=list
    )
    basicEventTypesWithKeywords: CustomData = Field(default_factory=dict)
    useNormalEventsAsCompatibleEvents: Flag
    customData: CustomData = Field(default_factory=dict)
