"""Raw shape of Beat Saber v2 ("old") difficulty files.

V2 maps use underscore-prefixed keys (_notes, _obstacles, _events) and store
notes and bombs together in a single _notes array differentiated by _type.
There is no reliable version tag, so these models double as the structural
test used by format detection.
"""

from typing import Any

from pydantic import Field, StrictFloat, StrictInt, StrictStr

from beat_reader.schemas.enums import (
    Direction,
    NoteColor,
    OldNoteKind,
    OldObstacleKind,
    SliderMidAnchorMode,
)
from beat_reader.schemas.raw import Code, CustomData, RawModel


class OldNote(RawModel):
    time: StrictFloat = Field(alias="_time")
    lineIndex: StrictInt = Field(alias="_lineIndex")  # column 0-3
    lineLayer: StrictInt = Field(alias="_lineLayer")  # row 0-2
    type: Code[OldNoteKind] = Field(alias="_type")
    cutDirection: Code[Direction] = Field(alias="_cutDirection")
    customData: CustomData = Field(default_factory=dict, alias="_customData")


class OldSlider(RawModel):
    colorType: Code[NoteColor] = Field(alias="_colorType")
    headTime: StrictFloat = Field(alias="_headTime")
    headLineIndex: StrictInt = Field(alias="_headLineIndex")
    headLineLayer: StrictInt = Field(alias="_headLineLayer")
    headControlPointLengthMultiplier: StrictFloat = Field(
        alias="_headControlPointLengthMultiplier"
    )
    headCutDirection: Code[Direction] = Field(alias="_headCutDirection")
    tailTime: StrictFloat = Field(alias="_tailTime")
    tailLineIndex: StrictInt = Field(alias="_tailLineIndex")
    tailLineLayer: StrictInt = Field(alias="_tailLineLayer")
    tailControlPointLengthMultiplier: StrictFloat = Field(
        alias="_tailControlPointLengthMultiplier"
    )
    tailCutDirection: Code[Direction] = Field(alias="_tailCutDirection")
    sliderMidAnchorMode: Code[SliderMidAnchorMode] = Field(alias="_sliderMidAnchorMode")
    customData: CustomData = Field(default_factory=dict, alias="_customData")


class OldObstacle(RawModel):
    time: StrictFloat = Field(alias="_time")
    lineIndex: StrictInt = Field(alias="_lineIndex")
    type: Code[OldObstacleKind] = Field(alias="_type")
    duration: StrictFloat = Field(alias="_duration")
    width: StrictFloat = Field(alias="_width")
    customData: CustomData = Field(default_factory=dict, alias="_customData")


class OldEvent(RawModel):
    time: StrictFloat = Field(alias="_time")
    type: StrictInt = Field(alias="_type")
    value: StrictInt = Field(alias="_value")
    floatValue: StrictFloat | None = Field(default=None, alias="_floatValue")
    customData: CustomData = Field(default_factory=dict, alias="_customData")


class OldBeatmapFile(RawModel):
    version: StrictStr = Field(alias="_version")
    notes: list[OldNote] = Field(alias="_notes")
    sliders: list[OldSlider] = Field(default_factory=list, alias="_sliders")
    obstacles: list[OldObstacle] = Field(alias="_obstacles")
    events: list[OldEvent] = Field(alias="_events")
    waypoints: list[Any] = Field(default_factory=list, alias="_waypoints")
    # Top-level custom data is unprefixed, unlike the per-record maps.
    customData: CustomData = Field(default_factory=dict)
