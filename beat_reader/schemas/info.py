"""Raw shape of a Beat Saber ``info.dat`` (set-level metadata) file."""

from pydantic import Field, StrictFloat, StrictInt, StrictStr

from beat_reader.schemas.enums import Difficulty
from beat_reader.schemas.raw import CustomData, RawModel


class DifficultyBeatmap(RawModel):
    difficulty: Difficulty = Field(alias="_difficulty")
    difficultyRank: StrictInt = Field(alias="_difficultyRank")
    beatmapFilename: StrictStr = Field(alias="_beatmapFilename")
    noteJumpMovementSpeed: StrictFloat = Field(alias="_noteJumpMovementSpeed")
    noteJumpStartBeatOffset: StrictFloat = Field(alias="_noteJumpStartBeatOffset")
    customData: CustomData = Field(default_factory=dict, alias="_customData")


class DifficultyBeatmapSet(RawModel):
    beatmapCharacteristicName: StrictStr = Field(alias="_beatmapCharacteristicName")
    difficultyBeatmaps: list[DifficultyBeatmap] = Field(alias="_difficultyBeatmaps")


class Info(RawModel):
    version: StrictStr = Field(alias="_version")
    songName: StrictStr = Field(alias="_songName")
    songSubName: StrictStr = Field(alias="_songSubName")
    songAuthorName: StrictStr = Field(alias="_songAuthorName")
    levelAuthorName: StrictStr = Field(alias="_levelAuthorName")
    beatsPerMinute: StrictFloat = Field(alias="_beatsPerMinute")
    shuffle: StrictFloat = Field(alias="_shuffle")
    shufflePeriod: StrictFloat = Field(alias="_shufflePeriod")
    previewStartTime: StrictFloat = Field(alias="_previewStartTime")
    previewDuration: StrictFloat = Field(alias="_previewDuration")
    songFilename: StrictStr = Field(alias="_songFilename")
    coverImageFilename: StrictStr = Field(alias="_coverImageFilename")
    environmentName: StrictStr = Field(alias="_environmentName")
    allDirectionsEnvironmentName: StrictStr | None = Field(
        default=None, alias="_allDirectionsEnvironmentName"
    )
    songTimeOffset: StrictFloat = Field(alias="_songTimeOffset")
    customData: CustomData = Field(default_factory=dict, alias="_customData")
    difficultyBeatmapSets: list[DifficultyBeatmapSet] = Field(alias="_difficultyBeatmapSets")
