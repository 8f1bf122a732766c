"""Unified light event boxes.

Color, rotation and translation box groups share one lane structure. Lanes
coming from rotation and translation groups also carry ``axis`` and
``reverse``; color lanes leave both as ``None``.
"""

from dataclasses import dataclass
from typing import ClassVar, Union

from beat_reader.schemas.enums import (
    Axis,
    BoxFilterOrdering,
    DistributionKind,
    Easing,
    EventKind,
    LightColor,
    LimitKind,
    RotationBehaviour,
    RotationDirection,
    TransitionKind,
)


@dataclass(frozen=True)
class Sections:
    """Split the fixtures into *count* sections and pick section *index*."""

    count: int
    index: int


@dataclass(frozen=True)
class StepAndOffset:
    """Start at fixture *start* and take every *skip*-th one after it."""

    start: int
    skip: int


BoxFilterSettings = Union[Sections, StepAndOffset]


@dataclass(frozen=True)
class BoxFilter:
    """Which fixture chunks a lane applies to, and in what order."""

    chunks: int
    settings: BoxFilterSettings
    reverse: bool
    ordering: BoxFilterOrdering
    random_seed: int
    limit: float
    limit_kind: LimitKind


@dataclass(frozen=True)
class LightColorEvent:
    relative_beat: float
    transition_kind: TransitionKind
    color: LightColor
    brightness: float
    frequency: int


@dataclass(frozen=True)
class LightRotationEvent:
    relative_beat: float
    behaviour: RotationBehaviour
    easing: Easing
    loops: int
    amount: float  # degrees
    direction: RotationDirection


@dataclass(frozen=True)
class LightTranslationEvent:
    relative_beat: float
    rotation_behaviour: RotationBehaviour
    easing: Easing
    amount: float


@dataclass(frozen=True)
class ColorLightEvents:
    events: tuple[LightColorEvent, ...] = ()


@dataclass(frozen=True)
class RotationLightEvents:
    events: tuple[LightRotationEvent, ...] = ()


@dataclass(frozen=True)
class TranslationLightEvents:
    events: tuple[LightTranslationEvent, ...] = ()


LightEvents = Union[ColorLightEvents, RotationLightEvents, TranslationLightEvents]


@dataclass(frozen=True)
class LightEventLane:
    filter: BoxFilter
    beat_dist: float
    beat_dist_kind: DistributionKind
    dist: float  # brightness for color lanes, rotation/translation amount otherwise
    dist_kind: DistributionKind
    dist_affects_first_event: bool
    dist_easing: Easing | None
    axis: Axis | None
    reverse: bool | None
    events: LightEvents


@dataclass(frozen=True)
class LightEventBox:
    kind: ClassVar[EventKind] = EventKind.LIGHT_EVENT_BOX

    beat: float
    group: int
    lanes: tuple[LightEventLane, ...] = ()
