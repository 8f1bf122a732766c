"""Integer-coded enumerations used by Beat Saber map files.

Every enumeration is written to disk as a small signed integer (difficulty
names are the exception and are stored as strings). ``IntEnum`` gives the
code -> symbol mapping via ``Direction(1)`` and the reverse via ``.value``.
"""

from enum import Enum, IntEnum


class NoteColor(IntEnum):
    RED = 0  # left saber
    BLUE = 1  # right saber


class Direction(IntEnum):
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3
    UP_LEFT = 4
    UP_RIGHT = 5
    DOWN_LEFT = 6
    DOWN_RIGHT = 7
    ANY = 8  # dot note


class SliderMidAnchorMode(IntEnum):
    STRAIGHT = 0
    CLOCKWISE = 1
    COUNTER_CLOCKWISE = 2


class RotationBehaviour(IntEnum):
    TRANSITION = 0
    EXTEND = 1


class RotationDirection(IntEnum):
    AUTOMATIC = 0
    CLOCKWISE = 1
    COUNTER_CLOCKWISE = 2


class DistributionKind(IntEnum):
    WAVE = 1
    STEP = 2


class Easing(IntEnum):
    NONE = -1
    LINEAR = 0
    EASE_IN_QUAD = 1
    EASE_OUT_QUAD = 2
    EASE_IN_OUT_QUAD = 3


class Axis(IntEnum):
    X = 0
    Y = 1
    Z = 2


class TransitionKind(IntEnum):
    INSTANT = 0
    TRANSITION = 1
    EXTEND = 2


class LightColor(IntEnum):
    RED = 0
    BLUE = 1
    WHITE = 2


class BoxFilterOrdering(IntEnum):
    STANDARD_1 = 0
    STANDARD_2 = 1
    RANDOM = 2
    RANDOM_STARTING_INDEX = 3


class LimitKind(IntEnum):
    SECTIONS = 0
    SECTIONS_DURATION = 1
    SECTIONS_BRIGHTNESS = 2
    SECTIONS_DURATION_BRIGHTNESS = 3


class BoxFilterKind(IntEnum):
    SECTIONS = 1
    STEP_AND_OFFSET = 2


class OldNoteKind(IntEnum):
    """``_type`` of a v2 note. Red/Blue are color notes, 2 is never used."""

    RED = 0
    BLUE = 1
    UNUSED = 2
    BOMB = 3


class OldObstacleKind(IntEnum):
    """``_type`` of a v2 obstacle."""

    FULL = 0
    CROUCH = 1


DIFFICULTY_RANK_MAP = {
    "Easy": 1,
    "Normal": 3,
    "Hard": 5,
    "Expert": 7,
    "ExpertPlus": 9,
}


class Difficulty(str, Enum):
    """Difficulty names as written in info.dat."""

    EASY = "Easy"
    NORMAL = "Normal"
    HARD = "Hard"
    EXPERT = "Expert"
    EXPERT_PLUS = "ExpertPlus"

    @property
    def rank(self) -> int:
        return DIFFICULTY_RANK_MAP[self.value]


class EventKind(str, Enum):
    """Discriminant of the unified event variants."""

    BPM = "bpm"
    ROTATION = "rotation"
    NOTE = "note"
    BOMB = "bomb"
    OBSTACLE = "obstacle"
    SLIDER = "slider"
    BURST_SLIDER = "burst_slider"
    BASIC_EVENT = "basic_event"
    COLOR_BOOST = "color_boost"
    LIGHT_EVENT_BOX = "light_event_box"
