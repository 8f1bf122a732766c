"""Shared building blocks for the on-disk (raw) schema models."""

from enum import IntEnum
from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict

E = TypeVar("E", bound=IntEnum)


def _flag(value: Any) -> bool:
    # The game writes booleans both as JSON true/false and as 0/1.
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise ValueError("expected a boolean or a 0/1 flag")


def _code(value: Any) -> int:
    # Only a plain JSON integer may name an enumeration member.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError("expected an integer code")
    return value


Flag = Annotated[bool, BeforeValidator(_flag)]

# Integer-coded enumeration field, e.g. ``Code[NoteColor]``.
Code = Annotated[E, BeforeValidator(_code)]

CustomData = dict[str, Any]


class RawModel(BaseModel):
    """Exact on-disk record shape. Unknown keys are ignored, nothing is coerced."""

    model_config = ConfigDict(frozen=True, extra="ignore")
