"""ColorSequence: an ordered color ramp."""

from dataclasses import dataclass
from typing import Iterable, Tuple

from ..errors import error_invalid_value
from ..variant import VariantType
from .base import Datatype
from .color3 import Color3
from .color_sequence_keypoint import ColorSequenceKeypoint


@dataclass(frozen=True)
class ColorSequence(Datatype):
    """
    A color ramp made of keypoints.

    Invariants, enforced on construction by rejecting the value (nothing is
    normalized): at least two keypoints, times non-decreasing, the first
    keypoint at time 0 and the last at time 1.
    """
    keypoints: Tuple[ColorSequenceKeypoint, ...]

    type_name = "ColorSequence"
    variant_type = VariantType.COLOR_SEQUENCE

    def __post_init__(self):
        keypoints = tuple(self.keypoints)
        if not all(isinstance(k, ColorSequenceKeypoint) for k in keypoints):
            raise error_invalid_value(self.type_name, "keypoints must be ColorSequenceKeypoints")
        if len(keypoints) < 2:
            raise error_invalid_value(self.type_name, "at least 2 keypoints are required")
        if keypoints[0].time != 0.0:
            raise error_invalid_value(self.type_name, "the first keypoint must be at time 0")
        if keypoints[-1].time != 1.0:
            raise error_invalid_value(self.type_name, "the last keypoint must be at time 1")
        for prev, cur in zip(keypoints, keypoints[1:]):
            if cur.time < prev.time:
                raise error_invalid_value(self.type_name, "keypoints must be sorted by time")
        object.__setattr__(self, "keypoints", keypoints)

    @classmethod
    def from_color(cls, color: Color3) -> "ColorSequence":
        """A constant ramp."""
        return cls((ColorSequenceKeypoint(0.0, color), ColorSequenceKeypoint(1.0, color)))

    @classmethod
    def from_colors(cls, start: Color3, end: Color3) -> "ColorSequence":
        """A two-stop ramp from start to end."""
        return cls((ColorSequenceKeypoint(0.0, start), ColorSequenceKeypoint(1.0, end)))

    @classmethod
    def from_keypoints(cls, keypoints: Iterable[ColorSequenceKeypoint]) -> "ColorSequence":
        return cls(tuple(keypoints))

    def __str__(self) -> str:
        return ", ".join(str(k) for k in self.keypoints)

    def _to_payload(self):
        return tuple(k._to_payload() for k in self.keypoints)

    @classmethod
    def _from_payload(cls, payload):
        if not isinstance(payload, (tuple, list)):
            raise TypeError(f"expected a keypoint tuple, got {type(payload).__name__}")
        return cls(tuple(ColorSequenceKeypoint._from_payload(k) for k in payload))
