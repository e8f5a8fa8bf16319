"""ColorSequenceKeypoint: one (time, color) stop of a ColorSequence."""

import math
from dataclasses import dataclass, field

from .. import numeric
from ..errors import error_invalid_value
from ..variant import VariantType
from .base import Datatype, payload_float, payload_tuple
from .color3 import Color3


@dataclass(frozen=True)
class ColorSequenceKeypoint(Datatype):
    """A color stop; ``time`` must lie in [0, 1]."""
    time: float = 0.0
    color: Color3 = field(default_factory=Color3)

    type_name = "ColorSequenceKeypoint"
    variant_type = VariantType.COLOR_SEQUENCE_KEYPOINT

    def __post_init__(self):
        time = numeric.f32(self.time)
        if math.isnan(time) or not 0.0 <= time <= 1.0:
            raise error_invalid_value(
                self.type_name, f"keypoint time {numeric.format_number(time)} is outside [0, 1]")
        if not isinstance(self.color, Color3):
            raise error_invalid_value(self.type_name, "keypoint color must be a Color3")
        object.__setattr__(self, "time", time)

    def __str__(self) -> str:
        return f"{numeric.format_number(self.time)}, {self.color}"

    def _to_payload(self):
        return (self.time, self.color._to_payload())

    @classmethod
    def _from_payload(cls, payload):
        time, color = payload_tuple(payload, 2)
        return cls(payload_float(time), Color3._from_payload(color))
