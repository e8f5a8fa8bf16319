"""UDim: one axis of a scale + pixel offset pair."""

from dataclasses import dataclass

from .. import numeric
from ..variant import VariantType
from .base import Datatype, payload_float, payload_int, payload_tuple


@dataclass(frozen=True)
class UDim(Datatype):
    """
    A scale (fraction of the parent size) plus an absolute pixel offset.

    ``scale`` is float32, ``offset`` is int32 and wraps on overflow.
    """
    scale: float = 0.0
    offset: int = 0

    type_name = "UDim"
    variant_type = VariantType.UDIM

    def __post_init__(self):
        object.__setattr__(self, "scale", numeric.f32(self.scale))
        object.__setattr__(self, "offset", numeric.wrap_int(self.offset, 32))

    def __str__(self) -> str:
        return f"{numeric.format_number(self.scale)}, {self.offset}"

    def __neg__(self) -> "UDim":
        return UDim(-self.scale, numeric.wrap_int(-self.offset, 32))

    def __add__(self, other):
        if not isinstance(other, UDim):
            return NotImplemented
        (scale,) = numeric.add([self.scale], [other.scale])
        return UDim(scale, numeric.wrap_int(self.offset + other.offset, 32))

    def __sub__(self, other):
        if not isinstance(other, UDim):
            return NotImplemented
        (scale,) = numeric.sub([self.scale], [other.scale])
        return UDim(scale, numeric.wrap_int(self.offset - other.offset, 32))

    def lerp(self, other: "UDim", alpha: float) -> "UDim":
        """Interpolate scale and offset; the offset is clamped then rounded."""
        scale, offset = numeric.lerp(
            (self.scale, numeric.f32(self.offset)),
            (other.scale, numeric.f32(other.offset)),
            alpha,
        )
        return UDim(scale, numeric.offset_from_float(offset))

    # --- Conversion ---

    def _to_payload(self):
        return (self.scale, self.offset)

    @classmethod
    def _from_payload(cls, payload):
        scale, offset = payload_tuple(payload, 2)
        return cls(payload_float(scale), payload_int(offset))
