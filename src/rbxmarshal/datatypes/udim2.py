"""UDim2: a pair of independent UDim axes."""

from dataclasses import dataclass, field
from typing import Optional

from ..variant import VariantType
from .base import Datatype, payload_tuple
from .udim import UDim


@dataclass(frozen=True)
class UDim2(Datatype):
    """
    Two UDim axes, ``x`` (width) and ``y`` (height).

    The axes are owned by value and never interact: every operation is
    applied to each axis on its own.
    """
    x: UDim = field(default_factory=UDim)
    y: UDim = field(default_factory=UDim)

    type_name = "UDim2"
    variant_type = VariantType.UDIM2

    @classmethod
    def from_components(cls, scale_x: float = 0.0, offset_x: int = 0,
                        scale_y: float = 0.0, offset_y: int = 0) -> "UDim2":
        return cls(UDim(scale_x, offset_x), UDim(scale_y, offset_y))

    @classmethod
    def from_scale(cls, x: Optional[float] = None, y: Optional[float] = None) -> "UDim2":
        """Scale-only UDim2; offsets are zero."""
        return cls(UDim(x or 0.0, 0), UDim(y or 0.0, 0))

    @classmethod
    def from_offset(cls, x: Optional[int] = None, y: Optional[int] = None) -> "UDim2":
        """Offset-only UDim2; scales are zero."""
        return cls(UDim(0.0, x or 0), UDim(0.0, y or 0))

    def __str__(self) -> str:
        return f"{self.x}, {self.y}"

    def __neg__(self) -> "UDim2":
        return UDim2(-self.x, -self.y)

    def __add__(self, other):
        if not isinstance(other, UDim2):
            return NotImplemented
        return UDim2(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        if not isinstance(other, UDim2):
            return NotImplemented
        return UDim2(self.x - other.x, self.y - other.y)

    def lerp(self, other: "UDim2", alpha: float) -> "UDim2":
        """
        Interpolate both axes.

        Each axis is treated as a (scale, offset) float pair; the offsets are
        clamped to the int32 range, rounded half away from zero and cast.
        """
        return UDim2(self.x.lerp(other.x, alpha), self.y.lerp(other.y, alpha))

    # --- Conversion ---

    def _to_payload(self):
        return (self.x._to_payload(), self.y._to_payload())

    @classmethod
    def _from_payload(cls, payload):
        x, y = payload_tuple(payload, 2)
        return cls(UDim._from_payload(x), UDim._from_payload(y))
