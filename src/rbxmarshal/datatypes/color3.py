"""Color3: a linear RGB color with float32 channels."""

import colorsys
import math
import re
from dataclasses import dataclass
from typing import Tuple

from .. import numeric
from ..errors import error_invalid_value
from ..variant import VariantType
from .base import Datatype, is_scalar, payload_float, payload_tuple


_HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{6}|[0-9a-fA-F]{3})$")


def _channel_byte(value: float) -> int:
    if math.isnan(value):
        return 0
    return int(numeric.round_half_away(min(max(value, 0.0), 1.0) * 255.0))


@dataclass(frozen=True)
class Color3(Datatype):
    """
    An RGB color.

    Channels are nominally in [0, 1] but are not clamped here; arithmetic
    can push them outside that range.
    """
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    type_name = "Color3"
    variant_type = VariantType.COLOR3

    def __post_init__(self):
        object.__setattr__(self, "r", numeric.f32(self.r))
        object.__setattr__(self, "g", numeric.f32(self.g))
        object.__setattr__(self, "b", numeric.f32(self.b))

    def __iter__(self):
        return iter((self.r, self.g, self.b))

    def __str__(self) -> str:
        return ", ".join(numeric.format_number(c) for c in self)

    # --- Alternate constructors ---

    @classmethod
    def from_rgb(cls, r: int = 0, g: int = 0, b: int = 0) -> "Color3":
        """Color from 0-255 channels."""
        return cls(r / 255.0, g / 255.0, b / 255.0)

    @classmethod
    def from_hsv(cls, h: float, s: float, v: float) -> "Color3":
        """Color from hue, saturation and value; hue wraps around at 1."""
        if not all(math.isfinite(c) for c in (h, s, v)):
            raise error_invalid_value(
                "Color3", f"HSV components ({h}, {s}, {v}) must be finite")
        return cls(*colorsys.hsv_to_rgb(h % 1.0, s, v))

    @classmethod
    def from_hex(cls, text: str) -> "Color3":
        """Color from ``#RRGGBB``, ``RRGGBB``, ``#RGB`` or ``RGB``."""
        match = _HEX_PATTERN.match(text.strip())
        if match is None:
            raise error_invalid_value("Color3", f"hex color {text!r} is not valid")
        digits = match.group(1)
        if len(digits) == 3:
            digits = "".join(d * 2 for d in digits)
        return cls.from_rgb(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))

    # --- Arithmetic ---

    def __neg__(self) -> "Color3":
        return Color3(*numeric.neg(self))

    def __add__(self, other):
        if not isinstance(other, Color3):
            return NotImplemented
        return Color3(*numeric.add(self, other))

    def __sub__(self, other):
        if not isinstance(other, Color3):
            return NotImplemented
        return Color3(*numeric.sub(self, other))

    def __mul__(self, other):
        if isinstance(other, Color3):
            return Color3(*numeric.mul(self, other))
        if is_scalar(other):
            return Color3(*numeric.scale(self, other))
        return NotImplemented

    def __rmul__(self, other):
        if is_scalar(other):
            return Color3(*numeric.scale(self, other))
        return NotImplemented

    def __truediv__(self, other):
        if isinstance(other, Color3):
            return Color3(*numeric.div(self, other))
        if is_scalar(other):
            return Color3(*numeric.div(self, (other, other, other)))
        return NotImplemented

    # --- Methods ---

    def lerp(self, other: "Color3", alpha: float) -> "Color3":
        return Color3(*numeric.lerp(self, other, alpha))

    def to_hsv(self) -> Tuple[float, float, float]:
        """
        Hue, saturation and value.

        A color whose brightest channel is not positive has no hue or
        saturation and reports (0, 0, v).
        """
        v = max(self)
        if not v > 0.0:
            return 0.0, 0.0, numeric.f32(v)
        h, s, v = colorsys.rgb_to_hsv(self.r, self.g, self.b)
        return numeric.f32(h), numeric.f32(s), numeric.f32(v)

    def to_hex(self) -> str:
        """Uppercase ``RRGGBB``; channels are clamped to [0, 1] first."""
        return "".join(f"{_channel_byte(c):02X}" for c in self)

    def to_rgb_bytes(self) -> Tuple[int, int, int]:
        return tuple(_channel_byte(c) for c in self)

    # --- Conversion ---

    def _to_payload(self):
        return (self.r, self.g, self.b)

    @classmethod
    def _from_payload(cls, payload):
        r, g, b = payload_tuple(payload, 3)
        return cls(payload_float(r), payload_float(g), payload_float(b))
