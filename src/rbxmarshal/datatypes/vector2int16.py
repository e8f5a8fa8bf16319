"""Vector2int16: a 2D vector of 16-bit signed integers."""

from dataclasses import dataclass

from .. import numeric
from ..variant import VariantType
from .base import Datatype, is_scalar, payload_int, payload_tuple


@dataclass(frozen=True)
class Vector2int16(Datatype):
    """
    A 2D vector with int16 components.

    Arithmetic wraps around. Division truncates toward zero and raises
    ZeroDivisionError for a zero divisor. Numbers used as scalars are cast
    to int16 first (truncated, saturated).
    """
    x: int = 0
    y: int = 0

    type_name = "Vector2int16"
    variant_type = VariantType.VECTOR2_INT16

    def __post_init__(self):
        object.__setattr__(self, "x", numeric.wrap_int(self.x, 16))
        object.__setattr__(self, "y", numeric.wrap_int(self.y, 16))

    def __iter__(self):
        return iter((self.x, self.y))

    def __str__(self) -> str:
        return f"{self.x}, {self.y}"

    def _scalar(self, value) -> tuple:
        n = numeric.saturate_int(float(value), 16)
        return (n, n)

    def __neg__(self) -> "Vector2int16":
        return Vector2int16(*numeric.int_neg(self, 16))

    def __add__(self, other):
        if not isinstance(other, Vector2int16):
            return NotImplemented
        return Vector2int16(*numeric.int_add(self, other, 16))

    def __sub__(self, other):
        if not isinstance(other, Vector2int16):
            return NotImplemented
        return Vector2int16(*numeric.int_sub(self, other, 16))

    def __mul__(self, other):
        if isinstance(other, Vector2int16):
            return Vector2int16(*numeric.int_mul(self, other, 16))
        if is_scalar(other):
            return Vector2int16(*numeric.int_mul(self, self._scalar(other), 16))
        return NotImplemented

    def __rmul__(self, other):
        if is_scalar(other):
            return Vector2int16(*numeric.int_mul(self, self._scalar(other), 16))
        return NotImplemented

    def __truediv__(self, other):
        if isinstance(other, Vector2int16):
            return Vector2int16(*numeric.int_div(self, other, 16))
        if is_scalar(other):
            return Vector2int16(*numeric.int_div(self, self._scalar(other), 16))
        return NotImplemented

    # --- Conversion ---

    def _to_payload(self):
        return (self.x, self.y)

    @classmethod
    def _from_payload(cls, payload):
        x, y = payload_tuple(payload, 2)
        return cls(payload_int(x, 16), payload_int(y, 16))
