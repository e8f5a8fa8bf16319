"""Vector3int16: a 3D vector of 16-bit signed integers."""

from dataclasses import dataclass

from .. import numeric
from ..variant import VariantType
from .base import Datatype, is_scalar, payload_int, payload_tuple


@dataclass(frozen=True)
class Vector3int16(Datatype):
    """A 3D vector with int16 components; same arithmetic rules as Vector2int16."""
    x: int = 0
    y: int = 0
    z: int = 0

    type_name = "Vector3int16"
    variant_type = VariantType.VECTOR3_INT16

    def __post_init__(self):
        object.__setattr__(self, "x", numeric.wrap_int(self.x, 16))
        object.__setattr__(self, "y", numeric.wrap_int(self.y, 16))
        object.__setattr__(self, "z", numeric.wrap_int(self.z, 16))

    def __iter__(self):
        return iter((self.x, self.y, self.z))

    def __str__(self) -> str:
        return f"{self.x}, {self.y}, {self.z}"

    def _scalar(self, value) -> tuple:
        n = numeric.saturate_int(float(value), 16)
        return (n, n, n)

    def __neg__(self) -> "Vector3int16":
        return Vector3int16(*numeric.int_neg(self, 16))

    def __add__(self, other):
        if not isinstance(other, Vector3int16):
            return NotImplemented
        return Vector3int16(*numeric.int_add(self, other, 16))

    def __sub__(self, other):
        if not isinstance(other, Vector3int16):
            return NotImplemented
        return Vector3int16(*numeric.int_sub(self, other, 16))

    def __mul__(self, other):
        if isinstance(other, Vector3int16):
            return Vector3int16(*numeric.int_mul(self, other, 16))
        if is_scalar(other):
            return Vector3int16(*numeric.int_mul(self, self._scalar(other), 16))
        return NotImplemented

    def __rmul__(self, other):
        if is_scalar(other):
            return Vector3int16(*numeric.int_mul(self, self._scalar(other), 16))
        return NotImplemented

    def __truediv__(self, other):
        if isinstance(other, Vector3int16):
            return Vector3int16(*numeric.int_div(self, other, 16))
        if is_scalar(other):
            return Vector3int16(*numeric.int_div(self, self._scalar(other), 16))
        return NotImplemented

    def _to_payload(self):
        return (self.x, self.y, self.z)

    @classmethod
    def _from_payload(cls, payload):
        x, y, z = payload_tuple(payload, 3)
        return cls(payload_int(x, 16), payload_int(y, 16), payload_int(z, 16))
