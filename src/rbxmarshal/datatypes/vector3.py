"""Vector3: a 3D float32 vector."""

import math
from dataclasses import dataclass
from typing import Optional

from .. import numeric
from ..variant import VariantType
from .base import Datatype, is_scalar, payload_float, payload_tuple


@dataclass(frozen=True)
class Vector3(Datatype):
    """A 3D vector with float32 components."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    type_name = "Vector3"
    variant_type = VariantType.VECTOR3

    def __post_init__(self):
        object.__setattr__(self, "x", numeric.f32(self.x))
        object.__setattr__(self, "y", numeric.f32(self.y))
        object.__setattr__(self, "z", numeric.f32(self.z))

    def __iter__(self):
        return iter((self.x, self.y, self.z))

    def __str__(self) -> str:
        return ", ".join(numeric.format_number(c) for c in self)

    # --- Arithmetic ---

    def __neg__(self) -> "Vector3":
        return Vector3(*numeric.neg(self))

    def __add__(self, other):
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(*numeric.add(self, other))

    def __sub__(self, other):
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(*numeric.sub(self, other))

    def __mul__(self, other):
        if isinstance(other, Vector3):
            return Vector3(*numeric.mul(self, other))
        if is_scalar(other):
            return Vector3(*numeric.scale(self, other))
        return NotImplemented

    def __rmul__(self, other):
        if is_scalar(other):
            return Vector3(*numeric.scale(self, other))
        return NotImplemented

    def __truediv__(self, other):
        if isinstance(other, Vector3):
            return Vector3(*numeric.div(self, other))
        if is_scalar(other):
            return Vector3(*numeric.div(self, (other, other, other)))
        return NotImplemented

    # --- Geometry ---

    @property
    def magnitude(self) -> float:
        return numeric.magnitude(self)

    @property
    def unit(self) -> "Vector3":
        """Normalized copy; NaN components for the zero vector."""
        return Vector3(*numeric.normalize(self))

    def dot(self, other: "Vector3") -> float:
        return numeric.dot(self, other)

    def cross(self, other: "Vector3") -> "Vector3":
        return Vector3(*numeric.cross3(self, other))

    def angle(self, other: "Vector3", axis: Optional["Vector3"] = None) -> float:
        """
        Angle between two vectors in radians.

        With an axis the result is signed: negative when the rotation from
        self to other runs clockwise around the axis.
        """
        crossed = self.cross(other)
        result = math.atan2(crossed.magnitude, self.dot(other))
        if axis is not None and axis.dot(crossed) < 0:
            result = -result
        return numeric.f32(result)

    def fuzzy_eq(self, other: "Vector3", epsilon: Optional[float] = None) -> bool:
        """True if every component differs by at most epsilon (default 1e-5)."""
        eps = 1e-5 if epsilon is None else epsilon
        return all(abs(a - b) <= eps for a, b in zip(self, other))

    def lerp(self, other: "Vector3", alpha: float) -> "Vector3":
        return Vector3(*numeric.lerp(self, other, alpha))

    def min(self, other: "Vector3") -> "Vector3":
        return Vector3(*numeric.minimum(self, other))

    def max(self, other: "Vector3") -> "Vector3":
        return Vector3(*numeric.maximum(self, other))

    # --- Conversion ---

    def _to_payload(self):
        return (self.x, self.y, self.z)

    @classmethod
    def _from_payload(cls, payload):
        x, y, z = payload_tuple(payload, 3)
        return cls(payload_float(x), payload_float(y), payload_float(z))


Vector3.zero = Vector3(0.0, 0.0, 0.0)
Vector3.one = Vector3(1.0, 1.0, 1.0)
Vector3.x_axis = Vector3(1.0, 0.0, 0.0)
Vector3.y_axis = Vector3(0.0, 1.0, 0.0)
Vector3.z_axis = Vector3(0.0, 0.0, 1.0)
