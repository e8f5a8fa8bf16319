"""Vector2: a 2D float32 vector."""

from dataclasses import dataclass

from .. import numeric
from ..variant import VariantType
from .base import Datatype, is_scalar, payload_float, payload_tuple


@dataclass(frozen=True)
class Vector2(Datatype):
    """A 2D vector with float32 components."""
    x: float = 0.0
    y: float = 0.0

    type_name = "Vector2"
    variant_type = VariantType.VECTOR2

    def __post_init__(self):
        object.__setattr__(self, "x", numeric.f32(self.x))
        object.__setattr__(self, "y", numeric.f32(self.y))

    def __iter__(self):
        return iter((self.x, self.y))

    def __str__(self) -> str:
        return f"{numeric.format_number(self.x)}, {numeric.format_number(self.y)}"

    # --- Arithmetic ---

    def __neg__(self) -> "Vector2":
        return Vector2(*numeric.neg(self))

    def __add__(self, other):
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(*numeric.add(self, other))

    def __sub__(self, other):
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(*numeric.sub(self, other))

    def __mul__(self, other):
        if isinstance(other, Vector2):
            return Vector2(*numeric.mul(self, other))
        if is_scalar(other):
            return Vector2(*numeric.scale(self, other))
        return NotImplemented

    def __rmul__(self, other):
        if is_scalar(other):
            return Vector2(*numeric.scale(self, other))
        return NotImplemented

    def __truediv__(self, other):
        if isinstance(other, Vector2):
            return Vector2(*numeric.div(self, other))
        if is_scalar(other):
            return Vector2(*numeric.div(self, (other, other)))
        return NotImplemented

    # --- Geometry ---

    @property
    def magnitude(self) -> float:
        return numeric.magnitude(self)

    @property
    def unit(self) -> "Vector2":
        """Normalized copy; NaN components for the zero vector."""
        return Vector2(*numeric.normalize(self))

    def dot(self, other: "Vector2") -> float:
        return numeric.dot(self, other)

    def cross(self, other: "Vector2") -> float:
        """Z component of the 3D cross product of the two vectors."""
        return numeric.cross3((self.x, self.y, 0.0), (other.x, other.y, 0.0))[2]

    def lerp(self, other: "Vector2", alpha: float) -> "Vector2":
        return Vector2(*numeric.lerp(self, other, alpha))

    def min(self, other: "Vector2") -> "Vector2":
        return Vector2(*numeric.minimum(self, other))

    def max(self, other: "Vector2") -> "Vector2":
        return Vector2(*numeric.maximum(self, other))

    # --- Conversion ---

    def _to_payload(self):
        return (self.x, self.y)

    @classmethod
    def _from_payload(cls, payload):
        x, y = payload_tuple(payload, 2)
        return cls(payload_float(x), payload_float(y))


Vector2.zero = Vector2(0.0, 0.0)
Vector2.one = Vector2(1.0, 1.0)
Vector2.x_axis = Vector2(1.0, 0.0)
Vector2.y_axis = Vector2(0.0, 1.0)
