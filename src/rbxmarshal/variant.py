"""
Tagged variant representation used at the engine boundary.

A ``Variant`` is a closed tagged union: ``type`` is one ``VariantType`` per
datatype this package knows about, plus ``OTHER`` for types owned by other
layers. The payload is a plain immutable Python value:

    UDIM                     (scale, offset)
    UDIM2                    ((scale_x, offset_x), (scale_y, offset_y))
    VECTOR2, VECTOR2_INT16   (x, y)
    VECTOR3, VECTOR3_INT16   (x, y, z)
    COLOR3                   (r, g, b)
    COLOR_SEQUENCE_KEYPOINT  (time, (r, g, b))
    COLOR_SEQUENCE           ((time, (r, g, b)), ...)
    BRICK_COLOR              palette number
    OTHER                    anything, with the foreign type name in ``name``
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class VariantType(Enum):
    """Variant discriminant; values are the wire names."""
    UDIM = "UDim"
    UDIM2 = "UDim2"
    VECTOR2 = "Vector2"
    VECTOR2_INT16 = "Vector2int16"
    VECTOR3 = "Vector3"
    VECTOR3_INT16 = "Vector3int16"
    COLOR3 = "Color3"
    COLOR_SEQUENCE_KEYPOINT = "ColorSequenceKeypoint"
    COLOR_SEQUENCE = "ColorSequence"
    BRICK_COLOR = "BrickColor"
    OTHER = "Other"

    @property
    def variant_name(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> Optional["VariantType"]:
        """Look up a variant type by wire name."""
        for member in cls:
            if member.value == name:
                return member
        return None


@dataclass(frozen=True)
class Variant:
    """A tagged value as stored or transmitted by the engine."""
    type: VariantType
    value: Any
    name: Optional[str] = None  # foreign type name, OTHER only

    @property
    def variant_name(self) -> str:
        """Wire name of this variant's type."""
        if self.type is VariantType.OTHER and self.name:
            return self.name
        return self.type.variant_name

    @classmethod
    def other(cls, name: str, value: Any = None) -> "Variant":
        """Create an escape variant for a type this layer does not model."""
        return cls(VariantType.OTHER, value, name)

    def __repr__(self) -> str:
        return f"Variant({self.variant_name}, {self.value!r})"
