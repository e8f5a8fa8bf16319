"""
Datatype value types.

Every class in ``DATATYPES`` owns exactly one ``VariantType``; the mapping is
checked at import time so a new datatype cannot be added without its variant.
"""

from typing import Dict, Type

from ..errors import error_mismatched_source
from ..variant import Variant, VariantType
from .base import Datatype
from .brick_color import BrickColor
from .color3 import Color3
from .color_sequence import ColorSequence
from .color_sequence_keypoint import ColorSequenceKeypoint
from .udim import UDim
from .udim2 import UDim2
from .vector2 import Vector2
from .vector2int16 import Vector2int16
from .vector3 import Vector3
from .vector3int16 import Vector3int16

__all__ = [
    "Datatype",
    "UDim",
    "UDim2",
    "Vector2",
    "Vector2int16",
    "Vector3",
    "Vector3int16",
    "Color3",
    "ColorSequenceKeypoint",
    "ColorSequence",
    "BrickColor",
    "DATATYPES",
    "datatype_for_variant_type",
    "datatype_from_variant",
]


DATATYPES = (
    UDim,
    UDim2,
    Vector2,
    Vector2int16,
    Vector3,
    Vector3int16,
    Color3,
    ColorSequenceKeypoint,
    ColorSequence,
    BrickColor,
)

_BY_VARIANT: Dict[VariantType, Type[Datatype]] = {cls.variant_type: cls for cls in DATATYPES}

if len(_BY_VARIANT) != len(DATATYPES):
    raise RuntimeError("two datatypes share a variant type")
if set(_BY_VARIANT) != set(VariantType) - {VariantType.OTHER}:
    raise RuntimeError("every variant type except OTHER needs a datatype")


def datatype_for_variant_type(variant_type: VariantType) -> Type[Datatype]:
    """Datatype class owning ``variant_type``; KeyError for OTHER."""
    return _BY_VARIANT[variant_type]


def datatype_from_variant(variant: Variant) -> Datatype:
    """Decode any variant this layer knows about into its datatype."""
    cls = _BY_VARIANT.get(variant.type)
    if cls is None:
        raise error_mismatched_source(
            variant.variant_name, "Datatype", "no datatype handles this variant type")
    return cls.from_variant(variant)
