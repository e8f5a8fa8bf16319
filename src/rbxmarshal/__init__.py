"""
rbxmarshal: engine datatypes for an embedded scripting runtime.

Immutable datatype values (UDim, UDim2, vectors, colors, color ramps,
BrickColor), their lossless conversion to and from tagged variants, and the
registry that exposes them to host scripts.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("rbxmarshal")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

from .errors import (
    DatatypeError,
    ConversionError,
    MismatchedSource,
    UnsupportedTarget,
    ArgumentError,
    InvalidConstructorArguments,
    InvalidMethodArguments,
    InvalidValue,
    HostRuntimeError,
)
from .variant import Variant, VariantType
from .datatypes import (
    Datatype,
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
    DATATYPES,
    datatype_from_variant,
)

__all__ = [
    '__version__',
    # Errors
    'DatatypeError',
    'ConversionError',
    'MismatchedSource',
    'UnsupportedTarget',
    'ArgumentError',
    'InvalidConstructorArguments',
    'InvalidMethodArguments',
    'InvalidValue',
    'HostRuntimeError',
    # Variants
    'Variant',
    'VariantType',
    # Datatypes
    'Datatype',
    'UDim',
    'UDim2',
    'Vector2',
    'Vector2int16',
    'Vector3',
    'Vector3int16',
    'Color3',
    'ColorSequenceKeypoint',
    'ColorSequence',
    'BrickColor',
    'DATATYPES',
    'datatype_from_variant',
]
