"""
Host runtime type system.

Every host value carries one of the *value types* below (nil, boolean,
number, string, table, or a userdata type per datatype). Constructor and
method signatures are written with *parameter types*, which decide whether a
host value is acceptable and how it converts into a Python argument:

    number    any host number, quantized to float32
    int32     host number, finite, truncated toward zero, inside int32
    int16     same, inside int16
    uint8     same, inside 0..255
    string    host string
    UDim2     userdata of that datatype
    table<T>  array table whose items all match T
    T?        T or nil
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict

from .numeric import f32, int_range


# =============================================================================
# Type Classes
# =============================================================================

@dataclass(frozen=True)
class Type(ABC):
    """Base class for all host types."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The type name for display/errors."""
        pass

    def matches(self, value: Any) -> bool:
        """Check if a host value is acceptable for this type."""
        return value.type == self

    def convert(self, value: Any) -> Any:
        """Convert a matching host value into the Python argument."""
        return value.data

    @property
    def optional(self) -> bool:
        """True if the type accepts nil."""
        return False

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class PrimitiveType(Type):
    """A primitive host type (nil, boolean, number, string, table)."""
    _name: str

    @property
    def name(self) -> str:
        return self._name

    @property
    def optional(self) -> bool:
        return self._name == "nil"


@dataclass(frozen=True)
class UserdataType(Type):
    """The host type of a datatype instance."""
    _name: str

    @property
    def name(self) -> str:
        return self._name


@dataclass(frozen=True)
class FloatType(Type):
    """A host number accepted as float32."""

    @property
    def name(self) -> str:
        return "number"

    def matches(self, value: Any) -> bool:
        return value.type == NUMBER

    def convert(self, value: Any) -> float:
        return f32(value.data)


@dataclass(frozen=True)
class IntegerType(Type):
    """A host number accepted as a fixed-width integer."""
    bits: int
    signed: bool = True

    @property
    def name(self) -> str:
        return f"{'int' if self.signed else 'uint'}{self.bits}"

    def matches(self, value: Any) -> bool:
        if value.type != NUMBER:
            return False
        number = value.data
        if isinstance(number, float) and not math.isfinite(number):
            return False
        lo, hi = int_range(self.bits, self.signed)
        return lo <= math.trunc(number) <= hi

    def convert(self, value: Any) -> int:
        return math.trunc(value.data)


@dataclass(frozen=True)
class ListType(Type):
    """An array table type: table<T>."""
    element_type: Type

    @property
    def name(self) -> str:
        return f"table<{self.element_type.name}>"

    def matches(self, value: Any) -> bool:
        if value.type != TABLE:
            return False
        return all(self.element_type.matches(item) for item in value.data)

    def convert(self, value: Any) -> list:
        return [self.element_type.convert(item) for item in value.data]


@dataclass(frozen=True)
class OptionalTypeWrapper(Type):
    """An optional type: T?"""
    inner_type: Type

    @property
    def name(self) -> str:
        return f"{self.inner_type.name}?"

    @property
    def optional(self) -> bool:
        return True

    def matches(self, value: Any) -> bool:
        return value.type == NIL or self.inner_type.matches(value)

    def convert(self, value: Any) -> Any:
        if value.type == NIL:
            return None
        return self.inner_type.convert(value)


# =============================================================================
# Built-in Type Instances
# =============================================================================

# Host value types
NIL = PrimitiveType("nil")
BOOLEAN = PrimitiveType("boolean")
NUMBER = PrimitiveType("number")
STRING = PrimitiveType("string")
TABLE = PrimitiveType("table")

# Parameter types
FLOAT = FloatType()
INT32 = IntegerType(32)
INT16 = IntegerType(16)
UINT8 = IntegerType(8, signed=False)

# Userdata types are created on demand and interned here
_USERDATA_TYPES: Dict[str, UserdataType] = {}


def userdata_type(name: str) -> UserdataType:
    """Return the userdata type for a datatype name."""
    t = _USERDATA_TYPES.get(name)
    if t is None:
        t = _USERDATA_TYPES[name] = UserdataType(name)
    return t


def make_list_type(element_type: Type) -> ListType:
    """Create a table type with the given element type."""
    return ListType(element_type)


def make_optional_type(inner_type: Type) -> OptionalTypeWrapper:
    """Create an optional type wrapping the given type."""
    return OptionalTypeWrapper(inner_type)


def is_userdata(t: Type) -> bool:
    """Check if type is a datatype (userdata) type."""
    return isinstance(t, UserdataType)
